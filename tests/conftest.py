import os
import random
import tempfile

# Keep test logs out of the working tree; must happen before phrasele is imported
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='phrasele-logs-'))

import pytest

from phrasele.services.phrase_source import PhraseSource
from phrasele.services.session import GameSession


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_session(rng):
    """Build a session over the given entries with ``index`` already loaded."""
    def _make(entries, index=0, **kwargs):
        session = GameSession(PhraseSource(entries), rng=rng, **kwargs)
        session.load_phrase(index)
        return session
    return _make


def type_word(session, text):
    """Type every non-space character of ``text`` into the current row."""
    for ch in text:
        if ch != ' ':
            session.put_letter(ch)


def submit_word(session, text):
    type_word(session, text)
    return session.submit_row()
