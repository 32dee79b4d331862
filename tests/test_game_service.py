import random

import pytest

from phrasele.services.game_service import GameService
from phrasele.services.phrase_source import PhraseSource
from phrasele.services.store import KeyValueStore, MemoryKeyValueStore

PHRASES = ["HELLO", "WORLD", "ACT ONE"]


class BrokenStore(KeyValueStore):
    """Store whose every call fails."""

    def get(self, key):
        raise ConnectionError("store down")

    def set(self, key, value):
        raise ConnectionError("store down")

    def delete(self, key):
        raise ConnectionError("store down")


@pytest.fixture
def store():
    return MemoryKeyValueStore()


@pytest.fixture
def service(store):
    return GameService(PhraseSource(PHRASES), store, rng=random.Random(4))


def type_and_submit(service, player_id, word):
    for ch in word:
        if ch != ' ':
            service.perform(player_id, 'put_letter', letter=ch)
    return service.perform(player_id, 'submit_row')


def test_cold_start_draws_a_random_phrase_and_saves(service, store):
    session = service.get_session('p1')
    assert session.status == 'playing'
    assert session.message == 'Random phrase. Start typing.'
    assert 'phrasele_save_v1:p1' in store.data


def test_sessions_are_cached_per_player(service):
    assert service.get_session('p1') is service.get_session('p1')
    assert service.get_session('p1') is not service.get_session('p2')


def test_every_change_is_saved(service, store):
    service.get_session('p1')
    service.perform('p1', 'put_letter', letter='Q')
    assert '"Q"' in store.data['phrasele_save_v1:p1']


def test_saved_game_is_restored_by_a_new_service(service, store):
    session = service.get_session('p1')
    service.perform('p1', 'next_phrase')
    type_and_submit(service, 'p1', 'X' * session.cols)
    service.perform('p1', 'put_letter', letter='A')

    fresh = GameService(PhraseSource(PHRASES), store)
    restored = fresh.get_session('p1')

    assert restored.phrase_index == session.phrase_index
    assert restored.history == session.history
    assert restored.row_input == session.row_input
    assert restored.cursor_col == session.cursor_col
    assert restored.message == 'Loaded saved game. Carry on.'


def test_rejected_input_is_not_saved(service, store):
    service.get_session('p1')
    before = store.data['phrasele_save_v1:p1']
    _, update = service.perform('p1', 'submit_row')
    assert not update.accepted
    assert store.data['phrasele_save_v1:p1'] == before


def test_restart_clears_the_save(service, store):
    service.get_session('p1')
    _, update = service.perform('p1', 'restart_phrase')
    assert update.accepted
    assert 'phrasele_save_v1:p1' not in store.data


def test_corrupt_save_starts_a_new_game(store):
    store.set('phrasele_save_v1:p1', '{broken')
    session = GameService(PhraseSource(PHRASES), store).get_session('p1')
    assert session.status == 'playing'
    assert session.message == 'Random phrase. Start typing.'


def test_store_failures_never_block_play():
    service = GameService(PhraseSource(PHRASES), BrokenStore())
    session = service.get_session('p1')
    _, update = service.perform('p1', 'put_letter', letter='A')
    assert update.accepted
    assert session.row_input[0] == 'A'
    assert service.discard_session('p1')


def test_empty_phrase_list_reports_error():
    session = GameService(PhraseSource([]), MemoryKeyValueStore()).get_session('p1')
    assert session.status == 'loading'
    assert session.message == 'No phrases found. Check the phrase list.'


def test_unknown_action(service):
    with pytest.raises(ValueError):
        service.perform('p1', 'cheat')


def test_discard_session(service, store):
    service.get_session('p1')
    assert service.discard_session('p1')
    assert 'p1' not in service.sessions
    assert 'phrasele_save_v1:p1' not in store.data
    assert not service.discard_session('p1')


def test_least_recently_used_session_is_evicted_and_restored(store):
    service = GameService(PhraseSource(PHRASES), store, max_cached_sessions=2, rng=random.Random(4))
    first = service.get_session('p1')
    service.perform('p1', 'put_letter', letter='Q')
    service.get_session('p2')
    service.get_session('p1')  # p2 is now the oldest
    service.get_session('p3')

    assert list(service.sessions) == ['p1', 'p3']

    service.get_session('p4')
    assert 'p1' not in service.sessions
    restored = service.get_session('p1')
    assert restored is not first
    assert restored.phrase_index == first.phrase_index
    assert restored.row_input == first.row_input
    assert restored.message == 'Loaded saved game. Carry on.'
    assert len(service.sessions) == 2
