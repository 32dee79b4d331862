import random

import pytest

from phrasele.models.game import Phrase
from phrasele.services.phrase_bag import PhraseBag
from phrasele.services.phrase_source import (
    EmptyPhraseSourceError, MalformedPhraseError, PhraseSource
)


class TestPhraseSource:

    def test_string_entries_are_uppercased(self):
        assert PhraseSource(["time flies"]).get(0) == Phrase("TIME FLIES", "")

    def test_object_entries_keep_a_trimmed_hint(self):
        source = PhraseSource([{"text": "hit the sack", "hint": "  Go to bed "}])
        assert source.get(0) == Phrase("HIT THE SACK", "Go to bed")

    def test_object_without_hint(self):
        assert PhraseSource([{"text": "on thin ice"}]).get(0).hint == ""

    def test_index_is_clamped(self):
        source = PhraseSource(["ONE", "TWO"])
        assert source.clamp(-4) == 0
        assert source.clamp(9) == 1
        assert source.get(9).text == "TWO"

    @pytest.mark.parametrize("entry", [42, None, {"hint": "no text"}, {"text": 7}, ["LIST"]])
    def test_malformed_entries(self, entry):
        with pytest.raises(MalformedPhraseError):
            PhraseSource([entry]).get(0)

    def test_empty_source(self):
        with pytest.raises(EmptyPhraseSourceError):
            PhraseSource([]).get(0)


class TestPhraseBag:

    def test_full_pass_draws_every_index_once(self):
        bag = PhraseBag(rng=random.Random(3))
        draws = [bag.draw(10) for _ in range(10)]
        assert sorted(draws) == list(range(10))

    def test_second_pass_is_also_complete(self):
        bag = PhraseBag(rng=random.Random(5))
        draws = [bag.draw(6) for _ in range(12)]
        assert sorted(draws[:6]) == list(range(6))
        assert sorted(draws[6:]) == list(range(6))

    def test_regenerates_when_phrase_count_changes(self):
        bag = PhraseBag([0, 1, 2], 1, rng=random.Random(0))
        assert bag.is_stale(5)
        bag.draw(5)
        assert sorted(bag.order) == list(range(5))
        assert bag.position == 1

    def test_continues_an_existing_bag(self):
        bag = PhraseBag([2, 0, 1], 1)
        assert bag.draw(3) == 0
        assert bag.draw(3) == 1
        assert bag.position == 3

    def test_empty_source_draws_zero(self):
        bag = PhraseBag()
        assert bag.draw(0) == 0
        assert bag.order == []
