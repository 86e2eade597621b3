# tests/test_ranked_vocab.py
import random
from collections import Counter

import pytest

from qlemu.lexicon import EmptyVocabularyError
from qlemu.ranked_vocab import RankedVocabList
from qlemu.textfile import LineArena


@pytest.fixture
def emu():
    return RankedVocabList(LineArena.from_lines([b"zeta\t100\t50", b"yak\t80\t40", b"xi"]))


def test_word_at_strips_columns(emu):
    assert emu.size() == len(emu) == 3
    assert [emu.word_at(i) for i in range(3)] == [b"zeta", b"yak", b"xi"]


@pytest.mark.parametrize("i", [-1, 3, 100])
def test_word_at_out_of_range(emu, i):
    with pytest.raises(IndexError):
        emu.word_at(i)


@pytest.mark.parametrize("draw,expected", [
    (0.0, b"zeta"),
    (0.33, b"zeta"),
    (0.34, b"yak"),
    (0.999999, b"xi"),
])
def test_random_word_uses_floor(emu, draw, expected):
    assert emu.random_word(lambda: draw) == expected


def test_random_word_is_roughly_uniform(emu):
    rng = random.Random(7)
    counts = Counter(emu.random_word(rng.random) for _ in range(3000))
    assert set(counts) == {b"zeta", b"yak", b"xi"}
    assert all(800 < c < 1200 for c in counts.values())


def test_empty_list_rejected():
    with pytest.raises(EmptyVocabularyError):
        RankedVocabList(LineArena(b""))
