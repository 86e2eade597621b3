# tests/test_lexicon.py
import math
import pytest

from qlemu.lexicon import (
    EmptyVocabularyError,
    NOT_FOUND,
    VocabFormatError,
    VocabIndex,
    compare_words,
)
from qlemu.textfile import LineArena

VOCAB = [
    b"a\t50\t40\t1",
    b"app\t3\t3\t7",
    b"apple\t10\t5\t2",
    b"applesauce\t2\t2\t9",
    b"banana\t20\t8\t3",
    b"cherry\t9\t9\t4",
    b"kiwi\t7\t6\t5",
    b"zebra\t4\t4\t6",
]


@pytest.fixture(scope="module")
def index():
    return VocabIndex(LineArena.from_lines(VOCAB))


@pytest.mark.parametrize("a,b,expected", [
    (b"apple", b"apple", 0),
    (b"apple\t10", b"apple\n", 0),        # terminators differ, both end together
    (b"app", b"apple", -1),               # shorter word ends first
    (b"apple", b"app\t3", 1),
    (b"apple", b"apply", -1),
    (b"\xc3\xa9t\xc3\xa9", b"zebra", 1),  # unsigned bytes: 0xc3 > 'z'
    (b"", b"a", -1),
])
def test_compare_words(a, b, expected):
    assert compare_words(a, b) == expected


@pytest.mark.parametrize("word,rank", [
    (b"a", 1),
    (b"app", 7),
    (b"apple", 2),
    (b"applesauce", 9),
    (b"banana", 3),
    (b"zebra", 6),
])
def test_lookup_rank_hits(index, word, rank):
    assert index.lookup_rank(word) == rank


@pytest.mark.parametrize("word", [b"ap", b"appl", b"apples", b"bananas", b"zz", b"0", b"Apple"])
def test_prefixes_and_extensions_not_found(index, word):
    assert index.lookup_rank(word) is None


def test_miss_returns_not_found(index):
    assert NOT_FOUND is None
    assert index.lookup_rank(b"durian") is NOT_FOUND


def test_lookup_is_repeatable(index):
    assert index.lookup_rank(b"kiwi") == index.lookup_rank(b"kiwi") == 5


def test_word_with_trailing_terminator_matches(index):
    assert index.lookup_rank(b"cherry\n") == 4


def test_probe_count_bounded():
    words = sorted(b"w%05d" % i for i in range(1000))
    lines = [w + b"\t1\t1\t%d" % (i + 1) for i, w in enumerate(words)]
    idx = VocabIndex(LineArena.from_lines(lines))
    bound = math.ceil(math.log2(len(lines))) + 1
    for w in words[::37] + [b"w", b"w00000x", b"w99999", b"a"]:
        idx.find(w)
        assert idx.probes <= bound


def test_rank_column_with_crlf_and_extra_columns():
    idx = VocabIndex(LineArena.from_lines([b"alpha\t1\t1\t4\r", b"beta\t2\t2\t3\textra"]))
    assert idx.lookup_rank(b"alpha") == 4
    assert idx.lookup_rank(b"beta") == 3


@pytest.mark.parametrize("line,fragment", [
    (b"apple\t10\t5", "missing field after document frequency"),
    (b"apple\t10", "missing field after occurrence frequency"),
    (b"apple", "missing field after word"),
    (b"apple\t10\t5\tx", "non-numeric rank"),
    (b"apple\t10\t\t2", "non-numeric document frequency"),
    (b"apple\t1x\t5\t2", "unexpected byte"),
    (b"apple\t10\t5\t2z", "unexpected byte"),
    (b"apple\t10\t5\t0", "rank must be 1 or more"),
])
def test_malformed_line_is_fatal(line, fragment):
    idx = VocabIndex(LineArena.from_lines([line]))
    with pytest.raises(VocabFormatError) as exc:
        idx.lookup_rank(b"apple")
    assert fragment in str(exc.value)
    assert exc.value.line_no == 1
    assert exc.value.line == line


def test_malformed_line_only_fails_when_hit():
    idx = VocabIndex(LineArena.from_lines([b"apple\t10\t5\t1", b"pear\t3"]))
    assert idx.lookup_rank(b"apple") == 1
    assert idx.lookup_rank(b"plum") is None
    with pytest.raises(VocabFormatError):
        idx.lookup_rank(b"pear")


def test_validate_ok(index):
    assert index.validate() == len(VOCAB)


def test_validate_reports_out_of_order():
    idx = VocabIndex(LineArena.from_lines([b"b\t1\t1\t1", b"a\t1\t1\t2"]))
    with pytest.raises(VocabFormatError) as exc:
        idx.validate()
    assert exc.value.line_no == 2
    assert "out of order" in str(exc.value)


def test_validate_reports_duplicate():
    idx = VocabIndex(LineArena.from_lines([b"a\t1\t1\t1", b"a\t1\t1\t2"]))
    with pytest.raises(VocabFormatError):
        idx.validate()


def test_empty_vocab_rejected():
    with pytest.raises(EmptyVocabularyError):
        VocabIndex(LineArena(b""))
