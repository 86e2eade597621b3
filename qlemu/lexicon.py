"""
qlemu/lexicon.py

VocabIndex maps each word of the base corpus to its frequency rank.

The base vocabulary file (<stem>_vocab.tsv) is sorted by word and each line
looks like:

    word \t occurrence_freq \t doc_freq \t rank

where rank is 1-origin (1 = most frequent word). Lines are kept in the
LineArena they were loaded into; the index is just binary search over the
arena's line offsets, and a line's numeric fields are parsed only when a
lookup lands on it.

Word comparison:
    A word ends at the first byte <= 0x20 (space, tab, CR, LF, NUL, ...).
    Two words are equal only if they end at the same position, a word that
    ends first sorts first, and otherwise the first differing byte decides
    (unsigned). This is exactly bytes ordering of the two words once each is
    cut at its terminator, so "app" never matches "apple".
"""

from __future__ import annotations

import re

from qlemu.textfile import LineArena

WORD_RE = re.compile(rb"[^\x00-\x20]*")
NUM_RE = re.compile(rb"[0-9]+")

TAB = 0x09
CR = 0x0D

# lookup_rank result for a word that is not in the vocabulary
NOT_FOUND = None

# occurrence frequency, document frequency, rank
FIELD_NAMES = ("occurrence frequency", "document frequency", "rank")


class VocabFormatError(ValueError):
    """A base vocabulary line is missing a numeric column or has junk in one."""

    def __init__(self, message: str, line_no: int, line: bytes):
        super().__init__(f"{message} (line {line_no}: {line!r})")
        self.line_no = line_no
        self.line = line


class EmptyVocabularyError(ValueError):
    pass


def word_end(buf: bytes, pos: int) -> int:
    """Offset of the first terminator byte at or after pos."""
    return WORD_RE.match(buf, pos).end()


def word_of(s: bytes) -> bytes:
    """The word at the start of s (everything up to the first terminator)."""
    return s[:word_end(s, 0)]


def compare_words(a: bytes, b: bytes) -> int:
    """
    Three-way comparison of the words at the start of a and b.
    Returns -1, 0 or 1.
    """
    wa, wb = word_of(a), word_of(b)
    if wa == wb:
        return 0
    return -1 if wa < wb else 1


class VocabIndex:
    """
    Sorted, read-only view over the base vocabulary.

    Typical usage:
        idx = VocabIndex(load_lines("trec_vocab.tsv"))
        idx.lookup_rank(b"apple")   # -> 2, or NOT_FOUND if not in the vocabulary

    The file order is trusted: nothing is re-sorted. Use validate() to check a
    file you do not trust.
    """

    def __init__(self, lines: LineArena):
        if len(lines) == 0:
            raise EmptyVocabularyError(f"Base vocabulary is empty: {lines.path}")
        self.lines = lines
        self.probes = 0   # comparisons made by the most recent lookup

    def __len__(self) -> int:
        return len(self.lines)

    def _word(self, i: int) -> bytes:
        buf = self.lines.buf
        start = self.lines.start(i)
        return buf[start:word_end(buf, start)]

    def find(self, word: bytes) -> int | None:
        """
        Binary search for word; returns the line number or None.
        At most floor(log2 N) + 1 comparisons.
        """
        key = word_of(word)
        lo, hi = 0, len(self.lines) - 1
        self.probes = 0
        while lo <= hi:
            mid = (lo + hi) // 2
            c = compare_words(self._word(mid), key)
            self.probes += 1
            if c == 0:
                return mid
            if c < 0:
                lo = mid + 1
            else:
                hi = mid - 1
        return None

    def lookup_rank(self, word: bytes) -> int | None:
        """
        1-origin frequency rank of word in the base corpus, or NOT_FOUND if the
        word is not in the vocabulary (the normal out-of-vocabulary case).

        Raises VocabFormatError if the matching line cannot be parsed.
        """
        i = self.find(word)
        if i is None:
            return NOT_FOUND
        return self.parse_fields(i)[2]

    def parse_fields(self, i: int) -> tuple[int, int, int]:
        """
        Parse (occurrence_freq, doc_freq, rank) from line i.

        Each field is a run of digits followed by a tab; the last one may
        instead be followed by the end of the line (or a CR). Columns after
        the rank are ignored.
        """
        buf = self.lines.buf
        end = self.lines.end(i)
        pos = word_end(buf, self.lines.start(i))
        if pos >= end or buf[pos] != TAB:
            self._fail(i, "missing field after word")
        pos += 1

        values = []
        for field, name in enumerate(FIELD_NAMES):
            m = NUM_RE.match(buf, pos, end)
            if m is None:
                self._fail(i, f"non-numeric {name}")
            values.append(int(m.group(0)))
            q = m.end()
            term = buf[q] if q < end else None
            if term == TAB:
                pos = q + 1
            elif term is None or term < 0x20:
                if field < 2:
                    self._fail(i, f"missing field after {name}")
                if term is not None and term != CR:
                    self._fail(i, f"unexpected byte {term:#04x} after {name}")
                break
            else:
                self._fail(i, f"unexpected byte {term:#04x} after {name}")

        if values[2] < 1:
            self._fail(i, "rank must be 1 or more")
        return values[0], values[1], values[2]

    def _fail(self, i: int, message: str):
        raise VocabFormatError(message, i + 1, self.lines[i])

    def validate(self) -> int:
        """
        Check the whole file: every line parses and words are strictly
        ascending under the word comparison. Returns the number of entries.
        """
        prev = None
        for i in range(len(self.lines)):
            w = self._word(i)
            if prev is not None and compare_words(prev, w) >= 0:
                self._fail(i, f"out of order after {prev!r}")
            self.parse_fields(i)
            prev = w
        return len(self.lines)
