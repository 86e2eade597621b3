"""
qlemu/ranked_vocab.py

RankedVocabList: the emulated corpus's vocabulary in descending frequency
order (<stem>_vocab_by_freq.tsv). Index i holds the word of rank i + 1.
Only the first column (the word) is used.
"""

from __future__ import annotations

import math
from array import array
from typing import Callable

from qlemu.lexicon import EmptyVocabularyError, word_end
from qlemu.textfile import LineArena


class RankedVocabList:
    def __init__(self, lines: LineArena):
        if len(lines) == 0:
            raise EmptyVocabularyError(f"Emulated vocabulary is empty: {lines.path}")
        self.buf = lines.buf
        self._starts = array("q")
        self._ends = array("q")
        for i in range(len(lines)):
            start = lines.start(i)
            self._starts.append(start)
            self._ends.append(word_end(self.buf, start))

    def __len__(self) -> int:
        return len(self._starts)

    def size(self) -> int:
        return len(self._starts)

    def word_at(self, index: int) -> bytes:
        """Word of 0-origin rank `index`. Raises IndexError outside [0, size)."""
        if not 0 <= index < len(self._starts):
            raise IndexError(f"rank0 {index} outside emulated vocabulary of {len(self._starts)} words")
        return self.buf[self._starts[index]:self._ends[index]]

    def random_word(self, uniform: Callable[[], float]) -> bytes:
        """A word chosen uniformly at random, using one draw from `uniform`."""
        return self.word_at(math.floor(uniform() * len(self._starts)))
