"""
qlemu/substitution.py

Maps one base-corpus query word to one emulated-corpus word by rank.

    rank0 = lookup_rank(word) - 1            (-1 if the word is unknown)
    obfuscate:  r > 2/3 -> rank0 + 1,  r < 1/3 and rank0 > 0 -> rank0 - 1
    rank0 < 0        -> "noexistN" placeholder, or a random emulated word
    rank0 >= size    -> a random emulated word
    otherwise        -> emulated word at rank0

All mutable state of a run (placeholder counter, random source, counters)
lives in a RunContext so the policy itself stays read-only.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable

from qlemu.lexicon import NOT_FOUND, VocabIndex
from qlemu.paths import NOEXIST_PREFIX
from qlemu.ranked_vocab import RankedVocabList

JITTER_UP = 2.0 / 3.0
JITTER_DOWN = 1.0 / 3.0


@dataclass
class RunContext:
    """
    Per-run mutable state shared by every query of the run.

    uniform: callable returning a float in [0, 1) on each call.
    noexist_next: number given to the next OOV placeholder.
    """
    uniform: Callable[[], float]
    noexist_next: int = 0
    queries: int = 0
    words: int = 0
    oov: int = 0
    overflow: int = 0
    jittered: int = 0
    seed: int | None = field(default=None, repr=False)

    @classmethod
    def seeded(cls, seed: int) -> "RunContext":
        return cls(uniform=random.Random(seed).random, seed=seed)

    def next_placeholder(self) -> bytes:
        token = NOEXIST_PREFIX + str(self.noexist_next).encode("ascii")
        self.noexist_next += 1
        return token


class SubstitutionPolicy:
    def __init__(self, index: VocabIndex, emu: RankedVocabList,
                 obfuscate: bool = False, preserve_no_exists: bool = False,
                 verbose: bool = False):
        self.index = index
        self.emu = emu
        self.obfuscate = obfuscate
        self.preserve_no_exists = preserve_no_exists
        self.verbose = verbose

    def jitter(self, rank0: int, ctx: RunContext) -> int:
        """Move rank0 one step up or down with probability 1/3 each; never below 0."""
        r = ctx.uniform()
        if r > JITTER_UP:
            ctx.jittered += 1
            return rank0 + 1
        if rank0 > 0 and r < JITTER_DOWN:
            ctx.jittered += 1
            return rank0 - 1
        return rank0

    def resolve(self, word: bytes, ctx: RunContext) -> bytes:
        rank = self.index.lookup_rank(word)
        rank0 = rank - 1 if rank is not NOT_FOUND else -1

        if self.obfuscate and rank0 >= 0:
            rank0 = self.jitter(rank0, ctx)

        if rank0 < 0:
            ctx.oov += 1
            if self.verbose:
                print(f"[Substitution] Warning: {word!r} not found in base vocab.")
            if self.preserve_no_exists:
                return ctx.next_placeholder()
            return self.emu.random_word(ctx.uniform)

        if self.verbose:
            print(f"[Substitution]   --- {word!r} is at rank0 {rank0}")
        if rank0 >= self.emu.size():
            ctx.overflow += 1
            if self.verbose:
                print(f"[Substitution] Warning: rank0 {rank0} too high (>= {self.emu.size()}). "
                      f"Choosing a random substitute.")
            return self.emu.random_word(ctx.uniform)

        return self.emu.word_at(rank0)
