# qlemu/emulator.py
"""
Generate an emulated query log from a base query log.

Inputs (must all exist):
  <base_stem>_vocab.tsv          word-sorted base vocabulary with rank column
  <base_stem>.qlog               base query log, one query per line
  <emu_stem>_vocab_by_freq.tsv   emulated vocabulary, most frequent first
Output:
  <emu_stem>.qlog                emulated query log, one line per input query

Each query word is replaced by the emulated word with the same frequency rank
(see qlemu.substitution for the out-of-vocabulary and overflow rules).

How to use:
python -m qlemu.emulator --base-stem data/trec --emu-stem data/synth --obfuscate --seed 42
"""

from __future__ import annotations

import argparse
import os
import sys
import time
from dataclasses import dataclass
from typing import Callable

from tqdm import tqdm

from qlemu.lexicon import EmptyVocabularyError, VocabFormatError, VocabIndex
from qlemu.parser import QueryParser
from qlemu.paths import base_qlog_path, base_vocab_path, emu_qlog_path, emu_vocab_path, missing_inputs
from qlemu.ranked_vocab import RankedVocabList
from qlemu.substitution import RunContext, SubstitutionPolicy
from qlemu.textfile import load_lines
from qlemu.transformer import QueryTransformer


@dataclass
class EmulationReport:
    output_path: str
    seed: int | None
    queries: int
    words: int
    oov: int
    overflow: int
    jittered: int
    setup_secs: float
    generation_secs: float

    @property
    def avg_query_length(self) -> float:
        return self.words / self.queries if self.queries else 0.0

    @property
    def avg_msec_per_query(self) -> float:
        return 1000.0 * self.generation_secs / self.queries if self.queries else 0.0


def default_seed() -> int:
    """Clock-derived seed, kept small so it is easy to copy into --seed."""
    return int(time.time() % 100000)


def emulate_query_log(
    base_stem: str,
    emu_stem: str,
    *,
    obfuscate: bool = False,
    preserve_no_exists: bool = False,
    seed: int | None = None,
    verbose: bool = False,
    fix_text: bool = False,
    case_fold: bool = True,
    limit: int | None = None,
    check_vocab: bool = False,
    uniform: Callable[[], float] | None = None,
) -> EmulationReport:
    """
    Read the base vocab, emulated vocab and base query log, write the
    emulated query log and return run statistics.

    `uniform` overrides the seeded random source (tests use a fixed sequence).

    Raises:
        FileNotFoundError: an input file is missing (nothing is written)
        ValueError: the output query log would overwrite the input
        EmptyVocabularyError: a vocabulary file has no lines
        VocabFormatError: a base vocabulary line is malformed
    """
    t0 = time.perf_counter()
    in_path = base_qlog_path(base_stem)
    out_path = emu_qlog_path(emu_stem)
    if os.path.abspath(in_path) == os.path.abspath(out_path):
        raise ValueError(f"Output query log would overwrite the input: {out_path}")
    missing = missing_inputs(base_stem, emu_stem)
    if missing:
        raise FileNotFoundError("Missing input file(s): " + ", ".join(missing))

    index = VocabIndex(load_lines(base_vocab_path(base_stem)))
    if check_vocab:
        n = index.validate()
        print(f"[Emulator] Base vocab checked: {n} entries in order")
    emu = RankedVocabList(load_lines(emu_vocab_path(emu_stem)))

    if uniform is not None:
        ctx = RunContext(uniform=uniform, seed=seed)
    else:
        if seed is None:
            seed = default_seed()
        ctx = RunContext.seeded(seed)
        print(f"[Emulator] Random seed: {seed}")

    policy = SubstitutionPolicy(index, emu, obfuscate=obfuscate,
                                preserve_no_exists=preserve_no_exists, verbose=verbose)
    parser = QueryParser(fix_text=fix_text, case_fold=case_fold)
    transformer = QueryTransformer(policy, parser)

    if verbose:
        print(f"[Emulator] Input file = {in_path}")

    t1 = time.perf_counter()
    setup_secs = t1 - t0
    print(f"[Emulator] Setup complete: elapsed time {setup_secs:.3f} sec.")

    with open(out_path, "wb") as out:
        lines = parser.iter_queries(in_path, limit=limit)
        for line in tqdm(lines, desc="queries", unit="q", disable=verbose):
            out.write(transformer.transform(line, ctx))

    generation_secs = time.perf_counter() - t1
    return EmulationReport(
        output_path=out_path,
        seed=ctx.seed,
        queries=ctx.queries,
        words=ctx.words,
        oov=ctx.oov,
        overflow=ctx.overflow,
        jittered=ctx.jittered,
        setup_secs=setup_secs,
        generation_secs=generation_secs,
    )


def print_report(report: EmulationReport):
    print(f"Number of input queries: {report.queries}")
    print(f"Ave. query length: {report.avg_query_length:.2f}")
    print(f"Words not in base vocab: {report.oov}   ranks beyond emulated vocab: {report.overflow}")
    print(f"Total time taken: {report.setup_secs:.1f} sec. startup + "
          f"{report.generation_secs:.1f} sec. generation time")
    print(f"Average generation time per query: {report.avg_msec_per_query:.4f} msec")
    print(f"\nEmulated query log ({report.queries} queries) is in {report.output_path}")


def main(argv=None):
    ap = argparse.ArgumentParser(
        description="Emulate a base query log against another corpus by mapping word frequency ranks.",
        epilog="<base-stem>_vocab.tsv, <base-stem>.qlog and <emu-stem>_vocab_by_freq.tsv must "
               "all exist. <emu-stem>.qlog will be created.",
    )
    ap.add_argument("--base-stem", required=True, help="Stem of the base corpus files")
    ap.add_argument("--emu-stem", required=True, help="Stem of the emulated corpus files")
    ap.add_argument("--obfuscate", action="store_true", help="Randomly shift each rank by -1, 0 or +1")
    ap.add_argument("--preserve-no-exists", action="store_true",
                    help="Replace unknown words with noexistN instead of a random emulated word")
    ap.add_argument("--seed", type=int, default=None, help="Random seed (default: derived from the clock)")
    ap.add_argument("--verbose", action="store_true", help="Print per-query and per-word diagnostics")
    ap.add_argument("--fix-text", action="store_true", help="Clean query lines with ftfy before tokenizing")
    ap.add_argument("--keep-case", action="store_true", help="Do not lowercase ASCII letters in query words")
    ap.add_argument("--limit", type=int, default=None, help="Only process the first N queries")
    ap.add_argument("--check-vocab", action="store_true",
                    help="Validate base vocab order and columns before starting")
    args = ap.parse_args(argv)

    try:
        report = emulate_query_log(
            args.base_stem,
            args.emu_stem,
            obfuscate=args.obfuscate,
            preserve_no_exists=args.preserve_no_exists,
            seed=args.seed,
            verbose=args.verbose,
            fix_text=args.fix_text,
            case_fold=not args.keep_case,
            limit=args.limit,
            check_vocab=args.check_vocab,
        )
    except FileNotFoundError as e:
        print(f"[Emulator] {e}", file=sys.stderr)
        return 2
    except (VocabFormatError, EmptyVocabularyError) as e:
        print(f"[Emulator] Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"[Emulator] {e}", file=sys.stderr)
        return 2

    print_report(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
