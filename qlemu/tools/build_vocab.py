# qlemu/tools/build_vocab.py
"""
Build the two vocabulary files the emulator reads from a plain corpus.

Corpus format: one document per line; if a line has tabs, the text is the
last column (docid<TAB>text works as-is).

Outputs:
  <stem>_vocab.tsv          word \t occ_freq \t doc_freq \t rank   (sorted by word)
  <stem>_vocab_by_freq.tsv  word \t occ_freq \t doc_freq           (most frequent first)

Rank 1 is the most frequent word; equal frequencies are ordered by word.

Usage:
  python -m qlemu.tools.build_vocab data/collection.tsv data/marco
"""

from __future__ import annotations

import argparse
from collections import defaultdict
from itertools import islice
from typing import Dict, Iterable, List, Tuple

from tqdm import tqdm

from qlemu.parser import QueryParser
from qlemu.paths import base_vocab_path, emu_vocab_path


def count_words(lines: Iterable[bytes], parser: QueryParser) -> Tuple[Dict[bytes, int], Dict[bytes, int]]:
    """Occurrence frequency and document frequency of every word."""
    occ: Dict[bytes, int] = defaultdict(int)
    df: Dict[bytes, int] = defaultdict(int)
    for line in lines:
        text = line.rstrip(b"\r\n").rsplit(b"\t", 1)[-1]
        words = parser.tokenize(text)
        for w in words:
            occ[w] += 1
        for w in set(words):
            df[w] += 1
    return dict(occ), dict(df)


def rank_words(occ: Dict[bytes, int]) -> List[bytes]:
    """Words by descending occurrence frequency, ties broken by word."""
    return sorted(occ, key=lambda w: (-occ[w], w))


def write_vocab_files(occ: Dict[bytes, int], df: Dict[bytes, int], stem: str) -> Tuple[str, str]:
    by_freq = rank_words(occ)
    rank = {w: i + 1 for i, w in enumerate(by_freq)}

    vocab_path = base_vocab_path(stem)
    with open(vocab_path, "wb") as f:
        for w in sorted(occ):
            f.write(b"%s\t%d\t%d\t%d\n" % (w, occ[w], df[w], rank[w]))

    by_freq_path = emu_vocab_path(stem)
    with open(by_freq_path, "wb") as f:
        for w in by_freq:
            f.write(b"%s\t%d\t%d\n" % (w, occ[w], df[w]))

    print(f"[BuildVocab] Wrote {len(occ)} words → {vocab_path}")
    print(f"[BuildVocab] Wrote {len(occ)} words → {by_freq_path}")
    return vocab_path, by_freq_path


def build_vocab(corpus_path: str, stem: str, limit: int | None = None, fix_text: bool = False,
                case_fold: bool = True):
    parser = QueryParser(max_words=None, fix_text=fix_text, case_fold=case_fold)
    with open(corpus_path, "rb") as f:
        lines = islice(f, limit)
        occ, df = count_words(tqdm(lines, desc="docs", unit="doc"), parser)
    return write_vocab_files(occ, df, stem)


def main():
    ap = argparse.ArgumentParser(description="Build <stem>_vocab.tsv and <stem>_vocab_by_freq.tsv from a corpus.")
    ap.add_argument("corpus", help="Corpus file, one document per line")
    ap.add_argument("stem", help="Output stem")
    ap.add_argument("--limit", type=int, default=None, help="Only read the first N documents")
    ap.add_argument("--fix-text", action="store_true", help="Clean lines with ftfy before tokenizing")
    ap.add_argument("--keep-case", action="store_true", help="Do not lowercase ASCII letters")
    args = ap.parse_args()
    build_vocab(args.corpus, args.stem, limit=args.limit, fix_text=args.fix_text, case_fold=not args.keep_case)


if __name__ == "__main__":
    main()
