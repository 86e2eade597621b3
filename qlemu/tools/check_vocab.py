# qlemu/tools/check_vocab.py
"""
Check that a base vocabulary (<stem>_vocab.tsv) can drive the emulator:
words strictly ascending, and occ_freq / doc_freq / rank present and numeric
on every line.

Usage:
  python -m qlemu.tools.check_vocab data/trec_vocab.tsv
"""

import argparse
import sys

from qlemu.lexicon import EmptyVocabularyError, VocabFormatError, VocabIndex
from qlemu.textfile import load_lines


def check_vocab(path: str) -> int:
    """Return the number of entries; raises VocabFormatError on the first bad line."""
    return VocabIndex(load_lines(path)).validate()


def main(argv=None):
    ap = argparse.ArgumentParser(description="Validate a word-sorted base vocabulary file.")
    ap.add_argument("vocab", help="Path to <stem>_vocab.tsv")
    args = ap.parse_args(argv)

    try:
        n = check_vocab(args.vocab)
    except FileNotFoundError as e:
        print(f"[CheckVocab] {e}", file=sys.stderr)
        return 2
    except (VocabFormatError, EmptyVocabularyError) as e:
        print(f"[CheckVocab] {args.vocab}: {e}", file=sys.stderr)
        return 1
    print(f"[CheckVocab] {args.vocab}: OK, {n} entries")
    return 0


if __name__ == "__main__":
    sys.exit(main())
