# qlemu/paths.py

import os

# --- Input / output suffixes appended to a corpus stem ---
BASE_VOCAB_SUFFIX = "_vocab.tsv"              # word-sorted, word \t occFreq \t docFreq \t rank
QLOG_SUFFIX = ".qlog"                         # one query per line
EMU_VOCAB_SUFFIX = "_vocab_by_freq.tsv"       # frequency-descending, word first

# --- Placeholder for out-of-vocabulary words (noexist0, noexist1, ...) ---
NOEXIST_PREFIX = b"noexist"

# --- Tokenizer limits (per query line) ---
MAX_WORDS_PER_QUERY = 500
MAX_WORD_LEN = 40


def base_vocab_path(stem: str) -> str:
    return stem + BASE_VOCAB_SUFFIX


def base_qlog_path(stem: str) -> str:
    return stem + QLOG_SUFFIX


def emu_vocab_path(stem: str) -> str:
    return stem + EMU_VOCAB_SUFFIX


def emu_qlog_path(stem: str) -> str:
    return stem + QLOG_SUFFIX


def missing_inputs(base_stem: str, emu_stem: str) -> list[str]:
    """Return every required input file that does not exist (empty list if all present)."""
    required = [
        base_vocab_path(base_stem),
        base_qlog_path(base_stem),
        emu_vocab_path(emu_stem),
    ]
    return [p for p in required if not os.path.exists(p)]
