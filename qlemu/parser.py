import re
import ftfy
from qlemu.paths import MAX_WORDS_PER_QUERY, MAX_WORD_LEN

# A word is a maximal run of bytes above the space character; tabs, spaces,
# CR/LF and other ASCII controls all break tokens.
TOKEN_RE = re.compile(rb"[^\x00-\x20]+")
TRAILING_CONTROLS_RE = re.compile(rb"[\x00-\x1f]+$")


class QueryParser:
    """
    Tokenizer for query log lines.

    Works on bytes so that words compare exactly as they are stored in the
    vocabulary files.

    What it does:
    - Strips trailing line terminators (CR, LF and other controls)
    - Optionally fixes mojibake with ftfy (decode UTF-8 -> fix_text -> encode)
    - Splits on whitespace / control characters
    - Lowercases ASCII letters (case_fold); other bytes are left alone
    - Keeps at most `max_words` words (None = no cap), each truncated to `max_word_len` bytes

    Methods:
        tokenize(line: bytes) -> list[bytes]
        iter_queries(path: str, limit: int | None = None) -> yields bytes lines
    """

    def __init__(self, max_words: int | None = MAX_WORDS_PER_QUERY,
                 max_word_len: int = MAX_WORD_LEN, fix_text: bool = False,
                 case_fold: bool = True):
        self.max_words = max_words
        self.max_word_len = max_word_len
        self.fix_text = fix_text
        self.case_fold = case_fold

    def strip_line(self, line: bytes) -> bytes:
        return TRAILING_CONTROLS_RE.sub(b"", line)

    def clean(self, line: bytes) -> bytes:
        """Repair broken encodings the same way the corpus text was cleaned."""
        text = line.decode("utf-8", errors="replace")
        return ftfy.fix_text(text).encode("utf-8")

    def tokenize(self, line: bytes) -> list[bytes]:
        """
        Split a raw query line into words.
        Returns [] for a blank line.
        """
        line = self.strip_line(line)
        if self.fix_text:
            line = self.clean(line)
        words = []
        for m in TOKEN_RE.finditer(line):
            if self.max_words is not None and len(words) >= self.max_words:
                break
            word = m.group(0)[:self.max_word_len]
            words.append(word.lower() if self.case_fold else word)
        return words

    def iter_queries(self, path: str, limit: int | None = None):
        """
        Stream raw query lines (bytes, terminator included) from a query log.
        """
        with open(path, "rb") as f:
            for i, line in enumerate(f):
                if limit is not None and i >= limit:
                    break
                yield line
