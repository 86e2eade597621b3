"""
qlemu/textfile.py

Whole-file line loading for vocabulary files.

A vocabulary can have millions of lines, so lines are never split into
separate objects. The file is read once into a single bytes buffer and an
array of line start offsets is recorded next to it:

    buf    = b"apple\t10\t5\t2\nbanana\t20\t8\t1\n"
    starts = array('q', [0, 13])

Line i spans buf[starts[i] : end_of(i)] where end_of(i) is the next start
minus its newline (or len(buf) for a final line without a newline).
"""

from __future__ import annotations

from array import array


class LineArena:
    """
    Read-only, ordered collection of the lines of one text file.

    - `arena[i]` returns line i as bytes, without its trailing "\\n".
    - `arena.start(i)` / `arena.end(i)` give offsets into `arena.buf`, so
      callers that only need to scan a prefix of a line can do so in place.
    """

    __slots__ = ("path", "buf", "_starts", "_ends")

    def __init__(self, buf: bytes, path: str | None = None):
        self.path = path
        self.buf = buf
        self._starts = array("q")
        self._ends = array("q")

        pos = 0
        n = len(buf)
        while pos < n:
            nl = buf.find(b"\n", pos)
            if nl < 0:
                nl = n
            self._starts.append(pos)
            self._ends.append(nl)
            pos = nl + 1

    def __len__(self) -> int:
        return len(self._starts)

    def __getitem__(self, i: int) -> bytes:
        return self.buf[self._starts[i]:self._ends[i]]

    def __iter__(self):
        for i in range(len(self._starts)):
            yield self.buf[self._starts[i]:self._ends[i]]

    def start(self, i: int) -> int:
        return self._starts[i]

    def end(self, i: int) -> int:
        return self._ends[i]

    @classmethod
    def from_lines(cls, lines) -> "LineArena":
        """Build an arena from an iterable of bytes lines (handy for tests)."""
        return cls(b"".join(line + b"\n" for line in lines))


def load_lines(path: str) -> LineArena:
    """Read an entire text file into a LineArena."""
    with open(path, "rb") as f:
        buf = f.read()
    arena = LineArena(buf, path=path)
    print(f"[TextFile] Loaded {len(arena)} lines ({len(buf)} bytes) from {path}")
    return arena
