# tests/test_textfile.py
from qlemu.textfile import LineArena, load_lines


def test_lines_without_final_newline():
    arena = LineArena(b"one\ttwo\nthree\n\nfour")
    assert len(arena) == 4
    assert list(arena) == [b"one\ttwo", b"three", b"", b"four"]
    assert arena.buf[arena.start(1):arena.end(1)] == b"three"


def test_load_lines(tmp_path):
    p = tmp_path / "v.tsv"
    p.write_bytes(b"a\t1\r\nb\t2\r\n")
    arena = load_lines(str(p))
    assert arena.path == str(p)
    assert arena[0] == b"a\t1\r"
    assert arena[1] == b"b\t2\r"
