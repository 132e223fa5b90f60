"""Count lines, words and bytes."""

import sys
from dataclasses import dataclass

_BUFSIZE = 512
_SEPARATORS = frozenset(b" \r\t\n\v\0")


@dataclass
class Counts:
    """Line, word and byte totals of one input."""

    lines: int = 0
    words: int = 0
    chars: int = 0

    def __str__(self):
        return f"{self.lines} {self.words} {self.chars}"


def count(stream):
    """Count the lines, words and bytes read from stream."""
    counts = Counts()
    inword = False
    while chunk := stream.read(_BUFSIZE):
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        for byte in chunk:
            counts.chars += 1
            if byte == ord("\n"):
                counts.lines += 1
            if byte in _SEPARATORS:
                inword = False
            elif not inword:
                counts.words += 1
                inword = True
    return counts


def _report(stream, name):
    try:
        counts = count(stream)
    except OSError:
        print("wc: read error")
        return False
    print(f"{counts} {name}")
    return True


def main(argv=None):
    """Count the named files, or standard input; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        return 0 if _report(sys.stdin.buffer, "") else 1
    for name in args:
        try:
            src = open(name, "rb")
        except OSError:
            print(f"wc: cannot open {name}")
            return 1
        with src:
            if not _report(src, name):
                return 1
    return 0