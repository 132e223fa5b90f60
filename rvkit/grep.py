"""Line filter for patterns made of literals and the ^ . * $ operators."""

import sys

_BUFSIZE = 1024


def match(re, text):
    """True if the pattern re matches anywhere in text."""
    if re.startswith("^"):
        return _matchhere(re[1:], text)
    return any(_matchhere(re, text[i:]) for i in range(len(text) + 1))


def _matchhere(re, text):
    if not re:
        return True
    if len(re) >= 2 and re[1] == "*":
        return _matchstar(re[0], re[2:], text)
    if re == "$":
        return not text
    if text and (re[0] == "." or re[0] == text[0]):
        return _matchhere(re[1:], text[1:])
    return False


def _matchstar(c, re, text):
    i = 0
    while True:
        if _matchhere(re, text[i:]):
            return True
        if i < len(text) and (text[i] == c or c == "."):
            i += 1
        else:
            return False


def grep(pattern, stream, out):
    """Write each newline-terminated line of stream that matches pattern.

    A final line without a newline is not considered, and a line longer
    than the buffer ends the search.
    """
    pending = ""
    while True:
        chunk = stream.read(_BUFSIZE - 1 - len(pending))
        if not chunk:
            break
        pending += chunk
        *lines, pending = pending.split("\n")
        for line in lines:
            if match(pattern, line):
                out.write(line + "\n")


def main(argv=None):
    """Run grep over the named files, or standard input; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("usage: grep pattern [file ...]", file=sys.stderr)
        return 1
    pattern, *names = args
    if not names:
        grep(pattern, sys.stdin, sys.stdout)
        return 0
    for name in names:
        try:
            src = open(name, encoding="utf-8", errors="replace", newline="")
        except OSError:
            print(f"grep: cannot open {name}")
            return 1
        with src:
            grep(pattern, src, sys.stdout)
    return 0