"""Small string and input helpers used by the user programs."""


def atoi(s):
    """Value of the leading decimal digits of s; no sign or whitespace."""
    n = 0
    for ch in s:
        if not "0" <= ch <= "9":
            break
        n = n * 10 + ord(ch) - ord("0")
    return n


def _as_cstring(s):
    data = s.encode("utf-8") if isinstance(s, str) else bytes(s)
    return data.split(b"\0", 1)[0]


def strcmp(p, q):
    """Compare two strings as unsigned bytes; negative, zero or positive."""
    a = _as_cstring(p)
    b = _as_cstring(q)
    for x, y in zip(a, b):
        if x != y:
            return x - y
    if len(a) == len(b):
        return 0
    return (a[len(b)] if len(a) > len(b) else 0) - (b[len(a)] if len(b) > len(a) else 0)


def gets(stream, limit):
    """Read one line of at most limit-1 characters, ending after a newline or CR.

    Returns an empty string at end of input.
    """
    empty = stream.read(0)
    pieces = []
    while len(pieces) + 1 < limit:
        c = stream.read(1)
        if not c:
            break
        pieces.append(c)
        if c in ("\n", "\r", b"\n", b"\r"):
            break
    return empty.join(pieces)