"""printf-style formatting that knows %d, %u, %x (with l and ll), %p, %s and %%."""

_DIGITS = "0123456789ABCDEF"

_INTEGER_SPECS = {
    "d": (10, True),
    "ld": (10, True),
    "lld": (10, True),
    "u": (10, False),
    "lu": (10, False),
    "llu": (10, False),
    "x": (16, False),
    "lx": (16, False),
    "llx": (16, False),
}

_SPECS = (*_INTEGER_SPECS, "p", "s", "%")


def _integer(value, base, signed):
    # The value passes through a 32-bit int on its way to be printed.
    value &= 0xFFFFFFFF
    if value >= 1 << 31:
        value -= 1 << 32
    negative = signed and value < 0
    x = (-value if negative else value) & 0xFFFFFFFF
    digits = []
    while True:
        digits.append(_DIGITS[x % base])
        x //= base
        if x == 0:
            break
    if negative:
        digits.append("-")
    return "".join(reversed(digits))


def _pointer(value):
    return "0x" + format(value & ((1 << 64) - 1), "016X")


def _string(value):
    if value is None:
        return "(null)"
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("latin-1")
    return str(value)


def format_string(fmt, *args):
    """Format args according to fmt and return the resulting text.

    Unknown conversions are copied out with their percent sign; a lone
    percent sign at the very end produces nothing.
    """
    values = iter(args)

    def next_arg():
        try:
            return next(values)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None

    out = []
    pos = 0
    while pos < len(fmt):
        c = fmt[pos]
        pos += 1
        if c != "%":
            out.append(c)
            continue
        if pos >= len(fmt):
            break
        spec = next((s for s in _SPECS if fmt.startswith(s, pos)), None)
        if spec is None:
            out.append("%" + fmt[pos])
            pos += 1
            continue
        pos += len(spec)
        if spec == "%":
            out.append("%")
        elif spec == "p":
            out.append(_pointer(next_arg()))
        elif spec == "s":
            out.append(_string(next_arg()))
        else:
            base, signed = _INTEGER_SPECS[spec]
            out.append(_integer(next_arg(), base, signed))
    return "".join(out)


def fprintf(stream, fmt, *args):
    """Write the formatted text to a text stream."""
    stream.write(format_string(fmt, *args))