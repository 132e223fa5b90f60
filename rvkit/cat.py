"""Copy files, or standard input, to standard output."""

import sys

_BUFSIZE = 512


class _ReadError(OSError):
    pass


class _WriteError(OSError):
    pass


def cat(src, out):
    """Copy everything readable from the binary stream src to out."""
    while True:
        try:
            chunk = src.read(_BUFSIZE)
        except OSError as exc:
            raise _ReadError(str(exc)) from exc
        if not chunk:
            return
        try:
            written = out.write(chunk)
        except OSError as exc:
            raise _WriteError(str(exc)) from exc
        if written is not None and written != len(chunk):
            raise _WriteError("short write")


def main(argv=None):
    """Concatenate the named files to standard output; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    out = sys.stdout.buffer
    try:
        if not args:
            cat(sys.stdin.buffer, out)
            return 0
        for name in args:
            try:
                src = open(name, "rb")
            except OSError:
                print(f"cat: cannot open {name}", file=sys.stderr)
                return 1
            with src:
                cat(src, out)
        return 0
    except _ReadError:
        print("cat: read error", file=sys.stderr)
        return 1
    except _WriteError:
        print("cat: write error", file=sys.stderr)
        return 1
    finally:
        out.flush()