"""Remove files and empty directories."""

import os
import sys


def _remove(name):
    if os.path.isdir(name) and not os.path.islink(name):
        os.rmdir(name)
    else:
        os.unlink(name)


def main(argv=None):
    """Remove each named entry, stopping at the first failure."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("Usage: rm files...", file=sys.stderr)
        return 1
    for name in args:
        try:
            _remove(name)
        except OSError:
            print(f"rm: {name} failed to delete", file=sys.stderr)
            break
    return 0