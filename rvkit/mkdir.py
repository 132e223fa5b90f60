"""Create directories."""

import os
import sys


def main(argv=None):
    """Create each named directory, stopping at the first failure."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("Usage: mkdir files...", file=sys.stderr)
        return 1
    for name in args:
        try:
            os.mkdir(name)
        except OSError:
            print(f"mkdir: {name} failed to create", file=sys.stderr)
            break
    return 0