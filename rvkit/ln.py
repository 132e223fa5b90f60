"""Make a hard link to a file."""

import os
import sys


def main(argv=None):
    """Link argv[0] as argv[1]; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print("Usage: ln old new", file=sys.stderr)
        return 1
    old, new = args
    try:
        os.link(old, new)
    except OSError:
        print(f"link {old} {new}: failed", file=sys.stderr)
    return 0