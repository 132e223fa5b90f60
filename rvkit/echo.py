"""Print the arguments separated by spaces."""

import sys


def echo(args):
    """Arguments joined by spaces with a newline; empty when there are none."""
    if not args:
        return ""
    return " ".join(args) + "\n"


def main(argv=None):
    """Write the arguments to standard output; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    sys.stdout.write(echo(args))
    return 0