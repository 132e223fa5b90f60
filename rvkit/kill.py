"""Kill the processes whose ids are given."""

import os
import signal
import sys

from .ulib import atoi

_SIGNAL = getattr(signal, "SIGKILL", signal.SIGTERM)


def main(argv=None):
    """Kill each pid named in the arguments; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("usage: kill pid...", file=sys.stderr)
        return 1
    for arg in args:
        pid = atoi(arg)
        if pid <= 0:
            # No process has such an id.
            continue
        try:
            os.kill(pid, _SIGNAL)
        except OSError:
            pass
    return 0