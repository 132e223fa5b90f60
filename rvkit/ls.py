"""List files and directories with their type, inode number and size."""

import os
import stat
import sys

DIRSIZ = 14

T_DIR = 1
T_FILE = 2
T_DEVICE = 3

_BUFSIZE = 512


def fmtname(path):
    """The last component of path, blank-padded to DIRSIZ characters."""
    name = path.rsplit("/", 1)[-1]
    if len(name) >= DIRSIZ:
        return name
    return name.ljust(DIRSIZ)


def _kind(st):
    if stat.S_ISDIR(st.st_mode):
        return T_DIR
    if stat.S_ISREG(st.st_mode):
        return T_FILE
    return T_DEVICE


def _line(path, st):
    return f"{fmtname(path)} {_kind(st)} {st.st_ino} {st.st_size}\n"


def ls(path, out):
    """Write a listing of path to out; problems opening it go to stderr."""
    try:
        st = os.stat(path)
    except OSError:
        print(f"ls: cannot open {path}", file=sys.stderr)
        return
    if _kind(st) != T_DIR:
        out.write(_line(path, st))
        return
    if len(path) + 1 + DIRSIZ + 1 > _BUFSIZE:
        out.write("ls: path too long\n")
        return
    try:
        names = sorted(os.listdir(path))
    except OSError:
        print(f"ls: cannot open {path}", file=sys.stderr)
        return
    for name in [".", "..", *names]:
        full = f"{path}/{name}"
        try:
            entry = os.stat(full)
        except OSError:
            out.write(f"ls: cannot stat {full}\n")
            continue
        out.write(_line(full, entry))


def main(argv=None):
    """List each named path, or the current directory; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    for path in args or ["."]:
        ls(path, sys.stdout)
    return 0