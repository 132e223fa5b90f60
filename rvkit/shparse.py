"""Parser for the shell's command language: words, < > >>, |, ;, & and ( )."""

from dataclasses import dataclass, field

from .riscv import O_CREATE, O_RDONLY, O_TRUNC, O_WRONLY

MAXARGS = 10

_WHITESPACE = " \t\r\n\v"
_SYMBOLS = "<|>&;()"

_END = ""
_WORD = "a"
_APPEND = "+"

_REDIRECTIONS = {
    "<": (O_RDONLY, 0),
    ">": (O_WRONLY | O_CREATE | O_TRUNC, 1),
    _APPEND: (O_WRONLY | O_CREATE, 1),
}


class ShellSyntaxError(ValueError):
    """The command line cannot be parsed."""

    def __init__(self, message, leftovers=None):
        super().__init__(message)
        self.leftovers = leftovers


@dataclass
class ExecCmd:
    """A program and its arguments."""

    argv: list = field(default_factory=list)


@dataclass
class RedirCmd:
    """A command with one file descriptor redirected to a file."""

    cmd: object
    file: str
    mode: int
    fd: int


@dataclass
class PipeCmd:
    """left's output piped into right."""

    left: object
    right: object


@dataclass
class ListCmd:
    """left, then right."""

    left: object
    right: object


@dataclass
class BackCmd:
    """A command run in the background."""

    cmd: object


class _Parser:
    def __init__(self, text):
        self.text = text
        self.pos = 0

    def skip(self):
        while self.pos < len(self.text) and self.text[self.pos] in _WHITESPACE:
            self.pos += 1

    def peek(self, toks):
        self.skip()
        return self.pos < len(self.text) and self.text[self.pos] in toks

    def gettoken(self):
        self.skip()
        text = self.text
        start = self.pos
        if start >= len(text):
            return _END, ""
        c = text[start]
        if c in "|();&<":
            self.pos += 1
            tok = c
        elif c == ">":
            self.pos += 1
            tok = ">"
            if text.startswith(">", self.pos):
                self.pos += 1
                tok = _APPEND
        else:
            while (
                self.pos < len(text)
                and text[self.pos] not in _WHITESPACE
                and text[self.pos] not in _SYMBOLS
            ):
                self.pos += 1
            tok = _WORD
        word = text[start:self.pos]
        self.skip()
        return tok, word

    def parse_line(self):
        cmd = self.parse_pipe()
        while self.peek("&"):
            self.gettoken()
            cmd = BackCmd(cmd)
        if self.peek(";"):
            self.gettoken()
            cmd = ListCmd(cmd, self.parse_line())
        return cmd

    def parse_pipe(self):
        cmd = self.parse_exec()
        if self.peek("|"):
            self.gettoken()
            cmd = PipeCmd(cmd, self.parse_pipe())
        return cmd

    def parse_redirs(self, cmd):
        while self.peek("<>"):
            tok, _ = self.gettoken()
            file_tok, file = self.gettoken()
            if file_tok != _WORD:
                raise ShellSyntaxError("missing file for redirection")
            mode, fd = _REDIRECTIONS[tok]
            cmd = RedirCmd(cmd, file, mode, fd)
        return cmd

    def parse_block(self):
        if not self.peek("("):
            raise ShellSyntaxError("parseblock")
        self.gettoken()
        cmd = self.parse_line()
        if not self.peek(")"):
            raise ShellSyntaxError("syntax - missing )")
        self.gettoken()
        return self.parse_redirs(cmd)

    def parse_exec(self):
        if self.peek("("):
            return self.parse_block()
        exec_cmd = ExecCmd()
        cmd = self.parse_redirs(exec_cmd)
        while not self.peek("|)&;"):
            tok, word = self.gettoken()
            if tok == _END:
                break
            if tok != _WORD:
                raise ShellSyntaxError("syntax")
            exec_cmd.argv.append(word)
            if len(exec_cmd.argv) >= MAXARGS:
                raise ShellSyntaxError("too many args")
            cmd = self.parse_redirs(cmd)
        return cmd


def parse_command(s):
    """Parse one command line into a tree of command objects."""
    s = s.split("\0", 1)[0]
    parser = _Parser(s)
    cmd = parser.parse_line()
    parser.skip()
    if parser.pos != len(s):
        raise ShellSyntaxError("syntax", leftovers=s[parser.pos:])
    return cmd