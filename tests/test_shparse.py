import pytest

from rvkit.riscv import O_CREATE, O_RDONLY, O_TRUNC, O_WRONLY
from rvkit.shparse import (
    BackCmd,
    ExecCmd,
    ListCmd,
    PipeCmd,
    RedirCmd,
    ShellSyntaxError,
    parse_command,
)


def test_simple_command():
    assert parse_command("echo hi\n") == ExecCmd(["echo", "hi"])


def test_empty_line():
    assert parse_command("") == ExecCmd([])


def test_redirections():
    expected = RedirCmd(
        RedirCmd(ExecCmd(["cat"]), "in", O_RDONLY, 0),
        "out",
        O_WRONLY | O_CREATE | O_TRUNC,
        1,
    )
    assert parse_command("cat < in > out") == expected


def test_append_redirection():
    assert parse_command("echo x >> log") == RedirCmd(
        ExecCmd(["echo", "x"]), "log", O_WRONLY | O_CREATE, 1
    )


def test_redirection_without_spaces():
    assert parse_command("a>b") == RedirCmd(
        ExecCmd(["a"]), "b", O_WRONLY | O_CREATE | O_TRUNC, 1
    )


def test_redirection_between_arguments():
    assert parse_command("grep < f x") == RedirCmd(
        ExecCmd(["grep", "x"]), "f", O_RDONLY, 0
    )


def test_pipe_is_right_associative():
    assert parse_command("a | b | c") == PipeCmd(
        ExecCmd(["a"]), PipeCmd(ExecCmd(["b"]), ExecCmd(["c"]))
    )


def test_list_and_background():
    assert parse_command("a ; b") == ListCmd(ExecCmd(["a"]), ExecCmd(["b"]))
    assert parse_command("a &") == BackCmd(ExecCmd(["a"]))
    assert parse_command("a & ; b") == ListCmd(BackCmd(ExecCmd(["a"])), ExecCmd(["b"]))


def test_block_with_redirection():
    assert parse_command("(a ; b) > out") == RedirCmd(
        ListCmd(ExecCmd(["a"]), ExecCmd(["b"])),
        "out",
        O_WRONLY | O_CREATE | O_TRUNC,
        1,
    )


def test_background_followed_by_word_is_leftover():
    with pytest.raises(ShellSyntaxError) as info:
        parse_command("a & b")
    assert info.value.leftovers == "b"


def test_stray_close_paren():
    with pytest.raises(ShellSyntaxError) as info:
        parse_command(")")
    assert info.value.leftovers == ")"


def test_missing_close_paren():
    with pytest.raises(ShellSyntaxError, match="missing"):
        parse_command("(a")


def test_missing_redirection_file():
    with pytest.raises(ShellSyntaxError, match="missing file for redirection"):
        parse_command("a >")


def test_open_paren_inside_arguments():
    with pytest.raises(ShellSyntaxError, match="syntax"):
        parse_command("a (b)")


def test_argument_limit():
    args = [f"w{i}" for i in range(9)]
    assert parse_command(" ".join(args)) == ExecCmd(args)
    with pytest.raises(ShellSyntaxError, match="too many args"):
        parse_command(" ".join(args + ["extra"]))