import io

from rvkit.ulib import atoi, gets, strcmp


def test_atoi_digits():
    assert atoi("123") == 123


def test_atoi_stops_at_non_digit():
    assert atoi("42abc") == 42


def test_atoi_no_sign_or_empty():
    assert atoi("-5") == 0
    assert atoi("") == atoi("x")


def test_strcmp_equal():
    assert not strcmp("abc", "abc")
    assert not strcmp("a\0x", "a\0y")


def test_strcmp_order():
    assert strcmp("abc", "abd") < 0
    assert strcmp("b", "a") > 0
    assert strcmp("ab", "abc") < 0
    assert strcmp("abc", "ab") > 0


def test_strcmp_is_unsigned():
    assert strcmp(b"\xff", b"a") > 0


def test_gets_reads_lines():
    stream = io.StringIO("first\nsecond\n")
    assert gets(stream, 100) == "first\n"
    assert gets(stream, 100) == "second\n"
    assert gets(stream, 100) == ""


def test_gets_respects_limit():
    stream = io.StringIO("abcdef")
    assert gets(stream, 4) == "abc"
    assert gets(stream, 4) == "def"


def test_gets_stops_at_carriage_return():
    stream = io.StringIO("ab\rcd")
    assert gets(stream, 10) == "ab\r"


def test_gets_binary():
    assert gets(io.BytesIO(b"hi\nthere"), 10) == b"hi\n"