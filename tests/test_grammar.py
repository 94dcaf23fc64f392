from functools import partial

import pytest

from httpgram.errors import EmptySegment, InvalidEncoding, UnexpectedInput
from httpgram.grammar import (
    Cursor,
    alt,
    char,
    is_alpha,
    is_token,
    line_end,
    many0,
    opt,
    separated_list0,
    separated_list1,
    tag,
    take_line,
    take_while,
    take_while1,
    text,
)


def word(cur):
    return take_while1(cur, is_token, EmptySegment)


def test_token_charset():
    for c in b"azAZ09-_.":
        assert is_token(c)
    for c in b" /?#&=:%\r\n":
        assert not is_token(c)
    assert is_alpha(ord("H"))
    assert not is_alpha(ord("1"))


def test_cursor():
    cur = Cursor(b"ab")
    assert cur.peek() == b"a"
    cur.pos = 2
    assert cur.peek() == b""
    assert cur.at_end()
    assert cur.rest() == b""


def test_take_while_is_maximal():
    cur = Cursor(b"GETX /")
    assert take_while(cur, is_token) == b"GETX"
    assert cur.pos == 4
    assert take_while(cur, is_token) == b""
    assert cur.pos == 4


def test_take_while1_does_not_consume_on_failure():
    cur = Cursor(b" x")
    with pytest.raises(UnexpectedInput) as excinfo:
        take_while1(cur, is_token, production="name")
    assert excinfo.value.offset == 0
    assert excinfo.value.production == "name"
    assert cur.pos == 0


def test_char_and_tag():
    cur = Cursor(b"/HTTP/1.1")
    assert char(cur, b"/") == b"/"
    assert tag(cur, b"HTTP/") == b"HTTP/"
    assert cur.pos == 6
    with pytest.raises(UnexpectedInput) as excinfo:
        char(cur, b" ")
    assert excinfo.value.production == "' '"
    assert str(excinfo.value) == "expected ' ' at offset 6"
    with pytest.raises(UnexpectedInput):
        tag(cur, b"2.0")
    assert cur.pos == 6


def test_alt_first_wins():
    cur = Cursor(b"abc")
    result = alt(cur, partial(tag, literal=b"ab"), partial(tag, literal=b"abc"))
    assert result == b"ab"
    assert cur.pos == 2


def test_alt_raises_last_error():
    cur = Cursor(b"xyz")
    with pytest.raises(UnexpectedInput) as excinfo:
        alt(
            cur,
            partial(tag, literal=b"a"),
            partial(tag, literal=b"b", production="bee"),
        )
    assert excinfo.value.production == "bee"
    assert cur.pos == 0


def test_separated_list0():
    assert separated_list0(Cursor(b"?q"), b"/", word) == []
    cur = Cursor(b"a/b.c/d ")
    assert separated_list0(cur, b"/", word) == [b"a", b"b.c", b"d"]
    assert cur.pos == 7


def test_separated_list_element_required_after_separator():
    with pytest.raises(EmptySegment) as excinfo:
        separated_list0(Cursor(b"a//b"), b"/", word)
    assert excinfo.value.offset == 2
    with pytest.raises(EmptySegment):
        separated_list1(Cursor(b""), b"&", word)


def test_many0():
    def item(cur):
        value = take_while1(cur, is_alpha)
        char(cur, b";")
        return value

    cur = Cursor(b"a;bc;1")
    assert many0(cur, item) == [b"a", b"bc"]
    assert cur.pos == 5
    with pytest.raises(UnexpectedInput) as excinfo:
        many0(Cursor(b"a;bc1"), item)
    assert excinfo.value.offset == 4


def test_opt():
    cur = Cursor(b"x")
    assert opt(cur, line_end) is None
    assert opt(cur, line_end, b"") == b""
    assert cur.pos == 0


def test_line_end():
    cur = Cursor(b"\r\n\n")
    assert line_end(cur) == b"\r\n"
    assert line_end(cur) == b"\n"
    with pytest.raises(UnexpectedInput) as excinfo:
        line_end(Cursor(b"\rx"))
    assert excinfo.value.production == "line terminator"
    assert excinfo.value.offset == 0


def test_take_line():
    cur = Cursor(b"abc\r\nrest")
    assert take_line(cur) == b"abc"
    assert cur.pos == 3
    cur = Cursor(b"a\rb\nrest")
    assert take_line(cur) == b"a\rb"
    cur = Cursor(b"\n")
    assert take_line(cur) == b""
    with pytest.raises(UnexpectedInput) as excinfo:
        take_line(Cursor(b"no end"))
    assert excinfo.value.offset == 6


def test_text():
    assert text("héllo".encode(), 0) == "héllo"
    with pytest.raises(InvalidEncoding) as excinfo:
        text(b"a\xff", 10)
    assert excinfo.value.offset == 11
