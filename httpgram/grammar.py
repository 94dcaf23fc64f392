"""
Small parsing combinators over a byte cursor.

Every rule takes a :class:`Cursor`, advances it past what it matched and
returns the matched value, or raises a :class:`~httpgram.errors.ParseError`
carrying the offset at which the rule expected something else.
"""
import string
from functools import partial

from .errors import InvalidEncoding, ParseError, UnexpectedInput

CR = b"\r"
LF = b"\n"
CRLF = CR + LF
SP = b" "
TOKEN_CHARS = frozenset(
    (string.ascii_letters + string.digits + "-_.").encode("ascii")
)
ALPHA_CHARS = frozenset(string.ascii_letters.encode("ascii"))


def is_token(byte: int) -> bool:
    return byte in TOKEN_CHARS


def is_alpha(byte: int) -> bool:
    return byte in ALPHA_CHARS


class Cursor:
    __slots__ = ("data", "pos")

    def __init__(self, data: bytes, pos: int = 0):
        self.data = data
        self.pos = pos

    def __repr__(self):
        head = self.data[self.pos : self.pos + 16]
        return f"{self.__class__.__name__}({head!r}, pos={self.pos})"

    def peek(self) -> bytes:
        "the next byte, or b'' at end of input"
        return self.data[self.pos : self.pos + 1]

    def at_end(self) -> bool:
        return self.pos >= len(self.data)

    def startswith(self, literal: bytes) -> bool:
        return self.data.startswith(literal, self.pos)

    def rest(self) -> bytes:
        return self.data[self.pos :]


def _show(literal: bytes) -> str:
    if literal == CRLF:
        return "CRLF"
    return f"'{literal.decode('ascii')}'"


def take_while(cur: Cursor, predicate) -> bytes:
    data, start = cur.data, cur.pos
    end = start
    size = len(data)
    while end < size and predicate(data[end]):
        end += 1
    cur.pos = end
    return data[start:end]


def take_while1(cur: Cursor, predicate, error=UnexpectedInput, production=None):
    run = take_while(cur, predicate)
    if not run:
        raise error(cur.pos, production)
    return run


def char(cur: Cursor, c: bytes, error=UnexpectedInput, production=None) -> bytes:
    if cur.peek() != c:
        if production is None and error is UnexpectedInput:
            production = _show(c)
        raise error(cur.pos, production)
    cur.pos += 1
    return c


def tag(cur: Cursor, literal: bytes, error=UnexpectedInput, production=None):
    if not cur.startswith(literal):
        if production is None and error is UnexpectedInput:
            production = _show(literal)
        raise error(cur.pos, production)
    cur.pos += len(literal)
    return literal


def alt(cur: Cursor, *rules):
    """Return the result of the first rule that matches.

    Every rule is tried from the same position. When all of them fail the
    error of the last one is raised.
    """
    start = cur.pos
    error = None
    for rule in rules:
        try:
            return rule(cur)
        except ParseError as e:
            cur.pos = start
            error = e
    raise error


def opt(cur: Cursor, rule, default=None):
    "``rule``, or ``default`` when it fails without consuming input"
    start = cur.pos
    try:
        return rule(cur)
    except ParseError:
        if cur.pos != start:
            raise
        return default


def many0(cur: Cursor, rule) -> list:
    """Apply ``rule`` until it fails without consuming input.

    A failure after the rule consumed something is not the end of the
    repetition but a real error, and propagates.
    """
    items = []
    while True:
        start = cur.pos
        try:
            items.append(rule(cur))
        except ParseError:
            if cur.pos != start:
                raise
            return items


def separated_list1(cur: Cursor, sep: bytes, rule) -> list:
    items = [rule(cur)]
    while cur.startswith(sep):
        cur.pos += len(sep)
        items.append(rule(cur))
    return items


def separated_list0(cur: Cursor, sep: bytes, rule) -> list:
    """Like :func:`separated_list1`, but the list may be empty.

    The list is empty only when the first element fails without consuming
    anything. An element after a separator is always required.
    """
    start = cur.pos
    try:
        first = rule(cur)
    except ParseError:
        if cur.pos != start:
            raise
        return []
    items = [first]
    while cur.startswith(sep):
        cur.pos += len(sep)
        items.append(rule(cur))
    return items


def line_end(cur: Cursor) -> bytes:
    "CRLF, or a bare LF"
    return alt(
        cur,
        partial(tag, literal=CRLF, production="line terminator"),
        partial(tag, literal=LF, production="line terminator"),
    )


def take_line(cur: Cursor) -> bytes:
    """Everything up to, not including, the next line terminator."""
    newline = cur.data.find(LF, cur.pos)
    if newline < 0:
        raise UnexpectedInput(len(cur.data), "line terminator")
    end = newline
    if end > cur.pos and cur.data[end - 1 : end] == CR:
        end -= 1
    line = cur.data[cur.pos : end]
    cur.pos = end
    return line


def text(raw: bytes, offset: int) -> str:
    "decode ``raw``, found at ``offset`` in the input, as utf-8"
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidEncoding(offset + e.start) from e
