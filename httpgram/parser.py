"""
Recursive-descent recognizer for an HTTP/1.x request head.

    request      = method SP target SP version EOL *header [EOL] body
    target       = "/" [segment *("/" segment)] ["?" [pair *("&" pair)]]
                   ["#" fragment]
    pair         = token "=" token
    version      = "HTTP/1.0" / "HTTP/1.1" / 1*ALPHA
    header       = token ":" [SP] *(any but EOL) EOL
    EOL          = CRLF / LF

``token`` is ASCII letters, digits, ``-``, ``_`` and ``.``. Every rule takes a
:class:`~httpgram.grammar.Cursor` and can be used on its own.
"""
from functools import partial

from . import gvars
from .errors import (
    EmptyMethod,
    EmptySegment,
    EmptyVersion,
    InvalidEncoding,
    MalformedHeaderLine,
    MalformedQueryPair,
    MissingPathRoot,
)
from .grammar import (
    SP,
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
from .protocols.http import (
    ExtensionMethod,
    ExtensionVersion,
    Field,
    Method,
    Request,
    Target,
    Version,
)

KNOWN_METHODS = {method.value.encode("ascii"): method for method in Method}
# bytes that end the target; "" is end of input
TARGET_END = (b"", b" ", b"#", b"\r", b"\n")


def method(cur: Cursor):
    token = take_while1(cur, is_token, EmptyMethod)
    known = KNOWN_METHODS.get(token)
    if known is not None:
        return known
    return ExtensionMethod(token.decode("ascii"))


def segment(cur: Cursor) -> str:
    return take_while1(cur, is_token, EmptySegment).decode("ascii")


def segments(cur: Cursor) -> list:
    if cur.peek() == b"/":
        raise EmptySegment(cur.pos)
    return separated_list0(cur, b"/", segment)


def query_pair(cur: Cursor) -> Field:
    key = take_while1(cur, is_token, MalformedQueryPair)
    char(cur, b"=", MalformedQueryPair)
    value = take_while1(cur, is_token, MalformedQueryPair)
    return Field(key.decode("ascii"), value.decode("ascii"))


def query(cur: Cursor) -> list:
    if cur.peek() != b"?":
        return []
    cur.pos += 1
    if cur.peek() in TARGET_END:
        return []
    return separated_list1(cur, b"&", query_pair)


def fragment(cur: Cursor):
    if cur.peek() != b"#":
        return None
    cur.pos += 1
    start = cur.pos
    raw = take_while(cur, lambda byte: byte not in b" \r\n")
    return text(raw, start)


def target(cur: Cursor) -> Target:
    char(cur, b"/", MissingPathRoot)
    path = segments(cur)
    pairs = query(cur)
    return Target(tuple(path), tuple(pairs), fragment(cur))


def _known_version(cur: Cursor, version: Version) -> Version:
    tag(cur, version.value.encode("ascii"))
    return version


def _extension_version(cur: Cursor) -> ExtensionVersion:
    return ExtensionVersion(take_while1(cur, is_alpha, EmptyVersion).decode("ascii"))


def version(cur: Cursor):
    return alt(
        cur,
        partial(_known_version, version=Version.HTTP_1_0),
        partial(_known_version, version=Version.HTTP_1_1),
        _extension_version,
    )


def header(cur: Cursor) -> Field:
    name = take_while1(cur, is_token, production="header name")
    char(cur, b":", MalformedHeaderLine)
    if cur.peek() == SP:
        cur.pos += 1
    start = cur.pos
    value = text(take_line(cur), start)
    line_end(cur)
    return Field(name.decode("ascii"), value)


def headers(cur: Cursor) -> list:
    start = cur.pos
    fields = many0(cur, header)
    gvars.logger.debug(f"headers: {len(fields)} fields at {start}-{cur.pos}")
    return fields


def request(cur: Cursor) -> Request:
    """Parse one request head; the cursor ends up after the header section."""
    request_method = method(cur)
    char(cur, SP)
    request_target = target(cur)
    char(cur, SP)
    request_version = version(cur)
    line_end(cur)
    gvars.logger.debug(
        f"request line: {request_method} {request_target} {request_version}"
    )
    fields = headers(cur)
    opt(cur, line_end)
    return Request(
        request_method, request_target, request_version, tuple(fields), cur.rest()
    )


def parse_request(data) -> Request:
    """Parse ``data`` (bytes, or str to be encoded as utf-8) into a Request.

    Raises a :class:`~httpgram.errors.ParseError` subclass naming the first
    rule that failed and its byte offset.
    """
    if isinstance(data, str):
        try:
            data = data.encode("utf-8")
        except UnicodeEncodeError as e:
            offset = len(data[: e.start].encode("utf-8"))
            raise InvalidEncoding(offset) from e
    return request(Cursor(bytes(data)))
