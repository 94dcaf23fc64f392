import enum
from http import HTTPStatus
from typing import NamedTuple, Optional, Tuple, Union

from iofree import schema


class Method(enum.Enum):
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    PATCH = "PATCH"

    def __str__(self):
        return self.value


class ExtensionMethod(NamedTuple):
    "a method token outside the known set, kept verbatim"
    token: str

    def __str__(self):
        return self.token


class Version(enum.Enum):
    HTTP_1_0 = "HTTP/1.0"
    HTTP_1_1 = "HTTP/1.1"

    def __str__(self):
        return self.value


class ExtensionVersion(NamedTuple):
    token: str

    def __str__(self):
        return self.token


AnyMethod = Union[Method, ExtensionMethod]
AnyVersion = Union[Version, ExtensionVersion]


class Field(NamedTuple):
    name: str
    value: str


class Target(NamedTuple):
    segments: Tuple[str, ...] = ()
    query: Tuple[Field, ...] = ()
    fragment: Optional[str] = None

    @property
    def path(self) -> str:
        return "/" + "/".join(self.segments)

    def __str__(self):
        s = self.path
        if self.query:
            s += "?" + "&".join(f"{name}={value}" for name, value in self.query)
        if self.fragment is not None:
            s += "#" + self.fragment
        return s


class Request(NamedTuple):
    method: AnyMethod
    target: Target
    version: AnyVersion
    headers: Tuple[Field, ...] = ()
    body: bytes = b""

    @property
    def request_line(self) -> str:
        return f"{self.method} {self.target} {self.version}"

    def header(self, name: str, default=None):
        "value of the first header called ``name``, compared case-insensitively"
        name = name.lower()
        for field in self.headers:
            if field.name.lower() == name:
                return field.value
        return default

    def header_values(self, name: str) -> list:
        name = name.lower()
        return [field.value for field in self.headers if field.name.lower() == name]

    def to_bytes(self) -> bytes:
        lines = [self.request_line]
        lines.extend(f"{name}: {value}" for name, value in self.headers)
        head = "\r\n".join(lines) + "\r\n\r\n"
        return head.encode("utf-8") + self.body

    def describe(self) -> str:
        indent = "\n" + " " * 16
        params = indent.join(f"{name}: {value}" for name, value in self.target.query)
        fragment = "" if self.target.fragment is None else f"#{self.target.fragment}"
        headers = indent.join(f"{name}: {value}" for name, value in self.headers)
        return (
            f"Request Method: {self.method}\n"
            f"  Request Path: {self.target.path}\n"
            f"    Parameters: {params}\n"
            f"      Fragment: {fragment}\n"
            f"  HTTP version: {self.version}\n"
            f"  HTTP Headers: {headers}"
        )


class Response(NamedTuple):
    status: int
    headers: Tuple[Field, ...] = ()
    body: bytes = b""
    version: AnyVersion = Version.HTTP_1_1

    @property
    def reason(self) -> str:
        try:
            return HTTPStatus(self.status).phrase
        except ValueError:
            return ""

    def to_bytes(self) -> bytes:
        lines = [f"{self.version} {self.status} {self.reason}"]
        names = {name.lower() for name, _ in self.headers}
        lines.extend(f"{name}: {value}" for name, value in self.headers)
        if "content-length" not in names:
            lines.append(f"Content-Length: {len(self.body)}")
        head = "\r\n".join(lines) + "\r\n\r\n"
        return head.encode("utf-8") + self.body


class RequestHead(schema.BinarySchema):
    "Request head gathered from a stream, up to and excluding the blank line"
    head = schema.EndWith(b"\r\n\r\n")
