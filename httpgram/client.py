import curio
import httptools

from . import __version__, gvars
from .utils import show


class HTTPResponse:
    def __init__(self):
        self.done = False
        self.status = None
        self.reason = b""
        self.headers = []
        self.body = b""

    def on_status(self, status: bytes):
        self.reason += status

    def on_header(self, name: bytes, value: bytes):
        self.headers.append((name, value))

    def on_body(self, body: bytes):
        self.body += body

    def on_message_complete(self):
        self.done = True


class HTTPClient:
    "One-shot connection to an httpgram server"
    sock = None

    def __init__(self, host, port):
        self.addr = (host, port)

    def __repr__(self):
        return f"{self.__class__.__name__}({show(self.addr)})"

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, et, e, tb):
        await self.close()

    async def connect(self):
        if self.sock is None:
            self.sock = await curio.open_connection(*self.addr)

    async def close(self):
        if self.sock:
            await self.sock.close()
            self.sock = None

    async def http_request(
        self, target: str = "/", method: str = "GET", headers: list = None, body=b""
    ):
        header_list = [
            f"Host: {show(self.addr)}".encode(),
            f"User-Agent: httpgram/{__version__}".encode(),
        ]
        if headers:
            for header in headers:
                if isinstance(header, str):
                    header = header.encode()
                header_list.append(header)
        if body:
            header_list.append(b"Content-Length: %d" % len(body))
        data = b"%b %b HTTP/1.1\r\n%b\r\n\r\n%b" % (
            method.upper().encode(),
            target.encode(),
            b"\r\n".join(header_list),
            body,
        )
        await self.sock.sendall(data)
        response = HTTPResponse()
        parser = httptools.HttpResponseParser(response)
        while not response.done:
            data = await self.sock.recv(gvars.PACKET_SIZE)
            if not data:
                raise Exception("Incomplete response")
            parser.feed_data(data)
        response.status = parser.get_status_code()
        return response

    async def send_raw(self, data: bytes) -> bytes:
        "send ``data`` as is, and return everything read until the peer closes"
        await self.sock.sendall(data)
        chunks = []
        while True:
            chunk = await self.sock.recv(gvars.PACKET_SIZE)
            if not chunk:
                break
            chunks.append(chunk)
        return b"".join(chunks)
