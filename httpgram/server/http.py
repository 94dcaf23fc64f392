from .. import gvars
from ..errors import ParseError
from ..parser import parse_request
from ..protocols import http
from ..router import default_router, text_response
from ..utils import run_parser_curio
from .base import ServerBase


class HTTPServer(ServerBase):
    proto = "HTTP"

    def __init__(self, bind_addr, router=None, gather=False, reply_errors=False):
        self.bind_addr = bind_addr
        self.router = router or default_router()
        self.gather = gather
        self.reply_errors = reply_errors

    async def read_request(self) -> bytes:
        if not self.gather:
            return await self.client.recv(gvars.PACKET_SIZE)
        parser = http.RequestHead.get_parser()
        head = await run_parser_curio(parser, self.client)
        return head.head + b"\r\n\r\n" + parser.readall()

    async def _run(self):
        data = await self.read_request()
        if not data:
            return
        try:
            request = parse_request(data)
        except ParseError as e:
            gvars.logger.info(f"{self} bad request: {e}")
            if self.reply_errors:
                await self.client.sendall(text_response(400, f"{e}\n").to_bytes())
            return
        gvars.logger.info(f"{self} {request.request_line}")
        gvars.logger.debug(request.describe())
        try:
            response = self.router(request)
        except Exception as e:
            gvars.logger.exception(f"{self} error {e}")
            response = text_response(500, "internal server error\n")
        await self.client.sendall(response.to_bytes())
