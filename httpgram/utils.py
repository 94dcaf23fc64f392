import ipaddress

import iofree

from . import gvars


async def run_parser_curio(parser, sock):
    parser.send(b"")
    received = 0
    while True:
        for to_send, close, exc, result in parser:
            if to_send:
                await sock.sendall(to_send)
            if close:
                await sock.close()
            if exc:
                raise exc
            if result is not iofree._no_result:
                return result
        if received >= gvars.MAX_HEAD_SIZE:
            raise iofree.ParseError(f"head exceeds {gvars.MAX_HEAD_SIZE} bytes")
        data = await sock.recv(gvars.PACKET_SIZE)
        if not data:
            raise iofree.ParseError("need data")
        received += len(data)
        parser.send(data)


def parse_addr(s):
    host, _, port = s.rpartition(":")
    port = -1 if not port else int(port)
    if not host:
        host = "0.0.0.0"
    elif len(host) >= 4 and host[0] == "[" and host[-1] == "]":
        host = host[1:-1]
    try:
        return (ipaddress.ip_address(host), port)
    except ValueError:
        return (host, port)


def show(addr) -> str:
    return f"{addr[0]}:{addr[1]}"
