import argparse
import logging
import os
import sys
from urllib import parse

import curio
from curio import socket, ssl
from curio.network import run_server

from . import __doc__ as desc
from . import __version__, gvars
from .errors import ParseError
from .parser import parse_request
from .router import default_router
from .server import server_protos
from .utils import parse_addr

FLAGS = ("gather", "reply_errors")


def TcpProtoFactory(cls, **kwargs):
    async def client_handler(client, addr):
        handler = cls(**kwargs)
        return await handler(client, addr)

    return client_handler


def get_ssl(url):
    ssl_context = None
    if url.scheme in ("https",):
        if not url.fragment:
            raise argparse.ArgumentTypeError("#keyfile,certfile is needed")
        keyfile, _, certfile = url.fragment.partition(",")
        ssl_context = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH)
        ssl_context.load_cert_chain(certfile=certfile, keyfile=keyfile)
    return ssl_context


def get_flag(qs, name) -> bool:
    value = qs.get(name, ["0"])[0].lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise argparse.ArgumentTypeError(f"bad value for {name}: {value}")


def get_server(uri):
    url = parse.urlparse(uri)
    if url.scheme not in server_protos:
        raise argparse.ArgumentTypeError(f"unknown scheme: {uri}")
    proto = server_protos[url.scheme]
    try:
        host, port = parse_addr(url.netloc)
    except ValueError:
        raise argparse.ArgumentTypeError(f"bad address: {uri}")
    if port == -1:
        port = gvars.default_ports.get(url.scheme, gvars.default_port)
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port must be 0-65535: {uri}")
    bind_addr = (str(host), port)
    qs = parse.parse_qs(url.query)
    unknown = set(qs) - set(FLAGS)
    if unknown:
        raise argparse.ArgumentTypeError(f"unknown options {sorted(unknown)}: {uri}")
    kwargs = {name: get_flag(qs, name) for name in FLAGS}
    kwargs["router"] = default_router()
    ssl_context = get_ssl(url)
    family = socket.AF_INET6 if ":" in bind_addr[0] else socket.AF_INET
    server_sock = curio.tcp_server_socket(*bind_addr, backlog=1024, family=family)
    real_ip, real_port, *_ = server_sock._socket.getsockname()
    kwargs["bind_addr"] = (real_ip, real_port)
    server = run_server(server_sock, TcpProtoFactory(proto, **kwargs), ssl=ssl_context)
    return server, (real_ip, real_port), url.scheme


async def multi_server(*servers):
    addrs = []
    async with curio.TaskGroup() as g:
        for server, addr, scheme in servers:
            await g.spawn(server)
            addrs.append((*addr, scheme))

        address = ", ".join(f"{scheme}://{host}:{port}" for host, port, scheme in addrs)
        pid = os.getpid()
        gvars.logger.info(f"{__package__}/{__version__} listen on {address} pid: {pid}")


def parse_file(path) -> int:
    if path == "-":
        data = sys.stdin.buffer.read()
    else:
        with open(path, "rb") as f:
            data = f.read()
    try:
        request = parse_request(data)
    except ParseError as e:
        gvars.logger.error(f"{path}: {e}")
        return 1
    print(request.describe())
    if request.body:
        print(f"          Body: {len(request.body)} bytes")
    return 0


def main(arguments=None):
    parser = argparse.ArgumentParser(
        description=desc, formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "-v", dest="verbose", action="count", default=0, help="print verbose output"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--parse", metavar="FILE", help="parse one request from FILE ('-' for stdin)"
    )
    parser.add_argument("server", nargs="*", type=get_server)
    args = parser.parse_args(arguments)
    if args.verbose == 0:
        level = logging.ERROR
    elif args.verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    gvars.logger.setLevel(level)
    if args.parse:
        return parse_file(args.parse)
    if not args.server:
        parser.error("at least one server uri or --parse is required")
    kernel = curio.Kernel()
    try:
        kernel.run(multi_server(*args.server))
    except Exception as e:
        gvars.logger.exception(str(e))
    except KeyboardInterrupt:
        kernel.run(shutdown=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
