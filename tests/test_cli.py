import argparse
import os
import signal

import pytest

from httpgram.__main__ import get_server, main

REQUEST = b"GET /a?b=c HTTP/1.1\r\nHost: x\r\n\r\nbody"


@pytest.mark.parametrize(
    "uri",
    [
        "ftp://127.0.0.1:0",
        "https://127.0.0.1:0",
        "http://127.0.0.1:port",
        "http://127.0.0.1:70000",
        "http://127.0.0.1:0/?gather=maybe",
        "http://127.0.0.1:0/?colour=1",
    ],
)
def test_cli(uri):
    with pytest.raises(argparse.ArgumentTypeError):
        get_server(uri)


def test_main():
    def handler(*args):
        os.kill(os.getpid(), signal.SIGINT)

    signal.signal(signal.SIGALRM, handler)
    signal.alarm(3)
    assert main(["-v", "http://127.0.0.1:0/?gather=1"]) == 0


def test_main_requires_something_to_do():
    with pytest.raises(SystemExit):
        main([])


def test_parse_file(tmp_path, capsys):
    path = tmp_path / "request.txt"
    path.write_bytes(REQUEST)
    assert main(["--parse", str(path)]) == 0
    out = capsys.readouterr().out
    assert "Request Method: GET" in out
    assert "    Parameters: b: c" in out
    assert "          Body: 4 bytes" in out


def test_parse_file_failure(tmp_path):
    path = tmp_path / "request.txt"
    path.write_bytes(b"GET a HTTP/1.1\r\n\r\n")
    assert main(["--parse", str(path)]) == 1
