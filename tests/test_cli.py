# tests/test_cli.py

import socket

import pytest

from agentrpc.cli import USAGE_EXIT, build_transport, main
from agentrpc.core.runtime import AgentRuntime
from agentrpc.core.settings import AgentSettings
from agentrpc.transport.http import HTTPTransport
from agentrpc.transport.tcp import TCPConnectBack, TCPListener


@pytest.fixture
def runtime():
    return AgentRuntime(settings=AgentSettings())


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["--http"],
        ["--http", "eighty"],
        ["--http", "70000"],
        ["--listen", "1", "host", "extra"],
        ["--connect", "host"],
        ["--serve", "80"],
    ],
)
def test_invalid_arguments_print_usage(argv, capsys):
    assert main(argv) == USAGE_EXIT
    out = capsys.readouterr().out
    assert out.startswith("usage: ")
    assert "--http PORT [HOST] | --listen PORT [HOST] | --connect HOST PORT" in out


def test_build_http(runtime):
    transport = build_transport(runtime, ["--http", "8080"])
    assert isinstance(transport, HTTPTransport)
    assert (transport.host, transport.port) == ("0.0.0.0", 8080)


def test_build_listener_with_host(runtime):
    transport = build_transport(runtime, ["--listen", "9000", "127.0.0.1"])
    assert isinstance(transport, TCPListener)
    assert (transport.host, transport.port) == ("127.0.0.1", 9000)


def test_build_connect_back(runtime):
    transport = build_transport(runtime, ["--connect", "10.1.1.1", "4444"])
    assert isinstance(transport, TCPConnectBack)
    assert (transport.host, transport.port) == ("10.1.1.1", 4444)


def test_connect_failure_exits_non_zero():
    with socket.socket() as s:
        s.bind(("127.0.0.1", 0))
        port = s.getsockname()[1]

    assert main(["--connect", "127.0.0.1", str(port)]) == 1
