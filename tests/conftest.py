import asyncio
import logging

import pytest

from agentrpc.core.registry import CapabilityRegistry
from agentrpc.core.router import CallRouter
from agentrpc.protocol.codec import decode_result, encode_request
from agentrpc.protocol.models import CallRequest, CallResult
from agentrpc.transport.stream import frame


class Boom(RuntimeError):
    pass


def _fail(*args):
    raise Boom("capability exploded")


def _exit(*args):
    raise SystemExit(3)


def deeply_nested(depth):
    value = []
    for _ in range(depth):
        value = [value]
    return value


def _counter():
    state = {"n": 0}

    def bump():
        state["n"] += 1
        return state["n"]

    return bump


def make_namespace():
    return {
        "a": {"b": {"c": lambda: 42}},
        "math": {"add": lambda x, y: x + y},
        "echo": {"args": lambda *args: list(args)},
        "broken": {
            "fail": _fail,
            "bytes": lambda: b"raw",
            "exit": _exit,
            "deep": lambda: deeply_nested(200_000),
        },
        "counter": {"next": _counter()},
    }


@pytest.fixture
def router():
    return CallRouter(CapabilityRegistry(make_namespace()))


@pytest.fixture(autouse=True)
def reset_agentrpc_logger():
    yield
    log = logging.getLogger("agentrpc")
    for handler in list(log.handlers):
        log.removeHandler(handler)
    log.propagate = True


def request_frame(name, *args) -> bytes:
    return frame(encode_request(CallRequest(name=name, arguments=list(args))))


async def read_result(reader: asyncio.StreamReader, timeout: float = 5.0) -> CallResult:
    data = await asyncio.wait_for(reader.readuntil(b"\0"), timeout)
    return decode_result(data[:-1])
