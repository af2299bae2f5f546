"""
Operator-side clients.

These drive an agent from the other end of a transport:

    client = HTTPAgentClient("http://10.0.0.5:8080/")
    pid = client.call("process.getpid")

    with TCPAgentClient("10.0.0.5", 9000) as client:
        client.call("fs.readdir", "/tmp")

Both raise RemoteCallError when the agent answers with an exception envelope.
"""

from __future__ import annotations

import socket
from typing import Any, Optional

import requests

from ..core.settings import REQUEST_PARAM
from ..protocol.codec import decode_result, encode_request
from ..protocol.errors import AgentError, TransportError
from ..protocol.models import CallRequest, CallResult
from .stream import DELIMITER, frame


class RemoteCallError(AgentError):
    """Raised when the remote capability reported a failure."""


def _unwrap(result: CallResult) -> Any:
    if not result.ok:
        raise RemoteCallError(result.error)
    return result.value


class HTTPAgentClient:
    def __init__(self, url: str, timeout: float = 10.0):
        self._url = url
        self._timeout = timeout
        self._session = requests.Session()

    def call(self, name: str, *args: Any) -> Any:
        envelope = encode_request(CallRequest(name=name, arguments=list(args)))
        response = self._session.get(
            self._url,
            params={REQUEST_PARAM: envelope},
            timeout=self._timeout,
        )
        response.raise_for_status()
        return _unwrap(decode_result(response.text.strip()))

    def close(self) -> None:
        self._session.close()


class TCPAgentClient:
    def __init__(self, host: str, port: int, timeout: float = 10.0):
        self.host = host
        self.port = int(port)
        self._timeout = timeout
        self._sock: Optional[socket.socket] = None
        self._buffer = b""

    def connect(self) -> None:
        if self._sock is not None:
            return
        try:
            self._sock = socket.create_connection((self.host, self.port), timeout=self._timeout)
        except OSError as ex:
            raise TransportError(f"cannot connect to {self.host}:{self.port}: {ex}") from ex

    def send_raw(self, data: bytes) -> None:
        self.connect()
        self._sock.sendall(data)

    def receive(self) -> CallResult:
        self.connect()
        while DELIMITER not in self._buffer:
            chunk = self._sock.recv(64 * 1024)
            if not chunk:
                raise TransportError("connection closed by agent")
            self._buffer += chunk
        message, self._buffer = self._buffer.split(DELIMITER, 1)
        return decode_result(message)

    def call(self, name: str, *args: Any) -> Any:
        envelope = encode_request(CallRequest(name=name, arguments=list(args)))
        self.send_raw(frame(envelope))
        return _unwrap(self.receive())

    def close(self) -> None:
        sock, self._sock = self._sock, None
        if sock is not None:
            sock.close()

    def __enter__(self) -> TCPAgentClient:
        self.connect()
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
