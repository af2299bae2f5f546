"""
TCP transports.

TCPListener    the agent accepts inbound connections (agent is server)
TCPConnectBack the agent dials out to the operator (agent is client)

Both serve with StreamTransport.serve, so framing and dispatch are shared.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Set

from ..core.router import CallRouter
from ..protocol.enums import FramingPolicy
from ..protocol.errors import TransportError
from .base import ReadyCallback
from .stream import StreamTransport

logger = logging.getLogger("agentrpc.transport.tcp")


class TCPListener(StreamTransport):
    def __init__(
        self,
        router: CallRouter,
        port: int,
        host: Optional[str] = None,
        *,
        framing: FramingPolicy = FramingPolicy.SPLIT,
        read_size: int = 64 * 1024,
    ) -> None:
        super().__init__(router, framing=framing, read_size=read_size)
        self.port = int(port)
        self.host = host or "0.0.0.0"
        self._server: Optional[asyncio.AbstractServer] = None
        self._sessions: Set[asyncio.Task] = set()

    async def start(self, on_ready: Optional[ReadyCallback] = None) -> None:
        try:
            self._server = await asyncio.start_server(self._accept, self.host, self.port)
        except OSError as ex:
            raise TransportError(f"cannot listen on {self.host}:{self.port}: {ex}") from ex

        self.address = self._server.sockets[0].getsockname()[:2]
        self._mark_open()
        self._notify_ready(on_ready)

    async def _accept(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        task = asyncio.current_task()
        if task is not None:
            self._sessions.add(task)
        try:
            await self.serve(reader, writer)
        finally:
            if task is not None:
                self._sessions.discard(task)

    async def stop(self) -> None:
        server, self._server = self._server, None
        if server is None:
            return

        server.close()
        for task in list(self._sessions):
            task.cancel()
        await asyncio.gather(*self._sessions, return_exceptions=True)
        await server.wait_closed()
        self._mark_closed()
        logger.info("[TCP] Stopped listening on %s:%s", self.host, self.port)


class TCPConnectBack(StreamTransport):
    def __init__(
        self,
        router: CallRouter,
        host: str,
        port: int,
        *,
        framing: FramingPolicy = FramingPolicy.SPLIT,
        read_size: int = 64 * 1024,
    ) -> None:
        super().__init__(router, framing=framing, read_size=read_size)
        self.host = host
        self.port = int(port)
        self._writer: Optional[asyncio.StreamWriter] = None
        self._session: Optional[asyncio.Task] = None

    def ready_message(self) -> str:
        return f"[TCP] Connected to {self.host}:{self.port}"

    def exit_status(self) -> int:
        # the only session failing is fatal for connect-back
        return 1 if self.last_error is not None else 0

    async def start(self, on_ready: Optional[ReadyCallback] = None) -> None:
        try:
            reader, writer = await asyncio.open_connection(self.host, self.port)
        except OSError as ex:
            raise TransportError(f"cannot connect to {self.host}:{self.port}: {ex}") from ex

        self._writer = writer
        self.address = writer.get_extra_info("peername")[:2]
        self._mark_open()
        self._session = asyncio.create_task(self._run(reader, writer))
        self._notify_ready(on_ready)

    async def _run(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        try:
            await self.serve(reader, writer)
        finally:
            self._writer = None
            self._mark_closed()
            logger.info("[TCP] Disconnected from %s:%s", self.host, self.port)

    async def stop(self) -> None:
        writer, self._writer = self._writer, None
        if writer is not None:
            await self._close_writer(writer)

        session = self._session
        if session is not None and session is not asyncio.current_task():
            await asyncio.gather(session, return_exceptions=True)
