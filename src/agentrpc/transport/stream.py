"""
NUL-delimited stream framing shared by the TCP listener and connect-back.

Requests and responses are envelope texts terminated by a NUL byte:

    <envelope>\\0<envelope>\\0...

StreamFramer is sans-IO: feed() takes the bytes of one read and returns the
request texts that became complete. Two policies exist:

  SPLIT     every NUL-terminated segment is a request; the trailing partial
            segment stays buffered. Empty segments are skipped.
  LAST_NUL  legacy wire behaviour: one request per chunk that contains a NUL,
            made of the buffer plus the chunk up to its *last* NUL. Bytes
            after that NUL start the next message.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from ..core.router import CallRouter
from ..protocol.enums import FramingPolicy
from .base import Transport

logger = logging.getLogger("agentrpc.transport.tcp")

DELIMITER = b"\0"


class StreamFramer:
    def __init__(self, policy: FramingPolicy = FramingPolicy.SPLIT) -> None:
        self.policy = FramingPolicy(policy)
        self._buffer = bytearray()

    @property
    def pending(self) -> bytes:
        return bytes(self._buffer)

    def feed(self, chunk: bytes) -> List[str]:
        if self.policy is FramingPolicy.LAST_NUL:
            return self._feed_last_nul(chunk)
        return self._feed_split(chunk)

    def _feed_split(self, chunk: bytes) -> List[str]:
        self._buffer += chunk
        if DELIMITER not in chunk:
            return []
        *complete, rest = bytes(self._buffer).split(DELIMITER)
        self._buffer = bytearray(rest)
        return [segment.decode("utf-8", errors="replace") for segment in complete if segment]

    def _feed_last_nul(self, chunk: bytes) -> List[str]:
        index = chunk.rfind(DELIMITER)
        if index < 0:
            self._buffer += chunk
            return []

        self._buffer += chunk[:index]
        request = bytes(self._buffer).decode("utf-8", errors="replace")
        self._buffer = bytearray(chunk[index + 1:])
        return [request]


def frame(envelope: str) -> bytes:
    return envelope.encode("utf-8") + DELIMITER


class StreamTransport(Transport):
    """
    Transport over asyncio streams. Subclasses decide who opens the
    connection; serving is identical for both directions.
    """

    label = "TCP"

    def __init__(
        self,
        router: CallRouter,
        *,
        framing: FramingPolicy = FramingPolicy.SPLIT,
        read_size: int = 64 * 1024,
    ) -> None:
        super().__init__(router)
        self.framing = FramingPolicy(framing)
        self.read_size = read_size
        self.last_error: Optional[BaseException] = None

    async def serve(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        framer = StreamFramer(self.framing)
        peer = writer.get_extra_info("peername")
        logger.debug("[TCP] Session opened with %s", peer)

        try:
            while True:
                chunk = await reader.read(self.read_size)
                if not chunk:
                    break

                for request in framer.feed(chunk):
                    response = self.dispatch(request)
                    if not await self._write(writer, frame(response)):
                        return
        except OSError as ex:
            self.last_error = ex
            logger.error("[TCP] Session with %s failed: %s", peer, ex)
        finally:
            await self._close_writer(writer)
            logger.debug("[TCP] Session closed with %s", peer)

    async def _write(self, writer: asyncio.StreamWriter, data: bytes) -> bool:
        # A write to a channel closed by stop() or the peer is dropped.
        if writer.is_closing():
            return False
        try:
            writer.write(data)
            await writer.drain()
        except OSError:
            return False
        return True

    @staticmethod
    async def _close_writer(writer: Optional[asyncio.StreamWriter]) -> None:
        if writer is None:
            return
        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass
