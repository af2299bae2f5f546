from __future__ import annotations

"""
Base transport interface for all agentrpc transports.

This defines the transport boundary:

    remote operator → [Envelope] → CallRequest → CallRouter
    CallRouter      → CallResult → [Envelope]  → remote operator

Transports DO NOT:
  - resolve capability names
  - invoke capabilities
  - interpret results

Transports ONLY:
  - accept or open connections
  - cut the byte stream into envelopes
  - hand each envelope to dispatch() and write the answer back

Everything else is handled by the CallRouter.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Tuple

from ..core.router import CallRouter, describe_error
from ..protocol import codec
from ..protocol.errors import AgentError

logger = logging.getLogger("agentrpc.transport")

ReadyCallback = Callable[["Transport"], Any]


class Transport(ABC):
    """
    Abstract base class for all transports.

    Lifecycle:
        await transport.start(on_ready)   # bind / connect, then on_ready(transport)
        await transport.wait_closed()     # until stop() or the peer goes away
        await transport.stop()            # idempotent
    """

    label = "transport"

    def __init__(self, router: CallRouter) -> None:
        self._router = router
        self._closed: Optional[asyncio.Event] = None
        self.address: Optional[Tuple[str, int]] = None

    @property
    def router(self) -> CallRouter:
        return self._router

    # ----------------------------------------------------------------------
    # Contract
    # ----------------------------------------------------------------------
    @abstractmethod
    async def start(self, on_ready: Optional[ReadyCallback] = None) -> None:
        """Begin listening/connecting; call on_ready once that succeeded."""
        raise NotImplementedError

    @abstractmethod
    async def stop(self) -> None:
        """Release the underlying network resource. Must tolerate repeat calls."""
        raise NotImplementedError

    @abstractmethod
    async def serve(self, *channel: Any) -> None:
        """Serve one bidirectional channel until it closes."""
        raise NotImplementedError

    async def wait_closed(self) -> None:
        if self._closed is None:
            return
        await self._closed.wait()

    # ----------------------------------------------------------------------
    # Shared helpers
    # ----------------------------------------------------------------------
    def return_message(self, value: Any) -> Dict[str, Any]:
        return {"return": value}

    def error_message(self, message: str) -> Dict[str, Any]:
        return {"exception": message}

    def serialize(self, data: Any) -> str:
        return codec.serialize(data)

    def deserialize(self, data: Any) -> Any:
        return codec.deserialize(data)

    def dispatch(self, envelope: Any) -> str:
        """
        Decode one request envelope, route it, and encode the result.

        Never raises: decode failures and results that cannot be encoded are
        reported as an exception envelope.
        """
        try:
            request = codec.decode_request(envelope)
        except AgentError as ex:
            logger.info("[%s] Undecodable request: %s", self.label, ex)
            return self.serialize(self.error_message(str(ex)))
        except Exception as ex:
            logger.warning("[%s] Request could not be decoded: %r", self.label, ex)
            return self.serialize(self.error_message(f"undecodable request: {describe_error(ex)}"))

        result = self._router.route(request)
        message = (
            self.return_message(result.value)
            if result.ok
            else self.error_message(result.error)
        )

        try:
            return self.serialize(message)
        except Exception as ex:
            logger.warning("[%s] Result of '%s' is not JSON-representable: %r", self.label, request.name, ex)
            return self.serialize(self.error_message(f"unserializable return value: {describe_error(ex)}"))

    def exit_status(self) -> int:
        return 0

    def ready_message(self) -> str:
        host, port = self.address or ("?", "?")
        return f"[{self.label}] Listening on {host}:{port}"

    def _notify_ready(self, on_ready: Optional[ReadyCallback]) -> None:
        if on_ready is not None:
            on_ready(self)

    def _mark_open(self) -> None:
        self._closed = asyncio.Event()

    def _mark_closed(self) -> None:
        if self._closed is not None:
            self._closed.set()
