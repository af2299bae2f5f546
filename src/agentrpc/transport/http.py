"""
HTTP Transport for agentrpc

- One HTTP request = one call
- The request envelope travels in the `_request` query parameter
- The response body is the result envelope; status is always 200

Served by FastAPI on uvicorn, inside the running event loop, over a socket
this transport binds itself so bind failures surface from start().
"""

from __future__ import annotations

import asyncio
import logging
import socket
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from ..core.router import CallRouter
from ..core.settings import REQUEST_PARAM
from ..protocol.errors import TransportError
from .base import ReadyCallback, Transport

logger = logging.getLogger("agentrpc.transport.http")

_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def bind_socket(host: str, port: int) -> socket.socket:
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    return sock


class HTTPTransport(Transport):
    """
    Usage:
        transport = HTTPTransport(router, 8080)
        await transport.start(lambda t: print("listening on", t.address))
        await transport.wait_closed()
    """

    label = "HTTP"

    def __init__(
        self,
        router: CallRouter,
        port: int,
        host: Optional[str] = None,
        *,
        param: str = REQUEST_PARAM,
        log_level: str = "warning",
    ) -> None:
        super().__init__(router)
        self.port = int(port)
        self.host = host or "0.0.0.0"
        self.param = param
        self._log_level = log_level.lower()
        self._server: Optional[uvicorn.Server] = None
        self._task: Optional[asyncio.Task] = None
        self.app = self._build_app()

    # ------------------------------------------------------------------
    # ASGI app
    # ------------------------------------------------------------------
    def _build_app(self) -> FastAPI:
        app = FastAPI(
            title="agentrpc HTTP transport",
            docs_url=None,
            redoc_url=None,
            openapi_url=None,
        )

        # async def: runs on the event loop, never in FastAPI's threadpool
        @app.api_route("/{path:path}", methods=_METHODS)
        async def handle_call(request: Request) -> PlainTextResponse:
            return await self.serve(request)

        return app

    async def serve(self, request: Request) -> PlainTextResponse:
        envelope = request.query_params.get(self.param)
        if envelope is None:
            body = self.serialize(self.error_message(f"missing {self.param} parameter"))
        else:
            # An unescaped '+' in a query string arrives as a space; base64 has no spaces.
            body = self.dispatch(envelope.replace(" ", "+"))
        return PlainTextResponse(body)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    async def start(self, on_ready: Optional[ReadyCallback] = None) -> None:
        try:
            sock = bind_socket(self.host, self.port)
        except OSError as ex:
            raise TransportError(f"cannot listen on {self.host}:{self.port}: {ex}") from ex

        self.address = sock.getsockname()[:2]
        config = uvicorn.Config(
            self.app,
            log_config=None,
            log_level=self._log_level,
            access_log=False,
            lifespan="off",
        )
        self._server = uvicorn.Server(config)
        self._mark_open()
        self._task = asyncio.create_task(self._server.serve(sockets=[sock]))
        self._task.add_done_callback(lambda _: self._mark_closed())

        while not self._server.started:
            if self._task.done():
                sock.close()
                error = None if self._task.cancelled() else self._task.exception()
                self._server = None
                raise TransportError(f"HTTP server on {self.host}:{self.port} failed to start: {error}")
            await asyncio.sleep(0.01)

        self._notify_ready(on_ready)

    async def stop(self) -> None:
        server, self._server = self._server, None
        if server is None:
            return

        server.should_exit = True
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)
        self._mark_closed()
        logger.info("[HTTP] Stopped listening on %s:%s", self.host, self.port)
