from __future__ import annotations

from typing import Any, Mapping, Optional

from ..capabilities import ProcessTable, build_namespace
from ..protocol.enums import FramingPolicy
from .registry import CapabilityRegistry
from .router import CallRouter
from .settings import AgentSettings, get_settings


class AgentRuntime:
    """
    High-level runtime that wires together:

    - CapabilityRegistry: the read-only capability namespace
    - CallRouter:         dotted-name dispatch over the registry
    - Transports:         built on demand, all sharing the one router

    Applications build one runtime per process and hand it to the
    transport they serve on.
    """

    def __init__(
        self,
        *,
        namespace: Optional[Mapping[str, Any]] = None,
        settings: Optional[AgentSettings] = None,
    ) -> None:
        self.settings: AgentSettings = settings or get_settings()
        self.process_table: ProcessTable = ProcessTable()
        if namespace is None:
            namespace = build_namespace(
                fs_block_size=self.settings.fs_block_size,
                process_table=self.process_table,
            )

        self.registry: CapabilityRegistry = CapabilityRegistry(namespace)
        self.router: CallRouter = CallRouter(self.registry)

    def shutdown(self) -> None:
        """Terminate every child still held by the shell process table."""
        self.process_table.close_all()

    # ------------------------------------------------------------------
    # Transport factories
    # ------------------------------------------------------------------
    def http(self, port: int, host: Optional[str] = None):
        from ..transport.http import HTTPTransport

        return HTTPTransport(
            self.router,
            port,
            host or self.settings.default_host,
            log_level=self.settings.log_level,
        )

    def listener(self, port: int, host: Optional[str] = None, *, framing: Optional[FramingPolicy] = None):
        from ..transport.tcp import TCPListener

        return TCPListener(
            self.router,
            port,
            host or self.settings.default_host,
            framing=framing or self.settings.framing,
            read_size=self.settings.read_size,
        )

    def connect_back(self, host: str, port: int, *, framing: Optional[FramingPolicy] = None):
        from ..transport.tcp import TCPConnectBack

        return TCPConnectBack(
            self.router,
            host,
            port,
            framing=framing or self.settings.framing,
            read_size=self.settings.read_size,
        )
