# agentrpc/core/router.py

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Sequence

from ..protocol.enums import ErrorCode
from ..protocol.errors import UnknownFunctionError
from ..protocol.models import CallRequest, CallResult
from .registry import CapabilityRegistry

logger = logging.getLogger("agentrpc.router")


def describe_error(ex: BaseException) -> str:
    message = str(ex)
    return message if message else ex.__class__.__name__


class CallRouter:
    """
    Reflection-style dispatcher over a CapabilityRegistry.

    Responsibilities:
      - Resolve a dotted name to a registered callable
      - Invoke it with the positional arguments as given
      - Convert every failure into CallResult.failure

    A callee failure never propagates past this boundary, so a crashing
    capability cannot take down a serving loop.
    """

    def __init__(self, registry: CapabilityRegistry) -> None:
        self._registry = registry
        self._log = logger

    @property
    def registry(self) -> CapabilityRegistry:
        return self._registry

    # ===========================================================
    # Public API
    # ===========================================================
    def call(self, name: str, arguments: Optional[Sequence[Any]] = None) -> CallResult:
        try:
            func = self._registry.resolve(name)
        except UnknownFunctionError as ex:
            self._log.info("Rejected call to unknown function '%s'", name)
            return CallResult.failure(str(ex))

        try:
            value = func(*(arguments or ()))
        except (KeyboardInterrupt, asyncio.CancelledError):
            raise
        except BaseException as ex:
            # SystemExit from a callee is a failure; process.exit leaves via os._exit.
            code = getattr(ex, "code", None)
            if not isinstance(code, ErrorCode):
                code = ErrorCode.CAPABILITY_FAILURE
            self._log.warning(
                "Capability '%s' failed (%s): %s",
                name,
                code.value,
                ex,
                exc_info=self._log.isEnabledFor(logging.DEBUG),
            )
            return CallResult.failure(describe_error(ex))

        self._log.debug("Capability '%s' returned", name)
        return CallResult.success(value)

    def route(self, request: CallRequest) -> CallResult:
        return self.call(request.name, request.arguments)
