# agentrpc/cli.py

"""
agentrpc command line
---------------------

One transport per process:

    agentrpc --http PORT [HOST]
    agentrpc --listen PORT [HOST]
    agentrpc --connect HOST PORT
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from typing import List, Optional, Sequence

from .core.runtime import AgentRuntime
from .core.settings import get_settings
from .protocol.errors import TransportError
from .transport.base import Transport
from .utils.logging import configure_logging

logger = logging.getLogger("agentrpc.cli")

USAGE_EXIT = 2


def usage(prog: Optional[str] = None) -> int:
    prog = prog or os.path.basename(sys.argv[0] or "agentrpc")
    print(f"usage: {prog} {{--http PORT [HOST] | --listen PORT [HOST] | --connect HOST PORT}}")
    return USAGE_EXIT


def _port(value: str) -> int:
    port = int(value)
    if not 0 <= port <= 65535:
        raise ValueError(f"port out of range: {value}")
    return port


def build_transport(runtime: AgentRuntime, argv: Sequence[str]) -> Transport:
    """
    Turn argv (without the program name) into a transport.

    Raises ValueError on anything that is not one of the three modes.
    """
    if len(argv) < 2:
        raise ValueError("missing arguments")

    option, args = argv[0], list(argv[1:])

    if option == "--http" and len(args) <= 2:
        return runtime.http(_port(args[0]), args[1] if len(args) > 1 else None)
    if option == "--listen" and len(args) <= 2:
        return runtime.listener(_port(args[0]), args[1] if len(args) > 1 else None)
    if option == "--connect" and len(args) == 2:
        return runtime.connect_back(args[0], _port(args[1]))

    raise ValueError(f"invalid option: {option}")


def _announce(transport: Transport) -> None:
    logger.info("%s", transport.ready_message())


async def run(transport: Transport) -> int:
    await transport.start(_announce)
    try:
        await transport.wait_closed()
    finally:
        await transport.stop()

    return transport.exit_status()


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    runtime = AgentRuntime(settings=settings)
    try:
        transport = build_transport(runtime, argv)
    except ValueError:
        return usage()

    try:
        return asyncio.run(run(transport))
    except TransportError as ex:
        logger.error("%s", ex)
        return 1
    except KeyboardInterrupt:
        return 0
    finally:
        runtime.shutdown()


if __name__ == "__main__":
    sys.exit(main())
