"""Process capabilities (`process.*`)."""

from __future__ import annotations

import logging
import os
import signal
import time as time_module
from typing import Any, Dict, Optional

logger = logging.getLogger("agentrpc.capabilities.process")


def getpid() -> int:
    return os.getpid()


def getcwd() -> str:
    return os.getcwd()


def chdir(path: str) -> None:
    os.chdir(path)


def getuid() -> int:
    return os.getuid()


def setuid(uid: int) -> None:
    os.setuid(uid)


def getgid() -> int:
    return os.getgid()


def setgid(gid: int) -> None:
    os.setgid(gid)


def getenv(name: str) -> Optional[str]:
    return os.environ.get(name)


def setenv(name: str, value: str) -> str:
    os.environ[name] = value
    return value


def unsetenv(name: str) -> Optional[str]:
    return os.environ.pop(name, None)


def time() -> int:
    return int(time_module.time() * 1000)


def kill(pid: int, sig: Any = signal.SIGTERM) -> bool:
    if isinstance(sig, str):
        name = sig.upper()
        sig = getattr(signal, name if name.startswith("SIG") else f"SIG{name}")
    os.kill(pid, sig)
    return True


def exit(status: int = 0) -> None:
    # Exits right away: a SystemExit would be swallowed by the serving loop.
    logger.warning("Exiting on remote request (status=%s)", status)
    logging.shutdown()
    os._exit(status)


def namespace() -> Dict[str, Any]:
    return {
        "getpid": getpid,
        "getcwd": getcwd,
        "chdir": chdir,
        "getuid": getuid,
        "setuid": setuid,
        "getgid": getgid,
        "setgid": setgid,
        "getenv": getenv,
        "setenv": setenv,
        "unsetenv": unsetenv,
        "time": time,
        "kill": kill,
        "exit": exit,
    }
