"""
Shell capabilities (`shell.*`) and the process table behind them.

`shell.exec` spawns a command through the system shell and returns its PID;
later calls address the child by that PID until `shell.close` removes it.
Reads never block the reactor: they return whatever output is available.
"""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Any, Dict, List

from ..protocol.errors import UnknownProcessError

logger = logging.getLogger("agentrpc.capabilities.shell")


class ProcessTable:
    """
    Spawned children keyed by OS process id.

    Entries are created by spawn() and removed only by close(); every other
    operation on an absent PID raises UnknownProcessError.
    """

    def __init__(self) -> None:
        self._processes: Dict[int, subprocess.Popen] = {}

    def __len__(self) -> int:
        return len(self._processes)

    def __contains__(self, pid: object) -> bool:
        return pid in self._processes

    def pids(self) -> List[int]:
        return sorted(self._processes)

    def get(self, pid: Any) -> subprocess.Popen:
        process = self._processes.get(pid) if isinstance(pid, int) else None
        if process is None:
            raise UnknownProcessError(pid)
        return process

    def spawn(self, command: str) -> int:
        process = subprocess.Popen(
            command,
            shell=True,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
        os.set_blocking(process.stdout.fileno(), False)
        self._processes[process.pid] = process
        logger.debug("Spawned pid=%d: %s", process.pid, command)
        return process.pid

    def close(self, pid: Any) -> None:
        process = self.get(pid)
        try:
            if process.poll() is None:
                process.terminate()
                try:
                    process.wait(timeout=2)
                except subprocess.TimeoutExpired:
                    process.kill()
                    process.wait()
        finally:
            for stream in (process.stdin, process.stdout):
                if stream is not None:
                    try:
                        stream.close()
                    except OSError:
                        pass
            del self._processes[pid]
            logger.debug("Closed pid=%d", pid)

    def close_all(self) -> None:
        for pid in self.pids():
            self.close(pid)


class ShellCapabilities:
    def __init__(self, table: ProcessTable | None = None) -> None:
        self.table = table if table is not None else ProcessTable()

    def exec(self, *words: Any) -> int:
        if not words:
            raise ValueError("shell.exec requires a command")
        return self.table.spawn(" ".join(str(w) for w in words))

    def read(self, pid: int) -> str:
        process = self.table.get(pid)
        try:
            data = os.read(process.stdout.fileno(), 64 * 1024)
        except BlockingIOError:
            return ""
        return data.decode("utf-8", errors="replace")

    def write(self, pid: int, data: str) -> int:
        process = self.table.get(pid)
        process.stdin.write(data.encode("utf-8"))
        process.stdin.flush()
        return len(data)

    def close(self, pid: int) -> bool:
        self.table.close(pid)
        return True

    def list(self) -> List[int]:
        return self.table.pids()

    def namespace(self) -> Dict[str, Any]:
        return {
            "exec": self.exec,
            "read": self.read,
            "write": self.write,
            "close": self.close,
            "list": self.list,
        }
