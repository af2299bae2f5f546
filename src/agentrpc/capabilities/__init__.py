from __future__ import annotations

from typing import Any, Dict, Optional

from . import process
from .code import CodeCapabilities
from .fs import FileSystemCapabilities
from .shell import ProcessTable, ShellCapabilities


def build_namespace(
    *,
    fs_block_size: int = 512 * 1024,
    process_table: Optional[ProcessTable] = None,
) -> Dict[str, Any]:
    """
    Assemble the default capability namespace:

        fs.*       filesystem
        process.*  current process
        shell.*    spawned commands (owns the process table)
        py.*       on-the-fly code
    """
    return {
        "fs": FileSystemCapabilities(fs_block_size).namespace(),
        "process": process.namespace(),
        "shell": ShellCapabilities(process_table).namespace(),
        "py": CodeCapabilities().namespace(),
    }


__all__ = [
    "build_namespace",
    "CodeCapabilities",
    "FileSystemCapabilities",
    "ProcessTable",
    "ShellCapabilities",
]
