"""
Filesystem capabilities (`fs.*`).

Thin wrappers over the os module. Paths and data cross the wire as JSON
strings. File contents are UTF-8 text by default (undecodable bytes are
replaced); encoding="base64" moves binary data unchanged.
"""

from __future__ import annotations

import base64
import os
import stat as stat_module
from typing import Any, Dict, List, Optional

_FLAGS: Dict[str, int] = {
    "r": os.O_RDONLY,
    "r+": os.O_RDWR,
    "w": os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
    "wx": os.O_WRONLY | os.O_CREAT | os.O_TRUNC | os.O_EXCL,
    "w+": os.O_RDWR | os.O_CREAT | os.O_TRUNC,
    "wx+": os.O_RDWR | os.O_CREAT | os.O_TRUNC | os.O_EXCL,
    "a": os.O_WRONLY | os.O_CREAT | os.O_APPEND,
    "ax": os.O_WRONLY | os.O_CREAT | os.O_APPEND | os.O_EXCL,
    "a+": os.O_RDWR | os.O_CREAT | os.O_APPEND,
    "ax+": os.O_RDWR | os.O_CREAT | os.O_APPEND | os.O_EXCL,
}


def parse_flags(flags: Any) -> int:
    if isinstance(flags, int) and not isinstance(flags, bool):
        return flags
    if flags not in _FLAGS:
        raise ValueError(f"unknown open flags: {flags!r}")
    return _FLAGS[flags]


def decode_data(data: bytes, encoding: str) -> str:
    """Bytes to wire text: base64, or any Python text codec (lossy for UTF-8)."""
    if encoding == "base64":
        return base64.b64encode(data).decode("ascii")
    return data.decode(encoding, errors="replace")


def encode_data(data: str, encoding: str) -> bytes:
    if encoding == "base64":
        return base64.b64decode(data, validate=True)
    return data.encode(encoding)


class FileSystemCapabilities:
    def __init__(self, block_size: int = 512 * 1024) -> None:
        self.block_size = block_size

    def open(self, path: str, flags: Any = "r", mode: int = 0o666) -> int:
        return os.open(path, parse_flags(flags), mode)

    def read(self, fd: int, position: Optional[int] = None, encoding: str = "utf-8") -> str:
        if position is None:
            data = os.read(fd, self.block_size)
        else:
            data = os.pread(fd, self.block_size, position)
        return decode_data(data, encoding)

    def write(self, fd: int, position: Optional[int], data: str, encoding: str = "utf-8") -> int:
        buffer = encode_data(data, encoding)
        if position is None:
            return os.write(fd, buffer)
        return os.pwrite(fd, buffer, position)

    def close(self, fd: int) -> None:
        os.close(fd)

    def readlink(self, path: str) -> str:
        return os.readlink(path)

    def readdir(self, path: str) -> List[str]:
        return [".", ".."] + sorted(os.listdir(path))

    def move(self, src: str, dst: str) -> None:
        os.rename(src, dst)

    def unlink(self, path: str) -> None:
        os.unlink(path)

    def rmdir(self, path: str) -> None:
        os.rmdir(path)

    def mkdir(self, path: str, mode: int = 0o777) -> None:
        os.mkdir(path, mode)

    def chmod(self, path: str, mode: int) -> None:
        os.chmod(path, mode)

    def stat(self, path: str) -> Dict[str, Any]:
        st = os.stat(path)
        return {
            "st_mode": st.st_mode,
            "st_ino": st.st_ino,
            "st_dev": st.st_dev,
            "st_nlink": st.st_nlink,
            "st_uid": st.st_uid,
            "st_gid": st.st_gid,
            "st_size": st.st_size,
            "st_atime": st.st_atime,
            "st_mtime": st.st_mtime,
            "st_ctime": st.st_ctime,
            "is_dir": stat_module.S_ISDIR(st.st_mode),
            "is_file": stat_module.S_ISREG(st.st_mode),
            "is_symlink": os.path.islink(path),
        }

    def link(self, target: str, path: str) -> None:
        os.symlink(target, path)

    def namespace(self) -> Dict[str, Any]:
        return {
            "open": self.open,
            "read": self.read,
            "write": self.write,
            "close": self.close,
            "readlink": self.readlink,
            "readdir": self.readdir,
            "move": self.move,
            "unlink": self.unlink,
            "rmdir": self.rmdir,
            "mkdir": self.mkdir,
            "chmod": self.chmod,
            "stat": self.stat,
            "link": self.link,
        }
