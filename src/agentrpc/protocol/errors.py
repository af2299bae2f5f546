from typing import Any, Optional
from .enums import ErrorCode


class AgentError(Exception):
    def __init__(self, message: str, code: Optional[ErrorCode] = None):
        super().__init__(message)
        self.code = code or ErrorCode.INTERNAL_ERROR


class UnknownFunctionError(AgentError):
    """Raised when a dotted name does not resolve to a capability."""

    def __init__(self, name: str):
        super().__init__(f"unknown function: {name}", ErrorCode.UNKNOWN_FUNCTION)
        self.name = name


class UnknownProcessError(UnknownFunctionError):
    """Raised when a shell operation names a PID the process table does not hold."""

    def __init__(self, pid: Any):
        AgentError.__init__(self, f"unknown command PID: {pid}", ErrorCode.UNKNOWN_FUNCTION)
        self.name = str(pid)
        self.pid = pid


class DecodeError(AgentError):
    """Raised when an envelope is not valid base64 or JSON."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.DECODE_FAILURE)


class TransportError(AgentError):
    """Raised when a transport cannot bind, connect or keep its socket."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.TRANSPORT_FAILURE)
