from .enums import ErrorCode, FramingPolicy
from .errors import (
    AgentError,
    DecodeError,
    TransportError,
    UnknownFunctionError,
    UnknownProcessError,
)
from .models import CallRequest, CallResult
from .codec import serialize, deserialize

__all__ = [
    "ErrorCode",
    "FramingPolicy",
    "AgentError",
    "DecodeError",
    "TransportError",
    "UnknownFunctionError",
    "UnknownProcessError",
    "CallRequest",
    "CallResult",
    "serialize",
    "deserialize",
]
