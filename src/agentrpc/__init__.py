from .core.runtime import AgentRuntime
from .core.router import CallRouter
from .core.registry import CapabilityRegistry
from .core.settings import AgentSettings, get_settings
from .protocol import CallRequest, CallResult, serialize, deserialize
from .transport import (
    HTTPTransport,
    TCPListener,
    TCPConnectBack,
    HTTPAgentClient,
    TCPAgentClient,
    RemoteCallError,
)

__all__ = [
    "AgentRuntime",
    "CallRouter",
    "CapabilityRegistry",
    "AgentSettings",
    "get_settings",
    "CallRequest",
    "CallResult",
    "serialize",
    "deserialize",
    "HTTPTransport",
    "TCPListener",
    "TCPConnectBack",
    "HTTPAgentClient",
    "TCPAgentClient",
    "RemoteCallError",
]

__version__ = "0.1.0"
