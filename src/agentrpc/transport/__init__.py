from .base import Transport
from .client import HTTPAgentClient, RemoteCallError, TCPAgentClient
from .http import HTTPTransport
from .stream import StreamFramer, StreamTransport
from .tcp import TCPConnectBack, TCPListener

__all__ = [
    "Transport",
    "HTTPTransport",
    "StreamFramer",
    "StreamTransport",
    "TCPListener",
    "TCPConnectBack",
    "HTTPAgentClient",
    "TCPAgentClient",
    "RemoteCallError",
]
