from .registry import CapabilityRegistry
from .router import CallRouter
from .runtime import AgentRuntime
from .settings import AgentSettings, get_settings

__all__ = ["CapabilityRegistry", "CallRouter", "AgentRuntime", "AgentSettings", "get_settings"]
