from .json import json_dumps, json_loads
from .logging import configure_logging

__all__ = ["json_dumps", "json_loads", "configure_logging"]
