# FILE: src/agentrpc/protocol/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import DecodeError


# -------------------------
# REQUESTS
# -------------------------

@dataclass
class CallRequest:
    name: str
    arguments: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "arguments": list(self.arguments)}

    @classmethod
    def from_dict(cls, data: Any) -> CallRequest:
        if not isinstance(data, dict):
            raise DecodeError("request envelope must be a JSON object")

        name = data.get("name")
        if not isinstance(name, str):
            raise DecodeError("request envelope is missing a string 'name'")

        arguments = data.get("arguments")
        if arguments is None:
            arguments = []
        if not isinstance(arguments, list):
            raise DecodeError("request 'arguments' must be a JSON array")

        return cls(name=name, arguments=arguments)


# -------------------------
# RESULTS
# -------------------------

@dataclass
class CallResult:
    """
    Tagged union of Success{value} / Failure{message}.

    `error` is None exactly when the call succeeded; `value` may itself be
    None (a capability returning null).
    """

    value: Any = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: Any) -> CallResult:
        return cls(value=value)

    @classmethod
    def failure(cls, message: str) -> CallResult:
        return cls(error=message)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        if self.error is not None:
            return {"exception": self.error}
        return {"return": self.value}

    @classmethod
    def from_dict(cls, data: Any) -> CallResult:
        if isinstance(data, dict):
            if "exception" in data:
                return cls.failure(str(data["exception"]))
            if "return" in data:
                return cls.success(data["return"])
        raise DecodeError("result envelope carries neither 'return' nor 'exception'")
