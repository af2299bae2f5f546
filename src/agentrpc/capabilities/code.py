"""
On-the-fly code capabilities (`py.*`).

This is the one place where text from the wire becomes executable code.
Defined functions live in this object's own table, never in the registry,
so the registry stays read-only after startup.
"""

from __future__ import annotations

import textwrap
from typing import Any, Callable, Dict, List, Sequence

from ..protocol.errors import UnknownFunctionError


class CodeCapabilities:
    def __init__(self) -> None:
        self._globals: Dict[str, Any] = {"__name__": "agentrpc.py"}
        self._functions: Dict[str, Callable[..., Any]] = {}

    def eval(self, expression: str) -> Any:
        return eval(compile(expression, "<py.eval>", "eval"), self._globals)

    def define(self, name: str, params: Sequence[str], body: str) -> bool:
        if not name.isidentifier():
            raise ValueError(f"invalid function name: {name!r}")
        for param in params:
            if not str(param).isidentifier():
                raise ValueError(f"invalid parameter name: {param!r}")

        source = "def {}({}):\n{}".format(
            name,
            ", ".join(params),
            textwrap.indent(textwrap.dedent(body).strip("\n") or "pass", "    "),
        )
        scope: Dict[str, Any] = {}
        exec(compile(source, f"<py.define:{name}>", "exec"), self._globals, scope)
        self._functions[name] = scope[name]
        self._globals[name] = scope[name]
        return True

    def call(self, name: str, *args: Any) -> Any:
        func = self._functions.get(name)
        if func is None:
            raise UnknownFunctionError(f"py.{name}")
        return func(*args)

    def defined(self) -> List[str]:
        return sorted(self._functions)

    def namespace(self) -> Dict[str, Any]:
        return {
            "eval": self.eval,
            "define": self.define,
            "call": self.call,
            "defined": self.defined,
        }
