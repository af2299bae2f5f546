from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Iterator, List, Mapping, Tuple

from ..protocol.errors import UnknownFunctionError


def _freeze(node: Mapping[str, Any], path: str) -> Mapping[str, Any]:
    frozen: dict[str, Any] = {}
    for key, value in node.items():
        if not isinstance(key, str) or not key or "." in key:
            raise ValueError(f"Invalid capability segment {key!r} under '{path or '<root>'}'")
        dotted = f"{path}.{key}" if path else key
        if isinstance(value, Mapping):
            frozen[key] = _freeze(value, dotted)
        elif callable(value):
            frozen[key] = value
        else:
            raise ValueError(f"Capability '{dotted}' is neither a callable nor a namespace")
    return MappingProxyType(frozen)


class CapabilityRegistry:
    """
    Process-wide namespace of callables addressed by dotted names.

    Built once from a nested mapping and read-only afterwards, so the
    reactor can resolve names without any synchronization.
    """

    def __init__(self, namespace: Mapping[str, Any]) -> None:
        self._root = _freeze(namespace, "")

    def resolve(self, name: str) -> Callable[..., Any]:
        scope: Any = self._root
        for segment in name.split("."):
            if not isinstance(scope, Mapping) or segment not in scope:
                raise UnknownFunctionError(name)
            scope = scope[segment]

        if not callable(scope):
            raise UnknownFunctionError(name)
        return scope

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        try:
            self.resolve(name)
        except UnknownFunctionError:
            return False
        return True

    def names(self) -> List[str]:
        return sorted(name for name, _ in self._walk(self._root, ""))

    def _walk(self, node: Mapping[str, Any], path: str) -> Iterator[Tuple[str, Callable[..., Any]]]:
        for key, value in node.items():
            dotted = f"{path}.{key}" if path else key
            if isinstance(value, Mapping):
                yield from self._walk(value, dotted)
            else:
                yield dotted, value
