# tests/test_router.py

import pytest

from agentrpc.core.registry import CapabilityRegistry
from agentrpc.core.router import CallRouter
from agentrpc.protocol.errors import UnknownFunctionError
from agentrpc.protocol.models import CallRequest


def test_router_success_path(router):
    result = router.call("a.b.c", [])
    assert result.ok
    assert result.to_dict() == {"return": 42}


def test_router_passes_positional_arguments(router):
    assert router.call("math.add", [2, 3]).value == 5
    assert router.route(CallRequest(name="echo.args", arguments=[1, "x", None])).value == [1, "x", None]


def test_router_missing_arguments_mean_no_arguments(router):
    assert router.call("a.b.c").value == 42


def test_unknown_function(router):
    assert router.call("a.b.x", []).to_dict() == {"exception": "unknown function: a.b.x"}
    assert router.call("nope", []).to_dict() == {"exception": "unknown function: nope"}


def test_unknown_when_descending_past_a_callable(router):
    assert router.call("a.b.c.d", []).error == "unknown function: a.b.c.d"


def test_namespace_node_is_not_callable(router):
    assert router.call("a.b", []).error == "unknown function: a.b"


def test_empty_name_is_unknown(router):
    assert router.call("", []).error == "unknown function: "


def test_failure_isolation(router):
    failed = router.call("broken.fail", [])
    assert failed.to_dict() == {"exception": "capability exploded"}

    ok = router.call("a.b.c", [])
    assert ok.to_dict() == {"return": 42}


def test_wrong_argument_count_is_a_failure_not_a_crash(router):
    result = router.call("math.add", [1])
    assert not result.ok
    assert "argument" in result.error


def test_exception_without_message_reports_its_type():
    def fail():
        raise KeyError()

    router = CallRouter(CapabilityRegistry({"x": {"fail": fail}}))
    assert router.call("x.fail").error == "KeyError"


def test_system_exit_from_a_callee_is_a_failure(router):
    assert router.call("broken.exit").to_dict() == {"exception": "3"}
    assert router.call("a.b.c").value == 42


def test_generator_exit_from_a_callee_is_a_failure():
    def stop():
        raise GeneratorExit()

    router = CallRouter(CapabilityRegistry({"x": {"stop": stop}}))
    assert router.call("x.stop").error == "GeneratorExit"


def test_keyboard_interrupt_is_not_swallowed():
    def interrupt():
        raise KeyboardInterrupt()

    router = CallRouter(CapabilityRegistry({"x": {"interrupt": interrupt}}))
    with pytest.raises(KeyboardInterrupt):
        router.call("x.interrupt")


class TestCapabilityRegistry:
    def test_resolve(self):
        fn = lambda: 1  # noqa: E731
        reg = CapabilityRegistry({"a": {"b": fn}})
        assert reg.resolve("a.b") is fn
        assert "a.b" in reg
        assert "a" not in reg

    def test_resolve_unknown_raises_typed_error(self):
        reg = CapabilityRegistry({"a": {"b": lambda: 1}})
        with pytest.raises(UnknownFunctionError) as info:
            reg.resolve("a.c")
        assert info.value.name == "a.c"

    def test_names(self):
        reg = CapabilityRegistry({"b": {"y": print}, "a": {"x": print, "z": {"w": print}}})
        assert reg.names() == ["a.x", "a.z.w", "b.y"]

    def test_registry_is_read_only(self):
        source = {"a": {"b": lambda: 1}}
        reg = CapabilityRegistry(source)

        source["a"]["c"] = lambda: 2
        assert "a.c" not in reg

        with pytest.raises(TypeError):
            reg._root["a"]["d"] = lambda: 3

    def test_rejects_non_callable_leaf(self):
        with pytest.raises(ValueError, match="a.b"):
            CapabilityRegistry({"a": {"b": 5}})

    def test_rejects_dotted_segment(self):
        with pytest.raises(ValueError):
            CapabilityRegistry({"a.b": print})
