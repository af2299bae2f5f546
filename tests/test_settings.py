# tests/test_settings.py

from agentrpc.core.runtime import AgentRuntime
from agentrpc.core.settings import AgentSettings
from agentrpc.protocol.enums import FramingPolicy
from agentrpc.transport.http import HTTPTransport
from agentrpc.transport.tcp import TCPConnectBack, TCPListener


def test_defaults(monkeypatch):
    for name in ("AGENTRPC_FRAMING", "AGENTRPC_LOG_LEVEL", "AGENTRPC_READ_SIZE"):
        monkeypatch.delenv(name, raising=False)

    settings = AgentSettings()
    assert settings.framing is FramingPolicy.SPLIT
    assert settings.log_level == "INFO"
    assert settings.fs_block_size == 512 * 1024
    assert settings.default_host == "0.0.0.0"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("AGENTRPC_FRAMING", "last_nul")
    monkeypatch.setenv("AGENTRPC_LOG_LEVEL", "debug")
    monkeypatch.setenv("AGENTRPC_READ_SIZE", "1024")

    settings = AgentSettings()
    assert settings.framing is FramingPolicy.LAST_NUL
    assert settings.log_level == "DEBUG"
    assert settings.read_size == 1024


def test_unknown_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("AGENTRPC_LOG_LEVEL", "chatty")
    assert AgentSettings().log_level == "INFO"


def test_runtime_builds_transports_from_settings():
    settings = AgentSettings(framing=FramingPolicy.LAST_NUL, read_size=10, default_host="127.0.0.1")
    runtime = AgentRuntime(settings=settings)

    listener = runtime.listener(9000)
    assert isinstance(listener, TCPListener)
    assert listener.host == "127.0.0.1"
    assert listener.framing is FramingPolicy.LAST_NUL
    assert listener.read_size == 10

    back = runtime.connect_back("10.0.0.1", 9001)
    assert isinstance(back, TCPConnectBack)
    assert (back.host, back.port) == ("10.0.0.1", 9001)

    http = runtime.http(8080, "::1")
    assert isinstance(http, HTTPTransport)
    assert http.host == "::1"

    assert listener.router is back.router is http.router is runtime.router
    assert runtime.router.call("process.getpid").ok


def test_runtime_accepts_a_custom_namespace():
    runtime = AgentRuntime(namespace={"x": {"y": lambda: "z"}}, settings=AgentSettings())
    assert runtime.registry.names() == ["x.y"]
    assert runtime.router.call("x.y").value == "z"


def test_runtime_shutdown_reaps_shell_children():
    runtime = AgentRuntime(settings=AgentSettings())
    pid = runtime.router.call("shell.exec", ["sleep", "5"]).value
    assert runtime.router.call("shell.list").value == [pid]

    runtime.shutdown()
    assert runtime.router.call("shell.list").value == []
    assert runtime.router.call("shell.read", [pid]).error == f"unknown command PID: {pid}"
