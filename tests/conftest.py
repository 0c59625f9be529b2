# tests/conftest.py
from __future__ import annotations
import asyncio
from typing import Any, Awaitable, Callable, Dict, List

import httpx
import pytest

from nodehub.apps.bootstrap import init_ctx
from nodehub.services.app_context import clear_ctx
from nodehub.services.settings import Settings

PROBE_TIMEOUT = 0.3

ONLINE_BODY: Dict[str, Any] = {
    "versionFamily": "1.0",
    "versionRelease": "stable",
    "online": True,
    "remote": True,
    "dockerInfo": {},
}

Behaviour = Callable[[httpx.Request], Awaitable[httpx.Response]]


class FakeFleet:
    """
    Поддельные ноды за httpx.MockTransport. Ключ: "host:port".
    Нода без поведения ведёт себя как недоступный хост (ConnectError).
    """

    def __init__(self) -> None:
        self._nodes: Dict[str, Behaviour] = {}
        self.requests: List[httpx.Request] = []

    def serve(self, host: str, port: int, behaviour: Behaviour) -> None:
        self._nodes[f"{host}:{port}"] = behaviour

    def online(self, host: str, port: int = 8080, **overrides: Any) -> None:
        body = {**ONLINE_BODY, **overrides}

        async def _ok(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=body)

        self.serve(host, port, _ok)

    def status(self, host: str, port: int, code: int) -> None:
        async def _status(request: httpx.Request) -> httpx.Response:
            return httpx.Response(code, json={"error": "nope"})

        self.serve(host, port, _status)

    def garbage(self, host: str, port: int = 8080) -> None:
        async def _garbage(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>not json</html>")

        self.serve(host, port, _garbage)

    def binary(self, host: str, port: int = 8080) -> None:
        async def _binary(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"\x80\x81\xfe not utf-8")

        self.serve(host, port, _binary)

    def hang(self, host: str, port: int = 8080) -> None:
        async def _hang(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(30)
            return httpx.Response(200, json=ONLINE_BODY)

        self.serve(host, port, _hang)

    def down(self, host: str, port: int = 8080) -> None:
        self._nodes.pop(f"{host}:{port}", None)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        behaviour = self._nodes.get(f"{request.url.host}:{request.url.port}")
        if behaviour is None:
            raise httpx.ConnectError("connection refused", request=request)
        return await behaviour(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def node_fields(address: str = "10.0.0.1", port: int = 8080, **overrides: Any) -> Dict[str, Any]:
    data = {
        "name": "node-1",
        "tags": "eu,ssd",
        "ram": 4096,
        "disk": 20480,
        "processor": "Ryzen 7",
        "address": address,
        "port": port,
        "apiKey": "secret-api-key-123",
    }
    data.update(overrides)
    return data


@pytest.fixture
def fleet() -> FakeFleet:
    return FakeFleet()


# ---------- автofixture: поднимаем AppContext для каждого теста ----------
@pytest.fixture(autouse=True)
def _autocontext(tmp_path, monkeypatch, fleet):
    base_dir = tmp_path / "base"
    monkeypatch.setenv("NODEHUB_BASE_DIR", str(base_dir))
    monkeypatch.setenv("NODEHUB_PROBE_TIMEOUT", str(PROBE_TIMEOUT))
    for var in ("NODEHUB_TOKEN", "NODEHUB_EXPOSE_API_KEYS", "NODEHUB_PROFILE", "NODEHUB_PROBE_USERNAME"):
        monkeypatch.delenv(var, raising=False)

    settings = Settings.from_sources(env_file=None).with_overrides(profile="test")
    ctx = init_ctx(settings, transport=fleet.transport)
    try:
        yield ctx
    finally:
        clear_ctx()


@pytest.fixture
def registry(_autocontext):
    return _autocontext.nodes


@pytest.fixture
def cli_app():
    from nodehub.apps.cli.app import app

    return app


@pytest.fixture
def event_loop():
    """Локальный event loop на тест (совместимо без pytest-asyncio)."""
    loop = asyncio.new_event_loop()
    try:
        yield loop
    finally:
        loop.close()


@pytest.fixture
def fields():
    return node_fields
