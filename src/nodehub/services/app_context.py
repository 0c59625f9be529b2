# src/nodehub/services/app_context.py
from __future__ import annotations
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Optional

from nodehub.ports import EventBus, KV, SQL, NodeStore
from nodehub.ports.paths import PathProvider
from nodehub.services.settings import Settings
from nodehub.services.nodes.registry import NodeRegistry

_CTX: ContextVar[Optional["AppContext"]] = ContextVar("nodehub_app_ctx", default=None)
# процессный fallback: ContextVar не виден из потока uvicorn/TestClient
_PROCESS_CTX: Optional["AppContext"] = None


def set_ctx(ctx: "AppContext") -> None:
    """Устанавливает текущий AppContext (делает доступным через get_ctx)."""
    global _PROCESS_CTX
    _PROCESS_CTX = ctx
    _CTX.set(ctx)


def get_ctx() -> "AppContext":
    """Возвращает текущий AppContext или бросает ошибку, если не инициализирован."""
    ctx = _CTX.get() or _PROCESS_CTX
    if ctx is None:
        raise RuntimeError("AppContext is not initialized. Call set_ctx(...) during app bootstrap.")
    return ctx


def clear_ctx() -> None:
    """Очищает текущий контекст (для тестов/завершения)."""
    global _PROCESS_CTX
    _PROCESS_CTX = None
    _CTX.set(None)


@dataclass(slots=True)
class AppContext:
    settings: Settings
    paths: PathProvider
    bus: EventBus
    sql: SQL
    kv: KV
    store: NodeStore
    nodes: NodeRegistry
