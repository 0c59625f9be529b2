# src/nodehub/apps/bootstrap.py
from __future__ import annotations
from typing import Optional
from threading import RLock

import httpx

from nodehub.services.settings import Settings
from nodehub.services.app_context import AppContext, set_ctx
from nodehub.adapters.fs.path_provider import PathProvider
from nodehub.adapters.db import SQLite, SQLiteKV
from nodehub.adapters.nodes import HttpNodeClient, KVNodeStore
from nodehub.services.eventbus import LocalEventBus
from nodehub.services.logging import setup_logging, attach_event_logger
from nodehub.services.nodes import NodeRegistry, Reconciler


class _CtxHolder:
    _ctx: Optional[AppContext] = None
    _lock = RLock()

    @classmethod
    def get(cls) -> AppContext:
        with cls._lock:
            if cls._ctx is None:
                cls._ctx = cls._build(Settings.from_sources())
                set_ctx(cls._ctx)
            return cls._ctx

    @classmethod
    def init(cls, settings: Optional[Settings] = None, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> AppContext:
        with cls._lock:
            cls._ctx = cls._build(settings or Settings.from_sources(), transport=transport)
            set_ctx(cls._ctx)
            return cls._ctx

    @classmethod
    def reload(cls, **overrides) -> AppContext:
        """Пересборка контекста с новыми безопасными настройками (base_dir/profile)."""
        with cls._lock:
            old = cls._ctx.settings if cls._ctx else Settings.from_sources()
            cls._ctx = cls._build(old.with_overrides(**overrides))
            set_ctx(cls._ctx)
            return cls._ctx

    @staticmethod
    def _build(settings: Settings, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> AppContext:
        paths = PathProvider.from_settings(settings)
        paths.ensure_tree()

        bus = LocalEventBus()
        root_logger = setup_logging(paths, level=settings.log_level)
        attach_event_logger(bus, root_logger.getChild("events"))

        sql = SQLite(paths)
        kv = SQLiteKV(sql, namespace="nodehub")
        store = KVNodeStore(kv)

        # transport подменяется в тестах (httpx.MockTransport)
        client = HttpNodeClient(timeout=settings.probe_timeout, username=settings.probe_username, transport=transport)
        registry = NodeRegistry(store, Reconciler(store, client), bus=bus)

        return AppContext(
            settings=settings,
            paths=paths,
            bus=bus,
            sql=sql,
            kv=kv,
            store=store,
            nodes=registry,
        )


# ── публичные функции (удобные фасады) ─────────────────────────────────────────


def get_ctx() -> AppContext:
    """Shim: проксируем на services.app_context.get_ctx()."""
    from nodehub.services.app_context import get_ctx as _get

    return _get()


def init_ctx(settings: Optional[Settings] = None, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> AppContext:
    """Явная инициализация приложения и публикация контекста."""
    return _CtxHolder.init(settings, transport=transport)


def reload_ctx(**overrides) -> AppContext:
    """Пересборка с overrides и публикация контекста."""
    return _CtxHolder.reload(**overrides)


def bootstrap_app(settings: Optional[Settings] = None) -> AppContext:
    """Синоним init_ctx: удобно вызывать из точек входа CLI/API."""
    return init_ctx(settings)
