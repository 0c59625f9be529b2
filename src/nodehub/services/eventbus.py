from __future__ import annotations
import asyncio
import time
from collections import defaultdict
from threading import RLock
from typing import Callable, Awaitable, Any, DefaultDict, List, Set

from nodehub.domain import Event
from nodehub.ports import EventBus

Handler = Callable[[Event], Any] | Callable[[Event], Awaitable[Any]]

# типы событий реестра нод
NODE_REGISTERED = "node.registered"
NODE_UPDATED = "node.updated"
NODE_REMOVED = "node.removed"


def _matches(prefix: str, type_: str) -> bool:
    return prefix in ("", "*") or type_.startswith(prefix)


class LocalEventBus(EventBus):
    """
    Шина событий по префиксам типов. Через неё другие подсистемы узнают об удалении ноды
    (node.removed) и освобождают связанные с ней ресурсы.
      * prefix = "" или "*": подписка на всё.
      * subscribe() возвращает функцию отписки.
      * async-хендлеры планируются в текущем loop; без loop выполняются блокирующе.
    """

    def __init__(self) -> None:
        self._subs: DefaultDict[str, List[Handler]] = defaultdict(list)
        self._lock = RLock()
        self._pending: Set[asyncio.Task] = set()

    def subscribe(self, type_prefix: str, handler: Handler) -> Callable[[], None]:
        with self._lock:
            self._subs[type_prefix].append(handler)

        def _unsubscribe() -> None:
            with self._lock:
                handlers = self._subs.get(type_prefix, [])
                if handler in handlers:
                    handlers.remove(handler)

        return _unsubscribe

    def publish(self, event: Event) -> None:
        with self._lock:
            handlers = [h for p, hs in self._subs.items() if _matches(p, event.type) for h in hs]
        for h in handlers:
            res = h(event)
            if asyncio.iscoroutine(res):
                self._schedule(res)

    def _schedule(self, coro: Awaitable[Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(coro)  # type: ignore[arg-type]
            return
        task = loop.create_task(coro)  # type: ignore[arg-type]
        # держим ссылку, пока задача не завершится
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)


def emit(bus: EventBus, type_: str, payload: dict, source: str) -> None:
    bus.publish(Event(type=type_, payload=payload, source=source, ts=time.time()))
