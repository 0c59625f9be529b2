# src/nodehub/services/nodes/reconciler.py
from __future__ import annotations
import asyncio
import logging
from dataclasses import replace
from typing import List, Sequence

from nodehub.domain import NodeRecord, NodeStatus
from nodehub.ports import NodeClient, NodeStore, ProbeResult

_log = logging.getLogger("nodehub.reconcile")


def merge_probe(record: NodeRecord, result: ProbeResult) -> NodeRecord:
    """Слить результат probe в запись.

    Online перезаписывает capability-поля свежими значениями. Offline меняет только
    статус: последние известные версии и docker-сведения остаются в записи.
    """
    if not result.online:
        return replace(record, status=NodeStatus.OFFLINE)
    return replace(
        record,
        status=NodeStatus.ONLINE,
        version_family=result.version_family,
        version_release=result.version_release,
        remote=result.remote,
        docker_info=result.docker_info,
    )


def _target(record: NodeRecord) -> tuple:
    return (record.address, record.port, record.api_key)


class Reconciler:
    """
    Параллельно опрашивает ноды и сохраняет каждую запись отдельно.

    Одна задача на ноду; у каждого probe свой таймаут, так что зависшая нода
    не задерживает остальные. Ошибка записи одной ноды не отменяет запись других:
    она пробрасывается вызывающему после того, как все задачи завершились.
    После probe запись перечитывается: удалённую не воскрешаем, а чужие
    описательные поля не перетираем.
    """

    def __init__(self, store: NodeStore, client: NodeClient) -> None:
        self.store = store
        self.client = client

    async def reconcile_one(self, record: NodeRecord) -> NodeRecord:
        result = await self.client.probe(record.address, record.port, record.api_key)
        # пока шёл probe, запись могли изменить или удалить: сливаем в актуальную
        current = self.store.get(record.id)
        if current is None:
            _log.debug("reconcile.skip_removed", extra={"extra": {"node_id": record.id}})
            return merge_probe(record, result)
        if _target(current) != _target(record):
            # адрес сменился: этот результат устарел, свежий probe делает update
            _log.debug("reconcile.skip_stale", extra={"extra": {"node_id": record.id}})
            return current
        merged = merge_probe(current, result)
        self.store.put(merged)
        if merged.status != current.status:
            _log.info(
                "node.status.changed",
                extra={"extra": {"node_id": record.id, "from": current.status.value, "to": merged.status.value}},
            )
        return merged

    async def reconcile(self, records: Sequence[NodeRecord]) -> List[NodeRecord]:
        if not records:
            return []
        results = await asyncio.gather(*(self.reconcile_one(r) for r in records), return_exceptions=True)
        errors = [r for r in results if isinstance(r, BaseException)]
        if errors:
            _log.error(
                "reconcile.store_failed",
                extra={"extra": {"failed": len(errors), "total": len(records), "error": repr(errors[0])}},
            )
            raise errors[0]
        return list(results)  # type: ignore[arg-type]
