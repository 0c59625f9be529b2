# src/nodehub/services/nodes/registry.py
from __future__ import annotations
import logging
import uuid
from typing import Any, List, Mapping, Optional

from nodehub.domain import NodeRecord, NodeStatus, NodeSummary, NotFoundError
from nodehub.ports import EventBus, NodeStore
from nodehub.services.eventbus import NODE_REGISTERED, NODE_REMOVED, NODE_UPDATED, emit
from nodehub.services.nodes.reconciler import Reconciler
from nodehub.services.nodes.validation import validate_fields

_log = logging.getLogger("nodehub.registry")


class NodeRegistry:
    """
    Публичный фасад реестра нод.

    Любое чтение (get_one/list_all) сперва опрашивает ноды, поэтому статус отражает
    текущую доступность, а не кэш. Недоступная нода получает status=Offline, а не ошибку.

    Конкурентные update/remove одного и того же id не сериализуются: вызывающий,
    которому нужен строгий порядок, должен сам держать блокировку на id.
    """

    def __init__(self, store: NodeStore, reconciler: Reconciler, bus: Optional[EventBus] = None) -> None:
        self.store = store
        self.reconciler = reconciler
        self.bus = bus

    def _emit(self, type_: str, payload: dict) -> None:
        if self.bus is not None:
            emit(self.bus, type_, payload, source="nodes.registry")

    def _require_known(self, node_id: str) -> None:
        if not node_id or node_id not in self.store.list_ids():
            raise NotFoundError(node_id)

    async def register(self, data: Mapping[str, Any]) -> NodeRecord:
        fields = validate_fields(data)
        record = NodeRecord(
            id=str(uuid.uuid4()),
            name=fields.name,
            tags=fields.tags,
            ram=fields.ram,
            disk=fields.disk,
            processor=fields.processor,
            address=fields.address,
            port=fields.port,
            api_key=fields.api_key,
            status=NodeStatus.UNKNOWN,
        )
        self.store.put(record)
        try:
            probed = await self.reconciler.reconcile_one(record)
            self.store.append_id(record.id)
        except BaseException:
            # не оставляем запись без id в списке
            self.store.delete(record.id)
            raise
        _log.info("node.registered", extra={"extra": {"node_id": probed.id, "status": probed.status.value}})
        self._emit(NODE_REGISTERED, {"node_id": probed.id, "status": probed.status.value})
        return probed

    async def remove(self, node_id: str) -> None:
        self._require_known(node_id)
        # сначала убираем из списка: читатели идут через список и уже не увидят ноду
        self.store.remove_id(node_id)
        self.store.delete(node_id)
        _log.info("node.removed", extra={"extra": {"node_id": node_id}})
        self._emit(NODE_REMOVED, {"node_id": node_id})

    async def update(self, node_id: str, data: Mapping[str, Any]) -> NodeRecord:
        self._require_known(node_id)
        current = self.store.get(node_id)
        if current is None:
            raise NotFoundError(node_id)
        fields = validate_fields(data)
        record = current.with_fields(fields)
        self.store.put(record)
        probed = await self.reconciler.reconcile_one(record)
        _log.info("node.updated", extra={"extra": {"node_id": node_id, "status": probed.status.value}})
        self._emit(NODE_UPDATED, {"node_id": node_id, "status": probed.status.value})
        return probed

    async def get_one(self, node_id: str) -> NodeRecord:
        self._require_known(node_id)
        record = self.store.get(node_id)
        if record is None:
            raise NotFoundError(node_id)
        return await self.reconciler.reconcile_one(record)

    async def list_all(self) -> List[NodeRecord]:
        records = self.store.get_all(self.store.list_ids())
        return await self.reconciler.reconcile(records)

    async def summary(self) -> NodeSummary:
        nodes = await self.list_all()
        online = sum(1 for n in nodes if n.status is NodeStatus.ONLINE)
        return NodeSummary(total=len(nodes), online=online, offline=len(nodes) - online)
