from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional

from nodehub.domain import NodeRecord
from nodehub.ports import NodeStore


class InMemoryNodeStore(NodeStore):
    def __init__(self) -> None:
        # храним сериализованный вид, как и durable-хранилище
        self._records: Dict[str, Dict[str, Any]] = {}
        self._ids: List[str] = []

    def get(self, node_id: str) -> Optional[NodeRecord]:
        data = self._records.get(node_id)
        return NodeRecord.from_dict(data) if data else None

    def get_all(self, node_ids: Iterable[str]) -> List[NodeRecord]:
        return [rec for rec in (self.get(i) for i in node_ids) if rec is not None]

    def put(self, record: NodeRecord) -> None:
        self._records[record.id] = record.to_dict()

    def delete(self, node_id: str) -> None:
        self._records.pop(node_id, None)

    def list_ids(self) -> List[str]:
        return list(self._ids)

    def append_id(self, node_id: str) -> None:
        if node_id not in self._ids:
            self._ids.append(node_id)

    def remove_id(self, node_id: str) -> None:
        if node_id in self._ids:
            self._ids.remove(node_id)
