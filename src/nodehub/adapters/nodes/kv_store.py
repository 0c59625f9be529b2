# src/nodehub/adapters/nodes/kv_store.py
from __future__ import annotations
import logging
from typing import Iterable, List, Optional

from nodehub.config import const
from nodehub.domain import NodeRecord
from nodehub.ports import KV, NodeStore

_log = logging.getLogger("nodehub.store")


def node_key(node_id: str) -> str:
    return f"{node_id}{const.NODE_KEY_SUFFIX}"


class KVNodeStore(NodeStore):
    """
    Хранилище нод поверх KV:
      - "nodes"      -> упорядоченный список id (порядок регистрации)
      - "<id>_node"  -> запись ноды (JSON, camelCase-ключи)
    """

    def __init__(self, kv: KV) -> None:
        self.kv = kv

    def get(self, node_id: str) -> Optional[NodeRecord]:
        data = self.kv.get(node_key(node_id))
        return NodeRecord.from_dict(data) if data else None

    def get_all(self, node_ids: Iterable[str]) -> List[NodeRecord]:
        records: List[NodeRecord] = []
        for node_id in node_ids:
            rec = self.get(node_id)
            if rec is None:
                _log.warning("store.dangling_id", extra={"extra": {"node_id": node_id}})
                continue
            records.append(rec)
        return records

    def put(self, record: NodeRecord) -> None:
        self.kv.set(node_key(record.id), record.to_dict())

    def delete(self, node_id: str) -> None:
        self.kv.delete(node_key(node_id))

    def list_ids(self) -> List[str]:
        return list(self.kv.get(const.NODES_KEY) or [])

    def append_id(self, node_id: str) -> None:
        ids = self.list_ids()
        if node_id in ids:
            return
        ids.append(node_id)
        self.kv.set(const.NODES_KEY, ids)

    def remove_id(self, node_id: str) -> None:
        ids = self.list_ids()
        if node_id not in ids:
            return
        self.kv.set(const.NODES_KEY, [i for i in ids if i != node_id])
