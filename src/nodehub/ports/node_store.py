from __future__ import annotations
from typing import Iterable, List, Optional, Protocol

from nodehub.domain import NodeRecord


class NodeStore(Protocol):
    """Keyed storage of node records plus the ordered list of registered ids.

    The two keys are not updated atomically; callers sequence them.
    """

    def get(self, node_id: str) -> Optional[NodeRecord]: ...
    def get_all(self, node_ids: Iterable[str]) -> List[NodeRecord]: ...
    def put(self, record: NodeRecord) -> None: ...
    def delete(self, node_id: str) -> None: ...
    def list_ids(self) -> List[str]: ...
    def append_id(self, node_id: str) -> None: ...
    def remove_id(self, node_id: str) -> None: ...
