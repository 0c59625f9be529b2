from .contracts import EventBus, KV, SQL
from .paths import PathProvider
from .node_store import NodeStore
from .node_client import NodeClient, ProbeResult

__all__ = [
    "EventBus",
    "KV",
    "SQL",
    "PathProvider",
    "NodeStore",
    "NodeClient",
    "ProbeResult",
]
