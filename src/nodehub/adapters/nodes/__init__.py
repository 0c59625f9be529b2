from .kv_store import KVNodeStore
from .memory_store import InMemoryNodeStore
from .http_client import HttpNodeClient

__all__ = ["KVNodeStore", "InMemoryNodeStore", "HttpNodeClient"]
