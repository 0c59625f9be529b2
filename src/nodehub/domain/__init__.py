from .types import Event
from .node import NodeStatus, NodeRecord, NodeFields, NodeSummary
from .errors import NodeHubError, ValidationError, NotFoundError

__all__ = [
    "Event",
    "NodeStatus",
    "NodeRecord",
    "NodeFields",
    "NodeSummary",
    "NodeHubError",
    "ValidationError",
    "NotFoundError",
]
