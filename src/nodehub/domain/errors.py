"""Typed errors raised by the node registry to its callers."""

from __future__ import annotations

__all__ = [
    "NodeHubError",
    "ValidationError",
    "NotFoundError",
]


class NodeHubError(RuntimeError):
    """Base class for registry errors that callers are expected to translate."""


class ValidationError(NodeHubError, ValueError):
    """Raised when register/update input is missing or malformed."""

    def __init__(self, field: str, *, message: str | None = None) -> None:
        self.field = field
        self.reason = message or "field required"
        super().__init__(f"{field}: {self.reason}")


class NotFoundError(NodeHubError, LookupError):
    """Raised when an operation references a node id absent from the registry."""

    def __init__(self, node_id: str, *, message: str | None = None) -> None:
        self.node_id = node_id
        super().__init__(message or f"node does not exist: {node_id}")
