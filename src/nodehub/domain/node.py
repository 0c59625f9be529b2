# src/nodehub/domain/node.py
from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class NodeStatus(str, Enum):
    UNKNOWN = "Unknown"
    ONLINE = "Online"
    OFFLINE = "Offline"


# snake_case attribute -> persisted/wire key
_WIRE_KEYS: Dict[str, str] = {
    "id": "id",
    "name": "name",
    "tags": "tags",
    "ram": "ram",
    "disk": "disk",
    "processor": "processor",
    "address": "address",
    "port": "port",
    "api_key": "apiKey",
    "status": "status",
    "version_family": "versionFamily",
    "version_release": "versionRelease",
    "remote": "remote",
    "docker_info": "dockerInfo",
}


def redact_secret(value: Optional[str]) -> str:
    if not value:
        return "-"
    if len(value) <= 8:
        return "*" * len(value)
    return value[:2] + "*" * (len(value) - 6) + value[-4:]


@dataclass(frozen=True, slots=True)
class NodeRecord:
    id: str
    name: str
    tags: str
    ram: int
    disk: int
    processor: str
    address: str
    port: int
    api_key: str
    status: NodeStatus = NodeStatus.UNKNOWN
    # capability metadata, filled by a successful probe only
    version_family: Optional[str] = None
    version_release: Optional[str] = None
    remote: Optional[Any] = None
    docker_info: Optional[Any] = None

    @property
    def url(self) -> str:
        return f"http://{self.address}:{self.port}/"

    def with_fields(self, fields: "NodeFields") -> "NodeRecord":
        """Overwrite descriptive/network fields, keep id and capability metadata."""
        return replace(
            self,
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

    def to_dict(self) -> Dict[str, Any]:
        data = {wire: getattr(self, attr) for attr, wire in _WIRE_KEYS.items()}
        data["status"] = self.status.value
        return data

    def to_public(self, *, expose_api_key: bool = False) -> Dict[str, Any]:
        data = self.to_dict()
        if not expose_api_key:
            data["apiKey"] = redact_secret(self.api_key)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NodeRecord":
        kwargs = {attr: data.get(wire) for attr, wire in _WIRE_KEYS.items() if wire in data}
        kwargs["status"] = NodeStatus(data.get("status") or NodeStatus.UNKNOWN.value)
        return cls(**kwargs)


@dataclass(frozen=True, slots=True)
class NodeFields:
    """Admin-supplied descriptive and network fields of a node."""

    name: str
    tags: str
    ram: int
    disk: int
    processor: str
    address: str
    port: int
    api_key: str


@dataclass(frozen=True, slots=True)
class NodeSummary:
    total: int
    online: int
    offline: int
