from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Protocol


@dataclass(frozen=True, slots=True)
class ProbeResult:
    online: bool
    version_family: Optional[str] = None
    version_release: Optional[str] = None
    remote: Optional[Any] = None
    docker_info: Optional[Any] = None
    # why the node was considered offline (diagnostics only)
    reason: Optional[str] = None


OFFLINE = ProbeResult(online=False)


class NodeClient(Protocol):
    async def probe(self, address: str, port: int, api_key: str) -> ProbeResult: ...
