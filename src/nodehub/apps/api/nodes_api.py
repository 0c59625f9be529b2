# src/nodehub/apps/api/nodes_api.py
from __future__ import annotations
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, ConfigDict, Field

from nodehub.apps.api.auth import require_token
from nodehub.domain import NodeRecord, NotFoundError, ValidationError
from nodehub.services.app_context import get_ctx

router = APIRouter(tags=["nodes"], dependencies=[Depends(require_token)])


# ---------- Models ----------
class NodeIn(BaseModel):
    # типы не навязываем: проверка и сообщения об ошибках: в validate_fields
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    tags: Optional[str] = None
    ram: Optional[Any] = None
    disk: Optional[Any] = None
    processor: Optional[str] = None
    address: Optional[str] = None
    port: Optional[Any] = None
    api_key: Optional[str] = Field(default=None, alias="apiKey")

    def as_fields(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class NodesResponse(BaseModel):
    ok: bool = True
    nodes: List[Dict[str, Any]]


class SummaryResponse(BaseModel):
    ok: bool = True
    total: int
    online: int
    offline: int


def _public(record: NodeRecord) -> Dict[str, Any]:
    return record.to_public(expose_api_key=get_ctx().settings.expose_api_keys)


def _not_found(e: NotFoundError) -> HTTPException:
    return HTTPException(status_code=404, detail=f"node not found: {e.node_id}")


def _invalid(e: ValidationError) -> HTTPException:
    return HTTPException(status_code=400, detail={"field": e.field, "message": e.reason})


# ---------- Endpoints ----------


@router.get("/nodes", response_model=NodesResponse)
async def nodes_list():
    """Все ноды в порядке регистрации, со свежим статусом."""
    nodes = await get_ctx().nodes.list_all()
    return NodesResponse(nodes=[_public(n) for n in nodes])


@router.get("/nodes/summary", response_model=SummaryResponse)
async def nodes_summary():
    s = await get_ctx().nodes.summary()
    return SummaryResponse(total=s.total, online=s.online, offline=s.offline)


@router.get("/nodes/{node_id}")
async def node_get(node_id: str):
    try:
        node = await get_ctx().nodes.get_one(node_id)
    except NotFoundError as e:
        raise _not_found(e)
    return {"ok": True, "node": _public(node)}


@router.post("/nodes", status_code=status.HTTP_201_CREATED)
async def node_create(body: NodeIn):
    try:
        node = await get_ctx().nodes.register(body.as_fields())
    except ValidationError as e:
        raise _invalid(e)
    return {"ok": True, "node": _public(node)}


@router.put("/nodes/{node_id}")
async def node_update(node_id: str, body: NodeIn):
    try:
        node = await get_ctx().nodes.update(node_id, body.as_fields())
    except NotFoundError as e:
        raise _not_found(e)
    except ValidationError as e:
        raise _invalid(e)
    return {"ok": True, "node": _public(node)}


@router.delete("/nodes/{node_id}", status_code=status.HTTP_204_NO_CONTENT)
async def node_delete(node_id: str):
    try:
        await get_ctx().nodes.remove(node_id)
    except NotFoundError as e:
        raise _not_found(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
