# src/nodehub/apps/cli/commands/node.py
from __future__ import annotations
import asyncio
import json
from typing import Any, Dict, NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from nodehub.apps.bootstrap import get_ctx
from nodehub.domain import NodeRecord, NodeStatus, NotFoundError, ValidationError

app = typer.Typer(help="Управление нодами")

_STATUS_STYLE = {
    NodeStatus.ONLINE: "green",
    NodeStatus.OFFLINE: "red",
    NodeStatus.UNKNOWN: "yellow",
}


def _print_node(node: NodeRecord, show_keys: bool) -> None:
    typer.echo(json.dumps(node.to_public(expose_api_key=show_keys), ensure_ascii=False, indent=2))


def _fail(e: Exception) -> NoReturn:
    typer.echo(f"Error: {e}", err=True)
    raise typer.Exit(1)


def _fields(**kw: Any) -> Dict[str, Any]:
    # в update опущенные опции берём из текущей записи
    return {k: v for k, v in kw.items() if v is not None}


@app.command("list")
def cmd_list():
    """Все ноды со свежим статусом."""
    nodes = asyncio.run(get_ctx().nodes.list_all())
    if not nodes:
        typer.echo("No nodes registered")
        return
    table = Table("id", "name", "address", "status", "version")
    for n in nodes:
        version = " ".join(v for v in (n.version_family, n.version_release) if v) or "-"
        table.add_row(
            n.id,
            n.name,
            f"{n.address}:{n.port}",
            f"[{_STATUS_STYLE[n.status]}]{n.status.value}[/]",
            version,
        )
    Console().print(table)


@app.command("show")
def cmd_show(node_id: str, show_keys: bool = typer.Option(False, "--show-keys", help="Показать apiKey")):
    try:
        node = asyncio.run(get_ctx().nodes.get_one(node_id))
    except NotFoundError as e:
        _fail(e)
    _print_node(node, show_keys)


@app.command("add")
def cmd_add(
    name: str = typer.Option(..., "--name"),
    tags: str = typer.Option(..., "--tags"),
    ram: int = typer.Option(..., "--ram", help="RAM, MB"),
    disk: int = typer.Option(..., "--disk", help="Disk, MB"),
    processor: str = typer.Option(..., "--processor"),
    address: str = typer.Option(..., "--address"),
    port: int = typer.Option(..., "--port"),
    api_key: str = typer.Option(..., "--api-key"),
    show_keys: bool = typer.Option(False, "--show-keys"),
):
    """Зарегистрировать ноду (сразу выполняется probe)."""
    data = dict(name=name, tags=tags, ram=ram, disk=disk, processor=processor, address=address, port=port, apiKey=api_key)
    try:
        node = asyncio.run(get_ctx().nodes.register(data))
    except ValidationError as e:
        _fail(e)
    _print_node(node, show_keys)


@app.command("update")
def cmd_update(
    node_id: str,
    name: Optional[str] = typer.Option(None, "--name"),
    tags: Optional[str] = typer.Option(None, "--tags"),
    ram: Optional[int] = typer.Option(None, "--ram"),
    disk: Optional[int] = typer.Option(None, "--disk"),
    processor: Optional[str] = typer.Option(None, "--processor"),
    address: Optional[str] = typer.Option(None, "--address"),
    port: Optional[int] = typer.Option(None, "--port"),
    api_key: Optional[str] = typer.Option(None, "--api-key"),
    show_keys: bool = typer.Option(False, "--show-keys"),
):
    """Изменить поля ноды; статус пересчитывается новым probe."""
    ctx = get_ctx()
    current = ctx.store.get(node_id)
    if current is None or node_id not in ctx.store.list_ids():
        _fail(NotFoundError(node_id))
    data = current.to_dict()
    data.update(_fields(name=name, tags=tags, ram=ram, disk=disk, processor=processor, address=address, port=port, apiKey=api_key))
    try:
        node = asyncio.run(ctx.nodes.update(node_id, data))
    except (NotFoundError, ValidationError) as e:
        _fail(e)
    _print_node(node, show_keys)


@app.command("rm")
def cmd_rm(node_id: str):
    try:
        asyncio.run(get_ctx().nodes.remove(node_id))
    except NotFoundError as e:
        _fail(e)
    typer.echo(f"Removed: {node_id}")


@app.command("summary")
def cmd_summary():
    s = asyncio.run(get_ctx().nodes.summary())
    typer.echo(f"total={s.total} online={s.online} offline={s.offline}")
