# src/nodehub/apps/cli/app.py
from __future__ import annotations

from typing import Optional

from dotenv import load_dotenv, find_dotenv
import typer

# загружаем .env один раз (NODEHUB_BASE_DIR, NODEHUB_TOKEN, ...)
load_dotenv(find_dotenv(usecwd=True))

from nodehub.services.settings import Settings
from nodehub.apps.bootstrap import init_ctx, get_ctx, reload_ctx
from nodehub.apps.cli.commands import api, node

app = typer.Typer(help="NodeHub: реестр нод и проверка их состояния")

# -------- корневой callback (composition root) --------


@app.callback()
def main(
    base_dir: Optional[str] = typer.Option(None, "--base-dir", help="Базовый каталог (по умолчанию ~/.nodehub или из .env/ENV)"),
    profile: Optional[str] = typer.Option(None, "--profile", help="Профиль настроек"),
    reload: bool = typer.Option(False, "--reload", help="Пересобрать контекст с новыми настройками"),
):
    """
    Вызывается перед любыми подкомандами: строит (или пересобирает) контекст процесса.
    """
    if reload:
        reload_ctx(base_dir=base_dir, profile=profile)
        return
    settings = Settings.from_sources().with_overrides(base_dir=base_dir, profile=profile)
    init_ctx(settings)


@app.command("where")
def where():
    ctx = get_ctx()
    typer.echo(f"base_dir: {ctx.settings.base_dir}")
    typer.echo(f"db: {ctx.sql.path}")


app.add_typer(api.app, name="api")
app.add_typer(node.app, name="node")

if __name__ == "__main__":
    app()
