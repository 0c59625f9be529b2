# src/nodehub/apps/cli/commands/api.py
import os

import typer
import uvicorn

app = typer.Typer(help="HTTP API реестра нод")


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", "--host"),
    port: int = typer.Option(8787, "--port"),
    reload: bool = typer.Option(False, "--reload", help="Для разработки"),
    token: str = typer.Option(None, "--token", help="X-NodeHub-Token; иначе возьмем из NODEHUB_TOKEN"),
):
    """Запустить HTTP API (FastAPI)."""
    if token:
        os.environ["NODEHUB_TOKEN"] = token
    uvicorn.run("nodehub.apps.api.server:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
