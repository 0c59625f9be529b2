# src/nodehub/apps/api/server.py
from contextlib import asynccontextmanager
import time

from fastapi import FastAPI

import nodehub
from nodehub.apps.bootstrap import bootstrap_app
from nodehub.apps.api import nodes_api
from nodehub.services.app_context import get_ctx


@asynccontextmanager
async def lifespan(app: FastAPI):
    # контекст мог быть собран заранее (CLI, тесты): тогда не пересобираем
    try:
        get_ctx()
    except RuntimeError:
        bootstrap_app()
    yield


app = FastAPI(title="NodeHub API", version=nodehub.__version__, lifespan=lifespan)
app.include_router(nodes_api.router, prefix="/api")


@app.get("/api/ping")
async def ping():
    return {"ok": True, "ts": time.time()}


# --- health endpoints (без авторизации; удобно для оркестраторов/проб) ---
@app.get("/health/live")
async def health_live():
    return {"ok": True}
