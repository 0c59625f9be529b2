# src/nodehub/apps/api/auth.py
from __future__ import annotations
import secrets
from typing import Optional

from fastapi import Header, HTTPException, status

from nodehub.services.app_context import get_ctx


async def require_token(x_nodehub_token: Optional[str] = Header(default=None)) -> None:
    """Проверка X-NodeHub-Token. Авторизация (admin-only): на стороне вызывающего слоя."""
    expected = get_ctx().settings.api_token
    if not x_nodehub_token or not secrets.compare_digest(x_nodehub_token, expected):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid token")
