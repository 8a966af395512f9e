# -*- coding: utf-8 -*-
"""
app/modules/auth/dependencies.py

Dependencias de autenticación JWT para FastAPI.

Provee:
- CurrentUser: identidad extraída del token
- user_from_token: validación (única fuente de verdad; también la usa el WebSocket)
- get_current_user / require_admin: dependencias para endpoints protegidos
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, status

from .security import oauth2_scheme, decode_access_token, TokenDecodeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    user_id: str
    email: Optional[str] = None
    is_admin: bool = False


def user_from_token(token: str) -> CurrentUser:
    """
    Valida un JWT y construye la identidad.

    Raises:
        TokenDecodeError: token inválido, expirado o sin 'sub'
    """
    payload = decode_access_token(token)
    return CurrentUser(
        user_id=str(payload["sub"]),
        email=payload.get("email"),
        is_admin=bool(payload.get("admin", False)),
    )


async def get_current_user(token: str = Depends(oauth2_scheme)) -> CurrentUser:
    try:
        return user_from_token(token)
    except TokenDecodeError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "invalid_token", "message": str(e)},
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


async def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_admin:
        logger.warning("admin_required user=%s", user.user_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "forbidden", "message": "Admin privileges required"},
        )
    return user


__all__ = ["CurrentUser", "get_current_user", "require_admin", "user_from_token"]
