# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/dependencies.py

Dependencias de autenticación JWT para FastAPI.

Provee:
- validate_jwt_token: valida el token y extrae el caller id (claim 'sub')
- get_current_user_id: dependencia FastAPI con oauth2_scheme

El caller id es la única identidad que reciben las operaciones de pagos y
créditos; el aislamiento por dueño se aplica en los repositorios.

Autor: Equipo Billing
Fecha: 2025-12-13
"""

from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, status

from .security import TokenDecodeError, decode_access_token, oauth2_scheme

logger = logging.getLogger(__name__)


def validate_jwt_token(token: str) -> str:
    """
    Valida un JWT y extrae el user_id.

    Raises:
        HTTPException 401: Si el token es inválido o expirado.

    Returns:
        str: El user_id extraído del token JWT (claim 'sub').
    """
    try:
        payload = decode_access_token(token)
    except TokenDecodeError as e:
        logger.debug("jwt_rejected reason=%s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "invalid_token",
                "message": str(e),
            },
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    return str(payload["sub"]).strip()


async def get_current_user_id(
    token: str = Depends(oauth2_scheme),
) -> str:
    """
    Dependencia de autenticación para endpoints protegidos.

    Extrae y valida el JWT del header Authorization: Bearer <token>.
    """
    return validate_jwt_token(token)


__all__ = ["validate_jwt_token", "get_current_user_id"]
# Fin del archivo backend/app/modules/auth/dependencies.py
