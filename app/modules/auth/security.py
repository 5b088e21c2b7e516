# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/security.py

Módulo de seguridad para Auth:
- Esquema OAuth2 (Bearer)
- Decodificación de JWT emitidos por el proveedor de identidad
- Creación de JWT (scripts locales y tests)

El servicio no emite sesiones; solo consume el claim 'sub'.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from app.shared.config import settings

ACCESS_TOKEN_EXPIRE_MINUTES = 60

# -----------------------------------------------------------------------------
# Esquema OAuth2 para extraer el token de Authorization: Bearer <token>
# -----------------------------------------------------------------------------
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


# -----------------------------------------------------------------------------
# Manejo de JWT
# -----------------------------------------------------------------------------
class TokenDecodeError(Exception):
    """Error al decodificar/validar un token JWT."""


def _signing_config() -> tuple[str, str]:
    # Leído en cada llamada: los tests fijan PYTHON_ENV antes del primer uso
    return settings.jwt_secret_key.get_secret_value(), settings.jwt_algorithm


def create_access_token(
    subject: Union[str, int],
    expires_delta: Optional[timedelta] = None,
    **extra: Any,
) -> str:
    """
    Crea un JWT con claim 'sub' y metadatos opcionales en `extra`.
    """
    secret_key, algorithm = _signing_config()
    now = datetime.now(tz=timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode: Dict[str, Any] = {"sub": str(subject), "iat": int(now.timestamp()), "exp": int(expire.timestamp())}
    if extra:
        to_encode.update(extra)
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decodifica y valida un JWT. Lanza TokenDecodeError si es inválido/expirado.
    """
    secret_key, algorithm = _signing_config()
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError as e:
        raise TokenDecodeError("Token inválido o expirado") from e

    sub = payload.get("sub")
    if sub is None or not str(sub).strip():
        raise TokenDecodeError("Token sin 'sub'")
    return payload


__all__ = [
    "oauth2_scheme",
    "TokenDecodeError",
    "create_access_token",
    "decode_access_token",
]
# Fin del archivo backend/app/modules/auth/security.py
