# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/__init__.py

Auth package public API. El servicio solo consume bearer tokens;
expone la dependencia que resuelve el caller id.
"""

from .dependencies import get_current_user_id, validate_jwt_token

__all__ = [
    "get_current_user_id",
    "validate_jwt_token",
]
# Fin del archivo backend/app/modules/auth/__init__.py
