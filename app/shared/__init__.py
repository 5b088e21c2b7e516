# -*- coding: utf-8 -*-
"""
backend/app/shared/__init__.py

Infraestructura compartida: configuración, base de datos y middlewares.
No importa submódulos en import-time; usar imports explícitos:
    from app.shared.config import get_settings
    from app.shared.database import Base, get_async_session
"""

__all__: list[str] = []

# Fin del archivo backend/app/shared/__init__.py
