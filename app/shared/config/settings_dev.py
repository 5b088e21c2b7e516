# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_dev.py

Settings de desarrollo local: logs DEBUG legibles, tablas creadas al
arrancar y CORS abierto solo a los frontends locales.

Autor: Equipo Billing
Fecha: 2026-02-03
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class DevSettings(BaseAppSettings):
    python_env: str = "development"

    log_level: str = "DEBUG"
    log_format: str = "plain"

    # Sin migraciones en local
    db_create_all: bool = True

    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        validation_alias="CORS_ORIGINS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["DevSettings"]
# Fin del archivo backend/app/shared/config/settings_dev.py
