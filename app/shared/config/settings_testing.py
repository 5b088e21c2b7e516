# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_testing.py

Overrides para entorno de PRUEBAS (test) usando Pydantic v2.
Busca ser determinista: logging moderado y base de datos aislada.
Los tests de integración sustituyen la sesión por SQLite (aiosqlite).

Autor: Ixchel Beristain
Fecha: 24/10/2025
"""

from pydantic import SecretStr
from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class EnvTestingSettings(BaseAppSettings):
    # --- Identidad de entorno ---
    python_env: str = "test"

    # --- Logging en test: menos ruido ---
    log_level: str = "WARNING"
    log_format: str = "pretty"

    # --- Base de datos: usar DB separada para pruebas ---
    db_name: str = "credits_test"

    # --- Auth: clave fija para firmar tokens en tests ---
    jwt_secret_key: SecretStr = SecretStr("test-secret-key-with-at-least-32-chars!!")

    model_config = SettingsConfigDict(
        env_file=".env.test",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["EnvTestingSettings"]
# Fin del archivo backend/app/shared/config/settings_testing.py
