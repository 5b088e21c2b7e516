# -*- coding: utf-8 -*-
"""
backend/app/shared/config/config_loader.py

Selección de settings según PYTHON_ENV.

- Normaliza el valor (comillas, mayúsculas y alias como "prod" o "testing")
- Instancia la subclase Dev/Test/Prod y ejecuta _security_checks()
- Cachea la instancia: get_settings.cache_clear() fuerza la recarga

Autor: Equipo Billing
Fecha: 2026-02-03
"""

import logging
import os
from functools import lru_cache

from .settings_base import BaseAppSettings
from .settings_dev import DevSettings
from .settings_prod import ProdSettings
from .settings_testing import EnvTestingSettings

logger = logging.getLogger(__name__)

_ENV_ALIASES = {
    "prod": "production",
    "production": "production",
    "test": "test",
    "testing": "test",
    "dev": "development",
    "development": "development",
}

_SETTINGS_BY_ENV: dict[str, type[BaseAppSettings]] = {
    "production": ProdSettings,
    "test": EnvTestingSettings,
    "development": DevSettings,
}


def resolve_env_name(raw: str | None) -> str:
    """Nombre canónico del entorno; valores desconocidos caen a development."""
    value = (raw or "").strip().strip('"').strip("'").lower()
    return _ENV_ALIASES.get(value, "development")


@lru_cache(maxsize=1)
def get_settings() -> BaseAppSettings:
    """
    Settings del entorno actual.

    Raises:
        ValueError: si las validaciones de seguridad fallan (p. ej. JWT débil en prod)
    """
    env = resolve_env_name(os.getenv("PYTHON_ENV"))
    settings = _SETTINGS_BY_ENV[env]()
    settings._security_checks()
    logger.debug("settings_loaded env=%s class=%s", env, type(settings).__name__)
    return settings


__all__ = ["get_settings", "resolve_env_name"]
# Fin del archivo backend/app/shared/config/config_loader.py
