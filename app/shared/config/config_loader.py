# -*- coding: utf-8 -*-
"""
backend/app/shared/config/config_loader.py

Selección de settings según PYTHON_ENV (development / test / production).

La instancia se cachea; los tests que cambian variables de entorno llaman a
`get_settings.cache_clear()`.

Autor: Equipo Storefront
Fecha: 2026-10-02
"""

import os
from functools import lru_cache
from typing import Dict, Type

from .settings_base import BaseAppSettings
from .settings_dev import DevSettings
from .settings_prod import ProdSettings
from .settings_testing import EnvTestingSettings

_SETTINGS_BY_ENV: Dict[str, Type[BaseAppSettings]] = {
    "production": ProdSettings,
    "prod": ProdSettings,
    "test": EnvTestingSettings,
    "testing": EnvTestingSettings,
}


@lru_cache(maxsize=1)
def get_settings() -> BaseAppSettings:
    """
    Raises:
        ValueError: producción sin DB_URL.
    """
    env = os.getenv("PYTHON_ENV", "development").strip().lower()
    settings = _SETTINGS_BY_ENV.get(env, DevSettings)()

    security_checks = getattr(settings, "_security_checks", None)
    if security_checks is not None:
        security_checks()
    return settings


__all__ = ["get_settings"]

# Fin del archivo backend/app/shared/config/config_loader.py
