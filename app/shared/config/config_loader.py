# -*- coding: utf-8 -*-
"""
app/shared/config/config_loader.py

get_settings(): settings del proceso según PYTHON_ENV, validado y cacheado.
Los tests limpian la caché con get_settings.cache_clear().
"""

import os
from functools import lru_cache

from .settings_base import BaseAppSettings
from .settings_dev import DevSettings
from .settings_prod import ProdSettings
from .settings_testing import EnvTestingSettings

_ENVIRONMENTS: dict[str, type[BaseAppSettings]] = {
    "production": ProdSettings,
    "test": EnvTestingSettings,
    "development": DevSettings,
}


@lru_cache(maxsize=1)
def get_settings() -> BaseAppSettings:
    """
    Raises:
        ValueError: PYTHON_ENV desconocido o validaciones de producción fallidas
    """
    env = os.getenv("PYTHON_ENV", "development").strip().lower()
    settings_cls = _ENVIRONMENTS.get(env)
    if settings_cls is None:
        raise ValueError(f"PYTHON_ENV desconocido: {env!r} (development, test o production)")

    settings = settings_cls()
    settings._security_checks()
    return settings


__all__ = ["get_settings"]
# Fin del archivo app/shared/config/config_loader.py
