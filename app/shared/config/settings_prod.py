# -*- coding: utf-8 -*-
"""
app/shared/config/settings_prod.py

Producción: solo variables de entorno, logs JSON y almacén SQL compartido.

Transacciones y perfiles deben sobrevivir a reinicios y ser visibles
desde todos los workers (los webhooks pueden caer en otro proceso que el
que abrió el checkout), por eso SQLite local y DEBUG quedan prohibidos.
"""

from typing import Literal

from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class ProdSettings(BaseAppSettings):
    python_env: Literal["development", "test", "production"] = "production"

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "pretty", "plain"] = "json"

    document_store_backend: Literal["memory", "sql"] = "sql"

    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    def _security_checks(self) -> None:
        super()._security_checks()
        if self.debug:
            raise ValueError("DEBUG no puede activarse en producción")
        if self.database_url.startswith("sqlite"):
            raise ValueError("DB_URL debe apuntar a un servidor SQL compartido en producción")


__all__ = ["ProdSettings"]
# Fin del archivo app/shared/config/settings_prod.py
