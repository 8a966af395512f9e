# -*- coding: utf-8 -*-
"""
app/shared/config/logging_config.py

Logging del backend de la tienda VR.

- plain/pretty: una línea legible por evento (desarrollo)
- json: python-json-logger, un objeto por línea (producción)

Los eventos de pagos se escriben como `evento clave=valor` (tx=..., gateway=...),
así que en json conviene conservar `message` completo para poder filtrar por tx.
Los clientes HTTP de terceros quedan en WARNING para no filtrar cuerpos
de respuesta de las pasarelas en DEBUG.
"""

import logging.config
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

QUIET_LOGGERS = ("httpx", "httpcore", "stripe", "aiosqlite", "sqlalchemy.engine")


def build_logging_config(level: LogLevel = "INFO", fmt: Literal["plain", "pretty", "json"] = "plain") -> dict:
    formatter = "json" if fmt == "json" else "storefront"
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "storefront": {
                "format": "%(asctime)s %(levelname)-8s %(name)s | %(message)s",
            },
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
                "rename_fields": {"levelname": "level", "name": "logger"},
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "stream": "ext://sys.stdout",
            }
        },
        "loggers": {name: {"level": "WARNING"} for name in QUIET_LOGGERS},
        "root": {"handlers": ["console"], "level": level.upper()},
    }


def setup_logging(level: LogLevel = "INFO", fmt: Literal["plain", "pretty", "json"] = "plain") -> None:
    logging.config.dictConfig(build_logging_config(level, fmt))


__all__ = ["QUIET_LOGGERS", "build_logging_config", "setup_logging"]
# Fin del archivo app/shared/config/logging_config.py
