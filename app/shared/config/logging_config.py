# -*- coding: utf-8 -*-
"""
backend/app/shared/config/logging_config.py

Logging del backend de pagos: texto plano en desarrollo, JSON en producción
(python-json-logger).

En JSON, los campos pasados vía `extra=` (transaction_id, reference,
old_status, new_status, security_event, alert...) quedan como claves del
documento, lo que permite reconstruir la traza de un webhook sin
reprocesarlo. Los loggers de pagos siempre llevan `service`.

Autor: Equipo Storefront
Fecha: 2026-10-02
"""

import logging
import logging.config
from typing import Literal

LogFormat = Literal["plain", "pretty", "json"]

SERVICE_NAME = "storefront-payments"

# Ruido de librerías que solo interesa con DEBUG explícito
_QUIET_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore", "aiosqlite")


class ServiceFieldFilter(logging.Filter):
    """Agrega `service` a cada registro para filtrar en el agregador de logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "service"):
            record.service = SERVICE_NAME
        return True


def _formatters(fmt: LogFormat) -> dict:
    if fmt == "json":
        return {
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(service)s %(message)s",
                "rename_fields": {"levelname": "level", "asctime": "ts"},
            }
        }
    pattern = "%(asctime)s %(levelname)s [%(name)s]: %(message)s"
    if fmt == "pretty":
        pattern = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    return {"text": {"format": pattern, "datefmt": "%Y-%m-%d %H:%M:%S"}}


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO",
    fmt: LogFormat = "plain",
) -> None:
    """
    Configura el logging raíz de la aplicación.

    Ejemplos:
        >>> setup_logging("INFO", "plain")
        >>> setup_logging("WARNING", "json")
    """
    formatter = "json" if fmt == "json" else "text"
    quiet_level = "DEBUG" if level.upper() == "DEBUG" else "WARNING"

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"service": {"()": ServiceFieldFilter}},
        "formatters": _formatters(fmt),
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "filters": ["service"],
                "stream": "ext://sys.stdout",
            }
        },
        "loggers": {name: {"level": quiet_level} for name in _QUIET_LOGGERS},
        "root": {"handlers": ["console"], "level": level.upper()},
    })


__all__ = ["ServiceFieldFilter", "setup_logging"]

# Fin del archivo backend/app/shared/config/logging_config.py
