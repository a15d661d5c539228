# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_prod.py

Overrides para entorno de PRODUCCIÓN usando Pydantic v2.
Lee solo variables de entorno / secret stores y emite logs en JSON.

Autor: Equipo Storefront
Fecha: 2026-10-02
"""

from typing import Literal

from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class ProdSettings(BaseAppSettings):
    python_env: Literal["development", "test", "production"] = "production"

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "pretty", "plain"] = "json"

    # En producción el esquema lo crean las migraciones, nunca el arranque
    db_create_tables: bool = False

    model_config = SettingsConfigDict(
        env_file=None,  # No leemos .env en producción
        extra="ignore",
    )

    def _security_checks(self) -> None:
        """Valida que producción no arranque con una base SQLite local."""
        if not self.db_url:
            raise ValueError("DB_URL es obligatorio en producción")


__all__ = ["ProdSettings"]

# Fin del archivo backend/app/shared/config/settings_prod.py
