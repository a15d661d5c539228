# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_payments.py

Configuración de pagos y webhooks del storefront.

Descripción:
    Centraliza secretos de eventos por entorno (test/prod), ventanas de
    tolerancia, lista de eventos procesables, política de reintentos,
    timeouts y colaboradores externos (persistencia GraphQL,
    notificaciones, fulfillment, inventario).

Autor: Equipo Storefront
Fecha: 2026-10-02
"""

from __future__ import annotations

import os
from typing import List, Literal, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaymentsSettings(BaseSettings):
    """Configuración del subsistema de webhooks y reconciliación."""

    # =========================================================================
    # WOMPI
    # =========================================================================

    wompi_events_secret_test: Optional[SecretStr] = Field(
        default=None,
        description="Secreto de eventos de Wompi para el entorno de pruebas",
    )

    wompi_events_secret_prod: Optional[SecretStr] = Field(
        default=None,
        description="Secreto de eventos de Wompi para producción",
    )

    wompi_environment: Optional[Literal["test", "prod"]] = Field(
        default=None,
        validate_default=True,
        description="Entorno Wompi esperado; si no se define se deriva de PYTHON_ENV",
    )

    wompi_integrity_secret: Optional[SecretStr] = Field(
        default=None,
        description="Secreto de integridad para firmar el widget de checkout",
    )

    wompi_public_key: Optional[str] = Field(
        default=None,
        description="Llave pública del comercio (pub_test_... o pub_prod_...)",
    )

    wompi_checkout_url: str = Field(
        default="https://checkout.wompi.co/p/",
        description="URL del checkout web de Wompi",
    )

    @field_validator("wompi_environment", mode="before")
    @classmethod
    def _derive_wompi_environment(cls, v: Optional[str]) -> Optional[str]:
        """Fallback: production -> prod, cualquier otro entorno -> test."""
        if v:
            return v.lower()
        python_env = os.getenv("PYTHON_ENV", "development").lower()
        return "prod" if python_env == "production" else "test"

    # =========================================================================
    # VALIDACIÓN DE EVENTOS
    # =========================================================================

    webhook_event_max_age_minutes: int = Field(
        default=60,
        description="Antigüedad máxima aceptada de un evento (ventana anti-replay)",
    )

    webhook_validate_age: bool = Field(default=True)
    webhook_validate_environment: bool = Field(default=True)
    webhook_validate_header_checksum: bool = Field(
        default=True,
        description="Exige que x-event-checksum coincida con el checksum del body si viene",
    )

    webhook_allowed_events: List[str] = Field(
        default_factory=lambda: [
            "transaction.updated",
            "nequi_token.updated",
            "bancolombia_transfer_token.updated",
        ],
        description="Tipos de evento que pasan a reconciliación",
    )

    # =========================================================================
    # REINTENTOS Y MÉTODOS
    # =========================================================================

    payment_max_attempts: int = Field(
        default=3,
        description="Intentos fallidos permitidos por orden antes de bloquear reintentos",
    )

    payment_available_methods: List[str] = Field(
        default_factory=lambda: ["CARD", "PSE", "NEQUI", "CASH_ON_DELIVERY"],
        description="Métodos de pago ofrecidos por la tienda",
    )

    checkout_retry_path: str = Field(
        default="/checkout/retry/{reference}",
        description="Ruta del storefront para reintentar el pago de una orden",
    )

    # =========================================================================
    # TIMEOUTS
    # =========================================================================

    webhook_processing_timeout_seconds: float = Field(
        default=5.0,
        description="Tiempo máximo del núcleo (lectura + reconciliación + escritura)",
    )

    side_effect_timeout_seconds: float = Field(
        default=2.0,
        description="Tiempo máximo por notificación / fulfillment / inventario",
    )

    # =========================================================================
    # COLABORADORES
    # =========================================================================

    payment_store_backend: Literal["sql", "graphql"] = Field(
        default="sql",
        description="Backend de persistencia de pagos",
    )

    graphql_api_url: Optional[str] = Field(default=None)
    graphql_api_token: Optional[SecretStr] = Field(default=None)
    graphql_timeout_seconds: float = Field(default=3.0)

    notifications_webhook_url: Optional[str] = Field(default=None)
    fulfillment_webhook_url: Optional[str] = Field(default=None)
    inventory_webhook_url: Optional[str] = Field(default=None)

    # =========================================================================
    # CONFIGURACIÓN DE PYDANTIC
    # =========================================================================

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def events_secret(self) -> Optional[str]:
        """Secreto de eventos correspondiente al entorno Wompi esperado."""
        secret = (
            self.wompi_events_secret_prod
            if self.wompi_environment == "prod"
            else self.wompi_events_secret_test
        )
        return secret.get_secret_value() if secret else None


# Singleton global
_payments_settings: Optional[PaymentsSettings] = None


def get_payments_settings() -> PaymentsSettings:
    """
    Obtiene la instancia global de configuración de pagos.

    Returns:
        PaymentsSettings: Configuración de pagos
    """
    global _payments_settings
    if _payments_settings is None:
        _payments_settings = PaymentsSettings()
    return _payments_settings


def reset_payments_settings() -> None:
    """Descarta el singleton (útil para tests que cambian variables de entorno)."""
    global _payments_settings
    _payments_settings = None


__all__ = [
    "PaymentsSettings",
    "get_payments_settings",
    "reset_payments_settings",
]

# Fin del archivo backend/app/shared/config/settings_payments.py
