# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/dependencies.py

Dependencias FastAPI del módulo Payments.

Los colaboradores (store y dispatcher de efectos) se construyen una vez en
el lifespan y viven en `app.state`; las rutas los obtienen vía Depends, de
modo que los tests pueden reemplazarlos con `dependency_overrides`.

Autor: Equipo Storefront
Fecha: 2026-10-06
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings
from app.modules.payments.exceptions import WebhookConfigurationError
from app.modules.payments.services import (
    GraphQLPaymentStore,
    PaymentStore,
    SideEffectDispatcher,
    SqlPaymentStore,
    build_sink,
)

logger = logging.getLogger(__name__)


def build_payment_store(
    settings: PaymentsSettings,
    *,
    session_factory: async_sessionmaker[AsyncSession],
    graphql_client: Optional[httpx.AsyncClient] = None,
) -> PaymentStore:
    """
    Elige la implementación según `payment_store_backend`.

    Raises:
        WebhookConfigurationError: backend graphql sin cliente configurado
    """
    if settings.payment_store_backend == "graphql":
        if graphql_client is None:
            raise WebhookConfigurationError("graphql backend requires GRAPHQL_API_URL")
        logger.info("[payments] PaymentStore=graphql url=%s", settings.graphql_api_url)
        return GraphQLPaymentStore(graphql_client)
    logger.info("[payments] PaymentStore=sql")
    return SqlPaymentStore(session_factory)


def build_side_effect_dispatcher(
    settings: PaymentsSettings,
    http_client: Optional[httpx.AsyncClient] = None,
) -> SideEffectDispatcher:
    return SideEffectDispatcher(
        notifications=build_sink("notifications", settings.notifications_webhook_url, http_client),
        fulfillment=build_sink("fulfillment", settings.fulfillment_webhook_url, http_client),
        inventory=build_sink("inventory", settings.inventory_webhook_url, http_client),
        timeout_seconds=settings.side_effect_timeout_seconds,
    )


# ---------------------------------------------------------------------------
# Depends
# ---------------------------------------------------------------------------
def get_settings_dependency() -> PaymentsSettings:
    return get_payments_settings()


def get_payment_store(request: Request) -> PaymentStore:
    return request.app.state.payment_store


def get_side_effect_dispatcher(request: Request) -> SideEffectDispatcher:
    return request.app.state.side_effect_dispatcher


SettingsDep = Depends(get_settings_dependency)
StoreDep = Depends(get_payment_store)
DispatcherDep = Depends(get_side_effect_dispatcher)


__all__ = [
    "DispatcherDep",
    "SettingsDep",
    "StoreDep",
    "build_payment_store",
    "build_side_effect_dispatcher",
    "get_payment_store",
    "get_settings_dependency",
    "get_side_effect_dispatcher",
]

# Fin del archivo backend/app/modules/payments/routes/dependencies.py
