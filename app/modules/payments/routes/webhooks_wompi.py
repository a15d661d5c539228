# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/webhooks_wompi.py

Webhook endpoint para Wompi.

Endpoints:
- POST /payments/webhooks/wompi
- POST /payments/webhooks/{provider}  (404 si el proveedor no está registrado)

El status HTTP lo decide WompiWebhookHandler; la ruta solo lee el body
crudo (el checksum se calcula sobre el JSON tal cual llegó) y traduce el
resultado a JSONResponse.

Autor: Equipo Storefront
Fecha: 2026-10-06
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import JSONResponse

from app.shared.config.settings_payments import PaymentsSettings
from app.modules.payments.enums import PaymentProvider
from app.modules.payments.exceptions import UnsupportedProviderError
from app.modules.payments.facades.payments import WompiWebhookHandler
from app.modules.payments.facades.webhooks.providers import get_provider_strategy
from app.modules.payments.services import PaymentStore, SideEffectDispatcher
from .dependencies import DispatcherDep, SettingsDep, StoreDep

router = APIRouter(
    prefix="/webhooks",
    tags=["payments:webhooks"],
)


async def _process(
    provider: str,
    request: Request,
    store: PaymentStore,
    dispatcher: SideEffectDispatcher,
    settings: PaymentsSettings,
) -> JSONResponse:
    try:
        strategy = get_provider_strategy(provider)
    except UnsupportedProviderError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    handler = WompiWebhookHandler(
        store=store,
        dispatcher=dispatcher,
        settings=settings,
        strategy=strategy,
    )
    raw_body = await request.body()
    result = await handler.handle(raw_body, request.headers)
    return JSONResponse(status_code=result.http_status, content=result.body)


@router.post("/wompi", status_code=status.HTTP_200_OK)
async def wompi_webhook(
    request: Request,
    store: PaymentStore = StoreDep,
    dispatcher: SideEffectDispatcher = DispatcherDep,
    settings: PaymentsSettings = SettingsDep,
) -> JSONResponse:
    """
    Webhook de Wompi (transaction.updated, nequi_token.updated, ...).

    Wompi reintenta mientras no reciba 200.
    """
    return await _process(PaymentProvider.WOMPI.value, request, store, dispatcher, settings)


@router.post("/{provider}", status_code=status.HTTP_200_OK)
async def provider_webhook(
    provider: str,
    request: Request,
    store: PaymentStore = StoreDep,
    dispatcher: SideEffectDispatcher = DispatcherDep,
    settings: PaymentsSettings = SettingsDep,
) -> JSONResponse:
    return await _process(provider, request, store, dispatcher, settings)


# Fin del archivo backend/app/modules/payments/routes/webhooks_wompi.py
