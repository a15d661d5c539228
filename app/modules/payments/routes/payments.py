# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/payments.py

Rutas del storefront para pagos por orden.

Endpoints:
- POST /payments/intents
- GET  /payments/orders/{order_reference}/status
- GET  /payments/orders/{order_reference}/retry
- POST /payments/orders/{order_reference}/retry

Autor: Equipo Storefront
Fecha: 2026-10-06
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from app.shared.config.settings_payments import PaymentsSettings
from app.modules.payments.exceptions import (
    DuplicatePaymentReferenceError,
    PaymentNotFoundError,
    PaymentStoreError,
    RetryNotAllowedError,
)
from app.modules.payments.facades.checkout import start_checkout
from app.modules.payments.facades.payments import (
    get_order_payment_status,
    get_retry_advice,
    start_payment_retry,
)
from app.modules.payments.schemas import (
    OrderPaymentStatusResponse,
    PaymentIntentRequest,
    PaymentIntentResponse,
    RetryAdviceResponse,
    RetryCreatedResponse,
    RetryRequest,
)
from app.modules.payments.services import PaymentStore
from .dependencies import SettingsDep, StoreDep

router = APIRouter(
    prefix="",
    tags=["payments"],
)


@router.post(
    "/intents",
    response_model=PaymentIntentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_payment_intent_route(
    payload: PaymentIntentRequest,
    store: PaymentStore = StoreDep,
    settings: PaymentsSettings = SettingsDep,
) -> PaymentIntentResponse:
    """
    Crea el pago PENDING de una orden y devuelve lo necesario para abrir el
    widget de Wompi (referencia, monto en centavos, firma de integridad).
    """
    try:
        return await start_checkout(store, payload, settings)
    except DuplicatePaymentReferenceError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except PaymentStoreError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get(
    "/orders/{order_reference}/status",
    response_model=OrderPaymentStatusResponse,
    summary="Estado de pago para polling",
)
async def get_order_payment_status_route(
    order_reference: str,
    store: PaymentStore = StoreDep,
) -> OrderPaymentStatusResponse:
    try:
        return await get_order_payment_status(store, order_reference)
    except PaymentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get(
    "/orders/{order_reference}/retry",
    response_model=RetryAdviceResponse,
)
async def get_retry_advice_route(
    order_reference: str,
    store: PaymentStore = StoreDep,
    settings: PaymentsSettings = SettingsDep,
) -> RetryAdviceResponse:
    try:
        return await get_retry_advice(store, order_reference, settings)
    except PaymentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post(
    "/orders/{order_reference}/retry",
    response_model=RetryCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def start_payment_retry_route(
    order_reference: str,
    payload: RetryRequest,
    store: PaymentStore = StoreDep,
    settings: PaymentsSettings = SettingsDep,
) -> RetryCreatedResponse:
    try:
        return await start_payment_retry(store, order_reference, payload, settings)
    except PaymentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RetryNotAllowedError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except PaymentStoreError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


# Fin del archivo backend/app/modules/payments/routes/payments.py
