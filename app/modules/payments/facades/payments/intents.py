# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/payments/intents.py

Facades de consulta y reintento por orden del storefront.

- get_order_payment_status: estado del último pago de la orden (polling)
- get_retry_advice: si se puede reintentar y con qué métodos
- start_payment_retry: crea un nuevo registro PENDING para la orden

Contrato de polling:
- is_final=False → el storefront sigue consultando
- status_message nunca expone el vocabulario del proveedor

Autor: Equipo Storefront
Fecha: 2026-10-06
"""

from __future__ import annotations

import logging

from app.shared.config.settings_payments import PaymentsSettings
from app.modules.payments.enums import PaymentStatus
from app.modules.payments.exceptions import PaymentNotFoundError, RetryNotAllowedError
from app.modules.payments.facades.checkout.retry_advisor import build_retry_url, can_retry
from app.modules.payments.facades.checkout.start_checkout import (
    generate_external_reference,
    integrity_signature_for,
)
from app.modules.payments.facades.reconciliation.failure_messages import status_message_for
from app.modules.payments.metrics import observe_payment_created
from app.modules.payments.schemas import (
    NewPaymentData,
    OrderPaymentStatusResponse,
    PaymentRecord,
    RetryAdviceResponse,
    RetryCreatedResponse,
    RetryRequest,
)
from app.modules.payments.services.payment_store import PaymentStore

logger = logging.getLogger(__name__)


async def _latest_payment(store: PaymentStore, order_reference: str) -> PaymentRecord:
    record = await store.fetch_latest_by_order_reference(order_reference)
    if record is None:
        raise PaymentNotFoundError(order_reference)
    return record


async def get_order_payment_status(
    store: PaymentStore,
    order_reference: str,
) -> OrderPaymentStatusResponse:
    """
    Raises:
        PaymentNotFoundError: la orden no tiene pagos
    """
    record = await _latest_payment(store, order_reference)
    return OrderPaymentStatusResponse(
        order_reference=record.order_reference,
        status=record.status,
        status_message=status_message_for(record.status, record.error_code),
        transaction_id=record.provider_transaction_id,
        is_final=record.status != PaymentStatus.PENDING,
        last_updated=record.last_updated,
    )


def _advice_response(record: PaymentRecord, settings: PaymentsSettings) -> RetryAdviceResponse:
    advice = can_retry(
        record,
        max_attempts=settings.payment_max_attempts,
        available_methods=settings.payment_available_methods,
    )
    return RetryAdviceResponse(
        can_retry=advice.allowed,
        remaining_attempts=advice.remaining_attempts,
        suggested_methods=advice.suggested_methods,
        recommended_method=advice.recommended_method,
        new_payment_url=(
            build_retry_url(settings.checkout_retry_path, record.order_reference)
            if advice.allowed
            else None
        ),
    )


async def get_retry_advice(
    store: PaymentStore,
    order_reference: str,
    settings: PaymentsSettings,
) -> RetryAdviceResponse:
    record = await _latest_payment(store, order_reference)
    return _advice_response(record, settings)


async def start_payment_retry(
    store: PaymentStore,
    order_reference: str,
    request: RetryRequest,
    settings: PaymentsSettings,
) -> RetryCreatedResponse:
    """
    Crea `<orden>_retry_<epoch_ms>` en PENDING con el mismo monto y moneda,
    arrastrando failed_attempts para que el límite aplique a toda la orden.

    Raises:
        PaymentNotFoundError: la orden no tiene pagos
        RetryNotAllowedError: intentos agotados, pago ya aprobado o en curso
    """
    latest = await _latest_payment(store, order_reference)

    if latest.status == PaymentStatus.COMPLETED:
        raise RetryNotAllowedError(order_reference, "payment already completed")
    if latest.status == PaymentStatus.PENDING:
        raise RetryNotAllowedError(order_reference, "payment still in progress")

    advice = _advice_response(latest, settings)
    if not advice.can_retry:
        raise RetryNotAllowedError(order_reference, "max attempts reached")

    record = await store.create_payment(
        NewPaymentData(
            external_reference=generate_external_reference(order_reference, suffix="retry"),
            order_reference=order_reference,
            amount=latest.amount,
            currency=latest.currency,
            provider=latest.provider,
            payment_method=request.payment_method,
            customer_email=latest.customer_email,
            failed_attempts=latest.failed_attempts,
        )
    )
    observe_payment_created(record.provider.value, "retry")
    logger.info(
        "payment_retry_created order=%s previous=%s new=%s method=%s attempts=%s",
        order_reference,
        latest.external_reference,
        record.external_reference,
        record.payment_method.value,
        record.failed_attempts,
    )

    return RetryCreatedResponse(
        **advice.model_dump(),
        new_reference=record.external_reference,
        amount_in_cents=record.amount_in_cents,
        currency=record.currency,
        payment_method=record.payment_method,
        integrity_signature=integrity_signature_for(record, settings),
    )


__all__ = ["get_order_payment_status", "get_retry_advice", "start_payment_retry"]

# Fin del archivo backend/app/modules/payments/facades/payments/intents.py
