# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/checkout/start_checkout.py

Inicio de pago desde el checkout del storefront.

Flujo:
1. Resolver la referencia externa (la del request o una generada)
2. Crear el registro PENDING (con su entrada CREATED en la bitácora)
3. Firmar monto + referencia para el widget de Wompi

El monto viaja al proveedor en centavos: amount * 100.

Autor: Equipo Storefront
Fecha: 2026-10-05
"""

from __future__ import annotations

import logging
from typing import Optional

from app.shared.config.settings_payments import PaymentsSettings
from app.modules.payments.metrics import observe_payment_created
from app.modules.payments.schemas import (
    NewPaymentData,
    PaymentIntentRequest,
    PaymentIntentResponse,
    PaymentRecord,
)
from app.modules.payments.services.payment_store import PaymentStore
from app.modules.payments.services.webhooks.signature_verification import compute_integrity_signature
from app.modules.payments.utils.datetime_helpers import epoch_ms

logger = logging.getLogger(__name__)


def generate_external_reference(order_reference: str, *, suffix: Optional[str] = None) -> str:
    """`<orden>_<epoch_ms>` o `<orden>_<suffix>_<epoch_ms>`."""
    parts = [order_reference]
    if suffix:
        parts.append(suffix)
    parts.append(str(epoch_ms()))
    return "_".join(parts)


def integrity_signature_for(record: PaymentRecord, settings: PaymentsSettings) -> Optional[str]:
    """Firma de integridad del widget; None si no hay secreto configurado."""
    if settings.wompi_integrity_secret is None:
        return None
    return compute_integrity_signature(
        record.external_reference,
        record.amount_in_cents,
        record.currency,
        settings.wompi_integrity_secret.get_secret_value(),
    )


def build_intent_response(record: PaymentRecord, settings: PaymentsSettings) -> PaymentIntentResponse:
    return PaymentIntentResponse(
        payment_id=record.id,
        external_reference=record.external_reference,
        order_reference=record.order_reference,
        status=record.status,
        provider=record.provider,
        payment_method=record.payment_method,
        amount=record.amount,
        amount_in_cents=record.amount_in_cents,
        currency=record.currency,
        integrity_signature=integrity_signature_for(record, settings),
        public_key=settings.wompi_public_key,
        checkout_url=settings.wompi_checkout_url,
    )


async def start_checkout(
    store: PaymentStore,
    request: PaymentIntentRequest,
    settings: PaymentsSettings,
) -> PaymentIntentResponse:
    """
    Crea el pago PENDING de una orden.

    Raises:
        DuplicatePaymentReferenceError: la referencia ya existe
        PaymentStoreError: falla de persistencia
    """
    external_reference = request.external_reference or generate_external_reference(request.order_reference)
    record = await store.create_payment(
        NewPaymentData(
            external_reference=external_reference,
            order_reference=request.order_reference,
            amount=request.amount,
            currency=request.currency.value,
            provider=request.provider,
            payment_method=request.payment_method,
            customer_email=request.customer_email,
        )
    )
    observe_payment_created(record.provider.value, "checkout")
    logger.info(
        "checkout_started payment_id=%s reference=%s order=%s amount=%s %s",
        record.id,
        record.external_reference,
        record.order_reference,
        record.amount,
        record.currency,
    )
    return build_intent_response(record, settings)


__all__ = [
    "build_intent_response",
    "generate_external_reference",
    "integrity_signature_for",
    "start_checkout",
]

# Fin del archivo backend/app/modules/payments/facades/checkout/start_checkout.py
