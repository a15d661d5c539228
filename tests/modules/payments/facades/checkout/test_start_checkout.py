# -*- coding: utf-8 -*-
"""
Tests de inicio de pago (checkout) contra el store en memoria.

Autor: Equipo Storefront
Fecha: 2026-10-07
"""

import hashlib
import re

import pytest

from app.modules.payments.enums import PaymentMethod, PaymentStatus
from app.modules.payments.facades.checkout import generate_external_reference, start_checkout
from app.modules.payments.schemas import PaymentIntentRequest


def test_generate_external_reference():
    assert re.fullmatch(r"ORD-7_\d{13}", generate_external_reference("ORD-7"))
    assert re.fullmatch(r"ORD-7_retry_\d{13}", generate_external_reference("ORD-7", suffix="retry"))


@pytest.mark.asyncio
async def test_start_checkout_creates_pending_payment(memory_store, payments_settings, integrity_secret):
    request = PaymentIntentRequest(
        order_reference="ORD-2002",
        amount=120_000,
        payment_method=PaymentMethod.PSE,
        customer_email="cliente@tienda.co",
    )

    response = await start_checkout(memory_store, request, payments_settings)

    assert response.status is PaymentStatus.PENDING
    assert response.order_reference == "ORD-2002"
    assert response.external_reference.startswith("ORD-2002_")
    assert response.amount_in_cents == 12_000_000
    assert response.public_key == "pub_test_storefront"
    expected = hashlib.sha256(
        f"{response.external_reference}12000000COP{integrity_secret}".encode()
    ).hexdigest()
    assert response.integrity_signature == expected

    stored = await memory_store.fetch_payment_by_external_reference(response.external_reference)
    assert stored.payment_method is PaymentMethod.PSE
    assert stored.failed_attempts == 0


@pytest.mark.asyncio
async def test_start_checkout_keeps_given_reference(memory_store, payments_settings):
    request = PaymentIntentRequest(order_reference="ORD-3", amount=1000, external_reference="ORD-3_custom")
    response = await start_checkout(memory_store, request, payments_settings)
    assert response.external_reference == "ORD-3_custom"


@pytest.mark.asyncio
async def test_signature_omitted_without_integrity_secret(memory_store, payments_settings):
    settings = payments_settings.model_copy(update={"wompi_integrity_secret": None})
    request = PaymentIntentRequest(order_reference="ORD-4", amount=1000)
    response = await start_checkout(memory_store, request, settings)
    assert response.integrity_signature is None
