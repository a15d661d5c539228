# -*- coding: utf-8 -*-
"""
backend/tests/modules/payments/routes/test_payments_routes.py

Flujo completo por HTTP: checkout → webhook firmado → estado → reintento.
Usa la app real (SQLite en memoria creado en el lifespan).

Autor: Equipo Storefront
Fecha: 2026-10-08
"""

import pytest

from app.modules.payments.routes.dependencies import get_payment_store


async def _create_intent(client, order="ORD-5005", amount=50_000):
    response = await client.post(
        "/payments/intents",
        json={"order_reference": order, "amount": amount, "payment_method": "CARD"},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_checkout_then_approved_webhook(async_client, wompi_event_factory):
    intent = await _create_intent(async_client)
    assert intent["status"] == "PENDING"
    assert intent["amount_in_cents"] == 5_000_000

    event = wompi_event_factory(reference=intent["external_reference"], status="APPROVED")
    response = await async_client.post("/payments/webhooks/wompi", json=event)

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["status"] == "applied"
    assert body["oldStatus"] == "PENDING"
    assert body["newStatus"] == "COMPLETED"
    assert body["side_effects"]["TRIGGER_FULFILLMENT"] is True

    status_response = await async_client.get("/payments/orders/ORD-5005/status")
    assert status_response.status_code == 200
    status_body = status_response.json()
    assert status_body["status"] == "COMPLETED"
    assert status_body["is_final"] is True
    assert status_body["transaction_id"] == event["data"]["transaction"]["id"]

    # Reentrega del mismo evento
    again = await async_client.post("/payments/webhooks/wompi", json=event)
    assert again.json()["status"] == "no_op"


@pytest.mark.asyncio
async def test_declined_payment_can_be_retried(async_client, wompi_event_factory):
    intent = await _create_intent(async_client, order="ORD-6006")
    event = wompi_event_factory(reference=intent["external_reference"], status="DECLINED")
    assert (await async_client.post("/payments/webhooks/wompi", json=event)).status_code == 200

    advice = await async_client.get("/payments/orders/ORD-6006/retry")
    assert advice.status_code == 200
    assert advice.json()["can_retry"] is True
    assert advice.json()["remaining_attempts"] == 2

    retry = await async_client.post("/payments/orders/ORD-6006/retry", json={"payment_method": "PSE"})
    assert retry.status_code == 201, retry.text
    assert retry.json()["new_reference"].startswith("ORD-6006_retry_")

    status_body = (await async_client.get("/payments/orders/ORD-6006/status")).json()
    assert status_body["status"] == "PENDING"
    assert status_body["is_final"] is False

    # Con un pago en curso no se permite otro reintento
    blocked = await async_client.post("/payments/orders/ORD-6006/retry", json={"payment_method": "PSE"})
    assert blocked.status_code == 409


@pytest.mark.asyncio
async def test_duplicate_intent_reference_is_409(async_client):
    payload = {"order_reference": "ORD-7", "amount": 1000, "external_reference": "ORD-7_fixed"}
    assert (await async_client.post("/payments/intents", json=payload)).status_code == 201
    assert (await async_client.post("/payments/intents", json=payload)).status_code == 409


@pytest.mark.asyncio
async def test_unknown_order_is_404(async_client):
    assert (await async_client.get("/payments/orders/ORD-404/status")).status_code == 404
    assert (await async_client.get("/payments/orders/ORD-404/retry")).status_code == 404


@pytest.mark.asyncio
async def test_forged_webhook_is_401(async_client, wompi_event_factory):
    intent = await _create_intent(async_client, order="ORD-8008")
    event = wompi_event_factory(reference=intent["external_reference"], secret="not_the_secret")

    response = await async_client.post("/payments/webhooks/wompi", json=event)

    assert response.status_code == 401
    status_body = (await async_client.get("/payments/orders/ORD-8008/status")).json()
    assert status_body["status"] == "PENDING"


@pytest.mark.asyncio
async def test_generic_provider_route(async_client, wompi_event_factory):
    intent = await _create_intent(async_client, order="ORD-9009")
    event = wompi_event_factory(reference=intent["external_reference"], status="VOIDED")

    response = await async_client.post("/payments/webhooks/Wompi", json=event)
    assert response.json()["newStatus"] == "CANCELLED"

    unsupported = await async_client.post("/payments/webhooks/stripe", json=event)
    assert unsupported.status_code == 404


@pytest.mark.asyncio
async def test_webhook_uses_overridden_store(app, async_client, memory_store, make_record, wompi_event_factory):
    memory_store.add(make_record())
    app.dependency_overrides[get_payment_store] = lambda: memory_store

    response = await async_client.post("/payments/webhooks/wompi", json=wompi_event_factory(status="APPROVED"))

    assert response.status_code == 200
    assert memory_store.update_calls == 1


@pytest.mark.asyncio
async def test_health_and_metrics(async_client, wompi_event_factory):
    health = await async_client.get("/health")
    assert health.status_code == 200
    body = health.json()
    assert body["database"]["reachable"] is True
    assert body["payments"]["events_secret_configured"] is True

    await async_client.post("/payments/webhooks/wompi", content=b"not json")
    metrics = await async_client.get("/metrics")
    assert metrics.status_code == 200
    assert "payments_webhook_rejected_total" in metrics.text


@pytest.mark.asyncio
async def test_module_metrics_are_served_from_global_endpoint(async_client):
    await _create_intent(async_client, order="ORD-1111")

    metrics = await async_client.get("/metrics")

    assert "payments_created_total" in metrics.text
    assert "http_requests_total" in metrics.text
    assert (await async_client.get("/payments/metrics")).status_code == 404


@pytest.mark.asyncio
async def test_health_reports_metrics_exporter(async_client):
    body = (await async_client.get("/health")).json()
    assert body["metrics"]["status"] == "ok"
