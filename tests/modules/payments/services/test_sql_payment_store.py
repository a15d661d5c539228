# -*- coding: utf-8 -*-
"""
Tests del SqlPaymentStore sobre SQLite en memoria (aiosqlite).

Autor: Equipo Storefront
Fecha: 2026-10-07
"""

from datetime import datetime, timezone

import pytest

from app.modules.payments.enums import AuditAction, PaymentMethod, PaymentStatus
from app.modules.payments.exceptions import (
    DuplicatePaymentReferenceError,
    PaymentNotFoundError,
    StalePaymentError,
)
from app.modules.payments.schemas import AuditEntryData, NewPaymentData
from app.modules.payments.services import PaymentStore

NOW = datetime(2026, 10, 6, 15, 30, tzinfo=timezone.utc)


def _new_payment(reference="ORD-1001_1760000000000", order="ORD-1001", **overrides) -> NewPaymentData:
    values = dict(
        external_reference=reference,
        order_reference=order,
        amount=50_000,
        currency="COP",
        payment_method=PaymentMethod.CARD,
        customer_email="cliente@tienda.co",
    )
    values.update(overrides)
    return NewPaymentData(**values)


def _transition(old, new) -> AuditEntryData:
    return AuditEntryData(
        action=AuditAction.TRANSITION,
        old_status=old,
        new_status=new,
        provider_event="transaction.updated",
        transaction_id="tx-1",
        raw_status="APPROVED",
        environment="test",
        processed_at=NOW,
    )


def test_implements_protocol(sql_store):
    assert isinstance(sql_store, PaymentStore)


@pytest.mark.asyncio
async def test_create_and_fetch(sql_store):
    created = await sql_store.create_payment(_new_payment())

    fetched = await sql_store.fetch_payment_by_external_reference("ORD-1001_1760000000000")

    assert fetched.id == created.id
    assert fetched.status is PaymentStatus.PENDING
    assert fetched.amount_in_cents == 5_000_000
    assert fetched.failed_attempts == 0
    assert fetched.created_at is not None

    entries = await sql_store.list_audit_entries(created.id)
    assert [e.action for e in entries] == [AuditAction.CREATED]
    assert entries[0].new_status is PaymentStatus.PENDING


@pytest.mark.asyncio
async def test_fetch_missing_returns_none(sql_store):
    assert await sql_store.fetch_payment_by_external_reference("nope") is None
    assert await sql_store.fetch_latest_by_order_reference("nope") is None


@pytest.mark.asyncio
async def test_duplicate_reference(sql_store):
    await sql_store.create_payment(_new_payment())
    with pytest.raises(DuplicatePaymentReferenceError):
        await sql_store.create_payment(_new_payment())


@pytest.mark.asyncio
async def test_conditional_update_with_audit(sql_store):
    created = await sql_store.create_payment(_new_payment())

    updated = await sql_store.update_payment(
        created.id,
        {
            "status": PaymentStatus.COMPLETED,
            "provider_transaction_id": "tx-1",
            "reference_number": created.external_reference,
            "completed_at": NOW,
        },
        expected_status=PaymentStatus.PENDING,
        audit_entry=_transition(PaymentStatus.PENDING, PaymentStatus.COMPLETED),
    )

    assert updated.status is PaymentStatus.COMPLETED
    assert updated.provider_transaction_id == "tx-1"
    entries = await sql_store.list_audit_entries(created.id)
    assert [e.action for e in entries] == [AuditAction.CREATED, AuditAction.TRANSITION]


@pytest.mark.asyncio
async def test_stale_expected_status_raises_and_writes_nothing(sql_store):
    created = await sql_store.create_payment(_new_payment())

    with pytest.raises(StalePaymentError):
        await sql_store.update_payment(
            created.id,
            {"status": PaymentStatus.FAILED},
            expected_status=PaymentStatus.COMPLETED,
            audit_entry=_transition(PaymentStatus.COMPLETED, PaymentStatus.FAILED),
        )

    current = await sql_store.fetch_payment_by_external_reference(created.external_reference)
    assert current.status is PaymentStatus.PENDING
    assert len(await sql_store.list_audit_entries(created.id)) == 1


@pytest.mark.asyncio
async def test_update_unknown_id(sql_store):
    with pytest.raises(PaymentNotFoundError):
        await sql_store.update_payment(999, {"status": PaymentStatus.FAILED})


@pytest.mark.asyncio
async def test_immutable_fields_are_rejected(sql_store):
    created = await sql_store.create_payment(_new_payment())
    with pytest.raises(ValueError):
        await sql_store.update_payment(created.id, {"amount": 1})


@pytest.mark.asyncio
async def test_latest_by_order_and_append_audit(sql_store):
    first = await sql_store.create_payment(_new_payment())
    second = await sql_store.create_payment(
        _new_payment(reference="ORD-1001_retry_1760000000001", failed_attempts=1)
    )

    latest = await sql_store.fetch_latest_by_order_reference("ORD-1001")
    assert latest.id == second.id
    assert latest.failed_attempts == 1

    await sql_store.append_audit_entry(
        first.id,
        AuditEntryData(action=AuditAction.STALE_EVENT, old_status=PaymentStatus.PENDING, processed_at=NOW),
    )
    entries = await sql_store.list_audit_entries(first.id)
    assert [e.action for e in entries] == [AuditAction.CREATED, AuditAction.STALE_EVENT]
