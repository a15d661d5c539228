# -*- coding: utf-8 -*-
"""
backend/tests/modules/payments/facades/reconciliation/test_reconciliation_core.py

Tests de la máquina de estados de reconciliación.

Cubre:
- Mapeo total de estados Wompi → PaymentStatus
- Los seis escenarios de referencia (aprobado, duplicado, monto alterado,
  conflicto terminal, PENDING tardío, rechazo con reintento)
- Campos a persistir, entradas de bitácora y efectos por transición
- Intentos agotados: FAILED pasa a ser terminal

Autor: Equipo Storefront
Fecha: 2026-10-07
"""

from datetime import datetime, timezone
from itertools import permutations

import pytest

from app.modules.payments.enums import (
    AuditAction,
    PaymentMethod,
    PaymentStatus,
    SideEffectKind,
)
from app.modules.payments.facades.reconciliation import (
    OutcomeKind,
    map_wompi_status,
    reconcile,
)
from app.modules.payments.schemas import WompiEvent

NOW = datetime(2026, 10, 6, 15, 30, tzinfo=timezone.utc)


def _event(factory, **kwargs) -> WompiEvent:
    return WompiEvent.model_validate(factory(**kwargs))


class TestStatusMapping:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("APPROVED", PaymentStatus.COMPLETED),
            ("DECLINED", PaymentStatus.FAILED),
            ("ERROR", PaymentStatus.FAILED),
            ("VOIDED", PaymentStatus.CANCELLED),
            ("PENDING", PaymentStatus.PENDING),
            ("approved", PaymentStatus.COMPLETED),
            ("EXPIRED", PaymentStatus.PENDING),
            ("SOMETHING_NEW", PaymentStatus.PENDING),
            ("", PaymentStatus.PENDING),
            (None, PaymentStatus.PENDING),
        ],
    )
    def test_mapping_is_total(self, raw, expected):
        assert map_wompi_status(raw) is expected

    def test_unknown_status_is_logged(self, caplog):
        with caplog.at_level("WARNING"):
            map_wompi_status("CHARGEBACK")
        assert "wompi_unknown_status" in caplog.text


class TestScenarios:
    def test_approved_payment_completes_and_triggers_fulfillment(self, make_record, wompi_event_factory):
        stored = make_record()
        event = _event(wompi_event_factory, status="APPROVED", finalized_at="2026-10-06T15:20:00.000Z")

        outcome = reconcile(stored, event, now=NOW)

        assert outcome.kind is OutcomeKind.APPLIED
        assert outcome.writes
        assert outcome.old_status is PaymentStatus.PENDING
        assert outcome.new_status is PaymentStatus.COMPLETED
        assert outcome.fields_to_persist["status"] is PaymentStatus.COMPLETED
        assert outcome.fields_to_persist["provider_transaction_id"] == "1234-1760000000-49201"
        assert outcome.fields_to_persist["reference_number"] == stored.external_reference
        assert outcome.fields_to_persist["completed_at"] == datetime(2026, 10, 6, 15, 20, tzinfo=timezone.utc)
        assert [e.kind for e in outcome.side_effects] == [
            SideEffectKind.SEND_CONFIRMATION,
            SideEffectKind.TRIGGER_FULFILLMENT,
            SideEffectKind.RESERVE_INVENTORY,
        ]
        assert outcome.audit_entry.action is AuditAction.TRANSITION
        assert outcome.audit_entry.raw_status == "APPROVED"
        assert outcome.audit_entry.environment == "test"

    def test_duplicate_delivery_is_no_op(self, make_record, wompi_event_factory):
        stored = make_record(status=PaymentStatus.COMPLETED)
        outcome = reconcile(stored, _event(wompi_event_factory, status="APPROVED"), now=NOW)

        assert outcome.kind is OutcomeKind.NO_OP
        assert not outcome.writes
        assert outcome.fields_to_persist == {}
        assert outcome.side_effects == []
        assert outcome.audit_entry is None

    def test_tampered_amount_is_rejected(self, make_record, wompi_event_factory):
        stored = make_record()
        event = _event(wompi_event_factory, status="APPROVED", amount_in_cents=100)

        outcome = reconcile(stored, event, now=NOW)

        assert outcome.kind is OutcomeKind.AMOUNT_MISMATCH
        assert outcome.fields_to_persist == {}
        assert outcome.side_effects == []
        assert "5000000" in outcome.detail

    def test_currency_mismatch_is_rejected(self, make_record, wompi_event_factory):
        outcome = reconcile(make_record(), _event(wompi_event_factory, currency="USD"), now=NOW)
        assert outcome.kind is OutcomeKind.AMOUNT_MISMATCH

    def test_currency_compared_case_insensitively(self, make_record, wompi_event_factory):
        outcome = reconcile(make_record(), _event(wompi_event_factory, currency="cop"), now=NOW)
        assert outcome.kind is OutcomeKind.APPLIED

    def test_amount_checked_before_idempotency(self, make_record, wompi_event_factory):
        stored = make_record(status=PaymentStatus.COMPLETED)
        event = _event(wompi_event_factory, status="APPROVED", amount_in_cents=1)
        assert reconcile(stored, event, now=NOW).kind is OutcomeKind.AMOUNT_MISMATCH

    def test_terminal_record_is_never_reopened(self, make_record, wompi_event_factory):
        stored = make_record(status=PaymentStatus.COMPLETED)
        outcome = reconcile(stored, _event(wompi_event_factory, status="DECLINED"), now=NOW)

        assert outcome.kind is OutcomeKind.CONFLICTING_TERMINAL
        assert outcome.fields_to_persist == {}
        assert outcome.side_effects == []
        assert outcome.audit_entry.action is AuditAction.CONFLICTING_TERMINAL
        assert outcome.audit_entry.old_status is PaymentStatus.COMPLETED
        assert outcome.audit_entry.new_status is PaymentStatus.FAILED

    def test_late_pending_after_failure_is_stale(self, make_record, wompi_event_factory):
        stored = make_record(status=PaymentStatus.FAILED, failed_attempts=1)
        outcome = reconcile(stored, _event(wompi_event_factory, status="PENDING"), now=NOW)

        assert outcome.kind is OutcomeKind.STALE_EVENT
        assert outcome.fields_to_persist == {}
        assert outcome.audit_entry.action is AuditAction.STALE_EVENT

    def test_decline_records_failure_and_offers_retry(self, make_record, wompi_event_factory):
        stored = make_record(failed_attempts=0)
        event = _event(
            wompi_event_factory,
            status="DECLINED",
            status_message="Fondos insuficientes (insufficient_funds)",
        )

        outcome = reconcile(stored, event, retry_path_template="/checkout/retry/{reference}", now=NOW)

        assert outcome.kind is OutcomeKind.APPLIED
        fields = outcome.fields_to_persist
        assert fields["status"] is PaymentStatus.FAILED
        assert fields["error_code"] == "WOMPI_DECLINED"
        assert fields["error_message"] == "Fondos insuficientes (insufficient_funds)"
        assert fields["failed_attempts"] == 1
        assert fields["failed_at"] == NOW

        (effect,) = outcome.side_effects
        assert effect.kind is SideEffectKind.SEND_FAILURE_NOTICE
        notice = effect.failure
        assert notice.can_retry is True
        assert notice.remaining_attempts == 2
        assert notice.suggested_methods == [
            PaymentMethod.PSE,
            PaymentMethod.NEQUI,
            PaymentMethod.CASH_ON_DELIVERY,
        ]
        assert notice.recommended_method is PaymentMethod.PSE
        assert notice.new_payment_url == "/checkout/retry/ORD-1001"
        assert notice.suggested_action == "Verifica que tengas fondos suficientes o usa otra tarjeta"

    def test_failure_without_message_uses_default(self, make_record, wompi_event_factory):
        outcome = reconcile(make_record(), _event(wompi_event_factory, status="ERROR"), now=NOW)
        assert outcome.fields_to_persist["error_message"] == "Payment failed"
        assert outcome.fields_to_persist["error_code"] == "WOMPI_ERROR"

    def test_voided_cancels(self, make_record, wompi_event_factory):
        outcome = reconcile(make_record(), _event(wompi_event_factory, status="VOIDED"), now=NOW)

        assert outcome.new_status is PaymentStatus.CANCELLED
        assert outcome.fields_to_persist["cancelled_at"] == NOW
        assert [e.kind for e in outcome.side_effects] == [SideEffectKind.SEND_CANCELLATION_NOTICE]

    def test_missing_record_is_not_found(self, wompi_event_factory):
        outcome = reconcile(None, _event(wompi_event_factory), now=NOW)
        assert outcome.kind is OutcomeKind.NOT_FOUND
        assert outcome.detail == "ORD-1001_1760000000000"

    def test_event_without_transaction_raises(self, make_record, wompi_event_factory):
        event = _event(wompi_event_factory, event="nequi_token.updated", include_transaction=False)
        with pytest.raises(ValueError):
            reconcile(make_record(), event, now=NOW)


class TestAttemptLimits:
    def test_failed_with_attempts_left_can_still_complete(self, make_record, wompi_event_factory):
        stored = make_record(status=PaymentStatus.FAILED, failed_attempts=2)
        outcome = reconcile(stored, _event(wompi_event_factory, status="APPROVED"), max_attempts=3, now=NOW)
        assert outcome.kind is OutcomeKind.APPLIED
        assert outcome.new_status is PaymentStatus.COMPLETED

    def test_exhausted_failed_record_is_terminal(self, make_record, wompi_event_factory):
        stored = make_record(status=PaymentStatus.FAILED, failed_attempts=3)
        outcome = reconcile(stored, _event(wompi_event_factory, status="APPROVED"), max_attempts=3, now=NOW)
        assert outcome.kind is OutcomeKind.CONFLICTING_TERMINAL

    def test_last_allowed_failure_disables_retry(self, make_record, wompi_event_factory):
        stored = make_record(failed_attempts=2)
        outcome = reconcile(
            stored,
            _event(wompi_event_factory, status="DECLINED"),
            max_attempts=3,
            retry_path_template="/checkout/retry/{reference}",
            now=NOW,
        )

        notice = outcome.side_effects[0].failure
        assert outcome.fields_to_persist["failed_attempts"] == 3
        assert notice.can_retry is False
        assert notice.remaining_attempts == 0
        assert notice.new_payment_url is None


@pytest.mark.parametrize("raw_status", ["APPROVED", "DECLINED", "ERROR", "VOIDED", "PENDING", "WEIRD"])
@pytest.mark.parametrize("stored_status", list(PaymentStatus))
def test_reconcile_is_idempotent(make_record, wompi_event_factory, raw_status, stored_status):
    """Aplicar el mismo evento sobre el resultado de sí mismo no escribe."""
    stored = make_record(status=stored_status, failed_attempts=1 if stored_status is PaymentStatus.FAILED else 0)
    event = _event(wompi_event_factory, status=raw_status)

    first = reconcile(stored, event, now=NOW)
    after = stored.model_copy(update=first.fields_to_persist) if first.writes else stored
    second = reconcile(after, event, now=NOW)

    assert not second.writes
    assert second.side_effects == []


@pytest.mark.parametrize("sequence", list(permutations(["APPROVED", "DECLINED", "VOIDED", "PENDING"])))
@pytest.mark.parametrize("stored_status", [PaymentStatus.COMPLETED, PaymentStatus.CANCELLED])
def test_terminal_monotonicity(make_record, wompi_event_factory, sequence, stored_status):
    """Cualquier secuencia de eventos deja intacto un pago terminal."""
    record = make_record(status=stored_status)
    for raw_status in sequence:
        outcome = reconcile(record, _event(wompi_event_factory, status=raw_status), now=NOW)
        assert not outcome.writes
        assert outcome.side_effects == []
        record = record.model_copy(update=outcome.fields_to_persist)
        assert record.status is stored_status


def test_sequence_from_pending_stops_at_first_terminal(make_record, wompi_event_factory):
    record = make_record()
    for raw_status in ["PENDING", "APPROVED", "DECLINED", "VOIDED", "PENDING"]:
        outcome = reconcile(record, _event(wompi_event_factory, status=raw_status), now=NOW)
        if outcome.writes:
            record = record.model_copy(update=outcome.fields_to_persist)
    assert record.status is PaymentStatus.COMPLETED


def test_error_code_uses_given_prefix(make_record, wompi_event_factory):
    outcome = reconcile(make_record(), _event(wompi_event_factory, status="DECLINED"), error_prefix="PSP", now=NOW)
    assert outcome.fields_to_persist["error_code"] == "PSP_DECLINED"
