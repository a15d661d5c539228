# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/reconciliation/core.py

Máquina de estados de pagos: decide, a partir del registro guardado y un
evento verificado, qué persistir, qué auditar y qué efectos disparar.

Función pura (sin I/O). El adaptador de webhooks se encarga de leer,
escribir con actualización condicional y ejecutar los efectos.

Orden de decisión:
    1. NOT_FOUND             registro inexistente
    2. AMOUNT_MISMATCH       monto o moneda distintos (anomalía de seguridad)
    3. NO_OP                 el estado mapeado ya es el guardado (idempotencia)
    4. CONFLICTING_TERMINAL  el registro es terminal y el evento lo contradice
    5. STALE_EVENT           PENDING tardío tras una decisión no terminal
    6. APPLIED               transición

Terminal: COMPLETED, CANCELLED, o FAILED con los intentos agotados.

Autor: Equipo Storefront
Fecha: 2026-10-05
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any, Callable, Dict, List, Optional, Sequence

from app.modules.payments.enums import (
    AuditAction,
    PaymentMethod,
    PaymentStatus,
    SideEffectKind,
    is_terminal_status,
)
from app.modules.payments.facades.checkout.retry_advisor import (
    DEFAULT_AVAILABLE_METHODS,
    build_retry_url,
    can_retry,
)
from app.modules.payments.schemas import (
    AuditEntryData,
    FailureNotice,
    PaymentRecord,
    SideEffect,
    WompiEvent,
    WompiTransaction,
)
from app.modules.payments.utils.datetime_helpers import parse_optional_iso8601, utcnow
from .failure_messages import humanize_failure
from .rules import map_wompi_status

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_MESSAGE = "Payment failed"


class OutcomeKind(StrEnum):
    NOT_FOUND = "not_found"
    AMOUNT_MISMATCH = "amount_mismatch"
    NO_OP = "no_op"
    CONFLICTING_TERMINAL = "conflicting_terminal"
    STALE_EVENT = "stale_event"
    APPLIED = "applied"


@dataclass(frozen=True)
class ReconciliationOutcome:
    """Decisión de la máquina de estados para un evento."""

    kind: OutcomeKind
    old_status: Optional[PaymentStatus] = None
    new_status: Optional[PaymentStatus] = None
    fields_to_persist: Dict[str, Any] = field(default_factory=dict)
    audit_entry: Optional[AuditEntryData] = None
    side_effects: List[SideEffect] = field(default_factory=list)
    detail: Optional[str] = None

    @property
    def writes(self) -> bool:
        return self.kind == OutcomeKind.APPLIED


def _audit_entry(
    action: AuditAction,
    event: WompiEvent,
    tx: WompiTransaction,
    *,
    old_status: Optional[PaymentStatus],
    new_status: Optional[PaymentStatus],
    now: datetime,
) -> AuditEntryData:
    return AuditEntryData(
        action=action,
        old_status=old_status,
        new_status=new_status,
        provider_event=event.event,
        transaction_id=tx.id,
        raw_status=tx.status,
        status_message=tx.status_message,
        payment_method=tx.payment_method_type,
        environment=event.environment,
        processed_at=now,
    )


def _amounts_match(stored: PaymentRecord, tx: WompiTransaction) -> bool:
    return (
        tx.amount_in_cents == stored.amount_in_cents
        and tx.currency.strip().upper() == stored.currency.strip().upper()
    )


def _fields_for_transition(
    stored: PaymentRecord,
    tx: WompiTransaction,
    new_status: PaymentStatus,
    *,
    error_prefix: str,
    now: datetime,
) -> Dict[str, Any]:
    fields: Dict[str, Any] = {
        "status": new_status,
        "provider_transaction_id": tx.id,
        "reference_number": tx.reference,
    }
    if tx.status_message:
        fields["error_message"] = tx.status_message

    if new_status == PaymentStatus.FAILED:
        fields["error_code"] = f"{error_prefix}_{tx.status.upper()}"
        fields["error_message"] = tx.status_message or DEFAULT_FAILURE_MESSAGE
        fields["failed_attempts"] = stored.failed_attempts + 1
        fields["failed_at"] = now
    elif new_status == PaymentStatus.COMPLETED:
        fields["completed_at"] = parse_optional_iso8601(tx.finalized_at) or now
    elif new_status == PaymentStatus.CANCELLED:
        fields["cancelled_at"] = now
    return fields


def _side_effects(
    stored: PaymentRecord,
    tx: WompiTransaction,
    new_status: PaymentStatus,
    *,
    failed_attempts: int,
    max_attempts: int,
    available_methods: Sequence[PaymentMethod | str],
    retry_path_template: Optional[str],
) -> List[SideEffect]:
    if new_status == PaymentStatus.COMPLETED:
        return [
            SideEffect(kind=SideEffectKind.SEND_CONFIRMATION),
            SideEffect(kind=SideEffectKind.TRIGGER_FULFILLMENT),
            SideEffect(kind=SideEffectKind.RESERVE_INVENTORY),
        ]
    if new_status == PaymentStatus.CANCELLED:
        return [SideEffect(kind=SideEffectKind.SEND_CANCELLATION_NOTICE)]
    if new_status == PaymentStatus.FAILED:
        humanized = humanize_failure(tx.status, tx.status_message)
        advice = can_retry(
            stored.model_copy(update={"failed_attempts": failed_attempts}),
            max_attempts=max_attempts,
            available_methods=available_methods,
        )
        new_payment_url = None
        if advice.allowed and retry_path_template:
            new_payment_url = build_retry_url(retry_path_template, stored.order_reference)
        return [
            SideEffect(
                kind=SideEffectKind.SEND_FAILURE_NOTICE,
                failure=FailureNotice(
                    reason=humanized.reason,
                    suggested_action=humanized.suggested_action,
                    can_retry=advice.allowed,
                    remaining_attempts=advice.remaining_attempts,
                    suggested_methods=advice.suggested_methods,
                    recommended_method=advice.recommended_method,
                    new_payment_url=new_payment_url,
                ),
            )
        ]
    return []


def reconcile(
    stored: Optional[PaymentRecord],
    event: WompiEvent,
    *,
    error_prefix: str = "WOMPI",
    max_attempts: int = 3,
    available_methods: Sequence[PaymentMethod | str] = DEFAULT_AVAILABLE_METHODS,
    retry_path_template: Optional[str] = None,
    map_status: Callable[[Optional[str]], PaymentStatus] = map_wompi_status,
    now: Optional[datetime] = None,
) -> ReconciliationOutcome:
    """
    Decide el resultado de aplicar `event` sobre `stored`.

    Raises:
        ValueError: si el evento no trae transacción (el adaptador filtra
            esos eventos antes de reconciliar).
    """
    tx = event.transaction
    if tx is None:
        raise ValueError("Event carries no transaction to reconcile")

    if stored is None:
        return ReconciliationOutcome(kind=OutcomeKind.NOT_FOUND, detail=tx.reference)

    now = now or utcnow()
    new_status = map_status(tx.status)
    old_status = stored.status

    if not _amounts_match(stored, tx):
        return ReconciliationOutcome(
            kind=OutcomeKind.AMOUNT_MISMATCH,
            old_status=old_status,
            new_status=new_status,
            detail=(
                f"expected {stored.amount_in_cents} {stored.currency}, "
                f"got {tx.amount_in_cents} {tx.currency}"
            ),
        )

    if new_status == old_status:
        return ReconciliationOutcome(kind=OutcomeKind.NO_OP, old_status=old_status, new_status=new_status)

    if is_terminal_status(old_status, stored.failed_attempts, max_attempts):
        return ReconciliationOutcome(
            kind=OutcomeKind.CONFLICTING_TERMINAL,
            old_status=old_status,
            new_status=new_status,
            audit_entry=_audit_entry(
                AuditAction.CONFLICTING_TERMINAL,
                event,
                tx,
                old_status=old_status,
                new_status=new_status,
                now=now,
            ),
            detail=f"{old_status} is terminal; event reports {tx.status}",
        )

    if new_status == PaymentStatus.PENDING and old_status != PaymentStatus.PENDING:
        return ReconciliationOutcome(
            kind=OutcomeKind.STALE_EVENT,
            old_status=old_status,
            new_status=new_status,
            audit_entry=_audit_entry(
                AuditAction.STALE_EVENT,
                event,
                tx,
                old_status=old_status,
                new_status=new_status,
                now=now,
            ),
            detail=f"late {tx.status or 'PENDING'} after {old_status}",
        )

    fields = _fields_for_transition(
        stored,
        tx,
        new_status,
        error_prefix=error_prefix,
        now=now,
    )
    return ReconciliationOutcome(
        kind=OutcomeKind.APPLIED,
        old_status=old_status,
        new_status=new_status,
        fields_to_persist=fields,
        audit_entry=_audit_entry(
            AuditAction.TRANSITION,
            event,
            tx,
            old_status=old_status,
            new_status=new_status,
            now=now,
        ),
        side_effects=_side_effects(
            stored,
            tx,
            new_status,
            failed_attempts=fields.get("failed_attempts", stored.failed_attempts),
            max_attempts=max_attempts,
            available_methods=available_methods,
            retry_path_template=retry_path_template,
        ),
    )


__all__ = ["OutcomeKind", "ReconciliationOutcome", "reconcile"]

# Fin del archivo backend/app/modules/payments/facades/reconciliation/core.py
