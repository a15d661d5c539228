# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/payments/webhook_handler.py

Adaptador de webhooks de Wompi: frontera de transporte del núcleo de
reconciliación. Es el único componente que habla con los colaboradores
(persistencia y efectos de seguimiento).

Flujo:
    1. Parseo                → 400 invalid_payload
    2. Secreto del entorno   → 500 misconfigured
    3. Verificación          → 401 firma / header; 400 evento viejo o entorno
    4. Clasificación         → 200 ignored
    5. Lectura + reconciliación + escritura condicional (con timeout)
         → 200 applied / no_op / conflicting_terminal / stale_event
         → 404 not_found, 400 amount_mismatch, 500 store_error / timeout
    6. Efectos de seguimiento (best-effort, timeout por efecto)

Wompi reintenta las entregas que no reciben 200, así que las fallas
transitorias responden 500 y el evento se vuelve a procesar más tarde.

Autor: Equipo Storefront
Fecha: 2026-10-05
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from time import perf_counter
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from app.shared.config.settings_payments import PaymentsSettings
from app.modules.payments.exceptions import (
    PaymentNotFoundError,
    PaymentStoreError,
    StalePaymentError,
)
from app.modules.payments.facades.reconciliation.core import (
    OutcomeKind,
    ReconciliationOutcome,
    reconcile,
)
from app.modules.payments.facades.webhooks.constants import WOMPI_CHECKSUM_HEADER
from app.modules.payments.facades.webhooks.normalize import extract_transaction_info
from app.modules.payments.facades.webhooks.providers import WOMPI_STRATEGY, ProviderStrategy
from app.modules.payments.metrics import (
    observe_amount_mismatch,
    observe_conflicting_terminal,
    observe_webhook_outcome,
    observe_webhook_received,
    observe_webhook_rejected,
)
from app.modules.payments.schemas import PaymentRecord, WompiEvent
from app.modules.payments.services.notification_service import SideEffectDispatcher
from app.modules.payments.services.payment_store import PaymentStore
from app.modules.payments.services.webhooks.payload_sanitizer import compute_payload_hash
from app.modules.payments.utils.datetime_helpers import to_iso8601, utcnow

logger = logging.getLogger(__name__)

# Reintentos de lectura + reconciliación ante una escritura concurrente
MAX_RECONCILE_PASSES = 2

_OUTCOME_HTTP_STATUS = {
    OutcomeKind.APPLIED: 200,
    OutcomeKind.NO_OP: 200,
    OutcomeKind.CONFLICTING_TERMINAL: 200,
    OutcomeKind.STALE_EVENT: 200,
    OutcomeKind.NOT_FOUND: 404,
    OutcomeKind.AMOUNT_MISMATCH: 400,
}


@dataclass(frozen=True)
class WebhookResult:
    http_status: int
    body: Dict[str, Any] = field(default_factory=dict)


class WompiWebhookHandler:
    """Procesa un webhook de Wompi de punta a punta."""

    def __init__(
        self,
        *,
        store: PaymentStore,
        dispatcher: SideEffectDispatcher,
        settings: PaymentsSettings,
        strategy: ProviderStrategy = WOMPI_STRATEGY,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.dispatcher = dispatcher
        self.settings = settings
        self.strategy = strategy
        self.clock = clock

    # ------------------------------------------------------------------ #
    # Entrada
    # ------------------------------------------------------------------ #
    async def handle(self, raw_body: bytes | str, headers: Mapping[str, str]) -> WebhookResult:
        provider = self.strategy.name
        started = perf_counter()
        observe_webhook_received(provider)

        # 1) Parseo
        event = self.strategy.parse(raw_body)
        if event is None:
            return self._reject("invalid_payload", 400, "Invalid webhook format")

        # 2) Secreto
        secret = self.settings.events_secret()
        if not secret:
            logger.error(
                "wompi_events_secret_missing environment=%s",
                self.settings.wompi_environment,
            )
            return self._reject("misconfigured", 500, "Server configuration error")

        # 3) Verificación
        rejection = self._verify(event, secret, headers)
        if rejection is not None:
            return rejection

        # 4) Clasificación
        if not self.strategy.should_process(event.event, self.settings.webhook_allowed_events):
            logger.info("wompi_event_ignored event=%s", event.event)
            return self._finish(started, "ignored", WebhookResult(
                200, {"status": "ignored", "reason": "event_type_not_processed", "event": event.event},
            ))
        if event.transaction is None:
            logger.info("wompi_event_without_transaction event=%s", event.event)
            return self._finish(started, "ignored", WebhookResult(
                200, {"status": "ignored", "reason": "no_transaction", "event": event.event},
            ))

        logger.info(
            "wompi_event_processing",
            extra={
                "transaction": extract_transaction_info(event),
                "payload_sha256": compute_payload_hash(raw_body),
            },
        )

        # 5) Núcleo con timeout
        try:
            outcome, record = await asyncio.wait_for(
                self._reconcile_and_persist(event),
                timeout=self.settings.webhook_processing_timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.error(
                "wompi_webhook_timeout reference=%s timeout=%.1fs",
                event.transaction.reference,
                self.settings.webhook_processing_timeout_seconds,
            )
            return self._finish(started, "error", WebhookResult(
                500, {"error": "timeout", "message": "Failed to process webhook"},
            ))
        except PaymentNotFoundError:
            outcome, record = ReconciliationOutcome(kind=OutcomeKind.NOT_FOUND), None
        except PaymentStoreError as e:
            logger.error(
                "wompi_webhook_store_error reference=%s error=%s",
                event.transaction.reference,
                str(e)[:200],
            )
            return self._finish(started, "error", WebhookResult(
                500, {"error": "store_error", "message": "Failed to process webhook"},
            ))

        result = self._result_for(event, outcome, record)

        # 6) Efectos de seguimiento
        if outcome.kind == OutcomeKind.APPLIED and outcome.side_effects and record is not None:
            result.body["side_effects"] = await self.dispatcher.dispatch(outcome.side_effects, record)

        return self._finish(started, outcome.kind.value, result)

    # ------------------------------------------------------------------ #
    # Pasos
    # ------------------------------------------------------------------ #
    def _verify(
        self,
        event: WompiEvent,
        secret: str,
        headers: Mapping[str, str],
    ) -> Optional[WebhookResult]:
        validator = self.strategy.build_validator(
            secret=secret,
            expected_environment=self.settings.wompi_environment,
            max_age_minutes=self.settings.webhook_event_max_age_minutes,
            check_age=self.settings.webhook_validate_age,
            check_environment=self.settings.webhook_validate_environment,
            check_header_checksum=self.settings.webhook_validate_header_checksum,
        )
        failure = validator.validate(
            event,
            header_checksum=headers.get(WOMPI_CHECKSUM_HEADER),
            now=self.clock(),
        )
        if failure is None:
            return None

        if failure.is_authentication:
            logger.warning(
                "wompi_webhook_forgery_attempt reason=%s event=%s environment=%s",
                failure.value,
                event.event,
                event.environment,
                extra={"security_event": "authentication_failed"},
            )
            return self._reject(failure.value, 401, "Invalid signature")

        logger.warning(
            "wompi_webhook_security_rejection reason=%s event=%s environment=%s expected=%s",
            failure.value,
            event.event,
            event.environment,
            self.settings.wompi_environment,
            extra={"security_event": failure.value},
        )
        return self._reject(failure.value, 400, "Event rejected")

    async def _reconcile_and_persist(
        self,
        event: WompiEvent,
    ) -> Tuple[ReconciliationOutcome, Optional[PaymentRecord]]:
        """
        Lee, reconcilia y escribe. Si la escritura condicional pierde la
        carrera se vuelve a leer y reconciliar una vez.
        """
        reference = event.transaction.reference
        for attempt in range(1, MAX_RECONCILE_PASSES + 1):
            stored = await self.store.fetch_payment_by_external_reference(reference)
            outcome = reconcile(
                stored,
                event,
                error_prefix=self.strategy.error_prefix,
                max_attempts=self.settings.payment_max_attempts,
                available_methods=self.settings.payment_available_methods,
                retry_path_template=self.settings.checkout_retry_path,
                map_status=self.strategy.map_status,
                now=self.clock(),
            )

            if outcome.kind == OutcomeKind.APPLIED:
                try:
                    record = await self.store.update_payment(
                        stored.id,
                        outcome.fields_to_persist,
                        expected_status=stored.status,
                        audit_entry=outcome.audit_entry,
                    )
                    return outcome, record
                except StalePaymentError:
                    logger.info(
                        "wompi_concurrent_update reference=%s attempt=%s",
                        reference,
                        attempt,
                    )
                    continue

            if outcome.audit_entry is not None and stored is not None:
                await self.store.append_audit_entry(stored.id, outcome.audit_entry)
            return outcome, stored

        raise PaymentStoreError(f"Payment {reference} kept changing during reconciliation")

    # ------------------------------------------------------------------ #
    # Respuestas
    # ------------------------------------------------------------------ #
    def _result_for(
        self,
        event: WompiEvent,
        outcome: ReconciliationOutcome,
        record: Optional[PaymentRecord],
    ) -> WebhookResult:
        tx = event.transaction
        status_code = _OUTCOME_HTTP_STATUS[outcome.kind]
        log_args = (
            outcome.kind.value,
            tx.id,
            tx.reference,
            outcome.old_status,
            outcome.new_status,
        )

        if outcome.kind == OutcomeKind.NOT_FOUND:
            logger.error("wompi_webhook_decision outcome=%s tx=%s reference=%s old=%s new=%s", *log_args)
            return WebhookResult(status_code, {"error": "Payment not found", "reference": tx.reference})

        if outcome.kind == OutcomeKind.AMOUNT_MISMATCH:
            observe_amount_mismatch(self.strategy.name)
            logger.error(
                "wompi_webhook_amount_mismatch tx=%s reference=%s detail=%s",
                tx.id,
                tx.reference,
                outcome.detail,
                extra={"security_event": "amount_mismatch"},
            )
            return WebhookResult(status_code, {"error": "Amount mismatch", "reference": tx.reference})

        body: Dict[str, Any] = {
            "status": outcome.kind.value,
            "paymentId": record.id if record is not None else None,
            "transactionId": tx.id,
            "oldStatus": outcome.old_status.value if outcome.old_status else None,
            "newStatus": outcome.new_status.value if outcome.new_status else None,
            "processedAt": to_iso8601(self.clock()),
        }

        if outcome.kind == OutcomeKind.CONFLICTING_TERMINAL:
            observe_conflicting_terminal(
                self.strategy.name,
                outcome.old_status.value,
                outcome.new_status.value,
            )
            logger.error(
                "wompi_webhook_decision outcome=%s tx=%s reference=%s old=%s new=%s detail=%s",
                *log_args,
                outcome.detail,
                extra={"alert": "conflicting_terminal"},
            )
            body["message"] = "Payment already in terminal state"
        elif outcome.kind == OutcomeKind.STALE_EVENT:
            logger.warning("wompi_webhook_decision outcome=%s tx=%s reference=%s old=%s new=%s", *log_args)
            body["message"] = "Stale event recorded"
        elif outcome.kind == OutcomeKind.NO_OP:
            logger.info("wompi_webhook_decision outcome=%s tx=%s reference=%s old=%s new=%s", *log_args)
            body["message"] = "Status unchanged"
        else:
            logger.info("wompi_webhook_decision outcome=%s tx=%s reference=%s old=%s new=%s", *log_args)
            body["message"] = "Webhook processed successfully"

        return WebhookResult(status_code, body)

    def _reject(self, reason: str, status_code: int, message: str) -> WebhookResult:
        observe_webhook_rejected(self.strategy.name, reason)
        return WebhookResult(status_code, {"error": reason, "message": message})

    def _finish(self, started: float, outcome: str, result: WebhookResult) -> WebhookResult:
        observe_webhook_outcome(self.strategy.name, outcome, perf_counter() - started)
        return result


__all__ = ["WebhookResult", "WompiWebhookHandler"]

# Fin del archivo backend/app/modules/payments/facades/payments/webhook_handler.py
