# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/notification_service.py

Ejecución de los efectos de seguimiento de la reconciliación.

Colaboradores:
- notificaciones al cliente (confirmación, falla, cancelación)
- fulfillment de la orden
- reserva de inventario

Cada colaborador es un `SideEffectSink`. Si hay URL configurada se usa
`HttpSideEffectSink` (POST JSON con httpx); si no, `LoggingSideEffectSink`.

Best-effort: cada efecto tiene su propio timeout; los errores se registran
y se cuentan en Prometheus, nunca se propagan al webhook (el pago ya quedó
persistido).

Autor: Equipo Storefront
Fecha: 2026-10-05
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Protocol

import httpx

from app.modules.payments.enums import SideEffectKind
from app.modules.payments.metrics import observe_side_effect_failure
from app.modules.payments.schemas import PaymentRecord, SideEffect
from app.modules.payments.services.webhooks.payload_sanitizer import mask_email
from app.modules.payments.utils.datetime_helpers import to_iso8601

logger = logging.getLogger(__name__)


NOTIFICATION_KINDS = frozenset({
    SideEffectKind.SEND_CONFIRMATION,
    SideEffectKind.SEND_FAILURE_NOTICE,
    SideEffectKind.SEND_CANCELLATION_NOTICE,
})


class SideEffectSink(Protocol):
    async def send(self, effect: SideEffect, payment: PaymentRecord) -> None:
        ...


def build_side_effect_payload(effect: SideEffect, payment: PaymentRecord) -> Dict[str, Any]:
    """Cuerpo JSON que reciben los colaboradores."""
    payload: Dict[str, Any] = {
        "kind": effect.kind.value,
        "payment_id": payment.id,
        "external_reference": payment.external_reference,
        "order_reference": payment.order_reference,
        "status": payment.status.value,
        "amount": payment.amount,
        "currency": payment.currency,
        "payment_method": payment.payment_method.value,
        "customer_email": payment.customer_email,
        "provider_transaction_id": payment.provider_transaction_id,
        "completed_at": to_iso8601(payment.completed_at),
    }
    if effect.failure is not None:
        payload["failure"] = effect.failure.model_dump(mode="json")
    return payload


class LoggingSideEffectSink:
    """Colaborador por defecto cuando no hay endpoint configurado."""

    def __init__(self, name: str):
        self.name = name

    async def send(self, effect: SideEffect, payment: PaymentRecord) -> None:
        logger.info(
            "side_effect_logged sink=%s kind=%s reference=%s order=%s email=%s",
            self.name,
            effect.kind.value,
            payment.external_reference,
            payment.order_reference,
            mask_email(payment.customer_email),
        )


class HttpSideEffectSink:
    """POST JSON a un endpoint del colaborador."""

    def __init__(self, name: str, url: str, client: httpx.AsyncClient):
        self.name = name
        self.url = url
        self._client = client

    async def send(self, effect: SideEffect, payment: PaymentRecord) -> None:
        response = await self._client.post(self.url, json=build_side_effect_payload(effect, payment))
        response.raise_for_status()
        logger.info(
            "side_effect_sent sink=%s kind=%s reference=%s status_code=%s",
            self.name,
            effect.kind.value,
            payment.external_reference,
            response.status_code,
        )


class SideEffectDispatcher:
    """Enruta cada efecto a su colaborador con timeout individual."""

    def __init__(
        self,
        *,
        notifications: SideEffectSink,
        fulfillment: SideEffectSink,
        inventory: SideEffectSink,
        timeout_seconds: float = 2.0,
    ):
        self._routes: Mapping[SideEffectKind, SideEffectSink] = {
            **{kind: notifications for kind in NOTIFICATION_KINDS},
            SideEffectKind.TRIGGER_FULFILLMENT: fulfillment,
            SideEffectKind.RESERVE_INVENTORY: inventory,
        }
        self.timeout_seconds = timeout_seconds

    async def _run_one(self, effect: SideEffect, payment: PaymentRecord) -> bool:
        sink = self._routes[effect.kind]
        try:
            await asyncio.wait_for(sink.send(effect, payment), timeout=self.timeout_seconds)
            return True
        except asyncio.TimeoutError:
            logger.warning(
                "side_effect_timeout kind=%s reference=%s timeout=%.1fs",
                effect.kind.value,
                payment.external_reference,
                self.timeout_seconds,
            )
            observe_side_effect_failure(effect.kind.value, "timeout")
        except Exception as e:
            logger.warning(
                "side_effect_failed kind=%s reference=%s error=%s",
                effect.kind.value,
                payment.external_reference,
                str(e)[:200],
            )
            observe_side_effect_failure(effect.kind.value, "error")
        return False

    async def dispatch(self, effects: Iterable[SideEffect], payment: PaymentRecord) -> Dict[str, bool]:
        """
        Ejecuta los efectos concurrentemente.

        Returns:
            {kind: True/False} según se completó o no cada efecto.
        """
        effects = list(effects)
        if not effects:
            return {}
        results = await asyncio.gather(*(self._run_one(effect, payment) for effect in effects))
        return {effect.kind.value: ok for effect, ok in zip(effects, results)}


def build_sink(name: str, url: Optional[str], client: Optional[httpx.AsyncClient]) -> SideEffectSink:
    if url and client is not None:
        return HttpSideEffectSink(name, url, client)
    return LoggingSideEffectSink(name)


__all__ = [
    "HttpSideEffectSink",
    "LoggingSideEffectSink",
    "SideEffectDispatcher",
    "SideEffectSink",
    "build_side_effect_payload",
    "build_sink",
]

# Fin del archivo backend/app/modules/payments/services/notification_service.py
