# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/metrics/exporters/prometheus_exporter.py

Exporter Prometheus para webhooks y reconciliación de pagos.

Separación de contadores:
- received: todo evento que llega al endpoint
- rejected: rechazos por razón (invalid_payload, invalid_signature,
  stale_event, environment_mismatch, ...)
- outcome: resultado de la reconciliación (applied, no_op, ...)
- amount_mismatch / conflicting_terminal: anomalías que requieren revisión

Autor: Equipo Storefront
Fecha: 2026-10-05
"""

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
)
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------
# Registro de Prometheus del módulo
# --------------------------------------------------------------------------
registry = CollectorRegistry()

# --------------------------------------------------------------------------
# Definición de métricas
# --------------------------------------------------------------------------

WEBHOOKS_RECEIVED_TOTAL = Counter(
    "payments_webhook_received_total",
    "Total webhooks recibidos por proveedor",
    ["provider"],
    registry=registry,
)

WEBHOOKS_REJECTED_TOTAL = Counter(
    "payments_webhook_rejected_total",
    "Total webhooks rechazados por proveedor y razón",
    ["provider", "reason"],
    registry=registry,
)

WEBHOOKS_OUTCOME_TOTAL = Counter(
    "payments_webhook_outcome_total",
    "Total webhooks por resultado de reconciliación",
    ["provider", "outcome"],
    registry=registry,
)

WEBHOOKS_PROCESSING_SECONDS = Histogram(
    "payments_webhook_processing_seconds",
    "Tiempo de procesamiento de webhooks (segundos)",
    ["provider"],
    registry=registry,
)

AMOUNT_MISMATCH_TOTAL = Counter(
    "payments_amount_mismatch_total",
    "Total de mismatches de monto o moneda detectados",
    ["provider"],
    registry=registry,
)

CONFLICTING_TERMINAL_TOTAL = Counter(
    "payments_conflicting_terminal_total",
    "Eventos que contradicen un estado terminal",
    ["provider", "stored_status", "event_status"],
    registry=registry,
)

SIDE_EFFECT_FAILURES_TOTAL = Counter(
    "payments_side_effect_failures_total",
    "Efectos de seguimiento fallidos o vencidos",
    ["kind", "reason"],
    registry=registry,
)

PAYMENTS_CREATED_TOTAL = Counter(
    "payments_created_total",
    "Pagos creados desde checkout o reintento",
    ["provider", "origin"],
    registry=registry,
)


# --------------------------------------------------------------------------
# Funciones auxiliares
# --------------------------------------------------------------------------
def render_prometheus_metrics() -> bytes:
    """Salida actual de las métricas en formato Prometheus."""
    return generate_latest(registry)


def observe_webhook_received(provider: str):
    WEBHOOKS_RECEIVED_TOTAL.labels(provider=provider).inc()


def observe_webhook_rejected(provider: str, reason: str):
    WEBHOOKS_REJECTED_TOTAL.labels(provider=provider, reason=reason).inc()
    logger.debug(f"[Prometheus] Webhook {provider} rejected reason={reason}")


def observe_webhook_outcome(provider: str, outcome: str, duration: float):
    """
    Registra el resultado de negocio del webhook.

    Args:
        provider: wompi
        outcome: applied/no_op/conflicting_terminal/stale_event/not_found/
                 amount_mismatch/ignored/error
        duration: tiempo total de procesamiento en segundos
    """
    WEBHOOKS_OUTCOME_TOTAL.labels(provider=provider, outcome=outcome).inc()
    WEBHOOKS_PROCESSING_SECONDS.labels(provider=provider).observe(duration)
    logger.debug(f"[Prometheus] Webhook {provider} outcome={outcome} duration={duration:.4f}s")


def observe_amount_mismatch(provider: str):
    AMOUNT_MISMATCH_TOTAL.labels(provider=provider).inc()


def observe_conflicting_terminal(provider: str, stored_status: str, event_status: str):
    CONFLICTING_TERMINAL_TOTAL.labels(
        provider=provider,
        stored_status=stored_status,
        event_status=event_status,
    ).inc()


def observe_side_effect_failure(kind: str, reason: str):
    SIDE_EFFECT_FAILURES_TOTAL.labels(kind=kind, reason=reason).inc()


def observe_payment_created(provider: str, origin: str):
    """origin: checkout/retry"""
    PAYMENTS_CREATED_TOTAL.labels(provider=provider, origin=origin).inc()


# --------------------------------------------------------------------------
# Health-check de Prometheus
# --------------------------------------------------------------------------
def prometheus_ping() -> dict:
    return {
        "status": "ok",
        "service": "payments-metrics",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "metrics_registered": len(registry._names_to_collectors),
    }


__all__ = [
    "CONTENT_TYPE_LATEST",
    "registry",
    "render_prometheus_metrics",
    "observe_webhook_received",
    "observe_webhook_rejected",
    "observe_webhook_outcome",
    "observe_amount_mismatch",
    "observe_conflicting_terminal",
    "observe_side_effect_failure",
    "observe_payment_created",
    "prometheus_ping",
]

# Fin del archivo backend/app/modules/payments/metrics/exporters/prometheus_exporter.py
