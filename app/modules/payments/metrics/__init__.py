# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/metrics/__init__.py

Métricas Prometheus de webhooks y reconciliación de pagos.

Autor: Equipo Storefront
Fecha: 2026-10-05
"""

from .exporters.prometheus_exporter import (
    observe_amount_mismatch,
    observe_conflicting_terminal,
    observe_payment_created,
    observe_side_effect_failure,
    observe_webhook_outcome,
    observe_webhook_received,
    observe_webhook_rejected,
    render_prometheus_metrics,
)

__all__ = [
    "observe_amount_mismatch",
    "observe_conflicting_terminal",
    "observe_payment_created",
    "observe_side_effect_failure",
    "observe_webhook_outcome",
    "observe_webhook_received",
    "observe_webhook_rejected",
    "render_prometheus_metrics",
]

# Fin del archivo backend/app/modules/payments/metrics/__init__.py
