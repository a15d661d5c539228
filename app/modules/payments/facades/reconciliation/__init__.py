# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/reconciliation/__init__.py

Submódulo de reconciliación: máquina de estados de pagos frente a eventos
del proveedor.

Autor: Equipo Storefront
Fecha: 2026-10-05
"""

from .core import (
    OutcomeKind,
    ReconciliationOutcome,
    reconcile,
)
from .failure_messages import humanize_failure, status_message_for
from .rules import map_wompi_status

__all__ = [
    "OutcomeKind",
    "ReconciliationOutcome",
    "reconcile",
    "humanize_failure",
    "status_message_for",
    "map_wompi_status",
]

# Fin del archivo backend/app/modules/payments/facades/reconciliation/__init__.py
