# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/models/__init__.py

Punto de entrada de modelos ORM del módulo Payments.

- Payment: registro de pago (sistema de registro interno)
- PaymentAuditEntry: bitácora append-only por pago

Autor: Equipo Storefront
Fecha: 2026-10-03
"""

from __future__ import annotations

from .payment_models import Payment
from .payment_audit_models import PaymentAuditEntry

__all__ = [
    "Payment",
    "PaymentAuditEntry",
]

# Fin del archivo backend/app/modules/payments/models/__init__.py
