# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/repositories/__init__.py

Repositorios async del módulo Payments.

Autor: Equipo Storefront
Fecha: 2026-10-04
"""

from .payment_repository import PaymentRepository
from .payment_audit_repository import PaymentAuditRepository

__all__ = [
    "PaymentRepository",
    "PaymentAuditRepository",
]

# Fin del archivo backend/app/modules/payments/repositories/__init__.py
