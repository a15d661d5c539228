# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/__init__.py

Superficie de exportación de enums del módulo Payments.

Incluye:
- AuditAction
- Currency
- PaymentMethod
- PaymentProvider
- PaymentStatus (+ is_terminal_status)
- SideEffectKind

Autor: Equipo Storefront
Fecha: 2026-10-03
"""

from .audit_action_enum import AuditAction
from .currency_enum import Currency
from .payment_method_enum import PaymentMethod
from .payment_provider_enum import PaymentProvider
from .payment_status_enum import PaymentStatus, is_terminal_status
from .side_effect_enum import SideEffectKind

__all__ = [
    "AuditAction",
    "Currency",
    "PaymentMethod",
    "PaymentProvider",
    "PaymentStatus",
    "SideEffectKind",
    "is_terminal_status",
]

# Fin del archivo backend/app/modules/payments/enums/__init__.py
