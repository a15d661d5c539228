# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/audit_action_enum.py

Tipos de entrada de la bitácora append-only de pagos.

Autor: Equipo Storefront
Fecha: 2026-10-03
"""

from enum import StrEnum


class AuditAction(StrEnum):
    CREATED = "CREATED"
    TRANSITION = "TRANSITION"
    CONFLICTING_TERMINAL = "CONFLICTING_TERMINAL"
    STALE_EVENT = "STALE_EVENT"

    __db_enum_name__ = "payment_audit_action_enum"


__all__ = ["AuditAction"]

# Fin del archivo backend/app/modules/payments/enums/audit_action_enum.py
