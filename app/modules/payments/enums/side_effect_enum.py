# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/side_effect_enum.py

Acciones de seguimiento que decide la reconciliación y ejecutan los
colaboradores (notificaciones, fulfillment, inventario).

Autor: Equipo Storefront
Fecha: 2026-10-05
"""

from enum import StrEnum


class SideEffectKind(StrEnum):
    SEND_CONFIRMATION = "SEND_CONFIRMATION"
    TRIGGER_FULFILLMENT = "TRIGGER_FULFILLMENT"
    RESERVE_INVENTORY = "RESERVE_INVENTORY"
    SEND_FAILURE_NOTICE = "SEND_FAILURE_NOTICE"
    SEND_CANCELLATION_NOTICE = "SEND_CANCELLATION_NOTICE"


__all__ = ["SideEffectKind"]

# Fin del archivo backend/app/modules/payments/enums/side_effect_enum.py
