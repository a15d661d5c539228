# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/payment_method_enum.py

Enum de métodos de pago ofrecidos en el checkout.

Autor: Equipo Storefront
Fecha: 2026-10-03
"""

from __future__ import annotations

from enum import StrEnum

class PaymentMethod(StrEnum):
    """Método con el que el cliente intenta pagar."""

    CARD = "CARD"
    PSE = "PSE"
    NEQUI = "NEQUI"
    BANCOLOMBIA_TRANSFER = "BANCOLOMBIA_TRANSFER"
    CASH_ON_DELIVERY = "CASH_ON_DELIVERY"

    __db_enum_name__ = "payment_method_enum"


__all__ = ["PaymentMethod"]

# Fin del archivo backend/app/modules/payments/enums/payment_method_enum.py
