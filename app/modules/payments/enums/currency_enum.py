# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/currency_enum.py

Enum de monedas operativas (ISO 4217).

Autor: Equipo Storefront
Fecha: 2026-10-03
"""

from enum import StrEnum


class Currency(StrEnum):
    """Moneda operativa para cobros."""

    COP = "COP"
    USD = "USD"

    __db_enum_name__ = "currency_enum"


__all__ = ["Currency"]

# Fin del archivo backend/app/modules/payments/enums/currency_enum.py
