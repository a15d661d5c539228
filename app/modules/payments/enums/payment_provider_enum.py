# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/payment_provider_enum.py

Enum de proveedores de pago configurables por tienda.
Solo los proveedores con estrategia registrada procesan webhooks
(ver facades/webhooks/providers.py).

Autor: Equipo Storefront
Fecha: 2026-10-03
"""

from enum import StrEnum


class PaymentProvider(StrEnum):
    """Proveedor de pago externo."""

    WOMPI = "WOMPI"
    MERCADOPAGO = "MERCADOPAGO"
    EPAYCO = "EPAYCO"

    __db_enum_name__ = "payment_provider_enum"


__all__ = ["PaymentProvider"]

# Fin del archivo backend/app/modules/payments/enums/payment_provider_enum.py
