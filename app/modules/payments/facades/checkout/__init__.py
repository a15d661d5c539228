# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/checkout/__init__.py

Punto de entrada del submódulo de checkout: inicio de pago y reintentos.

Autor: Equipo Storefront
Fecha: 2026-10-05
"""

from .retry_advisor import RetryAdvice, build_retry_url, can_retry
from .start_checkout import generate_external_reference, start_checkout

__all__ = [
    "RetryAdvice",
    "build_retry_url",
    "can_retry",
    "generate_external_reference",
    "start_checkout",
]

# Fin del archivo backend/app/modules/payments/facades/checkout/__init__.py
