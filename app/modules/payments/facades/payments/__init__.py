# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/payments/__init__.py

Superficie de exportación de las fachadas principales del submódulo Payments.

Incluye:
- WompiWebhookHandler / WebhookResult: procesamiento de webhooks de Wompi
- get_order_payment_status, get_retry_advice, start_payment_retry:
  consultas y reintentos por orden

Autor: Equipo Storefront
Fecha: 2026-10-06
"""

from __future__ import annotations

from .intents import get_order_payment_status, get_retry_advice, start_payment_retry
from .webhook_handler import WebhookResult, WompiWebhookHandler

__all__ = [
    "get_order_payment_status",
    "get_retry_advice",
    "start_payment_retry",
    "WebhookResult",
    "WompiWebhookHandler",
]

# Fin del archivo backend/app/modules/payments/facades/payments/__init__.py
