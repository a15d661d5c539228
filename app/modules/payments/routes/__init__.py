# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/__init__.py

Ensamblador de rutas del módulo Payments.

Incluye:
- /payments/webhooks/wompi
- /payments/webhooks/{provider}
- /payments/intents
- /payments/orders/{order_reference}/status
- /payments/orders/{order_reference}/retry

Autor: Equipo Storefront
Fecha: 2026-10-06
"""

from fastapi import APIRouter

from .webhooks_wompi import router as webhooks_wompi_router
from .payments import router as payments_router

router = APIRouter()

# Prefijo común /payments para todas las rutas del módulo
router.include_router(webhooks_wompi_router, prefix="/payments")
router.include_router(payments_router, prefix="/payments")

__all__ = ["router"]

# Fin del archivo backend/app/modules/payments/routes/__init__.py
