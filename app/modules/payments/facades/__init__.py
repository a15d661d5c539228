# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/__init__.py

Fachadas del módulo Payments.

Este __init__ no importa submódulos para evitar ciclos; cada fachada se
importa desde su paquete:

      from app.modules.payments.facades.checkout import start_checkout
      from app.modules.payments.facades.payments import WompiWebhookHandler
      from app.modules.payments.facades.reconciliation import reconcile
      from app.modules.payments.facades.webhooks.providers import get_provider_strategy

Autor: Equipo Storefront
Fecha: 2026-10-04
"""

__all__: list[str] = []

# Fin del archivo backend/app/modules/payments/facades/__init__.py
