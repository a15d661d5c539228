# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/utils/__init__.py

Utilidades del módulo de pagos (fechas UTC / ISO 8601).
"""
