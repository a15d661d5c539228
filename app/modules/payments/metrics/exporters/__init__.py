# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/metrics/exporters/__init__.py

Exporters de métricas del módulo de pagos (registro Prometheus propio).
"""
