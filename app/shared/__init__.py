# -*- coding: utf-8 -*-
"""
backend/app/shared/__init__.py

Infraestructura compartida: configuración (app.shared.config) y base de
datos async (app.shared.database).

No inicializa settings en import-time para evitar efectos colaterales
durante la recolección de tests.
"""
