# -*- coding: utf-8 -*-
"""
backend/app/__init__.py

Inicializador del paquete principal 'app' del backend de pagos.

Permite que los módulos internos se importen como 'app.*' cuando la
carpeta del backend está en PYTHONPATH.

Autor: Equipo Storefront
Fecha: 2026-10-02
"""

# Fin del archivo backend/app/__init__.py
