# -*- coding: utf-8 -*-
"""
backend/app/shared/database/__init__.py

Re-exporta utilidades comunes de base de datos.

Autor: Equipo Storefront
Fecha: 2026-10-02
"""

from __future__ import annotations

from .base import Base, NAMING_CONVENTION, as_str_enum
from .database import (
    engine,
    SessionLocal,
    build_engine,
    get_async_session,
    session_scope,
    init_models,
    check_database_health,
)
from .repository import BaseRepository

__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "BaseRepository",
    "NAMING_CONVENTION",
    "as_str_enum",
    "build_engine",
    "get_async_session",
    "session_scope",
    "init_models",
    "check_database_health",
]

# Fin del archivo backend/app/shared/database/__init__.py
