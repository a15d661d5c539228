# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/webhooks/helpers.py

Clasificación de eventos de Wompi.

Autor: Equipo Storefront
Fecha: 2026-10-05
"""

from __future__ import annotations

from typing import Iterable, Optional

from .constants import WOMPI_DEFAULT_ALLOWED_EVENTS


def should_process_event(event_type: str, allowed: Optional[Iterable[str]] = None) -> bool:
    """
    Determina si el tipo de evento pasa a reconciliación.

    Sin lista explícita se usan los eventos por defecto
    (transaction.updated y actualizaciones de tokens Nequi/Bancolombia).
    """
    allowed_set = frozenset(allowed) if allowed is not None else WOMPI_DEFAULT_ALLOWED_EVENTS
    return event_type in allowed_set


__all__ = ["should_process_event"]
