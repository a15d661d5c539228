# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/schemas/side_effect_schemas.py

Efectos de seguimiento decididos por la reconciliación.

Autor: Equipo Storefront
Fecha: 2026-10-05
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.modules.payments.enums import PaymentMethod, SideEffectKind


class FailureNotice(BaseModel):
    """Contenido para el cliente cuando un pago falla."""

    reason: str
    suggested_action: str
    can_retry: bool
    remaining_attempts: int
    suggested_methods: List[PaymentMethod] = Field(default_factory=list)
    recommended_method: Optional[PaymentMethod] = None
    new_payment_url: Optional[str] = None


class SideEffect(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: SideEffectKind
    failure: Optional[FailureNotice] = None


__all__ = ["FailureNotice", "SideEffect"]

# Fin del archivo backend/app/modules/payments/schemas/side_effect_schemas.py
