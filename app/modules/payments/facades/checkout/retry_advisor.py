# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/checkout/retry_advisor.py

Elegibilidad de reintento y métodos alternativos para una orden.

Funciones puras: no leen configuración ni base de datos; el llamador
pasa los límites.

Autor: Equipo Storefront
Fecha: 2026-10-05
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from app.modules.payments.enums import PaymentMethod
from app.modules.payments.schemas import PaymentRecord

DEFAULT_AVAILABLE_METHODS: tuple[PaymentMethod, ...] = (
    PaymentMethod.CARD,
    PaymentMethod.PSE,
    PaymentMethod.NEQUI,
    PaymentMethod.CASH_ON_DELIVERY,
)


@dataclass(frozen=True)
class RetryAdvice:
    allowed: bool
    remaining_attempts: int
    suggested_methods: List[PaymentMethod] = field(default_factory=list)
    recommended_method: Optional[PaymentMethod] = None


def can_retry(
    record: PaymentRecord,
    *,
    max_attempts: int = 3,
    available_methods: Sequence[PaymentMethod | str] = DEFAULT_AVAILABLE_METHODS,
) -> RetryAdvice:
    """
    - allowed: failed_attempts < max_attempts
    - suggested_methods: métodos configurados menos el del intento actual,
      conservando el orden
    - recommended_method: el primero sugerido
    """
    methods = [PaymentMethod(m) for m in available_methods]
    suggested = [m for m in methods if m != record.payment_method]
    return RetryAdvice(
        allowed=record.failed_attempts < max_attempts,
        remaining_attempts=max(0, max_attempts - record.failed_attempts),
        suggested_methods=suggested,
        recommended_method=suggested[0] if suggested else None,
    )


def build_retry_url(path_template: str, order_reference: str) -> str:
    """Ruta del storefront para reintentar (p. ej. /checkout/retry/{reference})."""
    return path_template.format(reference=order_reference)


__all__ = ["DEFAULT_AVAILABLE_METHODS", "RetryAdvice", "build_retry_url", "can_retry"]

# Fin del archivo backend/app/modules/payments/facades/checkout/retry_advisor.py
