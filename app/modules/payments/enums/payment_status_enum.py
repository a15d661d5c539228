# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/payment_status_enum.py

Enum de estados internos del pago.
Coincide con los valores que usa la API GraphQL del storefront.

Autor: Equipo Storefront
Fecha: 2026-10-03
"""

from enum import StrEnum


class PaymentStatus(StrEnum):
    """Estado del pago en el ciclo de vida interno."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"

    __db_enum_name__ = "payment_status_enum"

    @property
    def is_final(self) -> bool:
        """
        Estados que nunca se reabren para el mismo registro.

        FAILED no aparece aquí: solo es terminal cuando se agotaron los
        intentos (ver `is_terminal_status`).
        """
        return self in (PaymentStatus.COMPLETED, PaymentStatus.CANCELLED)


def is_terminal_status(
    status: PaymentStatus,
    failed_attempts: int,
    max_attempts: int,
) -> bool:
    """COMPLETED, CANCELLED o FAILED con los intentos agotados."""
    if status.is_final:
        return True
    return status == PaymentStatus.FAILED and failed_attempts >= max_attempts


__all__ = ["PaymentStatus", "is_terminal_status"]

# Fin del archivo backend/app/modules/payments/enums/payment_status_enum.py
