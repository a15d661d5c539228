# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/reconciliation/failure_messages.py

Mensajes para el cliente cuando un pago falla.

El vocabulario crudo del proveedor (DECLINED, insufficient_funds, ...)
nunca llega al cliente: se traduce aquí.

Autor: Equipo Storefront
Fecha: 2026-10-05
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from app.modules.payments.enums import PaymentStatus

DEFAULT_FAILURE_REASON = "Pago no procesado correctamente"

FAILURE_REASONS = {
    "DECLINED": "Tu tarjeta fue rechazada por el banco emisor",
    "ERROR": "Ocurrió un error técnico durante el procesamiento",
    "VOIDED": "La transacción fue anulada",
    "EXPIRED": "El tiempo para completar el pago expiró",
}

DECLINED_ACTIONS = {
    "insufficient_funds": "Verifica que tengas fondos suficientes o usa otra tarjeta",
    "card_expired": "Tu tarjeta ha expirado, usa una tarjeta vigente",
    "invalid_card": "Verifica los datos de tu tarjeta o usa otra tarjeta",
}
DECLINED_DEFAULT_ACTION = "Contacta a tu banco o intenta con otra tarjeta"
ERROR_ACTION = "Intenta nuevamente en unos minutos o usa otro método de pago"
DEFAULT_ACTION = "Intenta nuevamente o contacta nuestro soporte"

# Mensajes de estado para el endpoint de polling
STATUS_MESSAGES = {
    PaymentStatus.PENDING: "Transacción en proceso de verificación",
    PaymentStatus.COMPLETED: "Transacción aprobada exitosamente",
    PaymentStatus.FAILED: "Error al procesar la transacción",
    PaymentStatus.CANCELLED: "Transacción anulada",
}


@dataclass(frozen=True)
class HumanizedFailure:
    reason: str
    suggested_action: str


def humanize_failure(status: Optional[str], status_message: Optional[str] = None) -> HumanizedFailure:
    """
    Razón y acción sugerida a partir del estado crudo del proveedor.

    `status_message` solo se usa para elegir la acción de DECLINED y como
    razón de respaldo cuando el estado no tiene texto propio.
    """
    raw = (status or "").strip().upper()
    reason = FAILURE_REASONS.get(raw) or status_message or DEFAULT_FAILURE_REASON

    if raw == "DECLINED":
        action = DECLINED_DEFAULT_ACTION
        message = (status_message or "").lower()
        for code, text in DECLINED_ACTIONS.items():
            if code in message:
                action = text
                break
    elif raw == "ERROR":
        action = ERROR_ACTION
    else:
        action = DEFAULT_ACTION

    return HumanizedFailure(reason=reason, suggested_action=action)


def status_message_for(status: PaymentStatus, error_code: Optional[str] = None) -> str:
    """
    Texto del endpoint de estado.

    Para FAILED usa el estado crudo guardado en error_code
    (p. ej. WOMPI_DECLINED) para dar la razón legible.
    """
    if status == PaymentStatus.FAILED and error_code:
        raw = error_code.rsplit("_", 1)[-1]
        if raw in FAILURE_REASONS:
            return FAILURE_REASONS[raw]
    return STATUS_MESSAGES[status]


__all__ = [
    "HumanizedFailure",
    "STATUS_MESSAGES",
    "humanize_failure",
    "status_message_for",
]

# Fin del archivo backend/app/modules/payments/facades/reconciliation/failure_messages.py
