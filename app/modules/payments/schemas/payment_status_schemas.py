# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/schemas/payment_status_schemas.py

Schemas del endpoint de estado de pago por orden (polling del storefront).

Autor: Equipo Storefront
Fecha: 2026-10-04
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.modules.payments.enums import PaymentStatus


class OrderPaymentStatusResponse(BaseModel):
    """
    Estado del último pago de la orden.

    Contrato con el storefront:
    - status es siempre uno de PENDING/COMPLETED/FAILED/CANCELLED
    - status_message es texto para el cliente, nunca el vocabulario del proveedor
    - is_final=False → seguir haciendo polling
    """

    order_reference: str
    status: PaymentStatus
    status_message: str = Field(..., description="Mensaje legible para el cliente.")
    transaction_id: Optional[str] = Field(
        default=None,
        description="ID de la transacción en el proveedor, si ya existe.",
    )
    is_final: bool
    last_updated: Optional[datetime] = None


__all__ = ["OrderPaymentStatusResponse"]

# Fin del archivo backend/app/modules/payments/schemas/payment_status_schemas.py
