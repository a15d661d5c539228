# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/schemas/payment_record_schemas.py

Vista de dominio del registro de pago.

El motor de reconciliación trabaja sobre `PaymentRecord` y no sobre el
modelo ORM: así los dos backends de persistencia (SQL y GraphQL)
entregan el mismo tipo.

Autor: Equipo Storefront
Fecha: 2026-10-04
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from app.modules.payments.enums import (
    AuditAction,
    PaymentMethod,
    PaymentProvider,
    PaymentStatus,
)


# Entero en SQL; los IDs de la API GraphQL llegan como texto
PaymentId = Union[int, str]


class PaymentRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: PaymentId
    external_reference: str
    order_reference: str
    amount: int = Field(..., description="Monto en unidades enteras de la moneda.")
    currency: str
    status: PaymentStatus
    provider: PaymentProvider
    payment_method: PaymentMethod
    provider_transaction_id: Optional[str] = None
    reference_number: Optional[str] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    failed_attempts: int = 0
    customer_email: Optional[str] = None
    completed_at: Optional[datetime] = None
    failed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def amount_in_cents(self) -> int:
        """Monto en la unidad mínima que reporta el proveedor."""
        return self.amount * 100

    @property
    def last_updated(self) -> Optional[datetime]:
        return self.updated_at or self.created_at


class AuditEntryData(BaseModel):
    """Fila de bitácora lista para agregarse (sin id ni payment_id)."""

    model_config = ConfigDict(from_attributes=True)

    action: AuditAction
    old_status: Optional[PaymentStatus] = None
    new_status: Optional[PaymentStatus] = None
    provider_event: Optional[str] = None
    transaction_id: Optional[str] = None
    raw_status: Optional[str] = None
    status_message: Optional[str] = None
    payment_method: Optional[str] = None
    environment: Optional[str] = None
    processed_at: datetime

    def to_fields(self) -> Dict[str, Any]:
        return self.model_dump()


class NewPaymentData(BaseModel):
    """Datos para crear un registro PENDING (checkout o reintento)."""

    external_reference: str
    order_reference: str
    amount: int = Field(..., gt=0)
    currency: str
    provider: PaymentProvider = PaymentProvider.WOMPI
    payment_method: PaymentMethod
    customer_email: Optional[str] = None
    failed_attempts: int = Field(default=0, ge=0)


__all__ = ["AuditEntryData", "NewPaymentData", "PaymentId", "PaymentRecord"]

# Fin del archivo backend/app/modules/payments/schemas/payment_record_schemas.py
