# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/schemas/checkout_schemas.py

Esquemas Pydantic para iniciar un pago desde el checkout del storefront.

El backend crea el registro PENDING y devuelve lo necesario para abrir
el widget de Wompi (referencia, monto en centavos, firma de integridad).

Autor: Equipo Storefront
Fecha: 2026-10-04
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.modules.payments.enums import Currency, PaymentMethod, PaymentProvider, PaymentStatus


class PaymentIntentRequest(BaseModel):
    """
    Request para iniciar un pago de una orden.

    - `amount` va en unidades enteras de la moneda (pesos)
    - `external_reference` es opcional; si falta el backend genera una
    """

    order_reference: str = Field(..., min_length=1, max_length=128)
    amount: int = Field(..., gt=0, description="Monto en unidades enteras de la moneda.")
    currency: Currency = Field(default=Currency.COP)
    payment_method: PaymentMethod = Field(default=PaymentMethod.CARD)
    provider: PaymentProvider = Field(default=PaymentProvider.WOMPI)
    customer_email: Optional[str] = Field(default=None, max_length=255)
    external_reference: Optional[str] = Field(
        default=None,
        max_length=128,
        description="Referencia a enviar al proveedor; debe ser única.",
    )

    @field_validator("order_reference", "external_reference")
    @classmethod
    def _strip(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("La referencia no puede estar vacía")
        return v


class PaymentIntentResponse(BaseModel):
    """Registro creado más los datos para el widget del proveedor."""

    payment_id: int
    external_reference: str
    order_reference: str
    status: PaymentStatus
    provider: PaymentProvider
    payment_method: PaymentMethod
    amount: int
    amount_in_cents: int
    currency: str
    integrity_signature: Optional[str] = Field(
        default=None,
        description="Firma de integridad del widget; None si no hay secreto configurado.",
    )
    public_key: Optional[str] = None
    checkout_url: Optional[str] = None


__all__ = ["PaymentIntentRequest", "PaymentIntentResponse"]

# Fin del archivo backend/app/modules/payments/schemas/checkout_schemas.py
