# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/models/payment_models.py

Modelo ORM para la tabla payments (registro de pago del storefront).

Invariantes del registro:
- external_reference es único e inmutable; es la llave de correlación con
  `transaction.reference` de los eventos del proveedor.
- amount / currency se fijan al crear y ningún webhook los modifica.
- Nunca se borra: es un registro de auditoría.

Autor: Equipo Storefront
Fecha: 2026-10-03
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import BigInteger, DateTime, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base, as_str_enum
from app.modules.payments.enums import (
    Currency,
    PaymentMethod,
    PaymentProvider,
    PaymentStatus,
)

if TYPE_CHECKING:
    from .payment_audit_models import PaymentAuditEntry


# BIGINT en Postgres, INTEGER en SQLite (necesario para autoincrement)
PK_TYPE = BigInteger().with_variant(Integer, "sqlite")


class Payment(Base):
    """Pago iniciado desde el checkout y conciliado por webhooks."""

    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(PK_TYPE, primary_key=True, autoincrement=True)

    external_reference: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        unique=True,
        doc="Referencia enviada al proveedor en el checkout (transaction.reference).",
    )

    order_reference: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        index=True,
        doc="Orden del storefront; los reintentos crean otro pago con la misma orden.",
    )

    provider: Mapped[PaymentProvider] = mapped_column(
        as_str_enum(PaymentProvider),
        nullable=False,
    )

    payment_method: Mapped[PaymentMethod] = mapped_column(
        as_str_enum(PaymentMethod),
        nullable=False,
    )

    status: Mapped[PaymentStatus] = mapped_column(
        as_str_enum(PaymentStatus),
        nullable=False,
        index=True,
    )

    # Monto entero en unidades de la moneda (pesos); Wompi reporta x100
    amount: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        doc="Monto cobrado en unidades enteras de la moneda.",
    )

    currency: Mapped[Currency] = mapped_column(
        as_str_enum(Currency),
        nullable=False,
    )

    customer_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    provider_transaction_id: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        doc="ID de transacción asignado por el proveedor.",
    )

    reference_number: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    error_code: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    error_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    failed_attempts: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    failed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    cancelled_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    audit_entries: Mapped[List["PaymentAuditEntry"]] = relationship(
        "PaymentAuditEntry",
        back_populates="payment",
        lazy="noload",
        order_by="PaymentAuditEntry.id",
    )

    __table_args__ = (
        Index("ix_payments_order_created", "order_reference", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Payment id={self.id} ref={self.external_reference} "
            f"provider={self.provider} status={self.status}>"
        )

# Fin del archivo backend/app/modules/payments/models/payment_models.py
