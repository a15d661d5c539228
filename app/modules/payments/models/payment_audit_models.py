# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/models/payment_audit_models.py

Bitácora append-only de un pago.

Cada transición, evento conflictivo o evento tardío agrega una fila;
ninguna fila se actualiza ni se borra. Sustituye al antiguo campo
`notes` que se sobrescribía en cada actualización.

Autor: Equipo Storefront
Fecha: 2026-10-03
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base, as_str_enum
from app.modules.payments.enums import AuditAction, PaymentStatus
from .payment_models import PK_TYPE

if TYPE_CHECKING:
    from .payment_models import Payment


class PaymentAuditEntry(Base):
    __tablename__ = "payment_audit_log"

    id: Mapped[int] = mapped_column(PK_TYPE, primary_key=True, autoincrement=True)

    payment_id: Mapped[int] = mapped_column(
        ForeignKey("payments.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    action: Mapped[AuditAction] = mapped_column(as_str_enum(AuditAction), nullable=False)

    old_status: Mapped[Optional[PaymentStatus]] = mapped_column(
        as_str_enum(PaymentStatus, name="audit_old_status_enum"),
        nullable=True,
    )
    new_status: Mapped[Optional[PaymentStatus]] = mapped_column(
        as_str_enum(PaymentStatus, name="audit_new_status_enum"),
        nullable=True,
    )

    provider_event: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    transaction_id: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    raw_status: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    status_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    payment_method: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    environment: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)

    processed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    payment: Mapped["Payment"] = relationship("Payment", back_populates="audit_entries")

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return f"<PaymentAuditEntry id={self.id} payment={self.payment_id} action={self.action}>"

# Fin del archivo backend/app/modules/payments/models/payment_audit_models.py
