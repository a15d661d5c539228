# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/repositories/payment_audit_repository.py

Repositorio append-only para la bitácora de pagos.

Solo expone inserción y lectura: las filas no se actualizan ni se borran.

Autor: Equipo Storefront
Fecha: 2026-10-04
"""

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.payments.models.payment_audit_models import PaymentAuditEntry


class PaymentAuditRepository(BaseRepository[PaymentAuditEntry]):
    def __init__(self) -> None:
        super().__init__(PaymentAuditEntry)

    async def list_by_payment(
        self,
        session: AsyncSession,
        payment_id: int,
    ) -> Sequence[PaymentAuditEntry]:
        """Entradas del pago en orden de inserción."""
        return await self.all_where(
            session,
            PaymentAuditEntry.payment_id == payment_id,
            order_by=(PaymentAuditEntry.id.asc(),),
        )


__all__ = ["PaymentAuditRepository"]

# Fin del archivo backend/app/modules/payments/repositories/payment_audit_repository.py
