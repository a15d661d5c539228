# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/repositories/payment_repository.py

Repositorio para la tabla payments.

Responsabilidades:
- Búsqueda por referencia externa (llave de correlación con el proveedor)
- Último pago de una orden (estado y reintentos)
- Actualización condicional por estado (compare-and-set)

Autor: Equipo Storefront
Fecha: 2026-10-04
"""

from typing import Any, Dict, Optional

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.payments.enums import PaymentStatus
from app.modules.payments.models.payment_models import Payment

# Campos que ningún webhook puede tocar
IMMUTABLE_FIELDS = frozenset({"id", "external_reference", "amount", "currency", "created_at"})


class PaymentRepository(BaseRepository[Payment]):
    def __init__(self) -> None:
        super().__init__(Payment)

    async def get_by_external_reference(
        self,
        session: AsyncSession,
        external_reference: str,
    ) -> Optional[Payment]:
        return await self.first_where(session, Payment.external_reference == external_reference)

    async def get_latest_by_order(
        self,
        session: AsyncSession,
        order_reference: str,
    ) -> Optional[Payment]:
        """El pago más reciente de la orden (el reintento vigente, si lo hay)."""
        return await self.first_where(
            session,
            Payment.order_reference == order_reference,
            order_by=(Payment.created_at.desc(), Payment.id.desc()),
        )

    async def update_fields(
        self,
        session: AsyncSession,
        payment_id: int,
        fields: Dict[str, Any],
        *,
        expected_status: Optional[PaymentStatus] = None,
    ) -> bool:
        """
        UPDATE ... WHERE id = :id [AND status = :expected].

        Returns:
            True si se actualizó una fila; False si el estado ya no era el esperado
            (o el id no existe).
        """
        forbidden = IMMUTABLE_FIELDS.intersection(fields)
        if forbidden:
            raise ValueError(f"Campos inmutables en update: {sorted(forbidden)}")

        stmt = update(Payment).where(Payment.id == payment_id)
        if expected_status is not None:
            stmt = stmt.where(Payment.status == expected_status)
        stmt = stmt.values(**fields).execution_options(synchronize_session=False)

        result = await session.execute(stmt)
        return (result.rowcount or 0) > 0


__all__ = ["IMMUTABLE_FIELDS", "PaymentRepository"]

# Fin del archivo backend/app/modules/payments/repositories/payment_repository.py
