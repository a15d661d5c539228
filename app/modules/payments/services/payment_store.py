# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/payment_store.py

Colaborador de persistencia de pagos.

`PaymentStore` es la interfaz angosta que usan el adaptador de webhooks y
las rutas del storefront. `SqlPaymentStore` es la implementación por
defecto (SQLAlchemy async); `GraphQLPaymentStore` habla con la API del
storefront (ver graphql_payment_store.py).

Cada operación abre su propia sesión y hace commit: el adaptador no
comparte transacciones entre lectura y escritura, por eso la escritura
es condicional (compare-and-set sobre `status`).

Autor: Equipo Storefront
Fecha: 2026-10-04
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.modules.payments.enums import AuditAction, PaymentStatus
from app.modules.payments.exceptions import (
    DuplicatePaymentReferenceError,
    PaymentNotFoundError,
    PaymentStoreError,
    StalePaymentError,
)
from app.modules.payments.repositories import PaymentAuditRepository, PaymentRepository
from app.modules.payments.schemas import AuditEntryData, NewPaymentData, PaymentId, PaymentRecord
from app.modules.payments.utils.datetime_helpers import utcnow

logger = logging.getLogger(__name__)


@runtime_checkable
class PaymentStore(Protocol):
    async def fetch_payment_by_external_reference(self, reference: str) -> Optional[PaymentRecord]:
        ...

    async def update_payment(
        self,
        payment_id: PaymentId,
        fields: Dict[str, Any],
        expected_status: Optional[PaymentStatus] = None,
        audit_entry: Optional[AuditEntryData] = None,
    ) -> PaymentRecord:
        ...

    async def append_audit_entry(self, payment_id: PaymentId, entry: AuditEntryData) -> None:
        ...

    async def list_audit_entries(self, payment_id: PaymentId) -> List[AuditEntryData]:
        ...

    async def fetch_latest_by_order_reference(self, order_reference: str) -> Optional[PaymentRecord]:
        ...

    async def create_payment(self, data: NewPaymentData) -> PaymentRecord:
        ...


class SqlPaymentStore:
    """PaymentStore sobre SQLAlchemy async."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        payment_repo: Optional[PaymentRepository] = None,
        audit_repo: Optional[PaymentAuditRepository] = None,
    ):
        self._session_factory = session_factory
        self.payment_repo = payment_repo or PaymentRepository()
        self.audit_repo = audit_repo or PaymentAuditRepository()

    async def fetch_payment_by_external_reference(self, reference: str) -> Optional[PaymentRecord]:
        try:
            async with self._session_factory() as session:
                payment = await self.payment_repo.get_by_external_reference(session, reference)
                return PaymentRecord.model_validate(payment) if payment else None
        except SQLAlchemyError as e:
            logger.error("payment_store_fetch_failed reference=%s: %s", reference, e)
            raise PaymentStoreError(str(e)) from e

    async def fetch_latest_by_order_reference(self, order_reference: str) -> Optional[PaymentRecord]:
        try:
            async with self._session_factory() as session:
                payment = await self.payment_repo.get_latest_by_order(session, order_reference)
                return PaymentRecord.model_validate(payment) if payment else None
        except SQLAlchemyError as e:
            logger.error("payment_store_fetch_failed order=%s: %s", order_reference, e)
            raise PaymentStoreError(str(e)) from e

    async def update_payment(
        self,
        payment_id: PaymentId,
        fields: Dict[str, Any],
        expected_status: Optional[PaymentStatus] = None,
        audit_entry: Optional[AuditEntryData] = None,
    ) -> PaymentRecord:
        """
        Aplica `fields` y, si viene, agrega la entrada de bitácora en la misma
        transacción.

        Raises:
            StalePaymentError: el estado ya no es `expected_status`
            PaymentNotFoundError: el id no existe
            PaymentStoreError: falla de base de datos
        """
        try:
            async with self._session_factory() as session:
                updated = await self.payment_repo.update_fields(
                    session,
                    payment_id,
                    fields,
                    expected_status=expected_status,
                )
                if not updated:
                    await session.rollback()
                    if expected_status is not None:
                        raise StalePaymentError(payment_id, str(expected_status))
                    raise PaymentNotFoundError(str(payment_id))

                if audit_entry is not None:
                    await self.audit_repo.create(
                        session,
                        payment_id=payment_id,
                        **audit_entry.to_fields(),
                    )
                await session.commit()

                payment = await self.payment_repo.get(session, payment_id)
                await session.refresh(payment)
                return PaymentRecord.model_validate(payment)
        except SQLAlchemyError as e:
            logger.error("payment_store_update_failed payment_id=%s: %s", payment_id, e)
            raise PaymentStoreError(str(e)) from e

    async def append_audit_entry(self, payment_id: PaymentId, entry: AuditEntryData) -> None:
        try:
            async with self._session_factory() as session:
                await self.audit_repo.create(session, payment_id=payment_id, **entry.to_fields())
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("payment_store_audit_failed payment_id=%s: %s", payment_id, e)
            raise PaymentStoreError(str(e)) from e

    async def list_audit_entries(self, payment_id: PaymentId) -> List[AuditEntryData]:
        try:
            async with self._session_factory() as session:
                rows = await self.audit_repo.list_by_payment(session, payment_id)
                return [AuditEntryData.model_validate(row) for row in rows]
        except SQLAlchemyError as e:
            logger.error("payment_store_audit_list_failed payment_id=%s: %s", payment_id, e)
            raise PaymentStoreError(str(e)) from e

    async def create_payment(self, data: NewPaymentData) -> PaymentRecord:
        """Crea el registro PENDING y su entrada CREATED."""
        try:
            async with self._session_factory() as session:
                payment = await self.payment_repo.create(
                    session,
                    status=PaymentStatus.PENDING,
                    **data.model_dump(),
                )
                await self.audit_repo.create(
                    session,
                    payment_id=payment.id,
                    **AuditEntryData(
                        action=AuditAction.CREATED,
                        new_status=PaymentStatus.PENDING,
                        payment_method=str(data.payment_method),
                        processed_at=utcnow(),
                    ).to_fields(),
                )
                await session.commit()
                await session.refresh(payment)
                return PaymentRecord.model_validate(payment)
        except IntegrityError as e:
            raise DuplicatePaymentReferenceError(data.external_reference) from e
        except SQLAlchemyError as e:
            logger.error("payment_store_create_failed reference=%s: %s", data.external_reference, e)
            raise PaymentStoreError(str(e)) from e


__all__ = ["PaymentStore", "SqlPaymentStore"]

# Fin del archivo backend/app/modules/payments/services/payment_store.py
