# -*- coding: utf-8 -*-
"""
backend/app/shared/database/repository.py

Repositorio base async para los modelos del backend de pagos.

Las subclases fijan el modelo y construyen sus filtros; la sesión siempre
la pasa quien llama, que también decide el commit.

Autor: Equipo Storefront
Fecha: 2026-10-02
"""

from typing import Any, Generic, Optional, Sequence, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

ModelT = TypeVar("ModelT")


class BaseRepository(Generic[ModelT]):
    def __init__(self, model: Type[ModelT]):
        self.model = model

    async def get(self, session: AsyncSession, obj_id: Any) -> Optional[ModelT]:
        return await session.get(self.model, obj_id)

    async def create(self, session: AsyncSession, **values: Any) -> ModelT:
        """Agrega la fila y hace flush para obtener el id generado."""
        obj = self.model(**values)
        session.add(obj)
        await session.flush()
        return obj

    async def first_where(
        self,
        session: AsyncSession,
        *criteria: ColumnElement[bool],
        order_by: Sequence[Any] = (),
    ) -> Optional[ModelT]:
        stmt = select(self.model).where(*criteria).order_by(*order_by).limit(1)
        result = await session.execute(stmt)
        return result.scalars().first()

    async def all_where(
        self,
        session: AsyncSession,
        *criteria: ColumnElement[bool],
        order_by: Sequence[Any] = (),
    ) -> Sequence[ModelT]:
        stmt = select(self.model).where(*criteria).order_by(*order_by)
        result = await session.execute(stmt)
        return result.scalars().all()


__all__ = ["BaseRepository"]

# Fin del archivo backend/app/shared/database/repository.py
