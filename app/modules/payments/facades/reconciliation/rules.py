# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/reconciliation/rules.py

Traducción de estados del proveedor al enum interno PaymentStatus.

Autor: Equipo Storefront
Fecha: 2026-10-05
"""

import logging
from typing import Optional

from app.modules.payments.enums import PaymentStatus
from app.modules.payments.facades.webhooks.constants import (
    WOMPI_STATUS_APPROVED,
    WOMPI_STATUS_DECLINED,
    WOMPI_STATUS_ERROR,
    WOMPI_STATUS_EXPIRED,
    WOMPI_STATUS_PENDING,
    WOMPI_STATUS_VOIDED,
)

logger = logging.getLogger(__name__)

WOMPI_STATUS_MAP = {
    WOMPI_STATUS_APPROVED: PaymentStatus.COMPLETED,
    WOMPI_STATUS_DECLINED: PaymentStatus.FAILED,
    WOMPI_STATUS_ERROR: PaymentStatus.FAILED,
    WOMPI_STATUS_VOIDED: PaymentStatus.CANCELLED,
    WOMPI_STATUS_PENDING: PaymentStatus.PENDING,
}

# Estados conocidos que no tienen traducción propia
_KNOWN_PENDING_ALIASES = frozenset({WOMPI_STATUS_EXPIRED, ""})


def map_wompi_status(status: Optional[str]) -> PaymentStatus:
    """
    Normaliza el status de Wompi a nuestro enum PaymentStatus.

    Función total: cualquier valor desconocido cae en PENDING (y se registra).
    """
    normalized = (status or "").strip().upper()
    mapped = WOMPI_STATUS_MAP.get(normalized)
    if mapped is not None:
        return mapped
    if normalized not in _KNOWN_PENDING_ALIASES:
        logger.warning("wompi_unknown_status status=%r mapped_to=PENDING", status)
    return PaymentStatus.PENDING


__all__ = ["WOMPI_STATUS_MAP", "map_wompi_status"]

# Fin del archivo backend/app/modules/payments/facades/reconciliation/rules.py
