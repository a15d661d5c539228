# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/webhooks/constants.py

Constantes para webhooks de Wompi.

Autor: Equipo Storefront
Fecha: 2026-10-04
"""

# Eventos de Wompi
WOMPI_EVENT_TRANSACTION_UPDATED = "transaction.updated"
WOMPI_EVENT_NEQUI_TOKEN_UPDATED = "nequi_token.updated"
WOMPI_EVENT_BANCOLOMBIA_TOKEN_UPDATED = "bancolombia_transfer_token.updated"

WOMPI_DEFAULT_ALLOWED_EVENTS = frozenset({
    WOMPI_EVENT_TRANSACTION_UPDATED,
    WOMPI_EVENT_NEQUI_TOKEN_UPDATED,
    WOMPI_EVENT_BANCOLOMBIA_TOKEN_UPDATED,
})

# Estados de transacción de Wompi
WOMPI_STATUS_APPROVED = "APPROVED"
WOMPI_STATUS_DECLINED = "DECLINED"
WOMPI_STATUS_VOIDED = "VOIDED"
WOMPI_STATUS_ERROR = "ERROR"
WOMPI_STATUS_PENDING = "PENDING"
WOMPI_STATUS_EXPIRED = "EXPIRED"

# Header opcional con el checksum del evento
WOMPI_CHECKSUM_HEADER = "x-event-checksum"

__all__ = [
    "WOMPI_EVENT_TRANSACTION_UPDATED",
    "WOMPI_EVENT_NEQUI_TOKEN_UPDATED",
    "WOMPI_EVENT_BANCOLOMBIA_TOKEN_UPDATED",
    "WOMPI_DEFAULT_ALLOWED_EVENTS",
    "WOMPI_STATUS_APPROVED",
    "WOMPI_STATUS_DECLINED",
    "WOMPI_STATUS_VOIDED",
    "WOMPI_STATUS_ERROR",
    "WOMPI_STATUS_PENDING",
    "WOMPI_STATUS_EXPIRED",
    "WOMPI_CHECKSUM_HEADER",
]

# Fin del archivo backend/app/modules/payments/facades/webhooks/constants.py
