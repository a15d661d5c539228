# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/webhooks/normalize.py

Parseo de eventos webhook de Wompi al sobre validado `WompiEvent`.

El parser nunca lanza: un cuerpo que no se puede decodificar o que no
cumple la forma mínima (event, data, signature, timestamp) devuelve None
y el adaptador responde 400.

Autor: Equipo Storefront
Fecha: 2026-10-05
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import ValidationError

from app.modules.payments.schemas import WompiEvent
from app.modules.payments.services.webhooks.payload_sanitizer import drop_empty, mask_email
from app.modules.payments.utils.datetime_helpers import to_iso8601

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("event", "data", "signature", "timestamp")


def parse_wompi_event(raw_body: bytes | str) -> Optional[WompiEvent]:
    """
    Decodifica y valida un evento de Wompi.

    Returns:
        WompiEvent o None si el cuerpo no es JSON, falta algún campo
        requerido o la forma no es válida.
    """
    try:
        payload = json.loads(raw_body)
    except (ValueError, TypeError) as e:
        logger.warning("wompi_event_invalid_json: %s", str(e)[:200])
        return None

    if not isinstance(payload, dict):
        logger.warning("wompi_event_not_an_object type=%s", type(payload).__name__)
        return None

    missing = [name for name in REQUIRED_FIELDS if not payload.get(name)]
    if missing:
        logger.warning("wompi_event_missing_fields fields=%s", missing)
        return None

    try:
        return WompiEvent.model_validate(payload)
    except ValidationError as e:
        logger.warning(
            "wompi_event_invalid_shape errors=%s",
            [".".join(str(p) for p in err["loc"]) for err in e.errors()],
        )
        return None


def _timestamp_for_log(timestamp: int) -> Any:
    # Epoch fuera de rango (milisegundos, año > 9999): se registra el entero tal cual
    try:
        return to_iso8601(datetime.fromtimestamp(timestamp, tz=timezone.utc))
    except (ValueError, OverflowError, OSError):
        return timestamp


def extract_transaction_info(event: WompiEvent) -> Dict[str, Any]:
    """
    Resumen plano del evento para logs (sin PII en claro).
    """
    tx = event.transaction
    info = {
        "eventType": event.event,
        "environment": event.environment,
        "timestamp": _timestamp_for_log(event.timestamp),
    }
    if tx is None:
        return info
    info.update(
        drop_empty({
            "transactionId": tx.id,
            "reference": tx.reference,
            "status": tx.status,
            "amount": tx.amount_in_cents,
            "currency": tx.currency,
            "paymentMethod": tx.payment_method_type,
            "customerEmail": mask_email(tx.customer_email),
            "statusMessage": tx.status_message,
        })
    )
    return info


__all__ = ["parse_wompi_event", "extract_transaction_info"]
