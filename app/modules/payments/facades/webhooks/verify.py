# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/webhooks/verify.py

Verificación de eventos de Wompi.

Chequeos independientes (funciones puras):
- verify: checksum del cuerpo contra signature.checksum
- validate_event_age: ventana anti-replay sobre `timestamp`
- validate_environment: test/prod según configuración
- validate_header_checksum: x-event-checksum, si viene, igual al del cuerpo

`WompiEventValidator` los compone con toggles de configuración. Cualquier
falla es un rechazo; no hay modo "solo advertir".

Autor: Equipo Storefront
Fecha: 2026-10-05
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Optional

from app.modules.payments.schemas import WompiEvent
from app.modules.payments.services.webhooks.signature_verification import (
    checksums_match,
    compute_checksum,
)
from app.modules.payments.utils.datetime_helpers import epoch_ms

logger = logging.getLogger(__name__)


class VerificationFailure(StrEnum):
    """Razón de rechazo; también es la etiqueta de la métrica."""

    INVALID_SIGNATURE = "invalid_signature"
    HEADER_MISMATCH = "header_checksum_mismatch"
    STALE_EVENT = "stale_event"
    ENVIRONMENT_MISMATCH = "environment_mismatch"

    @property
    def is_authentication(self) -> bool:
        """Falla de autenticación (401) frente a rechazo de seguridad (400)."""
        return self in (VerificationFailure.INVALID_SIGNATURE, VerificationFailure.HEADER_MISMATCH)


def verify(event: WompiEvent, secret: str) -> bool:
    """Recalcula el checksum y lo compara con el del evento."""
    expected = compute_checksum(
        event.data,
        event.signature.properties,
        event.timestamp,
        secret,
    )
    return checksums_match(expected, event.signature.checksum)


def validate_event_age(
    event: WompiEvent,
    max_age_minutes: int = 60,
    now: Optional[datetime] = None,
) -> bool:
    """False si el evento es más viejo que `max_age_minutes`."""
    age_ms = epoch_ms(now) - event.timestamp * 1000
    return age_ms <= max_age_minutes * 60 * 1000


def validate_environment(event: WompiEvent, expected: str) -> bool:
    return event.environment == expected


def validate_header_checksum(event: WompiEvent, header_value: Optional[str]) -> bool:
    """Sin header no hay nada que comparar; con header debe coincidir."""
    if header_value is None:
        return True
    return checksums_match(event.signature.checksum, header_value)


@dataclass(frozen=True)
class WompiEventValidator:
    secret: str
    expected_environment: str
    max_age_minutes: int = 60
    check_age: bool = True
    check_environment: bool = True
    check_header_checksum: bool = True

    def validate(
        self,
        event: WompiEvent,
        *,
        header_checksum: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Optional[VerificationFailure]:
        """
        Ejecuta los chequeos en orden: header, checksum, antigüedad, entorno.

        Returns:
            None si el evento es auténtico y vigente; la razón del rechazo
            en otro caso.
        """
        if self.check_header_checksum and not validate_header_checksum(event, header_checksum):
            return VerificationFailure.HEADER_MISMATCH
        if not verify(event, self.secret):
            return VerificationFailure.INVALID_SIGNATURE
        if self.check_age and not validate_event_age(event, self.max_age_minutes, now=now):
            return VerificationFailure.STALE_EVENT
        if self.check_environment and not validate_environment(event, self.expected_environment):
            return VerificationFailure.ENVIRONMENT_MISMATCH
        return None


__all__ = [
    "VerificationFailure",
    "WompiEventValidator",
    "validate_environment",
    "validate_event_age",
    "validate_header_checksum",
    "verify",
]
