# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/webhooks/providers.py

Tabla de estrategias de webhook por proveedor.

Cada proveedor aporta parseo, verificación, traducción de estados y
clasificación de eventos. El adaptador resuelve la estrategia una vez por
request; un proveedor sin estrategia es UnsupportedProviderError.

Autor: Equipo Storefront
Fecha: 2026-10-05
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Optional

from app.modules.payments.enums import PaymentProvider, PaymentStatus
from app.modules.payments.exceptions import UnsupportedProviderError
from app.modules.payments.facades.reconciliation.rules import map_wompi_status
from app.modules.payments.schemas import WompiEvent
from .helpers import should_process_event
from .normalize import parse_wompi_event
from .verify import WompiEventValidator


@dataclass(frozen=True)
class ProviderStrategy:
    provider: PaymentProvider
    error_prefix: str
    parse: Callable[[bytes | str], Optional[WompiEvent]]
    build_validator: Callable[..., WompiEventValidator]
    map_status: Callable[[Optional[str]], PaymentStatus]
    should_process: Callable[[str, Optional[Iterable[str]]], bool]

    @property
    def name(self) -> str:
        return self.provider.value.lower()


WOMPI_STRATEGY = ProviderStrategy(
    provider=PaymentProvider.WOMPI,
    error_prefix="WOMPI",
    parse=parse_wompi_event,
    build_validator=WompiEventValidator,
    map_status=map_wompi_status,
    should_process=should_process_event,
)

PROVIDER_STRATEGIES: Mapping[PaymentProvider, ProviderStrategy] = {
    PaymentProvider.WOMPI: WOMPI_STRATEGY,
}


def get_provider_strategy(provider: PaymentProvider | str) -> ProviderStrategy:
    """
    Raises:
        UnsupportedProviderError: proveedor desconocido o sin estrategia
    """
    try:
        key = PaymentProvider(str(provider).upper())
    except ValueError as e:
        raise UnsupportedProviderError(str(provider)) from e
    strategy = PROVIDER_STRATEGIES.get(key)
    if strategy is None:
        raise UnsupportedProviderError(key.value)
    return strategy


__all__ = ["PROVIDER_STRATEGIES", "ProviderStrategy", "WOMPI_STRATEGY", "get_provider_strategy"]
