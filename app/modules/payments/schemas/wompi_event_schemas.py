# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/schemas/wompi_event_schemas.py

Sobre validado de los eventos webhook de Wompi.

Un evento tiene la forma:

    {
      "event": "transaction.updated",
      "data": {"transaction": {...}},
      "environment": "prod",
      "signature": {"properties": ["transaction.id", ...], "checksum": "..."},
      "timestamp": 1530291411,
      "sent_at": "2018-07-20T16:45:05.000Z"
    }

`data` se conserva tal cual llega: el checksum se calcula sobre las rutas
que indica `signature.properties`, así que no se normaliza.

Autor: Equipo Storefront
Fecha: 2026-10-04
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class WompiSignature(BaseModel):
    properties: List[str] = Field(default_factory=list)
    checksum: str = Field(..., min_length=1)


class WompiTransaction(BaseModel):
    """Transacción embebida en `data.transaction`."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1)
    reference: str = Field(..., min_length=1)
    amount_in_cents: int
    currency: str = Field(..., min_length=1)
    status: str = ""
    status_message: Optional[str] = None
    payment_method_type: Optional[str] = None
    customer_email: Optional[str] = None
    created_at: Optional[str] = None
    finalized_at: Optional[str] = None


class WompiEvent(BaseModel):
    """Evento entrante; nunca se persiste tal cual."""

    event: str = Field(..., min_length=1)
    data: Dict[str, Any]
    environment: str = ""
    signature: WompiSignature
    timestamp: int
    sent_at: Optional[str] = None

    transaction: Optional[WompiTransaction] = Field(default=None, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _extract_transaction(cls, values: Any) -> Any:
        # Solo data.transaction está firmado: un "transaction" de primer nivel se descarta.
        # Los eventos de tokens (nequi/bancolombia) no traen transaction.
        if not isinstance(values, dict):
            return values
        values = {key: value for key, value in values.items() if key != "transaction"}
        data = values.get("data")
        if isinstance(data, dict) and isinstance(data.get("transaction"), dict):
            values["transaction"] = data["transaction"]
        return values


__all__ = ["WompiEvent", "WompiSignature", "WompiTransaction"]

# Fin del archivo backend/app/modules/payments/schemas/wompi_event_schemas.py
