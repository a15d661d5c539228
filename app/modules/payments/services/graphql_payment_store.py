# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/graphql_payment_store.py

PaymentStore sobre la API GraphQL del storefront.

Operaciones usadas:
- query paymentByReference(reference)
- query payments(filter: {orderId}, pagination: {take: 1, orderBy: "createdAt_desc"})
- mutation updatePayment(id, input)
- mutation createPayment(input)
- mutation createPaymentLog(input) / query paymentLogs(paymentId)

LIMITACIÓN: la API no expone una actualización condicional. Antes de
mutar se vuelve a leer el pago y se compara el estado esperado; esto
reduce la ventana de carrera pero no la cierra.

Timeouts explícitos con httpx.Timeout (connect 3s, read configurable).

Autor: Equipo Storefront
Fecha: 2026-10-05
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError
from pydantic.alias_generators import to_camel, to_snake

from app.modules.payments.enums import AuditAction, PaymentStatus
from app.modules.payments.exceptions import (
    PaymentNotFoundError,
    PaymentStoreError,
    StalePaymentError,
)
from app.modules.payments.schemas import AuditEntryData, NewPaymentData, PaymentId, PaymentRecord
from app.modules.payments.utils.datetime_helpers import to_iso8601, utcnow

logger = logging.getLogger(__name__)


PAYMENT_FIELDS = """
      id
      externalReference
      orderId
      status
      amount
      currency
      provider
      paymentMethod
      providerTransactionId
      referenceNumber
      errorCode
      errorMessage
      failedAttempts
      customerEmail
      completedAt
      failedAt
      cancelledAt
      createdAt
      updatedAt
"""

GET_PAYMENT_BY_REFERENCE = f"""
  query GetPaymentByReference($reference: String!) {{
    paymentByReference(reference: $reference) {{{PAYMENT_FIELDS}    }}
  }}
"""

GET_PAYMENT_BY_ID = f"""
  query GetPayment($id: ID!) {{
    payment(id: $id) {{{PAYMENT_FIELDS}    }}
  }}
"""

GET_LATEST_ORDER_PAYMENT = f"""
  query GetOrderPayments($orderId: ID!) {{
    payments(filter: {{ orderId: $orderId }}, pagination: {{ take: 1, orderBy: "createdAt_desc" }}) {{{PAYMENT_FIELDS}    }}
  }}
"""

UPDATE_PAYMENT = f"""
  mutation UpdatePayment($id: ID!, $input: UpdatePaymentInput!) {{
    updatePayment(id: $id, input: $input) {{{PAYMENT_FIELDS}    }}
  }}
"""

CREATE_PAYMENT = f"""
  mutation CreatePayment($input: CreatePaymentInput!) {{
    createPayment(input: $input) {{{PAYMENT_FIELDS}    }}
  }}
"""

CREATE_PAYMENT_LOG = """
  mutation CreatePaymentLog($input: CreatePaymentLogInput!) {
    createPaymentLog(input: $input) { id }
  }
"""

GET_PAYMENT_LOGS = """
  query GetPaymentLogs($paymentId: ID!) {
    paymentLogs(paymentId: $paymentId) {
      action
      oldStatus
      newStatus
      providerEvent
      transactionId
      rawStatus
      statusMessage
      paymentMethod
      environment
      processedAt
    }
  }
"""

# La API identifica la orden como orderId
_INBOUND_RENAMES = {"order_id": "order_reference"}
_OUTBOUND_RENAMES = {"order_reference": "orderId"}


def _to_snake_keys(node: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in node.items():
        snake = to_snake(key)
        out[_INBOUND_RENAMES.get(snake, snake)] = value
    return out


def _to_camel_input(fields: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in fields.items():
        if hasattr(value, "isoformat"):
            value = to_iso8601(value)
        elif isinstance(value, PaymentStatus | AuditAction):
            value = value.value
        out[_OUTBOUND_RENAMES.get(key, to_camel(key))] = value
    return out


def build_graphql_client(
    api_url: str,
    *,
    token: Optional[str] = None,
    timeout_seconds: float = 3.0,
) -> httpx.AsyncClient:
    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return httpx.AsyncClient(
        base_url=api_url,
        headers=headers,
        timeout=httpx.Timeout(connect=3.0, read=timeout_seconds, write=timeout_seconds, pool=3.0),
    )


class GraphQLPaymentStore:
    """PaymentStore que delega en la API GraphQL del storefront."""

    def __init__(self, client: httpx.AsyncClient, *, path: str = ""):
        self._client = client
        self._path = path

    async def _execute(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = await self._client.post(
                self._path,
                json={"query": query, "variables": variables},
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("graphql_request_failed: %s", e)
            raise PaymentStoreError(f"GraphQL request failed: {e}") from e

        errors = payload.get("errors")
        if errors:
            message = "; ".join(str(err.get("message", err)) for err in errors)
            logger.error("graphql_errors: %s", message)
            raise PaymentStoreError(f"GraphQL errors: {message}")
        return payload.get("data") or {}

    @staticmethod
    def _record(node: Optional[Dict[str, Any]]) -> Optional[PaymentRecord]:
        if not node:
            return None
        try:
            return PaymentRecord.model_validate(_to_snake_keys(node))
        except ValidationError as e:
            raise PaymentStoreError(f"Unexpected payment shape from GraphQL: {e}") from e

    async def fetch_payment_by_external_reference(self, reference: str) -> Optional[PaymentRecord]:
        data = await self._execute(GET_PAYMENT_BY_REFERENCE, {"reference": reference})
        return self._record(data.get("paymentByReference"))

    async def fetch_latest_by_order_reference(self, order_reference: str) -> Optional[PaymentRecord]:
        data = await self._execute(GET_LATEST_ORDER_PAYMENT, {"orderId": order_reference})
        nodes = data.get("payments") or []
        return self._record(nodes[0]) if nodes else None

    async def update_payment(
        self,
        payment_id: PaymentId,
        fields: Dict[str, Any],
        expected_status: Optional[PaymentStatus] = None,
        audit_entry: Optional[AuditEntryData] = None,
    ) -> PaymentRecord:
        if expected_status is not None:
            current = await self._fetch_by_id(payment_id)
            if current is None:
                raise PaymentNotFoundError(str(payment_id))
            if current.status != expected_status:
                raise StalePaymentError(payment_id, str(expected_status))

        data = await self._execute(
            UPDATE_PAYMENT,
            {"id": str(payment_id), "input": _to_camel_input(fields)},
        )
        record = self._record(data.get("updatePayment"))
        if record is None:
            raise PaymentNotFoundError(str(payment_id))

        if audit_entry is not None:
            await self.append_audit_entry(payment_id, audit_entry)
        return record

    async def _fetch_by_id(self, payment_id: PaymentId) -> Optional[PaymentRecord]:
        data = await self._execute(GET_PAYMENT_BY_ID, {"id": str(payment_id)})
        return self._record(data.get("payment"))

    async def append_audit_entry(self, payment_id: PaymentId, entry: AuditEntryData) -> None:
        payload = {"paymentId": str(payment_id), **_to_camel_input(entry.to_fields())}
        await self._execute(CREATE_PAYMENT_LOG, {"input": payload})

    async def list_audit_entries(self, payment_id: PaymentId) -> List[AuditEntryData]:
        data = await self._execute(GET_PAYMENT_LOGS, {"paymentId": str(payment_id)})
        return [
            AuditEntryData.model_validate(_to_snake_keys(node))
            for node in data.get("paymentLogs") or []
        ]

    async def create_payment(self, data: NewPaymentData) -> PaymentRecord:
        fields = data.model_dump(mode="json")
        fields["status"] = PaymentStatus.PENDING.value
        result = await self._execute(CREATE_PAYMENT, {"input": _to_camel_input(fields)})
        record = self._record(result.get("createPayment"))
        if record is None:
            raise PaymentStoreError("createPayment returned no payment")

        await self.append_audit_entry(
            record.id,
            AuditEntryData(
                action=AuditAction.CREATED,
                new_status=PaymentStatus.PENDING,
                payment_method=str(data.payment_method),
                processed_at=utcnow(),
            ),
        )
        return record


__all__ = ["GraphQLPaymentStore", "build_graphql_client"]

# Fin del archivo backend/app/modules/payments/services/graphql_payment_store.py
