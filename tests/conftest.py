# backend/tests/conftest.py
# -*- coding: utf-8 -*-
"""
Config global de tests del backend de pagos.

- Variables de entorno de prueba ANTES de importar la app
  (PYTHON_ENV=test → SQLite en memoria y creación de tablas al arrancar)
- Fábricas de eventos Wompi firmados y de PaymentRecord
- Store en memoria y sinks que registran los efectos de seguimiento
- Engine aiosqlite por test para las pruebas del SqlPaymentStore
- Cliente httpx contra la app con ASGITransport + asgi-lifespan
"""

import asyncio
import hashlib
import os
import pathlib
import sys
import time
from collections import defaultdict
from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest

# -----------------------------------------------------------------------------
# 0) Entorno de pruebas (antes de cualquier import de app.*)
# -----------------------------------------------------------------------------
TEST_EVENTS_SECRET = "test_events_Fj5jRL3nJjR9rQ2"
TEST_INTEGRITY_SECRET = "test_integrity_Yy8xA1kPq0"

os.environ["PYTHON_ENV"] = "test"
os.environ.setdefault("WOMPI_EVENTS_SECRET_TEST", TEST_EVENTS_SECRET)
os.environ.setdefault("WOMPI_INTEGRITY_SECRET", TEST_INTEGRITY_SECRET)
os.environ.setdefault("WOMPI_PUBLIC_KEY", "pub_test_storefront")
os.environ.setdefault("PAYMENT_STORE_BACKEND", "sql")

# -----------------------------------------------------------------------------
# 1) Asegura .../backend en sys.path
# -----------------------------------------------------------------------------
BACKEND_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))
assert (BACKEND_ROOT / "app").exists(), f"'app' no existe en {BACKEND_ROOT}"

from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.shared.config import PaymentsSettings, reset_payments_settings
from app.shared.database import build_engine, init_models
from app.modules.payments.enums import PaymentMethod, PaymentProvider, PaymentStatus
from app.modules.payments.exceptions import PaymentNotFoundError, StalePaymentError
from app.modules.payments.schemas import AuditEntryData, NewPaymentData, PaymentRecord
from app.modules.payments.services import SideEffectDispatcher, SqlPaymentStore


# -----------------------------------------------------------------------------
# 2) Settings
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _fresh_payments_settings():
    reset_payments_settings()
    yield
    reset_payments_settings()


@pytest.fixture
def events_secret() -> str:
    return TEST_EVENTS_SECRET


@pytest.fixture
def integrity_secret() -> str:
    return TEST_INTEGRITY_SECRET


@pytest.fixture
def payments_settings() -> PaymentsSettings:
    return PaymentsSettings(
        wompi_events_secret_test=TEST_EVENTS_SECRET,
        wompi_events_secret_prod=None,
        wompi_environment="test",
        wompi_integrity_secret=TEST_INTEGRITY_SECRET,
        wompi_public_key="pub_test_storefront",
        payment_store_backend="sql",
        webhook_processing_timeout_seconds=1.0,
        side_effect_timeout_seconds=0.2,
    )


# -----------------------------------------------------------------------------
# 3) Fábricas
# -----------------------------------------------------------------------------
DEFAULT_PROPERTIES = ("transaction.id", "transaction.status", "transaction.amount_in_cents")


def _lookup(data: Dict[str, Any], path: str) -> str:
    current: Any = data
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return ""
        current = current[part]
    return str(current)


def sign_wompi_event(payload: Dict[str, Any], secret: str = TEST_EVENTS_SECRET) -> str:
    """Checksum calculado de forma independiente a la app."""
    props = payload["signature"]["properties"]
    chain = "".join(_lookup(payload["data"], p) for p in props)
    chain += str(payload["timestamp"]) + secret
    return hashlib.sha256(chain.encode("utf-8")).hexdigest().upper()


def build_wompi_event(
    *,
    reference: str = "ORD-1001_1760000000000",
    tx_id: str = "1234-1760000000-49201",
    status: str = "APPROVED",
    amount_in_cents: int = 5_000_000,
    currency: str = "COP",
    event: str = "transaction.updated",
    environment: str = "test",
    timestamp: Optional[int] = None,
    secret: str = TEST_EVENTS_SECRET,
    status_message: Optional[str] = None,
    payment_method_type: str = "CARD",
    finalized_at: Optional[str] = None,
    properties=DEFAULT_PROPERTIES,
    include_transaction: bool = True,
) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    if include_transaction:
        tx: Dict[str, Any] = {
            "id": tx_id,
            "reference": reference,
            "status": status,
            "amount_in_cents": amount_in_cents,
            "currency": currency,
            "payment_method_type": payment_method_type,
            "customer_email": "cliente@tienda.co",
        }
        if status_message is not None:
            tx["status_message"] = status_message
        if finalized_at is not None:
            tx["finalized_at"] = finalized_at
        data["transaction"] = tx
    else:
        data["nequi_token"] = {"id": "nequi_tok_1", "status": "APPROVED"}

    payload = {
        "event": event,
        "data": data,
        "environment": environment,
        "signature": {"properties": list(properties), "checksum": ""},
        "timestamp": timestamp if timestamp is not None else int(time.time()),
        "sent_at": "2026-10-06T15:00:00.000Z",
    }
    payload["signature"]["checksum"] = sign_wompi_event(payload, secret)
    return payload


@pytest.fixture
def wompi_event_factory():
    return build_wompi_event


@pytest.fixture
def sign_event():
    return sign_wompi_event


def build_record(**overrides: Any) -> PaymentRecord:
    values: Dict[str, Any] = {
        "id": 1,
        "external_reference": "ORD-1001_1760000000000",
        "order_reference": "ORD-1001",
        "amount": 50_000,
        "currency": "COP",
        "status": PaymentStatus.PENDING,
        "provider": PaymentProvider.WOMPI,
        "payment_method": PaymentMethod.CARD,
        "failed_attempts": 0,
        "customer_email": "cliente@tienda.co",
        "created_at": datetime(2026, 10, 6, 15, 0, tzinfo=timezone.utc),
    }
    values.update(overrides)
    return PaymentRecord(**values)


@pytest.fixture
def make_record():
    return build_record


# -----------------------------------------------------------------------------
# 4) Fakes de colaboradores
# -----------------------------------------------------------------------------
class InMemoryPaymentStore:
    """PaymentStore en memoria con compare-and-set como el de SQL."""

    def __init__(self):
        self.records: Dict[Any, PaymentRecord] = {}
        self.audit: Dict[Any, List[AuditEntryData]] = defaultdict(list)
        self.update_calls = 0
        # Cambios que "otro worker" aplica justo antes de cada update
        self.concurrent_writes: List[Dict[str, Any]] = []
        self.fetch_delay = 0.0
        self.fail_with: Optional[Exception] = None

    def add(self, record: PaymentRecord) -> PaymentRecord:
        self.records[record.id] = record
        return record

    async def fetch_payment_by_external_reference(self, reference: str) -> Optional[PaymentRecord]:
        if self.fail_with is not None:
            raise self.fail_with
        if self.fetch_delay:
            await asyncio.sleep(self.fetch_delay)
        return next((r for r in self.records.values() if r.external_reference == reference), None)

    async def update_payment(self, payment_id, fields, expected_status=None, audit_entry=None):
        self.update_calls += 1
        if self.concurrent_writes and payment_id in self.records:
            current = self.records[payment_id]
            self.records[payment_id] = current.model_copy(update=self.concurrent_writes.pop(0))
        current = self.records.get(payment_id)
        if current is None:
            raise PaymentNotFoundError(str(payment_id))
        if expected_status is not None and current.status != expected_status:
            raise StalePaymentError(payment_id, str(expected_status))
        updated = current.model_copy(update=fields)
        self.records[payment_id] = updated
        if audit_entry is not None:
            self.audit[payment_id].append(audit_entry)
        return updated

    async def append_audit_entry(self, payment_id, entry: AuditEntryData) -> None:
        self.audit[payment_id].append(entry)

    async def list_audit_entries(self, payment_id) -> List[AuditEntryData]:
        return list(self.audit[payment_id])

    async def fetch_latest_by_order_reference(self, order_reference: str) -> Optional[PaymentRecord]:
        candidates = [r for r in self.records.values() if r.order_reference == order_reference]
        if not candidates:
            return None
        return max(candidates, key=lambda r: (r.created_at, r.id))

    async def create_payment(self, data: NewPaymentData) -> PaymentRecord:
        next_id = max(self.records, default=0) + 1
        record = PaymentRecord(
            id=next_id,
            status=PaymentStatus.PENDING,
            created_at=datetime(2026, 10, 6, 15, 0, tzinfo=timezone.utc) + timedelta(minutes=next_id),
            **data.model_dump(),
        )
        return self.add(record)


class RecordingSink:
    def __init__(self, *, fail: bool = False, delay: float = 0.0):
        self.sent = []
        self.fail = fail
        self.delay = delay

    async def send(self, effect, payment) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise RuntimeError("collaborator unavailable")
        self.sent.append((effect, payment))


@pytest.fixture
def memory_store() -> InMemoryPaymentStore:
    return InMemoryPaymentStore()


@pytest.fixture
def sinks() -> Dict[str, RecordingSink]:
    return {
        "notifications": RecordingSink(),
        "fulfillment": RecordingSink(),
        "inventory": RecordingSink(),
    }


@pytest.fixture
def recording_sink_factory():
    return RecordingSink


@pytest.fixture
def dispatcher(sinks) -> SideEffectDispatcher:
    return SideEffectDispatcher(timeout_seconds=0.2, **sinks)


# -----------------------------------------------------------------------------
# 5) Base de datos (aiosqlite en memoria, una por test)
# -----------------------------------------------------------------------------
@pytest.fixture
async def sql_engine():
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await init_models(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(sql_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=sql_engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
def sql_store(session_factory) -> SqlPaymentStore:
    return SqlPaymentStore(session_factory)


# -----------------------------------------------------------------------------
# 6) App FastAPI y cliente httpx (con ciclo de vida)
# -----------------------------------------------------------------------------
@pytest.fixture
def app():
    """Carga la app **después** de fijar las variables de entorno."""
    from app.main import app as fastapi_app

    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app) -> AsyncIterator[AsyncClient]:
    """
    Cliente HTTP asíncrono contra la app con ASGITransport y gestión de
    startup/shutdown mediante asgi-lifespan.
    """
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client
