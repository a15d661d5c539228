# -*- coding: utf-8 -*-
"""
backend/app/main.py

Punto de entrada principal del backend de pagos del storefront.

Ajustes clave:
- Configuración vía app.shared.config (Dev/Test/Prod según PYTHON_ENV)
- Logging centralizado (plain en desarrollo, JSON en producción)
- Montaje de observabilidad Prometheus (/metrics) vía app.observability.prom
- Ciclo de vida: creación de tablas en dev/test, clientes HTTP compartidos,
  PaymentStore (SQL o GraphQL) y dispatcher de efectos en app.state
- Health principal /health delegado al paquete app.routes (health_routes.py)

Autor: Equipo Storefront
Fecha: 2026-10-06
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

# ---------------------------------------------------------------------------
# Cargar .env ANTES de cualquier import que lea configuración
# Solo en desarrollo el .env pisa las variables del entorno
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_PYTHON_ENV = os.getenv("PYTHON_ENV", "development").strip().lower()
load_dotenv(dotenv_path=_ENV_PATH, override=_PYTHON_ENV == "development")

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.shared.config import get_payments_settings, get_settings, setup_logging
from app.shared.database import SessionLocal, engine, init_models
from app.observability.prom import setup_observability
from app.modules.payments.routes.dependencies import (
    build_payment_store,
    build_side_effect_dispatcher,
)
from app.modules.payments.services import build_graphql_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ────────── STARTUP ──────────
    settings = get_settings()
    payments_settings = get_payments_settings()
    setup_logging(settings.log_level, settings.log_format)

    if settings.db_create_tables:
        await init_models()

    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(payments_settings.side_effect_timeout_seconds, connect=3.0),
    )
    graphql_client = None
    if payments_settings.payment_store_backend == "graphql" and payments_settings.graphql_api_url:
        token = payments_settings.graphql_api_token
        graphql_client = build_graphql_client(
            payments_settings.graphql_api_url,
            token=token.get_secret_value() if token else None,
            timeout_seconds=payments_settings.graphql_timeout_seconds,
        )

    app.state.payment_store = build_payment_store(
        payments_settings,
        session_factory=SessionLocal,
        graphql_client=graphql_client,
    )
    app.state.side_effect_dispatcher = build_side_effect_dispatcher(payments_settings, http_client)

    if not payments_settings.events_secret():
        logger.warning(
            "⚠️ Secreto de eventos de Wompi no configurado (environment=%s): los webhooks responderán 500",
            payments_settings.wompi_environment,
        )

    logger.info(
        "🟢 %s iniciado (env=%s, wompi=%s, store=%s)",
        settings.app_name,
        settings.python_env,
        payments_settings.wompi_environment,
        payments_settings.payment_store_backend,
    )
    try:
        yield
    finally:
        # ────────── SHUTDOWN ──────────
        await http_client.aclose()
        if graphql_client is not None:
            await graphql_client.aclose()
        await engine.dispose()
        logger.info("🔴 %s apagado.", settings.app_name)


openapi_tags = [
    {"name": "payments", "description": "Inicio de pago, estado y reintentos por orden"},
    {"name": "payments:webhooks", "description": "Webhooks de proveedores de pago"},
]

app = FastAPI(
    title="Storefront Payments API",
    description="Webhooks de Wompi y estado de pagos del storefront",
    version=get_settings().app_version,
    lifespan=lifespan,
    openapi_tags=openapi_tags,
)


def _configure_cors(app_instance: FastAPI) -> None:
    """CORS desde CORS_ORIGINS; '*' desactiva credenciales."""
    origins = [o.strip() for o in get_settings().allowed_origins.split(",") if o.strip()]
    wildcard = origins == ["*"]
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=not wildcard,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        max_age=600,
    )


# Observabilidad Prometheus (/metrics)
# Starlette ejecuta los middlewares en orden inverso al registro:
# CORS se registra al final para ejecutarse primero.
setup_observability(app)
_configure_cors(app)

# Incluye router maestro
from app.routes import router as main_router

app.include_router(main_router)


@app.get("/")
async def root():
    return {"service": get_settings().app_name, "status": "active"}


if __name__ == "__main__":
    _settings = get_settings()
    uvicorn.run("app.main:app", host=_settings.app_host, port=_settings.app_port, reload=False)

# Fin del archivo backend/app/main.py
