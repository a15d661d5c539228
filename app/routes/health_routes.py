# -*- coding: utf-8 -*-
"""
backend/app/routes/health_routes.py

Endpoint básico de health check del backend de pagos.

Autor: Equipo Storefront
Fecha: 2026-10-06
"""

from fastapi import APIRouter

from app.shared.config import get_payments_settings, get_settings
from app.shared.database import check_database_health
from app.modules.payments.metrics.exporters.prometheus_exporter import prometheus_ping
from app.modules.payments.utils.datetime_helpers import to_iso8601, utcnow

router = APIRouter()


@router.get(
    "/health",
    summary="Health check del backend",
    description=(
        "Devuelve el estado básico del backend, incluyendo conectividad a la "
        "base de datos y si el secreto de webhooks está configurado."
    ),
)
async def health_check() -> dict:
    settings = get_settings()
    payments_settings = get_payments_settings()

    db_ok = await check_database_health(timeout_s=2.0)

    return {
        "status": "ok" if db_ok else "degraded",
        "timestamp": to_iso8601(utcnow()),
        "environment": settings.python_env,
        "database": {
            "reachable": db_ok,
        },
        "payments": {
            "wompi_environment": payments_settings.wompi_environment,
            "events_secret_configured": payments_settings.events_secret() is not None,
            "store_backend": payments_settings.payment_store_backend,
        },
        "metrics": prometheus_ping(),
        "service": {
            "name": settings.app_name,
            "version": settings.app_version,
        },
    }

# Fin del archivo backend/app/routes/health_routes.py
