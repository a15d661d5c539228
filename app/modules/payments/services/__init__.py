# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/__init__.py

Servicios de bajo nivel del módulo Payments: persistencia (SQL / GraphQL)
y colaboradores de efectos de seguimiento.

Autor: Equipo Storefront
Fecha: 2026-10-05
"""

from .payment_store import PaymentStore, SqlPaymentStore
from .graphql_payment_store import GraphQLPaymentStore, build_graphql_client
from .notification_service import (
    HttpSideEffectSink,
    LoggingSideEffectSink,
    SideEffectDispatcher,
    build_sink,
)

__all__ = [
    "PaymentStore",
    "SqlPaymentStore",
    "GraphQLPaymentStore",
    "build_graphql_client",
    "HttpSideEffectSink",
    "LoggingSideEffectSink",
    "SideEffectDispatcher",
    "build_sink",
]

# Fin del archivo backend/app/modules/payments/services/__init__.py
