# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/metrics.py

Exposición de métricas de pagos en formato Prometheus.

Endpoints:
- GET /payments/metrics/prometheus

Autor: Equipo Billing
Fecha: 2026-02-03
"""

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST

from app.modules.payments.metrics import render_prometheus_metrics

router = APIRouter(prefix="/metrics", tags=["payments:metrics"])


@router.get(
    "/prometheus",
    summary="Métricas de pagos (Prometheus text format)",
    include_in_schema=False,
)
async def get_prometheus_metrics() -> Response:
    return Response(content=render_prometheus_metrics(), media_type=CONTENT_TYPE_LATEST)


__all__ = ["router"]
# Fin del archivo backend/app/modules/payments/routes/metrics.py
