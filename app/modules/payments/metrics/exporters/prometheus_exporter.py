# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/metrics/exporters/prometheus_exporter.py

Exporter Prometheus para el módulo de pagos on-chain.
Registro privado (CollectorRegistry) para no mezclar con métricas HTTP.

Autor: Ixchel Beristáin
Fecha: 08/11/2025 (pagos on-chain 2026-02-03)
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------
# Registro de Prometheus del módulo
# --------------------------------------------------------------------------
registry = CollectorRegistry()

# --------------------------------------------------------------------------
# Definición de métricas
# --------------------------------------------------------------------------
INTENTS_CREATED_TOTAL = Counter(
    "payments_intents_created_total",
    "Número total de intents de pago creados",
    ["chain_id"],
    registry=registry,
)

VERIFIER_CALLS_TOTAL = Counter(
    "payments_verifier_calls_total",
    "Llamadas al verificador on-chain por resultado",
    ["outcome"],  # verified/pending/rejected/timeout/unavailable
    registry=registry,
)

VERIFIER_LATENCY_SECONDS = Histogram(
    "payments_verifier_latency_seconds",
    "Latencia de llamadas al verificador on-chain (segundos)",
    registry=registry,
)

ATTEMPT_TRANSITIONS_TOTAL = Counter(
    "payments_attempt_terminal_total",
    "Transiciones a estado terminal por estado y código de error",
    ["status", "error_code"],
    registry=registry,
)

LEDGER_SETTLEMENTS_TOTAL = Counter(
    "payments_ledger_settlements_total",
    "Abonos al ledger por resultado (created/already_settled)",
    ["result"],
    registry=registry,
)

CREDITS_GRANTED_TOTAL = Counter(
    "payments_credits_granted_total",
    "Créditos otorgados por pagos confirmados",
    registry=registry,
)


# --------------------------------------------------------------------------
# Funciones auxiliares
# --------------------------------------------------------------------------
def render_prometheus_metrics() -> bytes:
    """Genera la salida actual de las métricas en formato Prometheus."""
    return generate_latest(registry)


def observe_intent_created(chain_id: int) -> None:
    INTENTS_CREATED_TOTAL.labels(chain_id=str(chain_id)).inc()


def observe_verifier_call(outcome: str, duration: float) -> None:
    VERIFIER_CALLS_TOTAL.labels(outcome=outcome).inc()
    VERIFIER_LATENCY_SECONDS.observe(duration)
    logger.debug("[Prometheus] verifier outcome=%s duration=%.4fs", outcome, duration)


def observe_terminal_transition(status: str, error_code: Optional[str]) -> None:
    ATTEMPT_TRANSITIONS_TOTAL.labels(status=status, error_code=error_code or "none").inc()


def observe_ledger_settlement(result: str, credits: int) -> None:
    LEDGER_SETTLEMENTS_TOTAL.labels(result=result).inc()
    if result == "created":
        CREDITS_GRANTED_TOTAL.inc(credits)


def prometheus_ping() -> dict:
    """Devuelve un simple dict para verificar salud del exporter."""
    return {
        "status": "ok",
        "service": "payments-metrics",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


__all__ = [
    "registry",
    "render_prometheus_metrics",
    "observe_intent_created",
    "observe_verifier_call",
    "observe_terminal_transition",
    "observe_ledger_settlement",
    "prometheus_ping",
]
# Fin del archivo backend/app/modules/payments/metrics/exporters/prometheus_exporter.py
