# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/metrics/__init__.py

Métricas Prometheus del módulo de pagos.

Autor: Ixchel Beristáin
Fecha: 08/11/2025
"""

from .exporters.prometheus_exporter import (
    observe_intent_created,
    observe_ledger_settlement,
    observe_terminal_transition,
    observe_verifier_call,
    prometheus_ping,
    registry,
    render_prometheus_metrics,
)

__all__ = [
    "registry",
    "render_prometheus_metrics",
    "observe_intent_created",
    "observe_verifier_call",
    "observe_terminal_transition",
    "observe_ledger_settlement",
    "prometheus_ping",
]

# Fin del archivo backend/app/modules/payments/metrics/__init__.py
