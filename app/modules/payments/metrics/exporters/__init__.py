# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/metrics/exporters/__init__.py
"""

from .prometheus_exporter import registry, render_prometheus_metrics

__all__ = ["registry", "render_prometheus_metrics"]
