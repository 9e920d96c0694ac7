"""
Monitoring Package für Fulbo Data

Enthält Prometheus Metriken.
"""

from .prometheus_metrics import PrometheusMetrics

__all__ = ["PrometheusMetrics"]
