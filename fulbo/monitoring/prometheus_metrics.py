"""
Prometheus Metrics für Fulbo Data

Implementiert Metriken-Sammlung und -Export für Scraping und API.
"""

import logging
from pathlib import Path
from typing import Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    Info,
    generate_latest,
    write_to_textfile,
)

from ..core.config import Settings

__all__ = ["PrometheusMetrics", "CONTENT_TYPE_LATEST"]


class PrometheusMetrics:
    """Prometheus Metriken für Fulbo Data"""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings
        self.logger = logging.getLogger("prometheus_metrics")

        # Custom Registry für bessere Kontrolle
        self.registry = CollectorRegistry()

        # API Metriken
        self.api_requests_total = Counter(
            "api_requests_total",
            "Total number of API requests",
            ["method", "endpoint", "status"],
            registry=self.registry,
        )

        self.api_request_duration = Histogram(
            "api_request_duration_seconds",
            "API request duration in seconds",
            ["method", "endpoint"],
            registry=self.registry,
        )

        # Scraping Metriken
        self.team_scrapes_total = Counter(
            "team_scrapes_total",
            "Total number of team roster scrapes",
            ["league", "status"],
            registry=self.registry,
        )

        self.team_scrape_duration = Histogram(
            "team_scrape_duration_seconds",
            "Team roster scrape duration in seconds",
            ["league"],
            registry=self.registry,
        )

        self.players_saved_total = Counter(
            "players_saved_total",
            "Total number of player records written",
            ["league"],
            registry=self.registry,
        )

        self.fetch_attempts_total = Counter(
            "fetch_attempts_total",
            "Total number of outbound HTTP fetch attempts",
            ["outcome"],
            registry=self.registry,
        )

        # Application Info
        self.app_info = Info(
            "fulbo_data_info",
            "Fulbo Data application info",
            registry=self.registry,
        )
        self.app_info.info(
            {
                "version": "1.0.0",
                "environment": getattr(settings, "environment", "development"),
            }
        )

    def record_api_request(self, method: str, endpoint: str, status: str, duration: float):
        """Zeichnet API Request auf"""
        self.api_requests_total.labels(method=method, endpoint=endpoint, status=status).inc()
        self.api_request_duration.labels(method=method, endpoint=endpoint).observe(duration)

    def record_team_scrape(self, league: str, status: str, duration: float, players: int = 0):
        """Zeichnet Team-Scrape auf"""
        self.team_scrapes_total.labels(league=league, status=status).inc()
        self.team_scrape_duration.labels(league=league).observe(duration)
        if players > 0:
            self.players_saved_total.labels(league=league).inc(players)

    def record_fetch_attempt(self, outcome: str):
        self.fetch_attempts_total.labels(outcome=outcome).inc()

    def export_metrics(self) -> bytes:
        """Exportiert Metriken im Prometheus Format"""
        return generate_latest(self.registry)

    def write_textfile(self, path: str):
        """Schreibt Metriken für den node_exporter textfile collector"""
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        write_to_textfile(path, self.registry)
        self.logger.info(f"Metrics written to {path}")
