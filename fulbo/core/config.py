"""
Zentrale Konfiguration für Fulbo Data
Basiert auf Pydantic Settings mit Environment Variable Support
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application Settings mit Environment Variable Support"""

    # Storage
    data_dir: str = "data/leagues"

    # Scraping
    # Safety gate: only the first discovered team is scraped unless enabled
    scrape_all: bool = False
    scrape_season: str = "2025"
    scrape_timeout: float = 30.0
    scrape_proxy: Optional[str] = None

    # Bingo / Quiz
    bingo_data_dir: str = "data/remote_bingo"
    bingo_extra_dirs: list[str] = ["backend/data/remote_bingo", "../data/remote_bingo"]
    bingo_remote_url: str = "https://playfootball.games/api/football-bingo/{game_id}.json"
    bingo_cache_ttl_seconds: int = 1800
    bingo_cache_backend: str = "memory"  # memory | redis
    questions_remote_url: str = "https://playfootball.games/api/futbol-list-a/{game_id}.json"
    questions_dir: str = "data/remote_q"
    questions_file: str = "data/all_questions.json"

    # Redis
    redis_url: str = "redis://localhost:6379"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = Field(default=8080, validation_alias=AliasChoices("api_port", "port"))
    cors_origins: list[str] = ["*"]
    # Single origin (env CORS_ORIGIN); overrides cors_origins when set
    cors_origin: Optional[str] = None

    # Monitoring
    log_level: str = "INFO"
    log_format: str = "console"  # console | json
    log_file_path: Optional[str] = None
    enable_metrics: bool = True
    # Scrape runs are short-lived: metrics go to a textfile collector file
    metrics_textfile_path: Optional[str] = None

    # Application
    environment: str = "development"  # Environment: development, staging, production

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Global Settings Instance
settings = Settings()
