"""
Core Module
Zentrale Konfiguration, Settings und Liga-Registry
"""

from .config import Settings, settings
from .leagues import LEAGUES, LeagueConfig, get_league, normalize_league

__all__ = ["settings", "Settings", "LEAGUES", "LeagueConfig", "get_league", "normalize_league"]
