from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class League(str, Enum):
    LALIGA = "laligaes"
    PREMIER = "premier"
    SERIEA = "seriea"
    LIGUE1 = "ligue1"
    BUNDESLIGA = "bundesliga"


ALL_LEAGUES: set[str] = {lg.value for lg in League}

ALIASES: dict[str, str] = {
    # common short-hands
    "laliga": League.LALIGA.value,
    "es1": League.LALIGA.value,
    "epl": League.PREMIER.value,
    "premier-league": League.PREMIER.value,
    "gb1": League.PREMIER.value,
    "serie-a": League.SERIEA.value,
    "it1": League.SERIEA.value,
    "ligue-1": League.LIGUE1.value,
    "fr1": League.LIGUE1.value,
    "buli": League.BUNDESLIGA.value,
    "l1": League.BUNDESLIGA.value,
}


@dataclass(frozen=True)
class LeagueConfig:
    """Static description of one scrapeable league.

    ``prefixes``/``suffixes`` are club-name tokens dropped when deriving the
    canonical team id; ``token_aliases`` rewrite single tokens before that.
    """

    key: str
    display_name: str
    landing_url: str
    base_url: str
    max_attempts: int = 4
    prefixes: frozenset[str] = field(default_factory=frozenset)
    suffixes: frozenset[str] = field(default_factory=frozenset)
    token_aliases: dict[str, str] = field(default_factory=dict)


_ES = "https://www.transfermarkt.es"
_COM = "https://www.transfermarkt.com"

LEAGUES: dict[str, LeagueConfig] = {
    League.LALIGA.value: LeagueConfig(
        key=League.LALIGA.value,
        display_name="LaLiga",
        landing_url=f"{_ES}/laliga/startseite/wettbewerb/ES1",
        base_url=_ES,
        max_attempts=4,
        prefixes=frozenset({"fc", "ud", "rc", "rcd", "cd", "ca", "deportivo"}),
        suffixes=frozenset({"cf", "fc"}),
    ),
    League.PREMIER.value: LeagueConfig(
        key=League.PREMIER.value,
        display_name="Premier League",
        landing_url=f"{_COM}/premier-league/startseite/wettbewerb/GB1",
        base_url=_COM,
        max_attempts=5,
        prefixes=frozenset({"fc", "afc"}),
        suffixes=frozenset({"fc", "afc"}),
    ),
    League.SERIEA.value: LeagueConfig(
        key=League.SERIEA.value,
        display_name="Serie A",
        landing_url=f"{_ES}/serie-a/startseite/wettbewerb/IT1",
        base_url=_ES,
        max_attempts=4,
        prefixes=frozenset({"fc", "ud", "rc", "rcd", "deportivo", "ac", "as", "ssc", "us"}),
        suffixes=frozenset({"cf", "fc", "calcio"}),
    ),
    League.LIGUE1.value: LeagueConfig(
        key=League.LIGUE1.value,
        display_name="Ligue 1",
        landing_url=f"{_ES}/ligue-1/startseite/wettbewerb/FR1",
        base_url=_ES,
        max_attempts=4,
        prefixes=frozenset({"ogc", "ac", "fc", "rc", "as"}),
        suffixes=frozenset({"fc"}),
    ),
    League.BUNDESLIGA.value: LeagueConfig(
        key=League.BUNDESLIGA.value,
        display_name="Bundesliga",
        landing_url=f"{_ES}/bundesliga/startseite/wettbewerb/L1",
        base_url=_ES,
        max_attempts=4,
        prefixes=frozenset({"1", "fc", "sv", "fsv", "vfl", "vfb", "tsg", "sc", "rb"}),
        suffixes=frozenset({"fc"}),
        token_aliases={"bvb": "borussia"},
    ),
}


def normalize_league(value: str | League) -> str:
    """
    Normalize a league identifier to the canonical lowercase key.
    Raises ValueError for unknown leagues.
    """
    if isinstance(value, League):
        return value.value
    v = (value or "").strip().lower()
    v = ALIASES.get(v, v)
    if v not in ALL_LEAGUES:
        allowed = ", ".join(sorted(ALL_LEAGUES))
        raise ValueError(f"Unknown league '{value}'. Allowed: {allowed}")
    return v


def get_league(value: str | League) -> LeagueConfig:
    return LEAGUES[normalize_league(value)]
