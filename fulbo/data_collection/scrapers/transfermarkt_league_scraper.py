"""Transfermarkt league landing page -> club roster URLs.

Club ids ("canonical team ids") are compact, filesystem-safe slugs:
``"FC Barcelona" -> "barcelona"``, ``"Real Madrid CF" -> "real-madrid"``.
"""

import logging
import re
from typing import Callable, Dict, Union
from urllib.parse import urljoin, urlsplit, urlunsplit

from fulbo.common.http import FetchError, fetch_html
from fulbo.common.parsing import clean_text, extract_tm_club_id_from_href, soup_from_html
from fulbo.core.leagues import LeagueConfig, get_league
from fulbo.domain.contracts import TeamDiscoveryEntry

logger = logging.getLogger(__name__)

DEFAULT_SEASON = "2025"

# Explicit substitutions, no general unicode normalization
ACCENT_MAP = str.maketrans(
    {
        "á": "a", "à": "a", "â": "a", "ä": "a", "ã": "a", "å": "a",
        "é": "e", "è": "e", "ê": "e", "ë": "e",
        "í": "i", "ì": "i", "î": "i", "ï": "i",
        "ó": "o", "ò": "o", "ô": "o", "ö": "o", "õ": "o", "ø": "o",
        "ú": "u", "ù": "u", "û": "u", "ü": "u",
        "ñ": "n", "ç": "c", "ß": "ss",
    }
)
_DISALLOWED_RE = re.compile(r"[^a-z0-9-]")
_HYPHENS_RE = re.compile(r"-{2,}")
_SEASON_RE = re.compile(r"/saison_id/[^/]*")


class DiscoveryError(Exception):
    """The league landing page could not be fetched or listed no clubs."""


def sanitize_team_id(value: str) -> str:
    s = (value or "").strip().lower().translate(ACCENT_MAP)
    s = s.replace(" ", "-").replace("/", "-")
    s = _DISALLOWED_RE.sub("", s)
    s = _HYPHENS_RE.sub("-", s)
    return s.strip("-")


def canonical_team_id(name: str, league: Union[str, LeagueConfig]) -> str:
    """Sanitize ``name`` and drop the league's common club-type prefix/suffix tokens.

    Idempotent. Falls back to the plain sanitized value when every token
    would be dropped, and to ``"team"`` when even that is empty.
    """
    cfg = league if isinstance(league, LeagueConfig) else get_league(league)
    base = sanitize_team_id(name)
    tokens = [cfg.token_aliases.get(t, t) for t in base.split("-") if t]
    while tokens and tokens[0] in cfg.prefixes:
        tokens.pop(0)
    while tokens and tokens[-1] in cfg.suffixes:
        tokens.pop()
    if not tokens:
        return base or "team"
    return "-".join(tokens)


def roster_url_for(href: str, base_url: str, season: str = DEFAULT_SEASON) -> str:
    """``/x/startseite/verein/131`` -> ``{base}/x/kader/verein/131/saison_id/{season}``"""
    parts = urlsplit(urljoin(base_url.rstrip("/") + "/", href))
    path = parts.path.replace("/startseite/", "/kader/", 1)
    path = _SEASON_RE.sub("", path).rstrip("/")
    return urlunsplit((parts.scheme, parts.netloc, f"{path}/saison_id/{season}", "", ""))


def _slug_from_href(href: str) -> str:
    path = urlsplit(href).path
    head = path.split("/startseite/", 1)[0].strip("/")
    return head.rsplit("/", 1)[-1].replace("-", " ") if head else ""


def discover_teams(
    html: str, league: Union[str, LeagueConfig], *, season: str = DEFAULT_SEASON
) -> Dict[str, TeamDiscoveryEntry]:
    """Collect every club profile link on a league page.

    Later links overwrite earlier ones with the same team id.
    """
    cfg = league if isinstance(league, LeagueConfig) else get_league(league)
    teams: Dict[str, TeamDiscoveryEntry] = {}
    for a in soup_from_html(html).find_all("a", href=True):
        href = a["href"]
        club_id = extract_tm_club_id_from_href(href)
        if not club_id:
            continue
        name = clean_text(a.get_text()) or clean_text(a.get("title")) or _slug_from_href(href) or href
        team_id = canonical_team_id(name, cfg)
        teams[team_id] = TeamDiscoveryEntry(
            team_id=team_id,
            roster_url=roster_url_for(href, cfg.base_url, season),
            display_name=name,
            club_id=club_id,
        )
    return teams


def discover_league(
    league: Union[str, LeagueConfig],
    *,
    season: str = DEFAULT_SEASON,
    fetch: Callable[..., str] = fetch_html,
    **fetch_kwargs,
) -> Dict[str, TeamDiscoveryEntry]:
    cfg = league if isinstance(league, LeagueConfig) else get_league(league)
    logger.info("Discovering %s clubs from %s", cfg.display_name, cfg.landing_url)
    try:
        html = fetch(cfg.landing_url, max_attempts=cfg.max_attempts, **fetch_kwargs)
    except FetchError as e:
        raise DiscoveryError(f"cannot fetch {cfg.key} landing page: {e}") from e
    teams = discover_teams(html, cfg, season=season)
    if not teams:
        raise DiscoveryError(f"no clubs found on {cfg.landing_url}")
    logger.info("Discovered %d %s clubs", len(teams), cfg.display_name)
    return teams
