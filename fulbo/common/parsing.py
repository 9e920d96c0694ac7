import re
from typing import Callable, Iterable, Optional, TypeVar

from bs4 import BeautifulSoup

T = TypeVar("T")

PLAYER_ID_RE = re.compile(r"/profil/spieler/(?:.*?-)?(\d+)")
CLUB_ID_RE = re.compile(r"/startseite/verein/(\d+)")


def clean_text(s: str | None) -> str:
    if not s:
        return ""
    return re.sub(r"\s+", " ", s.strip())


def soup_from_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def extract_tm_player_id_from_href(href: str | None) -> str:
    # Examples: /lamine-yamal/profil/spieler/937958, /profil/spieler/123-j-doe
    if not href:
        return ""
    m = PLAYER_ID_RE.search(href)
    return m.group(1) if m else ""


def extract_tm_club_id_from_href(href: str | None) -> str:
    # Example: /fc-barcelona/startseite/verein/131/saison_id/2025
    if not href:
        return ""
    m = CLUB_ID_RE.search(href)
    return m.group(1) if m else ""


def first_non_empty(strategies: Iterable[Callable[[T], Optional[str]]], target: T) -> str:
    """Run ``strategies`` against ``target`` in order; return the first non-empty result."""
    for strategy in strategies:
        value = clean_text(strategy(target))
        if value:
            return value
    return ""
