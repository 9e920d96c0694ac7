"""Transfermarkt squad ("kader") page parser.

Every field is read through an ordered list of strategies; the first one
that yields a non-empty value wins. Squad markup drifts between leagues and
seasons, so nothing here raises on odd rows: a row that cannot be read is
skipped.
"""

import logging
import re
from typing import Callable, List, Optional

from bs4 import BeautifulSoup, Tag

from fulbo.common.http import fetch_html
from fulbo.common.parsing import (
    clean_text,
    extract_tm_player_id_from_href,
    first_non_empty,
    soup_from_html,
)
from fulbo.domain.models import PlayerRecord

logger = logging.getLogger(__name__)

# Direct child cell positions on the squad table
NUMBER_CELL = 0
AGE_CELL = 2
FLAG_CELL = 3
CONTRACT_CELL = 4
MARKET_VALUE_CELL = 5

FLAG_SRC_HINTS = ("flagge", "tmssl", "flag")
RAW_FLAG_TITLE_RE = re.compile(
    r'(?i)<img[^>]+(?:flagge|flaggenrahmen|images/flagge|tmssl)[^>]+title\s*=\s*"([^"]+)"'
)
RAW_FLAG_DATA_SRC_RE = re.compile(
    r'(?i)<img[^>]+data-src\s*=\s*"([^"]*(?:flagge|flaggenrahmen|tmssl)[^"]*)"'
)
RAW_FLAG_SRC_RE = re.compile(
    r'(?i)<img[^>]+(?:flagge|flaggenrahmen|images/flagge|tmssl)[^>]+src\s*=\s*"([^"]+)"'
)


def _attr(tag: Optional[Tag], name: str) -> str:
    if tag is None:
        return ""
    value = tag.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return clean_text(value)


def _image_url(img: Optional[Tag]) -> str:
    # lazy-loaded images carry the real URL in data-src
    return _attr(img, "data-src") or _attr(img, "src")


def _cells(row: Tag) -> List[Tag]:
    return [c for c in row.children if isinstance(c, Tag)]


def _cell_text(row: Tag, index: int) -> str:
    cells = _cells(row)
    return clean_text(cells[index].get_text()) if index < len(cells) else ""


def _looks_like_flag_src(src: str) -> bool:
    lowered = src.lower()
    return any(hint in lowered for hint in FLAG_SRC_HINTS)


# --- name / link strategies ---

def _name_from_posrela(row: Tag) -> str:
    for a in row.select("td.posrela a"):
        text = clean_text(a.get_text())
        if text:
            return text
    return ""


def _name_from_first_link(row: Tag) -> str:
    a = row.find("a")
    return clean_text(a.get_text()) if a else ""


def _href_from_hauptlink(row: Tag) -> str:
    return _attr(row.select_one("td.hauptlink a"), "href")


def _href_from_first_link(row: Tag) -> str:
    return _attr(row.find("a"), "href")


NAME_STRATEGIES: List[Callable[[Tag], str]] = [_name_from_posrela, _name_from_first_link]
HREF_STRATEGIES: List[Callable[[Tag], str]] = [_href_from_hauptlink, _href_from_first_link]
PHOTO_STRATEGIES: List[Callable[[Tag], str]] = [
    lambda row: _attr(row.select_one("img.bilderrahmen-fixed"), "data-src"),
    lambda row: _attr(row.select_one("img.bilderrahmen-fixed"), "src"),
]


# --- nationality / flag cascade ---

def _flags_from_flag_cell(row: Tag, nats: List[str]) -> str:
    """Dedicated nationality cell: alt, then title, then the flag file name."""
    cells = _cells(row)
    if FLAG_CELL >= len(cells):
        return ""
    flag_url = ""
    for img in cells[FLAG_CELL].find_all("img"):
        if not flag_url:
            flag_url = _image_url(img)
        src = _attr(img, "src")
        name = _attr(img, "alt") or _attr(img, "title")
        if not name and _looks_like_flag_src(src):
            name = src.split("?", 1)[0].rstrip("/").rsplit("/", 1)[-1].lower()
        if name and name not in nats:
            nats.append(name)
    return flag_url


def _flags_from_any_image(row: Tag, nats: List[str], flag_url: str) -> str:
    """Any row image whose class or src looks like a flag: title before alt."""
    for img in row.find_all("img"):
        classes = _attr(img, "class").lower()
        if "flag" not in classes and not _looks_like_flag_src(_attr(img, "src")):
            continue
        if not flag_url:
            flag_url = _image_url(img)
        name = _attr(img, "title") or _attr(img, "alt")
        if name and name not in nats:
            nats.append(name)
    return flag_url


def _flags_from_raw_markup(row: Tag, nats: List[str], flag_url: str) -> str:
    markup = row.decode_contents()
    m = RAW_FLAG_TITLE_RE.search(markup)
    if m and clean_text(m.group(1)):
        nats.append(clean_text(m.group(1)))
    if not flag_url:
        # lazy-loaded flags keep a placeholder in src
        m = RAW_FLAG_DATA_SRC_RE.search(markup) or RAW_FLAG_SRC_RE.search(markup)
        if m:
            flag_url = clean_text(m.group(1))
    return flag_url


def _extract_nationalities(row: Tag) -> tuple[List[str], str]:
    nats: List[str] = []
    flag_url = _flags_from_flag_cell(row, nats)
    if not nats:
        flag_url = _flags_from_any_image(row, nats, flag_url)
    if not nats:
        flag_url = _flags_from_raw_markup(row, nats, flag_url)
    return nats, flag_url


def _parse_player_row(row: Tag) -> Optional[PlayerRecord]:
    """Parse a single player row; None when it has neither name nor profile link."""
    name = first_non_empty(NAME_STRATEGIES, row)
    href = first_non_empty(HREF_STRATEGIES, row)
    if not name and not href:
        return None

    nationalities, flag_url = _extract_nationalities(row)
    return PlayerRecord(
        identity=extract_tm_player_id_from_href(href),
        display_name=name,
        shirt_number=_cell_text(row, NUMBER_CELL),
        age=_cell_text(row, AGE_CELL),
        nationalities=nationalities,
        contract_expiry=_cell_text(row, CONTRACT_CELL),
        market_value=_cell_text(row, MARKET_VALUE_CELL),
        flag_image_url=flag_url,
        photo_image_url=first_non_empty(PHOTO_STRATEGIES, row),
    )


def _roster_rows(soup: BeautifulSoup) -> List[Tag]:
    rows = soup.select("table.items > tbody > tr")
    if not rows:
        # markup drift: fall back to every row on the page
        rows = soup.find_all("tr")
    return rows


def parse_squad_table(html_content: str) -> List[PlayerRecord]:
    """Parse a Transfermarkt squad page into player records.

    Args:
        html_content: HTML content of the squad page

    Returns:
        One record per usable row, in page order (not yet merged)
    """
    soup = soup_from_html(html_content)
    players: List[PlayerRecord] = []
    for row in _roster_rows(soup):
        try:
            record = _parse_player_row(row)
        except Exception as e:  # noqa: BLE001 - one bad row must not drop the page
            logger.debug("Skipping unparseable squad row: %s", e)
            continue
        if record is not None:
            players.append(record)
    return players


def scrape_squad(url: str, *, max_attempts: int, fetch: Callable[..., str] = fetch_html, **fetch_kwargs) -> List[PlayerRecord]:
    """Fetch a squad page and parse it. Raises FetchError when the page cannot be fetched."""
    html = fetch(url, max_attempts=max_attempts, **fetch_kwargs)
    players = parse_squad_table(html)
    logger.info("Parsed %d player rows from %s", len(players), url)
    return players
