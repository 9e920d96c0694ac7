"""
Scraping Orchestrator für Fulbo Data

Koordiniert Discovery, Kader-Scraping und Persistenz pro Liga.
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from fulbo.common.http import FetchError, fetch_html
from fulbo.core.config import Settings
from fulbo.core.leagues import LeagueConfig, get_league
from fulbo.data_collection.rate_limiter import IntervalRateLimiter
from fulbo.data_collection.scrapers.transfermarkt_league_scraper import discover_league
from fulbo.data_collection.scrapers.transfermarkt_squad_scraper import scrape_squad
from fulbo.domain.contracts import TeamDiscoveryEntry
from fulbo.storage.team_files import PersistenceError, save_team_document

# Hard politeness limit towards Transfermarkt, not configurable
POLITENESS_DELAY_SECONDS = 40.0


class RunState(str, Enum):
    IDLE = "idle"
    DISCOVERING = "discovering"
    GATED = "gated"
    SCRAPING = "scraping"
    DONE = "done"


class ScrapeStatus(str, Enum):
    SAVED = "saved"
    FETCH_FAILED = "fetch_failed"
    EMPTY = "empty"
    SAVE_FAILED = "save_failed"


@dataclass
class TeamScrapeResult:
    team_id: str
    team_label: str
    roster_url: str
    status: ScrapeStatus
    players: int = 0
    output_path: str = ""
    error: str = ""
    duration_seconds: float = 0.0


@dataclass
class LeagueScrapeReport:
    league: str
    discovered: int = 0
    scrape_all: bool = False
    results: List[TeamScrapeResult] = field(default_factory=list)
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None

    @property
    def attempted(self) -> int:
        return len(self.results)

    @property
    def saved(self) -> int:
        return sum(1 for r in self.results if r.status == ScrapeStatus.SAVED)

    @property
    def failed(self) -> List[TeamScrapeResult]:
        return [r for r in self.results if r.status != ScrapeStatus.SAVED]

    def counts(self) -> Dict[str, int]:
        out: Dict[str, int] = {}
        for r in self.results:
            out[r.status.value] = out.get(r.status.value, 0) + 1
        return out

    def summary_lines(self) -> List[str]:
        lines = [
            f"{self.league}: {self.saved}/{self.attempted} teams saved "
            f"({self.discovered} discovered, scrape_all={self.scrape_all})"
        ]
        for r in self.results:
            line = f"  {r.team_id:<28} {r.status.value:<12} players={r.players}"
            if r.error:
                line += f" error={r.error}"
            lines.append(line)
        return lines


class LeagueScrapeOrchestrator:
    """Orchestriert das Scraping aller Teams einer Liga"""

    def __init__(
        self,
        settings: Settings,
        *,
        fetch: Callable[..., str] = fetch_html,
        rate_limiter: Optional[IntervalRateLimiter] = None,
        metrics: Any = None,
    ):
        self.settings = settings
        self.fetch = fetch
        self.rate_limiter = rate_limiter or IntervalRateLimiter(POLITENESS_DELAY_SECONDS)
        self.metrics = metrics
        self.state = RunState.IDLE
        self.logger = logging.getLogger("scraping_orchestrator")

    def _set_state(self, state: RunState):
        self.state = state
        self.logger.debug(f"State -> {state.value}")

    def _fetch_kwargs(self) -> Dict[str, Any]:
        return {
            "timeout": self.settings.scrape_timeout,
            "proxy": self.settings.scrape_proxy,
            "metrics": self.metrics,
        }

    def discover(self, league: LeagueConfig, season: str) -> Dict[str, TeamDiscoveryEntry]:
        """Ermittelt alle Teams der Liga. Raises DiscoveryError."""
        self._set_state(RunState.DISCOVERING)
        return discover_league(league, season=season, fetch=self.fetch, **self._fetch_kwargs())

    def select_teams(self, teams: Dict[str, TeamDiscoveryEntry], scrape_all: bool) -> List[TeamDiscoveryEntry]:
        """Safety gate: without scrape_all only the first team (by id) is processed."""
        self._set_state(RunState.GATED)
        ordered = [teams[k] for k in sorted(teams)]
        if scrape_all or not ordered:
            return ordered
        self.logger.warning(
            f"scrape_all disabled: only scraping {ordered[0].team_id} "
            f"({len(ordered) - 1} teams skipped). Set SCRAPE_ALL=1 to scrape all teams."
        )
        return ordered[:1]

    def scrape_team(self, league: LeagueConfig, entry: TeamDiscoveryEntry, output_dir: Path) -> TeamScrapeResult:
        """Fetch -> Extract -> Merge -> Save für ein Team"""
        start = time.monotonic()
        result = TeamScrapeResult(
            team_id=entry.team_id,
            team_label=entry.display_name,
            roster_url=entry.roster_url,
            status=ScrapeStatus.SAVED,
        )
        self.logger.info(f"Scraping {entry.display_name} ({entry.team_id}) from {entry.roster_url}")
        try:
            records = scrape_squad(
                entry.roster_url,
                max_attempts=league.max_attempts,
                fetch=self.fetch,
                **self._fetch_kwargs(),
            )
        except FetchError as e:
            result.status = ScrapeStatus.FETCH_FAILED
            result.error = str(e.last_error)
            self.logger.error(f"Fetch failed for {entry.team_id} after {e.attempts} attempts: {e.last_error}")
        else:
            if not records:
                result.status = ScrapeStatus.EMPTY
                self.logger.warning(f"No players extracted for {entry.team_id}; nothing written")
            else:
                path = output_dir / f"{entry.team_id}.json"
                try:
                    document = save_team_document(entry.display_name, records, path)
                    result.players = len(document.players)
                    result.output_path = str(path)
                except PersistenceError as e:
                    result.status = ScrapeStatus.SAVE_FAILED
                    result.error = str(e)
                    self.logger.error(f"Saving {entry.team_id} failed: {e}")

        result.duration_seconds = time.monotonic() - start
        if self.metrics:
            self.metrics.record_team_scrape(
                league.key, result.status.value, result.duration_seconds, result.players
            )
        self.logger.info(f"{entry.team_id}: {result.status.value} ({result.players} players)")
        return result

    def run(
        self,
        league: Union[str, LeagueConfig],
        *,
        output_dir: Union[str, Path, None] = None,
        scrape_all: Optional[bool] = None,
        season: Optional[str] = None,
    ) -> LeagueScrapeReport:
        """Führt den Scraping-Lauf einer Liga aus.

        Raises DiscoveryError when no team list can be obtained and
        PersistenceError when the league output directory cannot be created.
        """
        cfg = league if isinstance(league, LeagueConfig) else get_league(league)
        scrape_all = self.settings.scrape_all if scrape_all is None else scrape_all
        season = season or self.settings.scrape_season
        league_dir = Path(output_dir or self.settings.data_dir) / cfg.key
        try:
            league_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(f"cannot create output directory {league_dir}: {e}") from e

        report = LeagueScrapeReport(league=cfg.key, scrape_all=scrape_all)
        # landing page waits for the previous league's last team without restarting the interval
        self.rate_limiter.acquire()
        try:
            teams = self.discover(cfg, season)
        finally:
            if self.state == RunState.DISCOVERING:
                self._set_state(RunState.IDLE)
        report.discovered = len(teams)

        selected = self.select_teams(teams, scrape_all)
        self._set_state(RunState.SCRAPING)
        for entry in selected:
            with self.rate_limiter:
                report.results.append(self.scrape_team(cfg, entry, league_dir))

        report.finished_at = datetime.now()
        self._set_state(RunState.DONE)
        for line in report.summary_lines():
            self.logger.info(line)
        return report
