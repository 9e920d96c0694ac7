"""
Command-line interface for scraping, content downloads and the API server.
Usage examples:
  fulbo scrape --league laligaes
  SCRAPE_ALL=1 fulbo scrape --league all
  fulbo questions --start 140 --end 144 --combine
  fulbo serve --port 8080
"""

import logging
from pathlib import Path
from typing import Optional

import click

from fulbo.common.logging_utils import configure_logging
from fulbo.core.config import Settings, settings
from fulbo.core.leagues import LEAGUES, normalize_league
from fulbo.data_collection.collectors.playfootball_collector import (
    bingo_collector,
    combine_questions,
    questions_collector,
)
from fulbo.data_collection.rate_limiter import IntervalRateLimiter
from fulbo.data_collection.scrapers.scraping_orchestrator import (
    POLITENESS_DELAY_SECONDS,
    LeagueScrapeOrchestrator,
)
from fulbo.data_collection.scrapers.transfermarkt_league_scraper import DiscoveryError
from fulbo.monitoring.prometheus_metrics import PrometheusMetrics
from fulbo.storage.team_files import PersistenceError

logger = logging.getLogger("fulbo.cli")


def _setup_logging(cfg: Settings, service: str) -> None:
    configure_logging(service=service, level=cfg.log_level, fmt=cfg.log_format, log_file=cfg.log_file_path)


def _resolve_leagues(values: tuple[str, ...]) -> list[str]:
    if not values or "all" in values:
        return list(LEAGUES)
    resolved: list[str] = []
    for value in values:
        key = normalize_league(value)
        if key not in resolved:
            resolved.append(key)
    return resolved


def cmd_scrape(
    cfg: Settings,
    leagues: list[str],
    *,
    output_dir: Optional[str] = None,
    scrape_all: Optional[bool] = None,
    season: Optional[str] = None,
    orchestrator: Optional[LeagueScrapeOrchestrator] = None,
    metrics: Optional[PrometheusMetrics] = None,
) -> int:
    """Scrape ``leagues`` one after another; returns the process exit code."""
    out = Path(output_dir or cfg.data_dir)
    try:
        out.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Cannot create output directory {out}: {e}")
        return 1

    if metrics is None and cfg.enable_metrics:
        metrics = PrometheusMetrics(cfg)
    # One limiter for the whole invocation: every league hits the same site
    orch = orchestrator or LeagueScrapeOrchestrator(
        cfg, rate_limiter=IntervalRateLimiter(POLITENESS_DELAY_SECONDS), metrics=metrics
    )

    try:
        return _scrape_leagues(orch, leagues, out, scrape_all=scrape_all, season=season)
    finally:
        if metrics and cfg.metrics_textfile_path:
            try:
                metrics.write_textfile(cfg.metrics_textfile_path)
            except OSError as e:
                logger.error(f"Cannot write metrics to {cfg.metrics_textfile_path}: {e}")


def _scrape_leagues(
    orch: LeagueScrapeOrchestrator,
    leagues: list[str],
    out: Path,
    *,
    scrape_all: Optional[bool],
    season: Optional[str],
) -> int:
    exit_code = 0
    for league in leagues:
        try:
            report = orch.run(league, output_dir=out, scrape_all=scrape_all, season=season)
        except DiscoveryError as e:
            logger.error(f"Discovery failed for {league}: {e}")
            exit_code = 1
            continue
        except PersistenceError as e:
            logger.error(str(e))
            return 1
        click.echo(f"{report.league}: {report.saved}/{report.attempted} teams saved")
        for failed in report.failed:
            click.echo(f"  {failed.team_id}: {failed.status.value} {failed.error}".rstrip())
    return exit_code


@click.group()
def cli():
    pass


@cli.command(name="leagues")
def list_leagues():
    """List the leagues that can be scraped"""
    for key, cfg in LEAGUES.items():
        click.echo(f"- {key:<12} {cfg.display_name:<16} {cfg.landing_url}")


@cli.command()
@click.option(
    "--league",
    "-l",
    "leagues",
    multiple=True,
    default=("all",),
    show_default=True,
    help="League key or alias (repeatable), or 'all'.",
)
@click.option("--output-dir", type=click.Path(file_okay=False), default=None, help="Defaults to settings.data_dir.")
@click.option(
    "--scrape-all/--no-scrape-all",
    default=None,
    help="Scrape every discovered team instead of only the first (env SCRAPE_ALL).",
)
@click.option("--season", default=None, help="Season id appended to roster URLs (e.g. 2025).")
def scrape(leagues: tuple[str, ...], output_dir: Optional[str], scrape_all: Optional[bool], season: Optional[str]):
    """Scrape team rosters into <output-dir>/<league>/<team>.json"""
    _setup_logging(settings, "scraper")
    try:
        targets = _resolve_leagues(leagues)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--league")
    raise SystemExit(cmd_scrape(settings, targets, output_dir=output_dir, scrape_all=scrape_all, season=season))


@cli.command()
@click.option("--start", default=720, show_default=True, help="start id")
@click.option("--end", default=730, show_default=True, help="end id (inclusive)")
@click.option("--out", "out_dir", default=None, help="Output directory (defaults to settings.bingo_data_dir).")
def bingo(start: int, end: int, out_dir: Optional[str]):
    """Download football bingo boards"""
    _setup_logging(settings, "bingo")
    collector = bingo_collector(out_dir or settings.bingo_data_dir, timeout=settings.scrape_timeout)
    try:
        saved = collector.download(start, end)
    except OSError as e:
        logger.error(f"failed to create out dir: {e}")
        raise SystemExit(1)
    click.echo(f"Saved {len(saved)} bingo boards to {collector.out_dir}")


@cli.command()
@click.option("--start", default=140, show_default=True, help="start id")
@click.option("--end", default=144, show_default=True, help="end id (inclusive)")
@click.option("--out", "out_dir", default=None, help="Output directory (defaults to settings.questions_dir).")
@click.option("--combine", is_flag=True, default=False, help="Combine all downloaded files into all_questions.json.")
def questions(start: int, end: int, out_dir: Optional[str], combine: bool):
    """Download quiz questions and optionally combine them"""
    _setup_logging(settings, "questions")
    collector = questions_collector(out_dir or settings.questions_dir, timeout=settings.scrape_timeout)
    try:
        if start <= end:
            saved = collector.download(start, end)
            click.echo(f"Saved {len(saved)} question files to {collector.out_dir}")
        if combine:
            total = combine_questions(collector.out_dir)
            click.echo(f"Combined {total} questions into {collector.out_dir.parent / 'all_questions.json'}")
    except OSError as e:
        logger.error(f"questions failed: {e}")
        raise SystemExit(1)


@cli.command()
@click.option("--host", default=None, help="Defaults to settings.api_host.")
@click.option("--port", default=None, type=int, help="Defaults to settings.api_port (env API_PORT).")
def serve(host: Optional[str], port: Optional[int]):
    """Run the JSON API with uvicorn"""
    import uvicorn

    _setup_logging(settings, "api")
    uvicorn.run("fulbo.api.app:app", host=host or settings.api_host, port=port or settings.api_port)


if __name__ == "__main__":
    cli()
