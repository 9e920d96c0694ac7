"""
Teams API Endpoints
Statische Auslieferung der Team-JSON-Dateien pro Liga
"""

import re
from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from fulbo.api.dependencies import get_settings
from fulbo.api.models import TeamListEntry, TeamListResponse, error_body
from fulbo.core.config import Settings
from fulbo.core.leagues import normalize_league
from fulbo.storage.team_files import read_team_label

router = APIRouter()

VALID_TEAM_FILE = re.compile(r"^[A-Za-z0-9._\-]+\.json$")


def _league_dir(settings: Settings, league: str):
    """Directory for ``league`` or None when the league is unknown."""
    try:
        return Path(settings.data_dir) / normalize_league(league)
    except ValueError:
        return None


def _serve_team_file(league: str, team_file: str, settings: Settings) -> Response:
    league_dir = _league_dir(settings, league)
    if league_dir is None:
        return JSONResponse(status_code=404, content=error_body("league not found"))
    if not VALID_TEAM_FILE.match(team_file) or ".." in team_file:
        return JSONResponse(status_code=400, content=error_body("invalid team name"))
    path = league_dir / team_file
    if not path.is_file():
        return JSONResponse(status_code=404, content=error_body("team json not found"))
    return Response(content=path.read_bytes(), media_type="application/json")


@router.get("/leagues/{league}/{team_file}")
async def get_team_file(league: str, team_file: str, settings: Settings = Depends(get_settings)):
    """Raw team document, e.g. ``/leagues/laligaes/barcelona.json``"""
    return _serve_team_file(league, team_file, settings)


@router.get("/api/get/{league}/{team_file}")
async def get_team_file_legacy(league: str, team_file: str, settings: Settings = Depends(get_settings)):
    """Same as ``/leagues/{league}/{team_file}``"""
    return _serve_team_file(league, team_file, settings)


@router.get("/api/list/{league}", response_model=TeamListResponse)
async def list_teams(league: str, settings: Settings = Depends(get_settings)):
    """List the team files of a league, sorted by team label"""
    league_dir = _league_dir(settings, league)
    if league_dir is None:
        return JSONResponse(status_code=404, content=error_body("league not found"))

    entries = []
    if league_dir.is_dir():
        for path in league_dir.glob("*.json"):
            entries.append(TeamListEntry(file=path.name, team=read_team_label(path)))
    entries.sort(key=lambda e: (e.team.lower(), e.file))
    return TeamListResponse(league=league_dir.name, teams=entries)
