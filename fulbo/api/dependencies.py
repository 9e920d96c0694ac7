"""
API Dependencies
Dependency Injection für FastAPI
"""

from fastapi import Request

from fulbo.core.config import Settings
from fulbo.games.bingo import BingoService


async def get_settings(request: Request) -> Settings:
    """Dependency für Settings (geteilt über App-Lebenszyklus)"""
    return request.app.state.settings


async def get_bingo_service(request: Request) -> BingoService:
    """Dependency für Bingo Service (mit geteiltem Cache)"""
    return request.app.state.bingo_service
