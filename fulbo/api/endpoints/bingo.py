"""
Bingo API Endpoints
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from fulbo.api.dependencies import get_bingo_service
from fulbo.api.models import error_body
from fulbo.domain.models import BingoGame
from fulbo.games.bingo import BingoFetchError, BingoService

router = APIRouter()


# sync def: runs in the threadpool, loading may block on the network
@router.get("/api/bingo/{game_id}", response_model=BingoGame, response_model_by_alias=True)
def get_bingo_game(game_id: int, service: BingoService = Depends(get_bingo_service)):
    """Normalized bingo board (categories + players) for one game id"""
    try:
        return service.get_game(game_id)
    except BingoFetchError as e:
        return JSONResponse(status_code=502, content=error_body("bingo game unavailable", str(e)))
