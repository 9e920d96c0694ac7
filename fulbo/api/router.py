"""
Aggregated API router.
"""

from fastapi import APIRouter

from fulbo.api.endpoints import bingo, quiz, teams

api_router = APIRouter()

# Register endpoint routers here to keep create_fastapi_app clean
api_router.include_router(teams.router, tags=["teams"])
api_router.include_router(quiz.router, tags=["quiz"])
api_router.include_router(bingo.router, tags=["bingo"])
