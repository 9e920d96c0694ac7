"""Football bingo game data.

Loads a game (local download first, remote API second), flattens its
category grid and player list, and caches the normalized result per id.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import ValidationError

from fulbo.common.cache import ResultCache, TTLCache
from fulbo.common.http import FetchError, fetch_json
from fulbo.core.config import Settings
from fulbo.domain.models import (
    BingoCategory,
    BingoGame,
    BingoPlayer,
    RemoteBingoDocument,
)

logger = logging.getLogger(__name__)

CATEGORY_IMAGE_URL = "https://playfootball.games/media/categories/{id}.webp"


class BingoFetchError(Exception):
    """The game could be neither read locally nor fetched remotely."""


def normalize_game(game_id: int, document: RemoteBingoDocument) -> BingoGame:
    categories = [
        BingoCategory(
            id=rc.id,
            name=rc.name,
            display_name=rc.display_name,
            type=rc.type,
            image=CATEGORY_IMAGE_URL.format(id=rc.id),
            helper_text=rc.helper_text,
        )
        for row in document.game_data.remit
        for rc in row
    ]
    players = [
        BingoPlayer(id=rp.id, name=rp.full_name, category_ids=list(rp.v))
        for rp in document.game_data.players
    ]
    return BingoGame(game_id=game_id, categories=categories, players=players)


class BingoService:
    def __init__(
        self,
        settings: Settings,
        *,
        cache: Optional[ResultCache] = None,
        fetch: Callable[..., Any] = fetch_json,
    ):
        self.settings = settings
        self.cache = cache if cache is not None else TTLCache(settings.bingo_cache_ttl_seconds)
        self.fetch = fetch

    @property
    def local_dirs(self) -> list[Path]:
        return [Path(self.settings.bingo_data_dir)] + [Path(d) for d in self.settings.bingo_extra_dirs]

    def _load_local(self, game_id: int) -> Optional[RemoteBingoDocument]:
        for directory in self.local_dirs:
            path = directory / f"{game_id}.json"
            if not path.is_file():
                continue
            try:
                return RemoteBingoDocument.model_validate(json.loads(path.read_text(encoding="utf-8")))
            except (OSError, ValueError, ValidationError) as e:
                raise BingoFetchError(f"failed to parse local file {path}: {e}") from e
        return None

    def _load_remote(self, game_id: int) -> RemoteBingoDocument:
        url = self.settings.bingo_remote_url.format(game_id=game_id)
        try:
            payload = self.fetch(url, max_attempts=1, timeout=self.settings.scrape_timeout)
            return RemoteBingoDocument.model_validate(payload)
        except (FetchError, ValidationError) as e:
            raise BingoFetchError(f"cannot load bingo game {game_id}: {e}") from e

    def _load(self, game_id: int) -> BingoGame:
        document = self._load_local(game_id)
        if document is None:
            logger.info("Bingo game %s not found locally, fetching remote", game_id)
            document = self._load_remote(game_id)
        return normalize_game(game_id, document)

    def get_game(self, game_id: int) -> BingoGame:
        """Cached lookup; loads and caches on miss. Raises BingoFetchError."""
        if isinstance(self.cache, TTLCache):
            return self.cache.get_or_load(game_id, lambda: self._load(game_id))
        value, found = self.cache.get(game_id)
        if found:
            return value
        game = self._load(game_id)
        self.cache.put(game_id, game)
        return game


def build_bingo_cache(settings: Settings) -> ResultCache:
    if settings.bingo_cache_backend == "redis":
        from fulbo.common.cache import RedisCache

        return RedisCache.from_url(
            settings.redis_url, settings.bingo_cache_ttl_seconds, model=BingoGame, prefix="fulbo:bingo"
        )
    return TTLCache(settings.bingo_cache_ttl_seconds)
