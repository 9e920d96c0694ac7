"""
Unit tests for the result caches and the bingo service
"""

import json
from unittest.mock import Mock

import pytest

from fulbo.common.cache import RedisCache, TTLCache
from fulbo.common.http import FetchError
from fulbo.domain.models import BingoGame, RemoteBingoDocument
from fulbo.games.bingo import BingoFetchError, BingoService, normalize_game

REMOTE_GAME = {
    "gameData": {
        "remit": [
            [
                {"id": 7, "name": "barcelona", "type": 1, "displayName": "FC Barcelona"},
                {"id": 9, "name": "spain", "type": 2, "displayName": "Spain", "helperText": "Capped"},
            ],
            [{"id": 11, "name": "ucl", "type": 3, "displayName": "Champions League"}],
        ],
        "players": [
            {"id": 1, "g": "Lionel", "f": "Messi", "v": [7, 11]},
            {"id": 2, "g": "", "f": "Pedri", "v": [7, 9]},
        ],
    }
}


class TestTTLCache:
    def test_expires_after_ttl(self, fake_clock):
        cache = TTLCache(60, clock=fake_clock)
        cache.put("k", "v")

        fake_clock.advance(59)
        assert cache.get("k") == ("v", True)
        fake_clock.advance(1)
        assert cache.get("k") == (None, False)
        assert len(cache) == 0

    def test_get_or_load_calls_loader_once(self, fake_clock):
        cache = TTLCache(60, clock=fake_clock)
        loader = Mock(return_value=42)

        assert cache.get_or_load(1, loader) == 42
        assert cache.get_or_load(1, loader) == 42
        assert loader.call_count == 1

        fake_clock.advance(60)
        cache.get_or_load(1, loader)
        assert loader.call_count == 2

    def test_loader_failure_is_not_cached(self, fake_clock):
        cache = TTLCache(60, clock=fake_clock)
        with pytest.raises(RuntimeError):
            cache.get_or_load(1, Mock(side_effect=RuntimeError("down")))
        assert cache.get(1) == (None, False)
        assert cache.get_or_load(1, lambda: "ok") == "ok"

    def test_distinct_keys_do_not_grow_lock_table(self, fake_clock):
        cache = TTLCache(60, clock=fake_clock, stripes=8)
        failing = Mock(side_effect=RuntimeError("down"))

        for key in range(1000):
            with pytest.raises(RuntimeError):
                cache.get_or_load(key, failing)

        assert len(cache._locks) == 8
        assert len(cache) == 0

    def test_expired_entries_are_swept_on_write(self, fake_clock):
        cache = TTLCache(60, clock=fake_clock)
        for key in range(100):
            cache.put(key, key)

        fake_clock.advance(60)
        cache.put("fresh", 1)

        assert len(cache) == 1
        assert cache.get("fresh") == (1, True)


class TestRedisCache:
    def test_round_trip_through_client(self):
        client = Mock()
        cache = RedisCache(client, 1800, model=BingoGame, prefix="fulbo:bingo")
        game = BingoGame(game_id=5)

        cache.put(5, game)
        key, ttl, payload = client.setex.call_args.args
        assert (key, ttl) == ("fulbo:bingo:5", 1800)
        assert json.loads(payload)["gameId"] == 5

        client.get.return_value = payload
        value, found = cache.get(5)
        assert found and value == game

        client.get.return_value = None
        assert cache.get(6) == (None, False)


class TestBingoService:
    def test_normalize_game(self):
        game = normalize_game(720, RemoteBingoDocument.model_validate(REMOTE_GAME))

        assert [c.id for c in game.categories] == [7, 9, 11]
        assert game.categories[0].image == "https://playfootball.games/media/categories/7.webp"
        assert game.categories[1].helper_text == "Capped"
        assert [p.name for p in game.players] == ["Lionel Messi", "Pedri"]
        assert game.players[0].category_ids == [7, 11]
        dumped = game.model_dump(by_alias=True)
        assert dumped["gameId"] == 720
        assert "categoryIds" in dumped["players"][0]

    def test_local_file_wins_and_is_cached(self, test_settings, tmp_path):
        local = tmp_path / "remote_bingo"
        local.mkdir()
        (local / "720.json").write_text(json.dumps(REMOTE_GAME), encoding="utf-8")
        fetch = Mock()
        service = BingoService(test_settings, fetch=fetch)

        first = service.get_game(720)
        (local / "720.json").unlink()
        second = service.get_game(720)

        assert first == second
        assert len(first.players) == 2
        fetch.assert_not_called()

    def test_extra_dir_is_searched(self, test_settings, tmp_path):
        extra = tmp_path / "extra"
        extra.mkdir()
        (extra / "5.json").write_text(json.dumps(REMOTE_GAME), encoding="utf-8")
        test_settings.bingo_extra_dirs = [str(extra)]

        assert BingoService(test_settings, fetch=Mock()).get_game(5).game_id == 5

    def test_remote_fallback_fetches_once(self, test_settings):
        fetch = Mock(return_value=REMOTE_GAME)
        service = BingoService(test_settings, fetch=fetch)

        service.get_game(721)
        service.get_game(721)

        assert fetch.call_count == 1
        url = fetch.call_args.args[0]
        assert url == test_settings.bingo_remote_url.format(game_id=721)
        assert fetch.call_args.kwargs["max_attempts"] == 1

    def test_broken_local_file_raises(self, test_settings, tmp_path):
        local = tmp_path / "remote_bingo"
        local.mkdir()
        (local / "3.json").write_text("{broken", encoding="utf-8")

        with pytest.raises(BingoFetchError):
            BingoService(test_settings, fetch=Mock()).get_game(3)

    def test_remote_failure_raises_and_is_not_cached(self, test_settings):
        fetch = Mock(side_effect=FetchError("https://x", 1, "HTTP 500"))
        service = BingoService(test_settings, fetch=fetch)

        with pytest.raises(BingoFetchError):
            service.get_game(9)

        fetch.side_effect = None
        fetch.return_value = REMOTE_GAME
        assert service.get_game(9).game_id == 9

    def test_custom_cache_backend(self, test_settings):
        cache = Mock()
        cache.get.return_value = (None, False)
        service = BingoService(test_settings, cache=cache, fetch=Mock(return_value=REMOTE_GAME))

        game = service.get_game(4)

        cache.put.assert_called_once_with(4, game)
