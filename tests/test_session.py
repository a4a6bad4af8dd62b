"""Tests for GameSession: movement, coin transfer, persistence while roaming, save/load."""

from __future__ import annotations

import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from geocoin.config import GameConfig
from geocoin.core.enums import Direction, EventCategory
from geocoin.core.geocache import Geocache
from geocoin.core.models import Cell, Coin, Point
from geocoin.engine.save import GameSave, decode_save, encode_save
from geocoin.engine.session import GameSession
from geocoin.errors import ConfigError, DecodeError, NotVisibleError, PositionError


def _config(**overrides) -> GameConfig:
    """Unit tiles, radius 2, every cell a cache: a 5x5 fully-populated window at (0, 0)."""
    base = dict(
        tile_width=1.0,
        tile_visibility_radius=2,
        cache_spawn_prob=1.0,
        start_lat=0.5,
        start_lng=0.5,
        move_threshold=0.5,
    )
    base.update(overrides)
    return GameConfig(**base)


def _all_serials(session: GameSession) -> list[int]:
    serials = [c.serial for c in session.holding]
    for key in session.store.snapshot():
        i, j = (int(p) for p in key.split(":"))
        serials.extend(c.serial for c in session.store.get_or_create(Cell(i, j)).coins)
    return serials


# ---------------------------------------------------------------------------
# Construction & visibility
# ---------------------------------------------------------------------------

class TestSessionBasics:
    def test_defaults_match_classroom(self):
        s = GameSession()
        assert s.player == Point(36.98949379578401, -122.06277128548504)
        assert s.board.tile_width == 1e-4
        assert s.board.tile_visibility_radius == 8
        assert s.history == (s.player,)
        assert s.holding == ()

    def test_bad_config_fails_fast(self):
        with pytest.raises(ConfigError):
            GameSession(_config(tile_width=-1.0))
        with pytest.raises(ConfigError):
            GameSession(_config(tile_visibility_radius=-2))

    def test_visible_caches_cover_window(self):
        s = GameSession(_config())
        caches = s.visible_caches()
        assert len(caches) == 25
        assert {(c.i, c.j) for c in caches} == {(i, j) for i in range(-2, 3) for j in range(-2, 3)}
        assert all(1 <= len(c) <= 5 for c in caches)

    def test_spawn_events_only_on_first_sight(self):
        s = GameSession(_config(tile_visibility_radius=0, event_history=100))
        s.visible_caches()
        s.visible_caches()
        spawns = [e for e in s.events.latest(100) if e.category == EventCategory.SPAWN]
        assert len(spawns) == 1
        assert spawns[0].cell == (0, 0)

    def test_no_caches_when_probability_zero(self):
        s = GameSession(_config(cache_spawn_prob=0.0))
        assert s.visible_caches() == []
        with pytest.raises(NotVisibleError):
            s.collect(Cell(0, 0))


# ---------------------------------------------------------------------------
# Movement
# ---------------------------------------------------------------------------

class TestMovement:
    def test_move_steps_one_tile(self):
        s = GameSession(_config())
        s.move(Direction.NORTH)
        assert s.player == Point(1.5, 0.5)
        s.move(Direction.EAST)
        assert s.player_cell == Cell(1, 1)
        s.move(Direction.SOUTH)
        s.move(Direction.WEST)
        assert s.player_cell == Cell(0, 0)
        assert len(s.history) == 5
        assert s.step == 4

    def test_relocate_ignores_jitter(self):
        s = GameSession(_config())
        assert s.relocate(Point(0.6, 0.7)) is False
        assert s.player == Point(0.5, 0.5)
        assert s.relocate(Point(40.5, -3.5)) is True
        assert s.player_cell == Cell(40, -4)
        assert s.history[-1] == Point(40.5, -3.5)

    @pytest.mark.parametrize("point", [
        Point(float("inf"), 0.0),
        Point(0.0, float("-inf")),
        Point(float("nan"), 0.0),
        Point(1e308, 0.0),
        Point(0.0, 180.5),
    ])
    def test_relocate_rejects_bad_position_without_mutating(self, point):
        s = GameSession(_config())
        with pytest.raises(PositionError):
            s.relocate(point)
        assert s.player == Point(0.5, 0.5)
        assert s.history == (Point(0.5, 0.5),)
        assert s.step == 0
        assert len(s.visible_caches()) == 25

    def test_cannot_walk_past_the_pole(self):
        s = GameSession(_config(start_lat=89.5))
        with pytest.raises(PositionError):
            s.move(Direction.NORTH)
        assert s.player == Point(89.5, 0.5)
        assert s.step == 0

    def test_start_position_is_checked(self):
        with pytest.raises(PositionError):
            GameSession(_config(start_lat=float("inf")))

    def test_move_events(self):
        s = GameSession(_config())
        s.move(Direction.WEST)
        event = s.events.latest(1)[0]
        assert event.category == EventCategory.MOVE
        assert "west" in event.message


# ---------------------------------------------------------------------------
# Coin transfer
# ---------------------------------------------------------------------------

class TestTransfer:
    def test_collect_moves_top_coin_to_holding(self):
        s = GameSession(_config())
        before = s.cache_at(Cell(0, 0)).coins
        coin = s.collect(Cell(0, 0))
        assert coin == before[-1]
        assert s.holding == (coin,)
        assert s.cache_at(Cell(0, 0)).coins == before[:-1]

    def test_collect_empty_cache_is_none(self):
        s = GameSession(_config())
        n = len(s.cache_at(Cell(1, 1)))
        for _ in range(n):
            assert s.collect(Cell(1, 1)) is not None
        assert s.collect(Cell(1, 1)) is None
        assert len(s.holding) == n

    def test_deposit_with_empty_holding_is_none(self):
        s = GameSession(_config())
        n = len(s.cache_at(Cell(0, 0)))
        assert s.deposit(Cell(0, 0)) is None
        assert len(s.cache_at(Cell(0, 0))) == n

    def test_deposit_moves_last_collected(self):
        s = GameSession(_config())
        a = s.collect(Cell(0, 0))
        b = s.collect(Cell(2, 2))
        assert s.deposit(Cell(-1, 1)) == b
        assert s.cache_at(Cell(-1, 1)).coins[-1] == b
        assert s.holding == (a,)

    def test_not_visible(self):
        s = GameSession(_config())
        with pytest.raises(NotVisibleError) as exc_info:
            s.collect(Cell(3, 0))
        assert (exc_info.value.i, exc_info.value.j) == (3, 0)
        with pytest.raises(NotVisibleError):
            s.deposit(Cell(0, -3))

    def test_transfers_conserve_coins(self):
        s = GameSession(_config())
        s.visible_caches()
        before = sorted(_all_serials(s))
        for cell in (Cell(0, 0), Cell(0, 0), Cell(1, -1), Cell(2, 2)):
            s.collect(cell)
        s.deposit(Cell(-2, -2))
        s.deposit(Cell(0, 1))
        assert sorted(_all_serials(s)) == before

    def test_cache_state_survives_roaming(self):
        s = GameSession(_config())
        s.collect(Cell(0, 0))
        kept = s.cache_at(Cell(0, 0)).coins
        for _ in range(6):
            s.move(Direction.EAST)
        assert not s.is_visible(Cell(0, 0))
        for _ in range(6):
            s.move(Direction.WEST)
        assert s.cache_at(Cell(0, 0)).coins == kept

    def test_collect_logs_event(self):
        s = GameSession(_config())
        coin = s.collect(Cell(0, 0))
        event = s.events.latest(1)[0]
        assert event.category == EventCategory.COLLECT
        assert event.cell == (0, 0)
        assert str(coin) in event.message


# ---------------------------------------------------------------------------
# Save / load / reset
# ---------------------------------------------------------------------------

class TestSaveLoad:
    def test_round_trip(self):
        s = GameSession(_config())
        s.collect(Cell(0, 0))
        s.move(Direction.NORTH)
        s.collect(Cell(1, 1))
        save = s.save()

        restored = GameSession.from_save(_config(), decode_save(encode_save(save)))
        assert restored.player == s.player
        assert restored.history == s.history
        assert restored.holding == s.holding
        assert restored.store.snapshot() == s.store.snapshot()
        assert restored.serials.peek == s.serials.peek

    def test_serials_never_reused_after_stale_load(self):
        held = Coin(0, 0, 41)
        cached = Geocache(1, 0, [Coin(1, 0, 57)]).serialize()
        save = GameSave(
            player={"lat": 0.5, "lng": 0.5},
            holding=[{"i": 0, "j": 0, "serial": 41}],
            cache_states={"1:0": cached},
            next_serial=0,
        )
        s = GameSession.from_save(_config(), save)
        assert s.holding == (held,)
        assert s.serials.peek == 58
        fresh = s.cache_at(Cell(0, 0)).coins
        assert all(c.serial >= 58 for c in fresh)
        serials = _all_serials(s)
        assert len(serials) == len(set(serials))

    def test_empty_history_defaults_to_player(self):
        save = GameSave(player={"lat": 3.5, "lng": 4.5})
        s = GameSession.from_save(_config(), save)
        assert s.history == (Point(3.5, 4.5),)

    def test_corrupt_cache_is_skipped(self):
        save = GameSave(player={"lat": 0.5, "lng": 0.5}, cache_states={"0:0": "junk"})
        s = GameSession.from_save(_config(), save)
        caches = s.visible_caches()
        assert len(caches) == 24
        assert (0, 0) not in {(c.i, c.j) for c in caches}
        assert any(e.category == EventCategory.CORRUPT for e in s.events.latest(50))
        with pytest.raises(DecodeError):
            s.collect(Cell(0, 0))
        # the other caches are still usable
        assert s.collect(Cell(1, 1)) is not None

    def test_corrupt_cache_is_reminted_when_configured(self):
        save = GameSave(player={"lat": 0.5, "lng": 0.5}, cache_states={"0:0": "junk"})
        s = GameSession.from_save(_config(remint_corrupt_caches=True), save)
        caches = s.visible_caches()
        assert len(caches) == 25
        assert len(s.cache_at(Cell(0, 0))) >= 1

    def test_decode_save_errors(self):
        with pytest.raises(DecodeError):
            decode_save("{}")
        with pytest.raises(DecodeError):
            decode_save('{"player": {"lat": 1, "lng": 2}, "next_serial": -1}')
        with pytest.raises(DecodeError):
            decode_save("nope")

    @pytest.mark.parametrize("player", [
        '{"lat": Infinity, "lng": 0.0}',
        '{"lat": NaN, "lng": 0.0}',
        '{"lat": 1e308, "lng": 0.0}',
        '{"lat": 0.0, "lng": -200.0}',
    ])
    def test_decode_save_rejects_bad_player_position(self, player):
        with pytest.raises(DecodeError):
            decode_save('{"player": ' + player + "}")

    def test_decode_save_rejects_bad_history_position(self):
        with pytest.raises(DecodeError):
            decode_save('{"player": {"lat": 0, "lng": 0}, "history": [{"lat": 91, "lng": 0}]}')

    def test_decode_save_rejects_unknown_version(self):
        assert decode_save('{"version": 1, "player": {"lat": 0, "lng": 0}}').version == 1
        with pytest.raises(DecodeError, match="version"):
            decode_save('{"version": 2, "player": {"lat": 0, "lng": 0}}')

    def test_reset(self):
        s = GameSession(_config())
        s.collect(Cell(0, 0))
        s.move(Direction.SOUTH)
        s.reset()
        assert s.holding == ()
        assert len(s.store) == 0
        assert s.player == Point(0.5, 0.5)
        assert s.serials.peek == 0
        assert [e.category for e in s.events.latest(10)] == [EventCategory.RESET]
