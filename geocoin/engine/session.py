"""GameSession: one player roaming the board, collecting and depositing coins."""

from __future__ import annotations

import logging
import math

from geocoin.config import GameConfig
from geocoin.core.board import Board
from geocoin.core.enums import Direction, EventCategory
from geocoin.core.geocache import CoinRecord, Geocache, decode_state
from geocoin.core.models import DIRECTION_OFFSETS, Cell, Coin, Point
from geocoin.engine.save import GameSave, PointRecord
from geocoin.errors import DecodeError, NotVisibleError, PositionError
from geocoin.systems.cache_store import CacheStore
from geocoin.systems.minting import SerialCounter
from geocoin.utils.event_log import EventLog, GameEvent

logger = logging.getLogger(__name__)


def _check_position(point: Point) -> Point:
    if not (math.isfinite(point.lat) and math.isfinite(point.lng)):
        raise PositionError(f"Position {point} is not finite")
    if not (-90.0 <= point.lat <= 90.0 and -180.0 <= point.lng <= 180.0):
        raise PositionError(f"Position {point} is off the globe")
    return point


class GameSession:
    """Single-writer game state for one local play session.

    Owns the Board, the serial counter and the cache store. Coins only move
    between caches and the player's holding; the only source of new coins is
    minting a cache the first time its cell is seen.
    """

    __slots__ = (
        "_config", "board", "events", "serials", "store",
        "_player", "_history", "_holding", "_step",
    )

    def __init__(self, config: GameConfig | None = None) -> None:
        self._config = config if config is not None else GameConfig()
        self.board = Board(
            self._config.tile_width,
            self._config.tile_visibility_radius,
            self._config.cache_spawn_prob,
        )
        self.events = EventLog(self._config.event_history)
        self._fresh_state()

    def _fresh_state(self) -> None:
        self.serials = SerialCounter()
        self.store = CacheStore(self.serials, self._config.max_coins_per_cache)
        self._player = _check_position(Point(self._config.start_lat, self._config.start_lng))
        self._history: list[Point] = [self._player]
        self._holding: list[Coin] = []
        self._step = 0

    @classmethod
    def from_save(cls, config: GameConfig | None, save: GameSave) -> GameSession:
        session = cls(config)
        session.load(save)
        return session

    # -- read-only views --

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def player(self) -> Point:
        return self._player

    @property
    def player_cell(self) -> Cell:
        return self.board.cell_for_point(self._player)

    @property
    def history(self) -> tuple[Point, ...]:
        return tuple(self._history)

    @property
    def holding(self) -> tuple[Coin, ...]:
        return tuple(self._holding)

    @property
    def step(self) -> int:
        return self._step

    # -- visibility --

    def visible_cells(self) -> list[Cell]:
        return self.board.cells_near(self._player)

    def visible_caches(self) -> list[Geocache]:
        """Materialize every cache in view, skipping unreadable ones."""
        caches: list[Geocache] = []
        for cell in self.visible_cells():
            cache = self._materialize(cell)
            if cache is not None:
                caches.append(cache)
        return caches

    def is_visible(self, cell: Cell) -> bool:
        origin = self.player_cell
        r = self.board.tile_visibility_radius
        return (
            abs(cell.i - origin.i) <= r
            and abs(cell.j - origin.j) <= r
            and self.board.is_cache_site(cell.i, cell.j)
        )

    def cache_at(self, cell: Cell) -> Geocache:
        cell = self._require_visible(cell)
        cache = self._materialize(cell)
        if cache is None:
            raise DecodeError(f"Cache at ({cell.i}, {cell.j}) is unreadable")
        return cache

    # -- movement --

    def move(self, direction: Direction) -> Point:
        """Step one tile in *direction*."""
        dlat, dlng = DIRECTION_OFFSETS[direction]
        w = self.board.tile_width
        self._set_player(self._player.offset(dlat * w, dlng * w))
        self._log(EventCategory.MOVE, f"Moved {Direction(direction).name.lower()} to {self._player}")
        return self._player

    def relocate(self, point: Point) -> bool:
        """Jump to *point* (a geolocation fix). Returns False for sub-threshold jitter."""
        threshold = self._config.move_threshold
        if abs(point.lat - self._player.lat) < threshold and abs(point.lng - self._player.lng) < threshold:
            return False
        self._set_player(point)
        self._log(EventCategory.MOVE, f"Relocated to {point}")
        return True

    def _set_player(self, point: Point) -> None:
        cell = self.board.cell_for_point(_check_position(point))
        self._player = point
        self._history.append(point)
        self._step += 1
        logger.debug("Player at %s (cell %s)", point, cell)

    # -- coin transfer --

    def collect(self, cell: Cell) -> Coin | None:
        """Move the top coin of a visible cache into the player's holding."""
        cell = self._require_visible(cell)
        if self._materialize(cell) is None:
            raise DecodeError(f"Cache at ({cell.i}, {cell.j}) is unreadable")
        coin = self.store.collect(cell)
        if coin is None:
            return None
        self._holding.append(coin)
        logger.info("Collected coin %s from (%d, %d)", coin, cell.i, cell.j)
        self._log(EventCategory.COLLECT, f"Collected coin {coin}", cell)
        return coin

    def deposit(self, cell: Cell) -> Coin | None:
        """Drop the most recently collected coin into a visible cache."""
        cell = self._require_visible(cell)
        if not self._holding:
            return None
        if self._materialize(cell) is None:
            raise DecodeError(f"Cache at ({cell.i}, {cell.j}) is unreadable")
        coin = self._holding.pop()
        self.store.deposit(cell, coin)
        logger.info("Deposited coin %s into (%d, %d)", coin, cell.i, cell.j)
        self._log(EventCategory.DEPOSIT, f"Deposited coin {coin}", cell)
        return coin

    # -- save / load --

    def save(self) -> GameSave:
        return GameSave(
            player=PointRecord.from_point(self._player),
            history=[PointRecord.from_point(p) for p in self._history],
            holding=[CoinRecord.from_coin(c) for c in self._holding],
            cache_states=self.store.snapshot(),
            next_serial=self.serials.peek,
        )

    def load(self, save: GameSave) -> None:
        """Replace the whole session state with *save*."""
        serials = SerialCounter(save.next_serial)
        holding = [c.to_coin() for c in save.holding]
        for coin in holding:
            serials.advance_past(coin.serial)
        for key, blob in save.cache_states.items():
            try:
                state = decode_state(blob)
            except DecodeError:
                # Reported when the cell comes into view.
                logger.debug("Skipping unreadable snapshot %s while scanning serials", key)
                continue
            for coin in state.coins:
                serials.advance_past(coin.serial)

        self.serials = serials
        self.store = CacheStore(serials, self._config.max_coins_per_cache, save.cache_states)
        self._player = save.player.to_point()
        self._history = [p.to_point() for p in save.history] or [self._player]
        self._holding = holding
        logger.info(
            "Loaded session: %d caches, %d coins held, next serial %d",
            len(self.store), len(self._holding), serials.peek,
        )
        self._log(EventCategory.LOAD, f"Loaded save with {len(self.store)} caches")

    def reset(self) -> None:
        self.events.clear()
        self._fresh_state()
        logger.info("Session reset to %s", self._player)
        self._log(EventCategory.RESET, "Session reset")

    # -- internals --

    def _require_visible(self, cell: Cell) -> Cell:
        if not self.is_visible(cell):
            raise NotVisibleError(cell.i, cell.j)
        return self.board.canonical_cell(cell.i, cell.j)

    def _materialize(self, cell: Cell) -> Geocache | None:
        fresh = cell not in self.store
        try:
            cache = self.store.get_or_create(cell)
        except DecodeError as exc:
            logger.warning("Cache at (%d, %d) is unreadable: %s", cell.i, cell.j, exc)
            self._log(EventCategory.CORRUPT, f"Unreadable cache: {exc}", cell)
            if not self._config.remint_corrupt_caches:
                return None
            self.store.discard(cell)
            cache = self.store.get_or_create(cell)
            fresh = True
        if fresh:
            self._log(EventCategory.SPAWN, f"Cache with {len(cache)} coins appeared", cell)
        return cache

    def _log(self, category: EventCategory, message: str, cell: Cell | None = None) -> None:
        where = (cell.i, cell.j) if cell is not None else None
        self.events.append(GameEvent(self._step, category, message, where))
