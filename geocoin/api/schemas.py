"""Pydantic response models for the REST API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from geocoin.core.board import Board
from geocoin.core.geocache import Geocache
from geocoin.core.models import Coin
from geocoin.utils.event_log import GameEvent

if TYPE_CHECKING:
    from geocoin.engine.session import GameSession


# --- Coins & caches ---

class CoinSchema(BaseModel):
    i: int
    j: int
    serial: int
    label: str = ""

    @classmethod
    def from_coin(cls, coin: Coin) -> CoinSchema:
        return cls(i=coin.i, j=coin.j, serial=coin.serial, label=str(coin))


class BoundsSchema(BaseModel):
    south: float
    west: float
    north: float
    east: float


class CacheSchema(BaseModel):
    i: int
    j: int
    bounds: BoundsSchema
    coins: list[CoinSchema] = Field(default_factory=list)   # bottom of the stack first

    @classmethod
    def from_cache(cls, cache: Geocache, board: Board) -> CacheSchema:
        b = board.cell_bounds(board.canonical_cell(cache.i, cache.j))
        return cls(
            i=cache.i,
            j=cache.j,
            bounds=BoundsSchema(south=b.south, west=b.west, north=b.north, east=b.east),
            coins=[CoinSchema.from_coin(c) for c in cache.coins],
        )


# --- Player & events ---

class PlayerSchema(BaseModel):
    lat: float
    lng: float
    i: int
    j: int
    step: int = 0
    coins_held: int = 0

    @classmethod
    def from_session(cls, session: GameSession) -> PlayerSchema:
        cell = session.player_cell
        return cls(
            lat=session.player.lat,
            lng=session.player.lng,
            i=cell.i,
            j=cell.j,
            step=session.step,
            coins_held=len(session.holding),
        )


class EventSchema(BaseModel):
    step: int
    category: str
    message: str
    i: int | None = None
    j: int | None = None

    @classmethod
    def from_event(cls, event: GameEvent) -> EventSchema:
        i, j = event.cell if event.cell is not None else (None, None)
        return cls(step=event.step, category=event.category.value, message=event.message, i=i, j=j)


# --- Responses ---

class StateResponse(BaseModel):
    player: PlayerSchema
    holding: list[CoinSchema] = Field(default_factory=list)
    caches: list[CacheSchema] = Field(default_factory=list)
    events: list[EventSchema] = Field(default_factory=list)


class ActionResponse(BaseModel):
    status: str                 # "ok" | "noop"
    message: str
    coin: CoinSchema | None = None
    cache: CacheSchema | None = None
    player: PlayerSchema | None = None


class GameConfigResponse(BaseModel):
    tile_width: float
    tile_visibility_radius: int
    cache_spawn_prob: float
    max_coins_per_cache: int
    start_lat: float
    start_lng: float
    move_threshold: float
    remint_corrupt_caches: bool
