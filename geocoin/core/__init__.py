"""Core data models, the board, and the geocache entity."""

from geocoin.core.enums import Direction, EventCategory
from geocoin.core.models import Bounds, Cell, Coin, Point
from geocoin.core.board import Board
from geocoin.core.geocache import CacheState, Geocache, decode_state, encode_state

__all__ = [
    "Board",
    "Bounds",
    "CacheState",
    "Cell",
    "Coin",
    "Direction",
    "EventCategory",
    "Geocache",
    "Point",
    "decode_state",
    "encode_state",
]
