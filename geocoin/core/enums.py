"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class Direction(IntEnum):
    """Cardinal movement directions."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


@unique
class EventCategory(str, Enum):
    """Kinds of entries written to the session event log."""

    MOVE = "move"
    SPAWN = "spawn"
    COLLECT = "collect"
    DEPOSIT = "deposit"
    CORRUPT = "corrupt"
    LOAD = "load"
    RESET = "reset"
