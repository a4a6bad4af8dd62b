"""Core data models: Point, Cell, Bounds, Coin."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Point:
    """Continuous 2D coordinate. ``lat`` is the y axis, ``lng`` the x axis."""

    lat: float = 0.0
    lng: float = 0.0

    def offset(self, dlat: float, dlng: float) -> Point:
        return Point(self.lat + dlat, self.lng + dlng)

    def __repr__(self) -> str:
        return f"({self.lat}, {self.lng})"


@dataclass(frozen=True, slots=True)
class Cell:
    """Immutable grid coordinate.

    Equal ``(i, j)`` means the same cell. The Board hands out one canonical
    instance per coordinate pair, so identity comparison is also safe for
    cells obtained from the same Board.
    """

    i: int
    j: int

    def __repr__(self) -> str:
        return f"Cell({self.i}, {self.j})"


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned half-open rectangle ``[south, north) x [west, east)``."""

    south: float
    west: float
    north: float
    east: float

    def contains(self, point: Point) -> bool:
        return self.south <= point.lat < self.north and self.west <= point.lng < self.east


@dataclass(frozen=True, slots=True)
class Coin:
    """A collectible token.

    ``(i, j)`` is the cell the coin was minted in and stays fixed wherever the
    coin travels; ``serial`` is unique within a session.
    """

    i: int
    j: int
    serial: int

    def __str__(self) -> str:
        return f"{self.i}:{self.j}#{self.serial}"


# Direction offsets in tiles, (dlat, dlng), mapped to Direction enum values
DIRECTION_OFFSETS: dict[int, tuple[int, int]] = {
    0: (1, 0),    # NORTH
    1: (0, 1),    # EAST
    2: (-1, 0),   # SOUTH
    3: (0, -1),   # WEST
}
