"""Board: infinite grid indexing and cache-site discovery."""

from __future__ import annotations

import logging
import math

from geocoin.core.models import Bounds, Cell, Point
from geocoin.errors import ConfigError
from geocoin.systems.rng import luck, spawn_key

logger = logging.getLogger(__name__)


class Board:
    """Maps continuous points onto an infinite grid of square cells.

    The Board owns the canonical cell table: every ``(i, j)`` it has ever
    handed out maps to exactly one :class:`Cell` instance.
    """

    __slots__ = ("tile_width", "tile_visibility_radius", "cache_spawn_prob", "_known_cells")

    def __init__(self, tile_width: float, tile_visibility_radius: int, cache_spawn_prob: float) -> None:
        if isinstance(tile_width, bool) or not isinstance(tile_width, (int, float)):
            raise ConfigError(f"tile_width must be a number, got {tile_width!r}")
        if not math.isfinite(tile_width) or tile_width <= 0:
            raise ConfigError(f"tile_width must be positive and finite, got {tile_width!r}")
        if isinstance(tile_visibility_radius, bool) or not isinstance(tile_visibility_radius, int):
            raise ConfigError(f"tile_visibility_radius must be an integer, got {tile_visibility_radius!r}")
        if tile_visibility_radius < 0:
            raise ConfigError(f"tile_visibility_radius must be >= 0, got {tile_visibility_radius}")
        if isinstance(cache_spawn_prob, bool) or not isinstance(cache_spawn_prob, (int, float)):
            raise ConfigError(f"cache_spawn_prob must be a number, got {cache_spawn_prob!r}")
        if math.isnan(cache_spawn_prob) or cache_spawn_prob < 0:
            raise ConfigError(f"cache_spawn_prob must be >= 0, got {cache_spawn_prob!r}")

        self.tile_width = float(tile_width)
        self.tile_visibility_radius = tile_visibility_radius
        self.cache_spawn_prob = float(cache_spawn_prob)
        self._known_cells: dict[tuple[int, int], Cell] = {}

    # -- canonical cells --

    def canonical_cell(self, i: int, j: int) -> Cell:
        """Return the one live Cell for (i, j), registering it on first use."""
        key = (i, j)
        cell = self._known_cells.get(key)
        if cell is None:
            cell = Cell(i, j)
            self._known_cells[key] = cell
        return cell

    @property
    def known_cells(self) -> int:
        return len(self._known_cells)

    # -- geometry --

    def cell_for_point(self, point: Point) -> Cell:
        # math.floor rounds toward -inf, so the tiling stays uniform across 0
        i = math.floor(point.lat / self.tile_width)
        j = math.floor(point.lng / self.tile_width)
        return self.canonical_cell(i, j)

    def cell_bounds(self, cell: Cell) -> Bounds:
        w = self.tile_width
        return Bounds(
            south=cell.i * w,
            west=cell.j * w,
            north=(cell.i + 1) * w,
            east=(cell.j + 1) * w,
        )

    # -- cache sites --

    def is_cache_site(self, i: int, j: int) -> bool:
        """Spawn test for the absolute cell (i, j); independent of any query origin."""
        return luck(spawn_key(i, j)) < self.cache_spawn_prob

    def cells_near(self, point: Point) -> list[Cell]:
        """Return cache-site cells in the square window around *point*.

        Row-major order: ``di`` ascending in the outer loop, ``dj`` ascending
        in the inner loop, both over ``[-radius, radius]``.
        """
        origin = self.cell_for_point(point)
        r = self.tile_visibility_radius
        result: list[Cell] = []
        for di in range(-r, r + 1):
            for dj in range(-r, r + 1):
                i, j = origin.i + di, origin.j + dj
                if self.is_cache_site(i, j):
                    result.append(self.canonical_cell(i, j))
        logger.debug("cells_near %s: %d sites around %s", point, len(result), origin)
        return result
