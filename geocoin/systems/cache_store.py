"""Cache store: per-cell snapshots with lazy Geocache materialization."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from geocoin.core.geocache import Geocache
from geocoin.errors import DecodeError
from geocoin.systems.minting import mint_coins

if TYPE_CHECKING:
    from geocoin.core.models import Cell, Coin
    from geocoin.systems.minting import SerialCounter

logger = logging.getLogger(__name__)


class CacheStore:
    """Maps ``"i:j"`` keys to the last-written snapshot of that cell's cache.

    The snapshot is the source of truth; :class:`Geocache` objects are
    rebuilt from it on every lookup. Every mutation goes through
    :meth:`save` so the store never holds a stale snapshot.
    """

    __slots__ = ("_states", "_serials", "_max_coins")

    def __init__(
        self,
        serials: SerialCounter,
        max_coins: int = 5,
        states: Mapping[str, str] | None = None,
    ) -> None:
        self._serials = serials
        self._max_coins = max_coins
        self._states: dict[str, str] = dict(states) if states else {}

    @staticmethod
    def key_for(cell: Cell) -> str:
        return f"{cell.i}:{cell.j}"

    # -- lookup --

    def get_or_create(self, cell: Cell) -> Geocache:
        """Restore the cell's cache from its snapshot, or mint a fresh one.

        Either way the resulting snapshot is written back, so a second call
        restores instead of minting again. Raises :class:`DecodeError` if the
        stored snapshot is malformed or describes another cell; the stored
        entry is left as it was.
        """
        key = self.key_for(cell)
        blob = self._states.get(key)
        if blob is not None:
            cache = Geocache(cell.i, cell.j)
            cache.restore(blob)
            if (cache.i, cache.j) != (cell.i, cell.j):
                raise DecodeError(
                    f"Snapshot under {key} describes cell ({cache.i}, {cache.j})"
                )
        else:
            cache = Geocache(cell.i, cell.j, mint_coins(cell.i, cell.j, self._serials, self._max_coins))
            logger.debug("Minted %d coins at %s", len(cache), key)
        self._states[key] = cache.serialize()
        return cache

    def peek(self, cell: Cell) -> str | None:
        """Return the raw snapshot for *cell* without materializing anything."""
        return self._states.get(self.key_for(cell))

    # -- mutation --

    def save(self, cache: Geocache) -> None:
        self._states[f"{cache.i}:{cache.j}"] = cache.serialize()

    def collect(self, cell: Cell) -> Coin | None:
        """Take the top coin from *cell*'s cache; None when it is empty."""
        cache = self.get_or_create(cell)
        coin = cache.collect()
        if coin is not None:
            self.save(cache)
        return coin

    def deposit(self, cell: Cell, coin: Coin) -> Geocache:
        cache = self.get_or_create(cell)
        cache.deposit(coin)
        self.save(cache)
        return cache

    def discard(self, cell: Cell) -> bool:
        """Forget *cell*'s snapshot; the next lookup mints a new cache."""
        return self._states.pop(self.key_for(cell), None) is not None

    # -- bulk state --

    def snapshot(self) -> dict[str, str]:
        return dict(self._states)

    def load(self, states: Mapping[str, str]) -> None:
        self._states = dict(states)

    def __contains__(self, cell: Cell) -> bool:
        return self.key_for(cell) in self._states

    def __len__(self) -> int:
        return len(self._states)
