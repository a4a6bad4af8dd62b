"""Coin minting and the serial counter that feeds it."""

from __future__ import annotations

import math

from geocoin.core.models import Coin
from geocoin.systems.rng import coin_count_key, luck


class SerialCounter:
    """Monotonic serial source owned by one session.

    Never shared between sessions, so two worlds in the same process (tests,
    API resets) cannot leak serials into each other.
    """

    __slots__ = ("_next",)

    def __init__(self, start: int = 0) -> None:
        self._next = start

    @property
    def peek(self) -> int:
        """The serial the next call to :meth:`next` will return."""
        return self._next

    def next(self) -> int:
        serial = self._next
        self._next += 1
        return serial

    def advance_past(self, serial: int) -> None:
        """Make sure every later serial is greater than *serial*."""
        if serial >= self._next:
            self._next = serial + 1


def coin_count(i: int, j: int, max_coins: int = 5) -> int:
    """Number of coins a fresh cache at (i, j) starts with, in [1, max_coins]."""
    return math.floor(luck(coin_count_key(i, j)) * max_coins) + 1


def mint_coins(i: int, j: int, serials: SerialCounter, max_coins: int = 5) -> list[Coin]:
    """Mint the starting coins for cell (i, j) with strictly increasing serials."""
    return [Coin(i, j, serials.next()) for _ in range(coin_count(i, j, max_coins))]
