"""Seedless string-keyed deterministic RNG using xxhash.

The world has no session seed: whether a cell holds a cache, and how many
coins it starts with, is a pure function of the cell's absolute coordinates.

Formula: luck(key) = (xxh64(utf8(key)) >> 11) / 2**53

Only the top 53 bits are kept so the quotient is exact and stays below 1.0.
"""

from __future__ import annotations

import xxhash

_SCALE = 1 << 53


def luck(key: str) -> float:
    """Return a deterministic float in [0.0, 1.0) for *key*."""
    return (xxhash.xxh64(key.encode("utf-8")).intdigest() >> 11) / _SCALE


def spawn_key(i: int, j: int) -> str:
    """Key deciding whether cell (i, j) holds a cache."""
    return f"{i},{j}"


def coin_count_key(i: int, j: int) -> str:
    """Key deciding how many coins cell (i, j) starts with."""
    return f"{i},{j},coins"
