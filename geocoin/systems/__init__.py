"""Engine systems: RNG, coin minting, cache storage."""

from geocoin.systems.rng import coin_count_key, luck, spawn_key
from geocoin.systems.minting import SerialCounter, coin_count, mint_coins
from geocoin.systems.cache_store import CacheStore

__all__ = [
    "CacheStore",
    "SerialCounter",
    "coin_count",
    "coin_count_key",
    "luck",
    "mint_coins",
    "spawn_key",
]
