"""Game configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for one play session."""

    # Board
    tile_width: float = 1e-4              # degrees per grid cell
    tile_visibility_radius: int = 8       # half-width of the visible window, in cells
    cache_spawn_prob: float = 0.1

    # Caches
    max_coins_per_cache: int = 5
    remint_corrupt_caches: bool = False   # re-mint a cache whose snapshot fails to decode

    # Player (the classroom)
    start_lat: float = 36.98949379578401
    start_lng: float = -122.06277128548504
    move_threshold: float = 1e-4          # ignore geolocation jitter below this, in degrees

    # Events
    event_history: int = 50

    # Logging
    log_level: str = "INFO"
