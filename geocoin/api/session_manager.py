"""SessionManager: owns the live GameSession and serializes access to it.

FastAPI runs sync handlers on a thread pool, so every read or write of the
session goes through :meth:`SessionManager.locked` (Single-Writer preserved).
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from geocoin.engine.session import GameSession

if TYPE_CHECKING:
    from geocoin.config import GameConfig
    from geocoin.engine.save import GameSave

logger = logging.getLogger(__name__)


class SessionManager:
    """Holds one GameSession for the lifetime of the server."""

    def __init__(self, config: GameConfig) -> None:
        self._config = config
        self._lock = threading.Lock()
        self._session = GameSession(config)
        logger.info(
            "Session ready at %s (tile=%g, radius=%d, spawn=%.2f)",
            self._session.player, config.tile_width,
            config.tile_visibility_radius, config.cache_spawn_prob,
        )

    @property
    def config(self) -> GameConfig:
        return self._config

    @contextmanager
    def locked(self) -> Iterator[GameSession]:
        with self._lock:
            yield self._session

    def reset(self) -> None:
        with self._lock:
            self._session.reset()

    def load(self, save: GameSave) -> None:
        with self._lock:
            self._session.load(save)
