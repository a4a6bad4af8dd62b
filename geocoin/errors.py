"""Exception hierarchy for the geocoin engine."""

from __future__ import annotations


class GeocoinError(Exception):
    """Base class for all engine errors."""


class ConfigError(GeocoinError):
    """Board or game configuration would produce wrong geometry."""


class DecodeError(GeocoinError):
    """A serialized cache snapshot or save document is malformed."""


class NotVisibleError(GeocoinError):
    """A cache action targeted a cell that is not a visible cache site."""

    def __init__(self, i: int, j: int) -> None:
        super().__init__(f"Cell ({i}, {j}) is not a visible cache")
        self.i = i
        self.j = j


class PositionError(GeocoinError, ValueError):
    """A player position is non-finite or off the globe."""
