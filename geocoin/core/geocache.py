"""Geocache entity and its snapshot codec.

A snapshot is a JSON document of the shape::

    {"i": 3, "j": -7, "coins": [{"i": 3, "j": -7, "serial": 12}, ...]}

This is the only persisted format the engine promises to keep readable.
Extra keys are ignored so older engines can read newer snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, StrictInt, ValidationError

from geocoin.core.models import Coin
from geocoin.errors import DecodeError


# ---------------------------------------------------------------------------
# Wire records
# ---------------------------------------------------------------------------

class CoinRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    i: StrictInt
    j: StrictInt
    serial: StrictInt

    @classmethod
    def from_coin(cls, coin: Coin) -> CoinRecord:
        return cls(i=coin.i, j=coin.j, serial=coin.serial)

    def to_coin(self) -> Coin:
        return Coin(self.i, self.j, self.serial)


class CacheRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    i: StrictInt
    j: StrictInt
    coins: list[CoinRecord]


# ---------------------------------------------------------------------------
# Pure codec
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CacheState:
    """Value form of a Geocache: coordinates plus coins, bottom to top."""

    i: int
    j: int
    coins: tuple[Coin, ...] = ()


def encode_state(state: CacheState) -> str:
    record = CacheRecord(
        i=state.i,
        j=state.j,
        coins=[CoinRecord.from_coin(c) for c in state.coins],
    )
    return record.model_dump_json()


def decode_state(blob: str | bytes) -> CacheState:
    """Decode a snapshot, raising :class:`DecodeError` if it is malformed."""
    if not isinstance(blob, (str, bytes, bytearray)):
        raise DecodeError(f"Cache snapshot must be text, got {type(blob).__name__}")
    try:
        record = CacheRecord.model_validate_json(blob)
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = ".".join(str(p) for p in first["loc"]) or "<root>"
        raise DecodeError(f"Malformed cache snapshot at {loc}: {first['msg']}") from exc
    return CacheState(record.i, record.j, tuple(c.to_coin() for c in record.coins))


# ---------------------------------------------------------------------------
# Entity
# ---------------------------------------------------------------------------

class Geocache:
    """Mutable coin stack for one grid cell.

    Short-lived: the store rebuilds it from the last snapshot whenever the
    cell comes back into view.
    """

    __slots__ = ("i", "j", "_coins")

    def __init__(self, i: int, j: int, coins: list[Coin] | None = None) -> None:
        self.i = i
        self.j = j
        self._coins: list[Coin] = list(coins) if coins else []

    @property
    def coins(self) -> tuple[Coin, ...]:
        """Read-only view, bottom of the stack first."""
        return tuple(self._coins)

    def __len__(self) -> int:
        return len(self._coins)

    def collect(self) -> Coin | None:
        """Pop the top coin, or return None when the cache is empty."""
        if not self._coins:
            return None
        return self._coins.pop()

    def deposit(self, coin: Coin) -> None:
        # Any coin may be dropped anywhere; provenance stays on the coin.
        self._coins.append(coin)

    # -- snapshots --

    def state(self) -> CacheState:
        return CacheState(self.i, self.j, tuple(self._coins))

    def serialize(self) -> str:
        return encode_state(self.state())

    def restore(self, blob: str | bytes) -> None:
        """Replace coordinates and coins with the snapshot's content.

        Decodes first: on :class:`DecodeError` this cache is left unchanged.
        """
        state = decode_state(blob)
        self.i = state.i
        self.j = state.j
        self._coins = list(state.coins)

    @classmethod
    def from_snapshot(cls, blob: str | bytes) -> Geocache:
        state = decode_state(blob)
        return cls(state.i, state.j, list(state.coins))

    def __repr__(self) -> str:
        return f"Geocache(({self.i}, {self.j}), coins={len(self._coins)})"
