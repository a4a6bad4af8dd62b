"""Whole-session save document and its JSON codec."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError, field_validator

from geocoin.core.geocache import CoinRecord
from geocoin.core.models import Point
from geocoin.errors import DecodeError

SAVE_VERSION = 1


class PointRecord(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)

    @classmethod
    def from_point(cls, point: Point) -> PointRecord:
        return cls(lat=point.lat, lng=point.lng)

    def to_point(self) -> Point:
        return Point(self.lat, self.lng)


class GameSave(BaseModel):
    """Everything needed to resume a session.

    ``cache_states`` holds the raw per-cell snapshots untouched; they are
    decoded lazily when each cell comes into view, so one bad entry cannot
    spoil the rest of the save.
    """

    model_config = ConfigDict(extra="ignore")

    version: StrictInt = SAVE_VERSION
    player: PointRecord
    history: list[PointRecord] = Field(default_factory=list)
    holding: list[CoinRecord] = Field(default_factory=list)
    cache_states: dict[str, str] = Field(default_factory=dict)
    next_serial: StrictInt = Field(0, ge=0)

    @field_validator("version")
    @classmethod
    def _known_version(cls, v: int) -> int:
        if v != SAVE_VERSION:
            raise ValueError(f"unsupported save version {v}, expected {SAVE_VERSION}")
        return v


def encode_save(save: GameSave) -> str:
    return save.model_dump_json()


def decode_save(blob: str | bytes) -> GameSave:
    try:
        return GameSave.model_validate_json(blob)
    except ValidationError as exc:
        raise DecodeError(f"Malformed save document: {exc.errors()[0]['msg']}") from exc
