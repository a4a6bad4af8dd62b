"""POST /api/v1/move, /relocate, /reset: player movement and session lifecycle."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, HTTPException, Query

from geocoin.api.dependencies import get_session_manager
from geocoin.api.schemas import ActionResponse, PlayerSchema
from geocoin.api.session_manager import SessionManager
from geocoin.core.enums import Direction
from geocoin.core.models import Point
from geocoin.errors import PositionError

router = APIRouter()


class MoveDirection(str, Enum):
    north = "north"
    east = "east"
    south = "south"
    west = "west"


@router.post("/move/{direction}", response_model=ActionResponse)
def move(
    direction: MoveDirection,
    manager: SessionManager = Depends(get_session_manager),
) -> ActionResponse:
    with manager.locked() as session:
        try:
            session.move(Direction[direction.name.upper()])
        except PositionError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return ActionResponse(
            status="ok",
            message=f"Moved {direction.value}.",
            player=PlayerSchema.from_session(session),
        )


@router.post("/relocate", response_model=ActionResponse)
def relocate(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lng: float = Query(..., ge=-180.0, le=180.0),
    manager: SessionManager = Depends(get_session_manager),
) -> ActionResponse:
    with manager.locked() as session:
        moved = session.relocate(Point(lat, lng))
        return ActionResponse(
            status="ok" if moved else "noop",
            message="Relocated." if moved else "Below movement threshold.",
            player=PlayerSchema.from_session(session),
        )


@router.post("/reset", response_model=ActionResponse)
def reset(manager: SessionManager = Depends(get_session_manager)) -> ActionResponse:
    manager.reset()
    with manager.locked() as session:
        return ActionResponse(
            status="ok",
            message="Session reset.",
            player=PlayerSchema.from_session(session),
        )
