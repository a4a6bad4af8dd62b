"""GET /api/v1/state: player, holding, visible caches and recent events."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from geocoin.api.dependencies import get_session_manager
from geocoin.api.schemas import (
    CacheSchema,
    CoinSchema,
    EventSchema,
    PlayerSchema,
    StateResponse,
)
from geocoin.api.session_manager import SessionManager

router = APIRouter()


@router.get("/state", response_model=StateResponse)
def get_state(
    events: int = Query(20, ge=0, le=500, description="Number of recent events to include"),
    manager: SessionManager = Depends(get_session_manager),
) -> StateResponse:
    with manager.locked() as session:
        caches = session.visible_caches()
        return StateResponse(
            player=PlayerSchema.from_session(session),
            holding=[CoinSchema.from_coin(c) for c in session.holding],
            caches=[CacheSchema.from_cache(c, session.board) for c in caches],
            events=[EventSchema.from_event(e) for e in session.events.latest(events)],
        )
