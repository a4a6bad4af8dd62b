"""GET/PUT /api/v1/save: export and import the whole session as a value."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_session_manager
from geocoin.api.schemas import ActionResponse, PlayerSchema
from geocoin.api.session_manager import SessionManager
from geocoin.engine.save import GameSave

router = APIRouter()


@router.get("/save", response_model=GameSave)
def export_save(manager: SessionManager = Depends(get_session_manager)) -> GameSave:
    with manager.locked() as session:
        return session.save()


@router.put("/save", response_model=ActionResponse)
def import_save(
    save: GameSave,
    manager: SessionManager = Depends(get_session_manager),
) -> ActionResponse:
    # Body validation (422 on malformed saves) happens before we get here.
    manager.load(save)
    with manager.locked() as session:
        return ActionResponse(
            status="ok",
            message=f"Loaded save with {len(session.store)} caches.",
            player=PlayerSchema.from_session(session),
        )
