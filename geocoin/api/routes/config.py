"""GET /api/v1/config: expose game configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_session_manager
from geocoin.api.schemas import GameConfigResponse
from geocoin.api.session_manager import SessionManager

router = APIRouter()


@router.get("/config", response_model=GameConfigResponse)
def get_config(
    manager: SessionManager = Depends(get_session_manager),
) -> GameConfigResponse:
    cfg = manager.config
    return GameConfigResponse(
        tile_width=cfg.tile_width,
        tile_visibility_radius=cfg.tile_visibility_radius,
        cache_spawn_prob=cfg.cache_spawn_prob,
        max_coins_per_cache=cfg.max_coins_per_cache,
        start_lat=cfg.start_lat,
        start_lng=cfg.start_lng,
        move_threshold=cfg.move_threshold,
        remint_corrupt_caches=cfg.remint_corrupt_caches,
    )
