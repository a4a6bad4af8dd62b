"""/api/v1/caches/{i}/{j}: inspect, collect from, and deposit into a visible cache."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import APIRouter, Depends, HTTPException

from geocoin.api.dependencies import get_session_manager
from geocoin.api.schemas import ActionResponse, CacheSchema, CoinSchema
from geocoin.api.session_manager import SessionManager
from geocoin.errors import DecodeError, NotVisibleError

router = APIRouter()


@contextmanager
def _cache_errors() -> Iterator[None]:
    try:
        yield
    except NotVisibleError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except DecodeError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.get("/caches/{i}/{j}", response_model=CacheSchema)
def get_cache(i: int, j: int, manager: SessionManager = Depends(get_session_manager)) -> CacheSchema:
    with manager.locked() as session, _cache_errors():
        cache = session.cache_at(session.board.canonical_cell(i, j))
        return CacheSchema.from_cache(cache, session.board)


@router.post("/caches/{i}/{j}/collect", response_model=ActionResponse)
def collect(i: int, j: int, manager: SessionManager = Depends(get_session_manager)) -> ActionResponse:
    with manager.locked() as session, _cache_errors():
        cell = session.board.canonical_cell(i, j)
        coin = session.collect(cell)
        cache = CacheSchema.from_cache(session.cache_at(cell), session.board)
        if coin is None:
            return ActionResponse(status="noop", message="Cache is empty.", cache=cache)
        return ActionResponse(
            status="ok",
            message=f"Collected coin {coin}.",
            coin=CoinSchema.from_coin(coin),
            cache=cache,
        )


@router.post("/caches/{i}/{j}/deposit", response_model=ActionResponse)
def deposit(i: int, j: int, manager: SessionManager = Depends(get_session_manager)) -> ActionResponse:
    with manager.locked() as session, _cache_errors():
        cell = session.board.canonical_cell(i, j)
        coin = session.deposit(cell)
        cache = CacheSchema.from_cache(session.cache_at(cell), session.board)
        if coin is None:
            return ActionResponse(status="noop", message="No coins to deposit.", cache=cache)
        return ActionResponse(
            status="ok",
            message=f"Deposited coin {coin}.",
            coin=CoinSchema.from_coin(coin),
            cache=cache,
        )
