"""Place search and selection routes."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from app.dependencies import SelectionOrchestratorDep
from app.errors import HeritageError
from app.models import (
    CacheStats,
    LanguageChangeRequest,
    PlaceSearchResult,
    PlaceSelectRequest,
    SelectionState,
)

router = APIRouter()


@router.get("/search", response_model=PlaceSearchResult)
async def search_places(
    service: SelectionOrchestratorDep,
    q: Optional[str] = Query(default=None, max_length=300),
):
    query = (q or "").strip() or None
    try:
        places = await service.search_places(query)
    except HeritageError as exc:
        raise HTTPException(exc.http_status, exc.message) from exc
    return PlaceSearchResult(query=query or "", places=places)


@router.get("/state", response_model=SelectionState)
async def get_selection_state(service: SelectionOrchestratorDep):
    return service.state


@router.post("/select", response_model=SelectionState)
async def select_place(body: PlaceSelectRequest, service: SelectionOrchestratorDep):
    try:
        return await service.select_place(body.name)
    except ValueError as exc:
        raise HTTPException(400, str(exc)) from exc


@router.put("/language", response_model=SelectionState)
async def change_language(body: LanguageChangeRequest, service: SelectionOrchestratorDep):
    return await service.change_language(body.language)


@router.delete("/selection", response_model=SelectionState)
async def clear_selection(service: SelectionOrchestratorDep):
    return await service.clear_selection()


@router.get("/cache", response_model=CacheStats)
async def get_cache_stats(service: SelectionOrchestratorDep):
    return service.cache.stats()
