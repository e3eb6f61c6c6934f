# FILE: squirrito/routes/memories.py
"""
Memory endpoints: save on consent, list, read by id, share card
"""
import logging
import re
from typing import List
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import PlainTextResponse

from squirrito.config import get_settings
from squirrito.models.memory import Memory, SaveRequest
from squirrito.services.memory_store import (
    MemoryNotFound,
    MemoryStore,
    MemoryStoreError,
    get_global_memory_store,
)
from squirrito.services.session import resolve_session_id
from squirrito.services.share_card import render_share_svg

logger = logging.getLogger(__name__)
router = APIRouter()

_MEMORY_ID = re.compile(r"^[A-Fa-f0-9-]+$")


def _not_found() -> PlainTextResponse:
    return PlainTextResponse("Not found", status_code=404)


def _unavailable() -> PlainTextResponse:
    return PlainTextResponse("Memory store unavailable", status_code=503)


@router.post("/save", response_model=Memory)
def save_memory(
    body: SaveRequest,
    request: Request,
    response: Response,
    store: MemoryStore = Depends(get_global_memory_store)
):
    """Persist a joke the user chose to keep and remember their session"""
    settings = get_settings()
    session_id = resolve_session_id(request.cookies.get(settings.session_cookie_name))

    try:
        memory = store.save(
            session_id=session_id,
            location_text=body.location_text,
            lat=body.lat,
            lng=body.lng,
            joke=body.joke
        )
    except MemoryStoreError:
        return PlainTextResponse("Failed to save", status_code=500)

    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_id,
        path="/",
        samesite="lax"
    )
    return memory


@router.get("/memories", response_model=List[Memory])
def list_memories(store: MemoryStore = Depends(get_global_memory_store)):
    """All memories, oldest first"""
    try:
        return store.list()
    except MemoryStoreError:
        return _unavailable()


@router.get("/memory/{memory_id}", response_model=Memory)
def get_memory(memory_id: str, store: MemoryStore = Depends(get_global_memory_store)):
    """One memory by id"""
    if not _MEMORY_ID.match(memory_id):
        return _not_found()
    try:
        return store.get_by_id(memory_id)
    except MemoryNotFound:
        return _not_found()
    except MemoryStoreError:
        return _unavailable()


@router.get("/share/{memory_id}")
def share_memory(memory_id: str, store: MemoryStore = Depends(get_global_memory_store)):
    """SVG share card; memories never change, so it can be cached forever"""
    if not _MEMORY_ID.match(memory_id):
        return _not_found()
    try:
        memory = store.get_by_id(memory_id)
    except MemoryNotFound:
        return _not_found()
    except MemoryStoreError:
        return _unavailable()

    settings = get_settings()
    return Response(
        content=render_share_svg(memory),
        media_type="image/svg+xml",
        headers={"Cache-Control": f"public, max-age={settings.share_cache_max_age}, immutable"}
    )
