# FILE: squirrito/routes/health.py
"""
Health check endpoints
"""
import logging
from fastapi import APIRouter, Depends

from squirrito import __version__
from squirrito.config import get_settings
from squirrito.providers.registry import ModelRegistry, get_model_registry
from squirrito.services.memory_store import (
    MemoryStore,
    MemoryStoreError,
    get_global_memory_store,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/ping")
async def ping():
    """Liveness probe"""
    return {"ok": True}


@router.get("/health")
def health_check(
    registry: ModelRegistry = Depends(get_model_registry),
    store: MemoryStore = Depends(get_global_memory_store)
):
    """
    Health check endpoint
    Reports candidate models and whether the memory store can be read
    """
    settings = get_settings()

    try:
        memory_count = len(store.list())
        storage_ok = True
    except MemoryStoreError:
        memory_count = None
        storage_ok = False

    return {
        "status": "healthy" if storage_ok else "degraded",
        "service": "squirrito",
        "version": __version__,
        "inference_configured": settings.inference_configured,
        "models": registry.models,
        "memory_store": store.name,
        "memory_count": memory_count
    }
