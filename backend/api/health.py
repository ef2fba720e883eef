"""
api/health.py
=============
GET /health — liveness probe reporting loaded datasets and LLM configuration.
Never calls the completion API.
"""

from fastapi import APIRouter, Depends

from backend.config import Settings
from backend.dependencies import get_settings, get_store
from backend.schemas.response import HealthResponse
from resource_engine.data_store import ResourceStore

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: Settings = Depends(get_settings),
    store: ResourceStore = Depends(get_store),
):
    """Return service status and component readiness flags."""
    return HealthResponse(
        status                  = "ok",
        providers_loaded        = len(store.providers),
        knowledge_blocks_loaded = len(store.knowledge_blocks),
        model                   = settings.openai_model,
        api_key_configured      = settings.api_key_configured,
    )
