"""
main.py
=======
FastAPI application entry point for the family resource assistant.

Run locally:
  uvicorn backend.main:app --reload --port 3000
  python -m backend.main            # honours $PORT (default 3000)

The lifespan handler loads the reference datasets and builds the completion
client once at startup so they are never re-created per request.
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import asynccontextmanager

from dotenv import load_dotenv  # type: ignore
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load .env from project root (one level above this file's package)
load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from backend.api.ask import router as ask_router  # noqa: E402
from backend.api.health import router as health_router  # noqa: E402
from backend.config import Settings  # noqa: E402
from rag_pipeline.llm_engine import CompletionClient  # noqa: E402
from resource_engine.data_store import load_store  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan: startup / shutdown
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise singletons before first request."""
    settings = Settings.from_env()
    logging.getLogger().setLevel(settings.log_level)
    app.state.settings = settings

    # 1. Reference data (fails fast on a broken dataset)
    app.state.store = load_store(settings.providers_path, settings.knowledge_path)

    # 2. Completion client
    if not settings.api_key_configured:
        logger.warning("OPENAI_API_KEY is not set; every /ask call will fail upstream.")
    app.state.completion_client = CompletionClient(
        api_key  = settings.openai_api_key,
        model    = settings.openai_model,
        base_url = settings.openai_base_url,
        timeout  = settings.openai_timeout,
    )

    logger.info("Completion model: %s (%s)", settings.openai_model, settings.openai_base_url)
    logger.info("Family resource backend running on port %d", settings.port)
    yield

    await app.state.completion_client.aclose()
    logger.info("Family resource backend shutting down.")


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app() -> FastAPI:
    app = FastAPI(
        title       = "Family Resource Assistant API",
        description = (
            "Answers family-support questions with an LLM grounded only in "
            "county-matched providers and tagged knowledge snippets."
        ),
        version     = "1.0.0",
        docs_url    = "/docs",
        redoc_url   = "/redoc",
        lifespan    = lifespan,
    )

    # ── CORS ──────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins = ["*"],
        allow_methods = ["*"],
        allow_headers = ["*"],
    )

    # ── Routers ───────────────────────────────────────────────────────────
    app.include_router(ask_router)
    app.include_router(health_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=Settings.from_env().port)
