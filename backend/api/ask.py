"""
api/ask.py
==========
POST /ask
---------
Accepts a JSON body ``{"question": str, "county": str (optional)}``, read
leniently (see _read_ask_request), and:

  1. Matches providers serving the county (skipped when no county is given)
  2. Retrieves knowledge blocks whose tags occur in the question
  3. Assembles both into a single context block
  4. Asks the completion API for an answer grounded in that context
  5. Returns ``{"answer": str, "providers": [...]}``

Any failure along the way, upstream or internal, is logged with its
traceback and reported to the client only as ``500 {"error": "Server error"}``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from backend.dependencies import get_completion_client, get_store
from backend.schemas.request import AskRequest
from backend.schemas.response import AskResponse, ErrorResponse
from rag_pipeline.context_builder import build_context
from rag_pipeline.llm_engine import CompletionClient
from resource_engine.data_store import ResourceStore
from resource_engine.knowledge_retriever import get_relevant_knowledge
from resource_engine.provider_matcher import get_providers_for_county

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/ask",
    response_model=AskResponse,
    responses={500: {"model": ErrorResponse}},
    openapi_extra={
        "requestBody": {"content": {"application/json": {"schema": AskRequest.model_json_schema()}}},
    },
)
async def ask(
    request: Request,
    store: ResourceStore = Depends(get_store),
    client: CompletionClient = Depends(get_completion_client),
):
    """Answer a family's question using only the matched local resources."""
    try:
        req = await _read_ask_request(request)
        provider_matches = get_providers_for_county(store, req.county) if req.county else []
        knowledge = get_relevant_knowledge(store, req.question)
        logger.debug(
            "ask: county=%r matched %d providers, knowledge %d chars.",
            req.county, len(provider_matches), len(knowledge),
        )

        context = build_context(provider_matches, knowledge)
        answer = await client.generate_answer(context, req.question)

        return AskResponse(answer=answer, providers=provider_matches)

    except Exception as exc:
        logger.error("ask failed: %s", exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error="Server error").model_dump(),
        )


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------

async def _read_ask_request(request: Request) -> AskRequest:
    """
    Parse the body without FastAPI's validation so nothing turns into a 422.

    An empty body or a JSON value that is not an object counts as ``{}``;
    undecodable JSON raises and ends up as the generic 500.
    """
    raw = await request.body()
    data: Any = json.loads(raw) if raw.strip() else {}
    return AskRequest.model_validate(data if isinstance(data, dict) else {})
