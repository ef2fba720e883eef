"""
schemas/response.py
===================
Pydantic v2 models for the JSON bodies returned by the API.
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class AskResponse(BaseModel):
    answer: str
    providers: List[Dict[str, Any]] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    providers_loaded: int
    knowledge_blocks_loaded: int
    model: str
    api_key_configured: bool
