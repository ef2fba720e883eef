"""
dependencies.py
===============
FastAPI dependencies exposing the startup singletons kept on ``app.state``.

Tests replace these through ``app.dependency_overrides``.
"""

from __future__ import annotations

from fastapi import Request

from backend.config import Settings
from rag_pipeline.llm_engine import CompletionClient
from resource_engine.data_store import ResourceStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> ResourceStore:
    return request.app.state.store


def get_completion_client(request: Request) -> CompletionClient:
    return request.app.state.completion_client
