from __future__ import annotations

import json
from typing import Any, Callable, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

from backend.dependencies import get_completion_client, get_settings, get_store
from backend.config import Settings
from backend.main import create_app
from rag_pipeline.llm_engine import CompletionClient
from resource_engine.data_store import ResourceStore, build_store

TEST_BASE_URL = "https://llm.test/v1"

PROVIDERS: List[Dict[str, Any]] = [
    {
        "name": "ABQ Family Center",
        "counties_served": ["Bernalillo"],
        "phone": "505-555-0101",
    },
    {
        "name": "Northern Partners",
        "counties_served": ["Santa Fe", "Rio Arriba"],
        "services": ["Home visiting"],
    },
    {
        "name": "Statewide Line",
        "counties_served": ["BERNALILLO", "Santa Fe", "Doña Ana"],
    },
]

KNOWLEDGE: List[Dict[str, Any]] = [
    {"tags": ["food"], "content": "Food bank info..."},
    {"tags": ["WIC", "formula"], "content": "WIC info..."},
    {"tags": ["child care"], "content": "Child care info..."},
]


def chat_completion(content: Any = "Here is what I found.") -> Dict[str, Any]:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-4o-mini",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


class FakeUpstream:
    """Records outbound chat-completion requests and replies via a handler."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def payloads(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]


def make_completion_client(upstream: FakeUpstream, model: str = "gpt-4o-mini") -> CompletionClient:
    return CompletionClient(
        api_key     = "sk-test",
        model       = model,
        base_url    = TEST_BASE_URL,
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream)),
    )


@pytest.fixture
def store() -> ResourceStore:
    return build_store(PROVIDERS, KNOWLEDGE)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream(lambda request: httpx.Response(200, json=chat_completion()))


@pytest.fixture
def app(store, upstream):
    app = create_app()
    completion_client = make_completion_client(upstream)
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_completion_client] = lambda: completion_client
    app.dependency_overrides[get_settings] = lambda: Settings(openai_api_key="sk-test")
    return app


@pytest.fixture
def client(app):
    # No context manager: the lifespan (env + disk loading) is not run.
    return TestClient(app)
