import json
import logging

import pytest
from fastapi.testclient import TestClient

from backend.main import create_app
from resource_engine.data_store import DataStoreError


@pytest.fixture
def dataset_env(tmp_path, monkeypatch):
    providers = tmp_path / "providers.json"
    knowledge = tmp_path / "knowledge.json"
    providers.write_text(json.dumps([{"name": "A", "counties_served": ["Lea"]}]), encoding="utf-8")
    knowledge.write_text(json.dumps([]), encoding="utf-8")

    monkeypatch.setenv("PROVIDERS_PATH", str(providers))
    monkeypatch.setenv("KNOWLEDGE_PATH", str(knowledge))
    monkeypatch.setenv("OPENAI_MODEL", "test-model")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


def test_startup_loads_datasets_from_environment(dataset_env):
    with TestClient(create_app()) as client:
        body = client.get("/health").json()

    assert body == {
        "status": "ok",
        "providers_loaded": 1,
        "knowledge_blocks_loaded": 0,
        "model": "test-model",
        "api_key_configured": False,
    }


def test_startup_without_api_key_warns_and_ask_fails(dataset_env, caplog):
    with caplog.at_level(logging.WARNING):
        with TestClient(create_app()) as client:
            resp = client.post("/ask", json={"question": "hi", "county": "Lea"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Server error"}
    assert any("OPENAI_API_KEY is not set" in r.getMessage() for r in caplog.records)


def test_log_level_comes_from_settings(dataset_env, monkeypatch):
    root = logging.getLogger()
    previous = root.level
    monkeypatch.setenv("LOG_LEVEL", "debug")
    try:
        with TestClient(create_app()):
            assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)


def test_startup_fails_on_broken_dataset(tmp_path, monkeypatch):
    broken = tmp_path / "providers.json"
    broken.write_text('{"not": "an array"}', encoding="utf-8")
    monkeypatch.setenv("PROVIDERS_PATH", str(broken))

    with pytest.raises(DataStoreError):
        with TestClient(create_app()):
            pass
