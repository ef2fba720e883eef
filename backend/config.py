"""
config.py
=========
Process configuration, read once from the environment at startup.

The Settings object is built in the lifespan handler, stored on
``app.state`` and handed to the components that need it; nothing below the
HTTP layer reads os.environ directly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from rag_pipeline.llm_engine import DEFAULT_BASE_URL, DEFAULT_MODEL

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_DATA_DIR    = os.path.join(PROJECT_ROOT, "data")


def _clean_env(name: str, default: str = "") -> str:
    value = os.getenv(name, default)
    return value.strip().strip('"').strip("'")


@dataclass(frozen=True)
class Settings:
    openai_api_key: str = ""
    openai_base_url: str = DEFAULT_BASE_URL
    openai_model: str = DEFAULT_MODEL
    openai_timeout: float = 60.0
    providers_path: str = os.path.join(_DATA_DIR, "providers.json")
    knowledge_path: str = os.path.join(_DATA_DIR, "knowledge_blocks.json")
    port: int = 3000
    log_level: str = "INFO"

    @property
    def api_key_configured(self) -> bool:
        return bool(self.openai_api_key) and not self.openai_api_key.startswith("your_")

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            openai_api_key  = _clean_env("OPENAI_API_KEY", ""),
            openai_base_url = _clean_env("OPENAI_BASE_URL", defaults.openai_base_url) or defaults.openai_base_url,
            openai_model    = _clean_env("OPENAI_MODEL", defaults.openai_model) or defaults.openai_model,
            openai_timeout  = float(_clean_env("OPENAI_TIMEOUT", str(defaults.openai_timeout))),
            providers_path  = _clean_env("PROVIDERS_PATH", defaults.providers_path),
            knowledge_path  = _clean_env("KNOWLEDGE_PATH", defaults.knowledge_path),
            port            = int(_clean_env("PORT", str(defaults.port))),
            log_level       = _clean_env("LOG_LEVEL", defaults.log_level).upper() or defaults.log_level,
        )
