"""
llm_engine.py
=============
Chat-completion client that turns the assembled context plus the family's
question into a plain-language answer.

Talks to any OpenAI-compatible endpoint through the ``openai`` SDK:
  • base_url    : https://api.openai.com/v1 (overridable)
  • model       : gpt-4o-mini (overridable)
  • temperature : 0.3, fixed

The LLM is confined to the providers and knowledge supplied in the context;
the system prompt forbids inventing anything else.  Upstream failures are
not retried and not swallowed here; the HTTP layer turns them into a
generic server error.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL    = "gpt-4o-mini"
TEMPERATURE      = 0.3
FALLBACK_ANSWER  = "I couldn't generate a response."


class LLMUnavailableError(RuntimeError):
    """Raised when no API key is configured for the completion API."""


class MalformedCompletionError(RuntimeError):
    """Raised when the completion API answers 2xx with a body that is not a chat completion."""


# ---------------------------------------------------------------------------
# Prompt
# ---------------------------------------------------------------------------

SYSTEM_PROMPT = """
You are an AI assistant for a statewide New Mexico family resource platform.
You must follow these rules:

- Use plain, strengths-based, trauma-informed language.
- Do not give medical advice, diagnoses, or treatment recommendations.
- Do not guess or invent providers, counties, or services.
- Only use the provider data and knowledge blocks supplied in the prompt.
- Follow county → provider matching exactly as provided.
- Respect cultural and tribal contexts.
- Keep answers simple, accurate, and family-friendly.
- If information is missing, say so without guessing.
"""

GROUNDING_INSTRUCTION = "Use only the data provided below."


def build_messages(context: str, question: str) -> List[Dict[str, str]]:
    """Fixed four-message conversation: rules, grounding, context, question."""
    return [
        {"role": "system",    "content": SYSTEM_PROMPT},
        {"role": "assistant", "content": GROUNDING_INSTRUCTION},
        {"role": "assistant", "content": context},
        {"role": "user",      "content": question},
    ]


def extract_answer(completion: Any) -> str:
    """
    Pull the first choice's message text out of a completion.

    Any missing piece (no ``choices``, empty list, no message, empty content)
    yields FALLBACK_ANSWER instead of an error.
    """
    choices = getattr(completion, "choices", None)
    if not choices:
        return FALLBACK_ANSWER

    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if not isinstance(content, str) or not content:
        return FALLBACK_ANSWER
    return content


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class CompletionClient:
    """Thin async wrapper around ``AsyncOpenAI`` chat completions."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = 60.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.model = model
        self._api_key_missing = not api_key
        # AsyncOpenAI refuses an empty key; calls are blocked in generate_answer instead.
        self._client = AsyncOpenAI(
            api_key     = api_key or "unset",
            base_url    = base_url,
            timeout     = timeout,
            max_retries = 0,
            http_client = http_client,
        )

    async def generate_answer(self, context: str, question: str) -> str:
        if self._api_key_missing:
            raise LLMUnavailableError("Completion API key is not configured.")

        completion = await self._client.chat.completions.create(
            model       = self.model,
            messages    = build_messages(context, question),
            temperature = TEMPERATURE,
        )
        if not isinstance(completion, ChatCompletion):
            raise MalformedCompletionError(
                f"Completion API returned {type(completion).__name__} instead of a chat completion."
            )

        answer = extract_answer(completion)
        if answer == FALLBACK_ANSWER:
            logger.warning("Completion from %s carried no answer text; using fallback.", self.model)
        return answer

    async def aclose(self) -> None:
        await self._client.close()
