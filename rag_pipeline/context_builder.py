"""
context_builder.py
==================
Render matched providers and knowledge text into the single context block
handed to the LLM.

The rendering is a fixed template: a PROVIDERS section with the provider
records as indented JSON (every field kept), followed by a KNOWLEDGE section
with the retrieved snippets as-is.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

_CONTEXT_TEMPLATE = """
### PROVIDERS
{providers}

### KNOWLEDGE
{knowledge}
"""


def build_context(providers: List[Dict[str, Any]], knowledge: str) -> str:
    return _CONTEXT_TEMPLATE.format(
        providers = json.dumps(providers, indent=2, ensure_ascii=False),
        knowledge = knowledge,
    )
