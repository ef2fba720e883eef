"""
knowledge_retriever.py
======================
Keyword retrieval over the static knowledge blocks.

A block is relevant when any of its tags, lower-cased, occurs anywhere in the
lower-cased question.  This is plain substring matching: the tag "food"
matches "foodbank", and the tag "wic" matches "WIC office".
"""

from __future__ import annotations

import logging
from typing import List, Optional

from resource_engine.data_store import KnowledgeBlock, ResourceStore

logger = logging.getLogger(__name__)

_BLOCK_SEPARATOR = "\n\n"


def match_knowledge_blocks(store: ResourceStore, question: Optional[str]) -> List[KnowledgeBlock]:
    """Return matching blocks in dataset order."""
    lower = (question or "").lower()
    return [
        block for block in store.knowledge_blocks
        if any(tag.lower() in lower for tag in block.tags)
    ]


def get_relevant_knowledge(store: ResourceStore, question: Optional[str]) -> str:
    """Concatenate the content of matching blocks; "" when nothing matches."""
    matches = match_knowledge_blocks(store, question)
    logger.debug("Knowledge retrieval: %d/%d blocks matched.", len(matches), len(store.knowledge_blocks))
    return _BLOCK_SEPARATOR.join(block.content for block in matches)
