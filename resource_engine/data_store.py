"""
data_store.py
=============
Read-only reference datasets for the family resource assistant.

Two JSON files are loaded once at startup and shared by every request:

  • providers.json        — array of provider objects, each carrying a
                            ``counties_served`` list plus arbitrary descriptive
                            fields (name, phone, services, …) that are passed
                            through to clients verbatim.
  • knowledge_blocks.json — array of ``{"tags": [...], "content": "..."}``
                            snippets used as retrievable reference text.

Nothing in this module is mutated after load_store() returns.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, FrozenSet, List, Mapping, NamedTuple, Tuple, Union

logger = logging.getLogger(__name__)


class DataStoreError(RuntimeError):
    """Raised when a reference dataset cannot be read or has the wrong shape."""


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------

class Provider(NamedTuple):
    record: Mapping[str, Any]   # verbatim provider object (read-only view)
    counties: FrozenSet[str]    # lower-cased counties_served


class KnowledgeBlock(NamedTuple):
    tags: Tuple[str, ...]
    content: str


class ResourceStore(NamedTuple):
    providers: Tuple[Provider, ...]
    knowledge_blocks: Tuple[KnowledgeBlock, ...]


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------

def _read_json_array(path: Union[str, Path], label: str) -> List[Any]:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError) as exc:
        raise DataStoreError(f"Cannot load {label} dataset from {path}: {exc}") from exc

    if not isinstance(data, list):
        raise DataStoreError(
            f"{label.capitalize()} dataset {path} must be a JSON array, got {type(data).__name__}."
        )
    return data


def _to_provider(raw: Any, index: int) -> Provider:
    if not isinstance(raw, dict):
        raise DataStoreError(f"Provider #{index} is not a JSON object.")

    served = raw.get("counties_served")
    if isinstance(served, list):
        counties = frozenset(str(c).lower() for c in served)
    else:
        logger.warning(
            "Provider #%d (%s) has no counties_served list; it will never match.",
            index, raw.get("name", "unnamed"),
        )
        counties = frozenset()

    return Provider(record=MappingProxyType(dict(raw)), counties=counties)


def _to_knowledge_block(raw: Any, index: int) -> KnowledgeBlock:
    if not isinstance(raw, dict):
        raise DataStoreError(f"Knowledge block #{index} is not a JSON object.")

    tags = raw.get("tags") or []
    if not isinstance(tags, list):
        tags = [tags]
    content = raw.get("content")
    return KnowledgeBlock(
        tags    = tuple(str(t) for t in tags),
        content = "" if content is None else str(content),
    )


def load_providers(path: Union[str, Path]) -> Tuple[Provider, ...]:
    """Load provider records in file order."""
    rows = _read_json_array(path, "provider")
    return tuple(_to_provider(raw, i) for i, raw in enumerate(rows))


def load_knowledge_blocks(path: Union[str, Path]) -> Tuple[KnowledgeBlock, ...]:
    """Load knowledge blocks in file order."""
    rows = _read_json_array(path, "knowledge")
    return tuple(_to_knowledge_block(raw, i) for i, raw in enumerate(rows))


def build_store(providers: List[Any], knowledge_blocks: List[Any]) -> ResourceStore:
    """Build a store from already-parsed JSON rows (tests, embedded datasets)."""
    return ResourceStore(
        providers        = tuple(_to_provider(raw, i) for i, raw in enumerate(providers)),
        knowledge_blocks = tuple(_to_knowledge_block(raw, i) for i, raw in enumerate(knowledge_blocks)),
    )


def load_store(providers_path: Union[str, Path], knowledge_path: Union[str, Path]) -> ResourceStore:
    store = ResourceStore(
        providers        = load_providers(providers_path),
        knowledge_blocks = load_knowledge_blocks(knowledge_path),
    )
    logger.info(
        "Reference data loaded: %d providers, %d knowledge blocks.",
        len(store.providers), len(store.knowledge_blocks),
    )
    return store
