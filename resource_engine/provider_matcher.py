"""
provider_matcher.py
===================
County → provider lookup.

A provider matches when the requested county equals one of its
``counties_served`` entries, compared case-insensitively as whole strings
("Bernalillo" matches "bernalillo", "Santa Fe" does not match "Santa").
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from resource_engine.data_store import ResourceStore


def get_providers_for_county(store: ResourceStore, county: Optional[str]) -> List[Dict[str, Any]]:
    """
    Return the verbatim records of every provider serving ``county``.

    Order follows the dataset.  An absent or empty county yields an empty
    list, never the full provider set.
    """
    if not county:
        return []

    wanted = county.lower()
    return [dict(p.record) for p in store.providers if wanted in p.counties]
