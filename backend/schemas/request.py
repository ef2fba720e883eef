"""
schemas/request.py
==================
Body of POST /ask.

Input is deliberately permissive: no field is required and nothing is
rejected.  Defaults are applied here, at the boundary, so the pipeline
always sees ``question: str`` and ``county: Optional[str]``.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class AskRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    question: str = ""
    county: Optional[str] = None

    @field_validator("question", mode="before")
    @classmethod
    def _question_to_text(cls, v: Any) -> str:
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

    @field_validator("county", mode="before")
    @classmethod
    def _county_to_text(cls, v: Any) -> Optional[str]:
        if v is None or v == "":
            return None
        return v if isinstance(v, str) else str(v)
