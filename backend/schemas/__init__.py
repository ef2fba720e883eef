# backend/schemas/__init__.py
from backend.schemas.request import AskRequest
from backend.schemas.response import AskResponse, ErrorResponse, HealthResponse

__all__ = ["AskRequest", "AskResponse", "ErrorResponse", "HealthResponse"]
