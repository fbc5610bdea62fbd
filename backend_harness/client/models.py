"""Pydantic models for the backend's call API responses."""

from typing import Any

from pydantic import BaseModel


class CallResponse(BaseModel):
    """Successful call response."""

    result: Any = None


class CallErrorResponse(BaseModel):
    """Error body returned with a non-200 status."""

    type: str
    message: str
