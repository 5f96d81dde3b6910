"""Pydantic models for request/response types."""
from __future__ import annotations
from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ConversationTurn(BaseModel):
    """One prior exchange, flattened into the prompt as ``role: content``."""
    role: str
    content: str


class GenerationRequest(BaseModel):
    # validated in the handler: absent, null and "" all map to 400
    message: str | None = None
    conversationHistory: list[ConversationTurn] = Field(default_factory=list)

    @field_validator("conversationHistory", mode="before")
    @classmethod
    def null_history_is_empty(cls, value):
        return [] if value is None else value


class GenerationResponse(BaseModel):
    code: str
    timestamp: str = Field(default_factory=utc_timestamp)


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: str = Field(default_factory=utc_timestamp)
