"""
SimpleNote: Pydantic Request/Response Schemas
=============================================

What:  Pydantic models defining the API contract.
How:   Routes return these; FastAPI serializes them and documents them in
       the OpenAPI schema. `NoteSubmission` is the normalized POST input.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteSubmission(BaseModel):
    """
    What:  A note submission normalized from either a JSON or a form body.
    How:   Missing fields default to empty strings; unknown fields are ignored.
    """
    title: str = Field(default="", description="Note title (may be empty)")
    body: str = Field(default="", description="Note body (may be empty)")

    model_config = {"extra": "ignore"}

    @field_validator("title", "body", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        """JSON null counts as a missing field."""
        return "" if v is None else v


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """One stored note, as returned by GET /api/notes."""
    id: int = Field(description="Server-assigned note id")
    title: str = Field(description="Note title")
    body: str = Field(description="Note body")
    created_at: datetime = Field(description="Insertion time (ISO 8601)")

    model_config = {"from_attributes": True}


class NoteCreatedResponse(BaseModel):
    """Returned by POST /api/notes."""
    id: int = Field(description="Id assigned to the new note")


class ErrorResponse(BaseModel):
    """
    Error body shared by every SimpleNoteError.

    Example:
        {
            "error": "validation_error",
            "message": "A note needs a title or a body",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error kind")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
