"""
Pydantic schemas for the Slack Web API response envelope.

Every method answers with ``{"ok": bool, "error": str?}`` plus method
specific fields. The base Envelope is decoded first; payload schemas are
only decoded once ``ok`` is known to be true.
"""

from typing import List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .conversation import Channel


class Envelope(BaseModel):
    """Outer shape shared by every response."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    ok: bool = Field(..., description="Whether the call succeeded")
    error: Optional[str] = Field(None, description="Error code when ok is false")
    warning: Optional[str] = Field(None, description="Non-fatal warning codes")

    @property
    def error_code(self) -> str:
        """Error code for a failed envelope, never empty."""
        return self.error or "unknown_error"


class ResponseMetadata(BaseModel):
    """Pagination metadata returned by cursor-paginated methods."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    next_cursor: str = ""


class MembersEnvelope(Envelope):
    """Response of conversations.members."""

    members: List[str] = Field(default_factory=list)
    response_metadata: Optional[ResponseMetadata] = None

    @field_validator("members", mode="before")
    @classmethod
    def _null_members(cls, value):
        return [] if value is None else value

    @property
    def next_cursor(self) -> str:
        if self.response_metadata is None:
            return ""
        return self.response_metadata.next_cursor


class ChannelEnvelope(Envelope):
    """Response of methods that return the affected channel."""

    channel: Channel


class CloseEnvelope(Envelope):
    """Response of conversations.close."""

    no_op: bool = False
    already_closed: bool = False


class CloseResult(NamedTuple):
    """Outcome of closing a conversation."""

    no_op: bool
    already_closed: bool
