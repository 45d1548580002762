"""
Pydantic models for Slack conversation objects.

Slack returns a flat JSON object for every channel-like entity. Here that
object is split into three layers held by composition: a Channel holds a
GroupConversation, which holds the base Conversation. Each layer exposes
read-only accessors that delegate to the layer below, so callers can write
``channel.name`` or ``channel.id`` without reaching through the nesting.
"""

from datetime import datetime
from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

_SNAPSHOT = ConfigDict(frozen=True, extra="ignore")


def _lift(data: Any, key: str, fields: Iterable[str]) -> Any:
    """Move the named flat fields of ``data`` into a nested ``key`` dict."""
    if not isinstance(data, dict) or key in data:
        return data
    flat = dict(data)
    flat[key] = {name: flat.pop(name) for name in list(fields) if name in flat}
    return flat


class Message(BaseModel):
    """Latest message snapshot attached to a conversation."""

    model_config = _SNAPSHOT

    type: str = Field(default="", description="Event type, usually 'message'")
    subtype: Optional[str] = Field(None, description="Message subtype")
    user: str = Field(default="", description="Author user ID")
    text: str = Field(default="", description="Message text")
    ts: str = Field(default="", description="Message timestamp")
    thread_ts: Optional[str] = Field(None, description="Parent thread timestamp")


class Topic(BaseModel):
    """Channel topic as last set."""

    model_config = _SNAPSHOT

    value: str = ""
    creator: str = ""
    last_set: Optional[datetime] = None


class Purpose(BaseModel):
    """Channel purpose as last set."""

    model_config = _SNAPSHOT

    value: str = ""
    creator: str = ""
    last_set: Optional[datetime] = None


class Conversation(BaseModel):
    """
    Fields shared by every conversation type (channels, groups and IMs).

    ``created`` arrives as unix seconds and is decoded to an aware UTC
    datetime.
    """

    model_config = _SNAPSHOT

    id: str = Field(..., description="Conversation ID")
    created: Optional[datetime] = Field(None, description="Creation time")
    is_open: bool = Field(default=False, description="Whether the conversation is open")
    last_read: str = Field(default="", description="Timestamp of the last read message")
    latest: Optional[Message] = Field(None, description="Most recent message")
    unread_count: int = Field(default=0, description="Unread message count")
    unread_count_display: int = Field(default=0, description="Unread count shown to the user")


class GroupConversation(BaseModel):
    """Named multi-member conversation, the base of groups and channels."""

    model_config = _SNAPSHOT

    conversation: Conversation
    name: str = ""
    creator: str = ""
    is_archived: bool = False
    members: List[str] = Field(default_factory=list)
    topic: Topic = Field(default_factory=Topic)
    purpose: Purpose = Field(default_factory=Purpose)

    @model_validator(mode="before")
    @classmethod
    def _nest_conversation(cls, data: Any) -> Any:
        return _lift(data, "conversation", Conversation.model_fields)

    @property
    def id(self) -> str:
        return self.conversation.id

    @property
    def created(self) -> Optional[datetime]:
        return self.conversation.created

    @property
    def is_open(self) -> bool:
        return self.conversation.is_open

    @property
    def last_read(self) -> str:
        return self.conversation.last_read

    @property
    def latest(self) -> Optional[Message]:
        return self.conversation.latest

    @property
    def unread_count(self) -> int:
        return self.conversation.unread_count

    @property
    def unread_count_display(self) -> int:
        return self.conversation.unread_count_display


class Channel(BaseModel):
    """
    Channel object returned by the conversations.* methods.

    Everything that is not channel-specific is kept on ``group``; the
    properties below forward to it.
    """

    model_config = _SNAPSHOT

    group: GroupConversation
    is_channel: bool = False
    is_group: bool = False
    is_im: bool = False
    is_private: bool = False
    is_general: bool = False
    is_member: bool = False
    locale: str = ""

    @model_validator(mode="before")
    @classmethod
    def _nest_group(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "group" in data:
            return data
        own = set(cls.model_fields) - {"group"}
        return _lift(data, "group", [name for name in data if name not in own])

    @property
    def conversation(self) -> Conversation:
        return self.group.conversation

    @property
    def id(self) -> str:
        return self.group.id

    @property
    def created(self) -> Optional[datetime]:
        return self.group.created

    @property
    def is_open(self) -> bool:
        return self.group.is_open

    @property
    def last_read(self) -> str:
        return self.group.last_read

    @property
    def latest(self) -> Optional[Message]:
        return self.group.latest

    @property
    def unread_count(self) -> int:
        return self.group.unread_count

    @property
    def unread_count_display(self) -> int:
        return self.group.unread_count_display

    @property
    def name(self) -> str:
        return self.group.name

    @property
    def creator(self) -> str:
        return self.group.creator

    @property
    def is_archived(self) -> bool:
        return self.group.is_archived

    @property
    def members(self) -> List[str]:
        return self.group.members

    @property
    def topic(self) -> Topic:
        return self.group.topic

    @property
    def purpose(self) -> Purpose:
        return self.group.purpose
