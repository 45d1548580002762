"""
Pydantic schemas for Slack conversation objects and response envelopes.
"""

from .conversation import Channel, Conversation, GroupConversation, Message, Purpose, Topic
from .envelope import (
    ChannelEnvelope,
    CloseEnvelope,
    CloseResult,
    Envelope,
    MembersEnvelope,
    ResponseMetadata,
)

__all__ = [
    "Channel",
    "ChannelEnvelope",
    "CloseEnvelope",
    "CloseResult",
    "Conversation",
    "Envelope",
    "GroupConversation",
    "MembersEnvelope",
    "Message",
    "Purpose",
    "ResponseMetadata",
    "Topic",
]
