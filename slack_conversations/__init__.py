"""
Typed async client for the Slack conversations.* Web API methods.

Call ``setup_logging()`` once at startup to configure structlog output at
``settings.log_level``.
"""

from .client import ConversationsClient, get_conversations_client
from .errors import ConfigurationError, RemoteError, SlackConversationsError, TransportError
from .schemas import Channel, CloseResult, Conversation, GroupConversation, Message, Purpose, Topic
from .utils.logging import setup_logging

__all__ = [
    "Channel",
    "CloseResult",
    "ConfigurationError",
    "Conversation",
    "ConversationsClient",
    "GroupConversation",
    "Message",
    "Purpose",
    "RemoteError",
    "SlackConversationsError",
    "Topic",
    "TransportError",
    "get_conversations_client",
    "setup_logging",
]
