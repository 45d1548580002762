"""
Slack Web API client for the conversations.* methods.

This module provides a typed async interface for managing Slack
conversations: membership, archival, topic and purpose, invitations,
closing, creation and lookup. Every method issues exactly one form-encoded
POST, decodes the response envelope and either returns a typed result or
raises TransportError / RemoteError.
"""

import asyncio
import time
from typing import Any, AsyncIterator, List, Optional, Tuple, Type, TypeVar
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from .config import settings
from .errors import ConfigurationError, RemoteError, TransportError
from .schemas import (
    Channel,
    ChannelEnvelope,
    CloseEnvelope,
    CloseResult,
    Envelope,
    MembersEnvelope,
)
from .utils.form import FormPairs, build_form, redact
from .utils.logging import get_logger, log_api_call
from .utils.pagination import iterate_pages

logger = get_logger("slack.conversations")

E = TypeVar("E", bound=Envelope)

# Slack method names, used as the URL path segment
METHOD_MEMBERS = "conversations.members"
METHOD_ARCHIVE = "conversations.archive"
METHOD_UNARCHIVE = "conversations.unarchive"
METHOD_SET_TOPIC = "conversations.setTopic"
METHOD_SET_PURPOSE = "conversations.setPurpose"
METHOD_RENAME = "conversations.rename"
METHOD_INVITE = "conversations.invite"
METHOD_KICK = "conversations.kick"
METHOD_CLOSE = "conversations.close"
METHOD_CREATE = "conversations.create"
METHOD_INFO = "conversations.info"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class ConversationsClient:
    """
    Client for the Slack conversations.* Web API methods.

    The token and HTTP client are fixed at construction and shared by every
    call, so one instance can be used concurrently from many tasks. Each
    method accepts an optional ``timeout`` deadline in seconds; ``None``
    means no deadline. Cancelling the calling task aborts the request.
    """

    def __init__(
        self,
        token: str = None,
        api_url: str = None,
        timeout: float = None,
        http_client: Optional[httpx.AsyncClient] = None,
        debug: Optional[bool] = None
    ):
        """
        Initialize the conversations client.

        Args:
            token: Slack token (defaults to config)
            api_url: Slack API base URL (defaults to config)
            timeout: Transport timeout in seconds for the HTTP client this
                instance creates (defaults to config)
            http_client: Shared httpx client; when given it is not closed by
                us and keeps its own timeout, so ``timeout`` is not applied
            debug: Log submitted form keys per call (defaults to config)

        Raises:
            ConfigurationError: If no token is available or the API URL is
                not an http(s) URL
        """
        self.token = token or settings.slack_bot_token
        if not self.token:
            raise ConfigurationError("Slack token not configured")

        self.api_url = api_url or settings.slack_api_url
        if not self.api_url.startswith(("https://", "http://")):
            raise ConfigurationError(f"Slack API URL must be http(s): {self.api_url!r}")
        if not self.api_url.endswith("/"):
            self.api_url += "/"
        self.timeout = settings.slack_timeout if timeout is None else timeout
        self.debug = settings.debug if debug is None else debug

        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=self.timeout)

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http_client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def _send(self, method: str, form: FormPairs) -> Any:
        response = await self._http_client.post(
            self.api_url + method,
            content=urlencode(form),
            headers={"Content-Type": FORM_CONTENT_TYPE},
        )
        response.raise_for_status()
        return response.json()

    async def _post(
        self,
        method: str,
        form: FormPairs,
        envelope_type: Type[E],
        timeout: Optional[float] = None,
        channel_id: Optional[str] = None
    ) -> E:
        """
        Issue one API call and decode its envelope.

        Args:
            method: Slack method name
            form: Form pairs built by build_form
            envelope_type: Envelope schema holding the method's payload
            timeout: Deadline in seconds for the whole call (None = no deadline)
            channel_id: Channel the call targets, for logging

        Returns:
            The decoded envelope, guaranteed to have ``ok`` set

        Raises:
            TransportError: If the call or decoding failed
            RemoteError: If the envelope reports ``ok: false``
        """
        start_time = time.monotonic()

        def fail(error: str) -> None:
            log_api_call(
                method,
                success=False,
                duration=time.monotonic() - start_time,
                channel_id=channel_id,
                error=error
            )

        if self.debug:
            logger.debug("Calling Slack method", method=method, keys=redact(form))

        try:
            if timeout is None:
                payload = await self._send(method, form)
            else:
                payload = await asyncio.wait_for(self._send(method, form), timeout)
        except asyncio.TimeoutError as e:
            fail("deadline_exceeded")
            raise TransportError(
                f"{method} exceeded its deadline of {timeout}s", method=method
            ) from e
        except httpx.HTTPError as e:
            fail(f"http_error: {e}")
            raise TransportError(f"{method} request failed: {e}", method=method) from e
        except ValueError as e:
            fail("invalid_json")
            raise TransportError(f"{method} returned a non-JSON body", method=method) from e

        try:
            envelope = Envelope.model_validate(payload)
        except ValidationError as e:
            fail("invalid_envelope")
            raise TransportError(f"{method} returned a malformed envelope", method=method) from e

        if not envelope.ok:
            fail(envelope.error_code)
            raise RemoteError(envelope.error_code, method=method, warning=envelope.warning)

        try:
            result = envelope_type.model_validate(payload)
        except ValidationError as e:
            fail("invalid_payload")
            raise TransportError(f"{method} returned a malformed payload", method=method) from e

        log_api_call(
            method,
            success=True,
            duration=time.monotonic() - start_time,
            channel_id=channel_id,
            warning=envelope.warning
        )
        return result

    async def get_users_in_conversation(
        self,
        channel_id: str,
        cursor: str = "",
        limit: int = 0,
        *,
        timeout: Optional[float] = None
    ) -> Tuple[List[str], str]:
        """
        List one page of member IDs of a conversation.

        Args:
            channel_id: Conversation ID
            cursor: Cursor from a previous call, empty for the first page
            limit: Page size, 0 for the Slack default
            timeout: Deadline in seconds

        Returns:
            tuple: (member IDs, next cursor); an empty cursor means last page
        """
        form = build_form(
            self.token,
            required={"channel": channel_id},
            optional={"cursor": cursor, "limit": limit},
        )
        response = await self._post(
            METHOD_MEMBERS, form, MembersEnvelope, timeout=timeout, channel_id=channel_id
        )
        return response.members, response.next_cursor

    async def iterate_members(
        self,
        channel_id: str,
        limit: int = 0,
        *,
        timeout: Optional[float] = None
    ) -> AsyncIterator[str]:
        """
        Yield every member ID of a conversation, following cursors.

        The timeout applies to each page request, not the whole iteration.
        """
        async def fetch_page(cursor: str) -> Tuple[List[str], str]:
            return await self.get_users_in_conversation(
                channel_id, cursor=cursor, limit=limit, timeout=timeout
            )

        async for members in iterate_pages(fetch_page):
            for member in members:
                yield member

    async def archive_conversation(self, channel_id: str, *, timeout: Optional[float] = None) -> None:
        """Archive a conversation."""
        form = build_form(self.token, required={"channel": channel_id})
        await self._post(METHOD_ARCHIVE, form, Envelope, timeout=timeout, channel_id=channel_id)

    async def unarchive_conversation(self, channel_id: str, *, timeout: Optional[float] = None) -> None:
        """Reverse conversation archival."""
        form = build_form(self.token, required={"channel": channel_id})
        await self._post(METHOD_UNARCHIVE, form, Envelope, timeout=timeout, channel_id=channel_id)

    async def set_topic_of_conversation(
        self,
        channel_id: str,
        topic: str,
        *,
        timeout: Optional[float] = None
    ) -> Channel:
        """Set the topic of a conversation and return the updated channel."""
        form = build_form(self.token, required={"channel": channel_id, "topic": topic})
        response = await self._post(
            METHOD_SET_TOPIC, form, ChannelEnvelope, timeout=timeout, channel_id=channel_id
        )
        return response.channel

    async def set_purpose_of_conversation(
        self,
        channel_id: str,
        purpose: str,
        *,
        timeout: Optional[float] = None
    ) -> Channel:
        """Set the purpose of a conversation and return the updated channel."""
        form = build_form(self.token, required={"channel": channel_id, "purpose": purpose})
        response = await self._post(
            METHOD_SET_PURPOSE, form, ChannelEnvelope, timeout=timeout, channel_id=channel_id
        )
        return response.channel

    async def rename_conversation(
        self,
        channel_id: str,
        name: str,
        *,
        timeout: Optional[float] = None
    ) -> Channel:
        """Rename a conversation and return the updated channel."""
        form = build_form(self.token, required={"channel": channel_id, "name": name})
        response = await self._post(
            METHOD_RENAME, form, ChannelEnvelope, timeout=timeout, channel_id=channel_id
        )
        return response.channel

    async def invite_users_to_conversation(
        self,
        channel_id: str,
        users: List[str],
        *,
        timeout: Optional[float] = None
    ) -> Channel:
        """
        Invite users to a conversation.

        Args:
            channel_id: Conversation ID
            users: User IDs, sent as one comma-joined field
            timeout: Deadline in seconds

        Returns:
            Channel: The updated channel
        """
        form = build_form(self.token, required={"channel": channel_id, "users": users})
        response = await self._post(
            METHOD_INVITE, form, ChannelEnvelope, timeout=timeout, channel_id=channel_id
        )
        return response.channel

    async def kick_user_from_conversation(
        self,
        channel_id: str,
        user: str,
        *,
        timeout: Optional[float] = None
    ) -> None:
        """Remove a user from a conversation."""
        form = build_form(self.token, required={"channel": channel_id, "user": user})
        await self._post(METHOD_KICK, form, Envelope, timeout=timeout, channel_id=channel_id)

    async def close_conversation(
        self,
        channel_id: str,
        *,
        timeout: Optional[float] = None
    ) -> CloseResult:
        """
        Close a direct message or multi-person direct message.

        Returns:
            CloseResult: (no_op, already_closed) as reported by Slack
        """
        form = build_form(self.token, required={"channel": channel_id})
        response = await self._post(
            METHOD_CLOSE, form, CloseEnvelope, timeout=timeout, channel_id=channel_id
        )
        return CloseResult(no_op=response.no_op, already_closed=response.already_closed)

    async def create_conversation(
        self,
        name: str,
        is_private: bool,
        *,
        timeout: Optional[float] = None
    ) -> Channel:
        """Create a public or private channel-based conversation."""
        form = build_form(self.token, required={"name": name, "is_private": is_private})
        response = await self._post(METHOD_CREATE, form, ChannelEnvelope, timeout=timeout)
        return response.channel

    async def get_conversation_info(
        self,
        channel_id: str,
        include_locale: bool = False,
        *,
        timeout: Optional[float] = None
    ) -> Channel:
        """Retrieve information about a conversation."""
        form = build_form(
            self.token,
            required={"channel": channel_id, "include_locale": include_locale},
        )
        response = await self._post(
            METHOD_INFO, form, ChannelEnvelope, timeout=timeout, channel_id=channel_id
        )
        return response.channel


# Global client instance
_conversations_client: Optional[ConversationsClient] = None


def get_conversations_client() -> ConversationsClient:
    """
    Get or create the global conversations client instance.

    Returns:
        ConversationsClient: Client instance built from settings
    """
    global _conversations_client
    if _conversations_client is None:
        _conversations_client = ConversationsClient()
    return _conversations_client
