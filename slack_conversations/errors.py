"""
Exceptions raised by the Slack conversations client.

Two failure kinds reach callers: TransportError when the round-trip itself
failed (network, HTTP status, undecodable body, deadline) and RemoteError
when Slack answered with ``"ok": false``. Callers branch on the kind when
deciding whether a retry is safe.
"""

from typing import Optional


class SlackConversationsError(Exception):
    """Base exception for all client errors."""
    pass


class ConfigurationError(SlackConversationsError):
    """Raised when the client is built without a usable token or URL."""
    pass


class TransportError(SlackConversationsError):
    """Raised when a call fails before a valid envelope was decoded."""

    def __init__(self, message: str, method: Optional[str] = None):
        self.method = method
        super().__init__(message)


class RemoteError(SlackConversationsError):
    """
    Raised when the envelope reports ``"ok": false``.

    The remote error code is kept verbatim, so ``str(exc)`` is exactly the
    envelope's ``error`` field.
    """

    def __init__(
        self,
        code: str,
        method: Optional[str] = None,
        warning: Optional[str] = None
    ):
        self.code = code
        self.method = method
        self.warning = warning
        super().__init__(code)
