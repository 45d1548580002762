"""
Form encoding for Slack Web API requests.

Slack methods take ``application/x-www-form-urlencoded`` bodies. This module
turns typed keyword parameters into the ordered key/value string pairs that
go on the wire.
"""

from collections.abc import Iterable, Sized
from typing import Any, List, Mapping, Optional, Sequence, Tuple

FormPairs = List[Tuple[str, str]]


def is_list_valued(value: Any) -> bool:
    """Return True for iterables sent as one comma-joined field."""
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, Mapping))


def encode_value(value: Any) -> str:
    """
    Render a single parameter value as its wire string.

    Booleans become ``"true"``/``"false"``, lists, sets and other iterables
    are comma-joined and everything else goes through ``str``.
    """
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_list_valued(value):
        return ",".join(str(item) for item in value)
    return str(value)


def is_zero(value: Any) -> bool:
    """Return True for values an optional parameter treats as "not set"."""
    if value is None:
        return True
    if isinstance(value, bool):
        return value is False
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def build_form(
    token: str,
    required: Optional[Mapping[str, Any]] = None,
    optional: Optional[Mapping[str, Any]] = None
) -> FormPairs:
    """
    Build the form pairs submitted for one API call.

    Args:
        token: Credential attached to every request, always the first pair
        required: Parameters always sent, even when empty or false
        optional: Parameters sent only when not at their zero value

    Returns:
        list: Ordered ``(key, value)`` string pairs
    """
    pairs: FormPairs = [("token", token)]

    for key, value in (required or {}).items():
        pairs.append((key, encode_value(value)))

    # limit=0 and cursor="" are dropped so the remote applies its own defaults
    for key, value in (optional or {}).items():
        # generators have no length until drained
        if is_list_valued(value):
            value = list(value)
        if is_zero(value):
            continue
        pairs.append((key, encode_value(value)))

    return pairs


def redact(pairs: Sequence[Tuple[str, str]]) -> List[str]:
    """Return the submitted keys without values, safe for logging."""
    return [key for key, _ in pairs]
