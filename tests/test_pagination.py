from __future__ import annotations

import pytest

from slack_conversations.errors import TransportError
from slack_conversations.utils.pagination import iterate_pages


@pytest.mark.asyncio
async def test_iterate_members_follows_cursors(client, slack):
    slack.respond({"ok": True, "members": ["U1", "U2"], "response_metadata": {"next_cursor": "page2"}})
    slack.respond({"ok": True, "members": ["U3"], "response_metadata": {"next_cursor": "page3"}})
    slack.respond({"ok": True, "members": ["U4"], "response_metadata": {"next_cursor": ""}})

    members = [member async for member in client.iterate_members("C1", limit=2)]

    assert members == ["U1", "U2", "U3", "U4"]
    cursors = [dict(form).get("cursor") for form in _forms(slack)]
    assert cursors == [None, "page2", "page3"]
    assert all(dict(form)["limit"] == "2" for form in _forms(slack))


@pytest.mark.asyncio
async def test_iterate_members_single_page(client, slack):
    slack.respond({"ok": True, "members": ["U1"]})

    members = [member async for member in client.iterate_members("C1")]

    assert members == ["U1"]
    assert len(slack.requests) == 1


@pytest.mark.asyncio
async def test_repeated_cursor_stops_iteration():
    pages = {"": (["a"], "c1"), "c1": (["b"], "c1")}
    requested = []

    async def fetch_page(cursor):
        requested.append(cursor)
        return pages[cursor]

    seen = []
    with pytest.raises(TransportError, match="repeated"):
        async for items in iterate_pages(fetch_page):
            seen.extend(items)

    assert seen == ["a", "b"]
    assert requested == ["", "c1"]


@pytest.mark.asyncio
async def test_iterate_pages_resumes_from_cursor():
    pages = {"c2": (["x"], "")}

    async def fetch_page(cursor):
        return pages[cursor]

    result = [items async for items in iterate_pages(fetch_page, cursor="c2")]

    assert result == [["x"]]


def _forms(slack):
    from urllib.parse import parse_qsl

    return [parse_qsl(request.content.decode()) for request in slack.requests]
