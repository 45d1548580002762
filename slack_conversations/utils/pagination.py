"""Cursor pagination helpers.

Slack paginated methods return ``response_metadata.next_cursor``. An empty
cursor on input means "first page"; an empty cursor on output means there
are no more pages.
"""

from typing import AsyncIterator, Awaitable, Callable, List, Set, Tuple, TypeVar

from ..errors import TransportError

T = TypeVar("T")

PageFetcher = Callable[[str], Awaitable[Tuple[List[T], str]]]


async def iterate_pages(fetch_page: PageFetcher, cursor: str = "") -> AsyncIterator[List[T]]:
    """
    Yield every page produced by ``fetch_page`` until the cursor runs out.

    Args:
        fetch_page: Coroutine function taking a cursor and returning
            ``(items, next_cursor)``
        cursor: Cursor to start from, empty for the first page

    Raises:
        TransportError: If the remote hands back a cursor that was already
            requested, which would fetch the same page twice
    """
    requested: Set[str] = {cursor}
    while True:
        items, next_cursor = await fetch_page(cursor)
        yield items
        if not next_cursor:
            return
        if next_cursor in requested:
            raise TransportError(f"Pagination cursor repeated: {next_cursor!r}")
        requested.add(next_cursor)
        cursor = next_cursor
