from __future__ import annotations
import logging
from typing import AsyncIterator
from issue_browser.domain.entities import FetchPath, PageRequest, Snapshot
from issue_browser.domain.interfaces import IGitHubGateway
from .merge import merge

log = logging.getLogger(__name__)


def can_load_more(snapshot: Snapshot | None) -> bool:
    return snapshot is not None and snapshot.page_info.has_next_page


def next_fetch(snapshot: Snapshot | None) -> PageRequest | None:
    """
    Decide what to request next for this snapshot.

    No snapshot yet → first page (no cursor).
    No next page    → None, nothing more to fetch.
    """
    if snapshot is None:
        return PageRequest(end_cursor=None)

    if not can_load_more(snapshot):
        return None

    cursor = snapshot.page_info.end_cursor
    if cursor is None:
        # Without a cursor the "next" request would be the first page again.
        log.warning("Server reported another page but sent no endCursor, stopping")
        return None

    return PageRequest(end_cursor=cursor)


class PaginationDriver:
    """
    Sends paginate-issues requests and feeds each response through the
    merge engine. A request with a cursor is always merged as a
    continuation, one without as a first page.

    The gateway is injected, the driver creates nothing itself.
    """

    def __init__(self, gateway: IGitHubGateway) -> None:
        self._gateway = gateway

    async def fetch(self, path: FetchPath, snapshot: Snapshot | None, request: PageRequest) -> Snapshot:
        response = await self._gateway.fetch_issues_page(path, request.end_cursor)

        if response.errors:
            log.warning("GraphQL errors for %s: %s", path, " ".join(response.errors))

        merged = merge(snapshot, response, is_first_page=request.is_first_page)
        log.debug(
            "Merged page for %s | cursor=%s | issues=%d/%d | has_next=%s",
            path,
            request.end_cursor,
            len(merged.issues),
            merged.total_count,
            merged.page_info.has_next_page,
        )
        return merged

    async def iter_pages(self, path: FetchPath, max_pages: int | None = None) -> AsyncIterator[Snapshot]:
        """
        Async generator — fetches pages one after another, yielding the
        merged snapshot after each one.

        Requests are strictly sequential: page N+1 is only requested once
        page N has been merged, since its cursor comes from that merge.
        Stops when there is no next page, a response carries errors, or
        `max_pages` pages have been fetched.
        """
        snapshot: Snapshot | None = None
        pages = 0

        while max_pages is None or pages < max_pages:
            request = next_fetch(snapshot)
            if request is None:
                break

            snapshot = await self.fetch(path, snapshot, request)
            pages += 1
            yield snapshot

            if snapshot.has_errors:
                break

        log.info("Pagination finished for %s | pages=%d", path, pages)
