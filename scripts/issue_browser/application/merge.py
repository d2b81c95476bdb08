"""
Result Merge Engine
-------------------
Turns (previous snapshot, new paginate-issues response) into the next
snapshot. Three outcomes:

  first page      → full replace, previous issues are dropped
  continuation    → previous issues + new issues, everything else from
                    the new response (the server re-sends star fields and
                    page info on every page)
  no usable data  → errors recorded, data fields left as they were
                    (continuation) or empty (first page)

Pure: no I/O, never raises on GraphQL errors, never modifies `previous`.
"""

from __future__ import annotations
import logging
from dataclasses import replace
from issue_browser.domain.entities import IssuesPage, IssuesPageResponse, Snapshot

log = logging.getLogger(__name__)


def merge(previous: Snapshot | None, response: IssuesPageResponse, is_first_page: bool) -> Snapshot:
    if not is_first_page and previous is None:
        log.debug("Continuation merge with no previous snapshot, treating as first page")
        is_first_page = True

    if is_first_page:
        return _replace(response)
    return _accumulate(previous, response)


def _replace(response: IssuesPageResponse) -> Snapshot:
    page = response.page
    if page is None:
        return Snapshot(errors=response.errors)

    return Snapshot(
        organization = page.organization,
        repository   = page.repository,
        issues       = page.issues,
        page_info    = page.page_info,
        total_count  = page.total_count,
        errors       = response.errors,
    )


def _accumulate(previous: Snapshot, response: IssuesPageResponse) -> Snapshot:
    page = response.page
    if not _is_usable(page):
        log.debug("Continuation response has no usable data, keeping %d issues", len(previous.issues))
        return replace(previous, errors=response.errors)

    _warn_on_overlap(previous, page)

    return Snapshot(
        organization = page.organization,
        repository   = page.repository,
        issues       = previous.issues + page.issues,
        page_info    = page.page_info,
        total_count  = page.total_count,
        errors       = response.errors,
    )


def _is_usable(page: IssuesPage | None) -> bool:
    return page is not None and page.repository is not None


def _warn_on_overlap(previous: Snapshot, page: IssuesPage) -> None:
    # Overlapping pages are kept as-is; only reported.
    seen = set(previous.issue_ids)
    repeated = [issue.id for issue in page.issues if issue.id in seen]
    if repeated:
        log.warning("Page repeats %d issue id(s) already loaded: %s", len(repeated), ", ".join(repeated))
