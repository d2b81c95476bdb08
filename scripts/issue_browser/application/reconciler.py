"""
Mutation Reconciler
-------------------
Applies an add-star / remove-star result to a snapshot without refetching.

The mutation response only reports `viewerHasStarred`, not the new
stargazer count. The count is therefore adjusted LOCALLY: +1 / -1 relative
to the count captured when the request was issued. It trusts that local
baseline; it is not a value re-derived from the server. The next
paginate-issues response overwrites it with the server's figure.
"""

from __future__ import annotations
import logging
from dataclasses import replace
from issue_browser.domain.entities import Snapshot, StarDirection, StarMutationResult

log = logging.getLogger(__name__)


def apply_star_toggle(snapshot: Snapshot, result: StarMutationResult, direction: StarDirection, baseline_count: int | None = None) -> Snapshot:
    """
    Return a new snapshot with only the repository's star fields changed.
    Issues, page info and organization are carried over as the same objects.
    """
    repository = snapshot.repository
    if repository is None:
        log.debug("No repository in snapshot, star result ignored")
        return snapshot

    baseline = repository.stargazers_count if baseline_count is None else baseline_count
    count = adjusted_count(baseline, direction)

    return replace(
        snapshot,
        repository=replace(
            repository,
            stargazers_count   = count,
            viewer_has_starred = result.viewer_has_starred,
        ),
    )


def adjusted_count(baseline: int, direction: StarDirection) -> int:
    count = baseline + direction.delta
    if count < 0:
        log.warning("Stargazer count would drop below zero (baseline %d), clamping", baseline)
        return 0
    return count
