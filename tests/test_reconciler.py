"""Tests for the star mutation reconciler."""

from issue_browser.application.merge import merge
from issue_browser.application.reconciler import adjusted_count, apply_star_toggle
from issue_browser.domain.entities import Snapshot, StarDirection, StarMutationResult

from fakes import make_issues, make_page


def _loaded(stars, starred):
    return merge(None, make_page(make_issues(1, 5), end_cursor="c1", has_next_page=True, stars=stars, starred=starred), is_first_page=True)


def test_star_increments_count():
    snapshot = _loaded(stars=10, starred=False)

    updated = apply_star_toggle(snapshot, StarMutationResult(viewer_has_starred=True), StarDirection.STAR)

    assert updated.repository.stargazers_count == 11
    assert updated.repository.viewer_has_starred is True
    assert updated.issues is snapshot.issues


def test_unstar_decrements_count():
    snapshot = _loaded(stars=10, starred=True)

    updated = apply_star_toggle(snapshot, StarMutationResult(viewer_has_starred=False), StarDirection.UNSTAR)

    assert updated.repository.stargazers_count == 9
    assert updated.repository.viewer_has_starred is False
    assert updated.issues is snapshot.issues


def test_only_star_fields_change():
    snapshot = _loaded(stars=10, starred=False)

    updated = apply_star_toggle(snapshot, StarMutationResult(viewer_has_starred=True), StarDirection.STAR)

    assert updated.page_info is snapshot.page_info
    assert updated.organization is snapshot.organization
    assert updated.repository.id == snapshot.repository.id
    assert snapshot.repository.stargazers_count == 10


def test_count_is_relative_to_baseline():
    snapshot = _loaded(stars=15, starred=False)

    updated = apply_star_toggle(snapshot, StarMutationResult(viewer_has_starred=True), StarDirection.STAR, baseline_count=10)

    assert updated.repository.stargazers_count == 11


def test_count_never_goes_negative():
    snapshot = _loaded(stars=0, starred=True)

    updated = apply_star_toggle(snapshot, StarMutationResult(viewer_has_starred=False), StarDirection.UNSTAR)

    assert updated.repository.stargazers_count == 0
    assert adjusted_count(0, StarDirection.UNSTAR) == 0


def test_snapshot_without_repository_is_returned_unchanged():
    snapshot = Snapshot(errors=("not found",))

    assert apply_star_toggle(snapshot, StarMutationResult(viewer_has_starred=True), StarDirection.STAR) is snapshot
