"""Tests for the command-line rendering of a snapshot."""

from issue_browser.application.merge import merge

from fakes import error_response, make_issues, make_page
from main import render


def test_render_without_snapshot():
    assert render(None) == "No information yet ..."


def test_render_errors_instead_of_data():
    snapshot = merge(None, error_response("Bad credentials", "Try again"), is_first_page=True)

    assert render(snapshot) == "Something went wrong: Bad credentials Try again"


def test_render_issues_and_star_button():
    snapshot = merge(None, make_page(make_issues(1, 2), end_cursor="c1", has_next_page=True, stars=42), is_first_page=True)

    text = render(snapshot)

    assert "[Star 42]" in text
    assert "Issue 1" in text
    assert "THUMBS_UP" in text
    assert text.endswith("[More]")
