"""In-memory stand-ins for the GitHub gateway, plus builders for test data."""

from __future__ import annotations

import asyncio

from issue_browser.domain.entities import (
    FetchPath,
    Issue,
    IssuesPage,
    IssuesPageResponse,
    Organization,
    PageInfo,
    Reaction,
    Repository,
    RepositorySummary,
    StarMutationResult,
)
from issue_browser.domain.interfaces import IGitHubGateway


def make_issue(n: int) -> Issue:
    return Issue(
        id=f"I{n}",
        title=f"Issue {n}",
        url=f"https://github.com/acme/widgets/issues/{n}",
        reactions=(Reaction(id=f"R{n}", content="THUMBS_UP"),),
    )


def make_issues(start: int, stop: int) -> tuple[Issue, ...]:
    return tuple(make_issue(n) for n in range(start, stop + 1))


def make_page(
    issues,
    end_cursor=None,
    has_next_page=False,
    stars=42,
    starred=False,
    repository_id="R1",
    total_count=8,
) -> IssuesPageResponse:
    return IssuesPageResponse(
        page=IssuesPage(
            organization=Organization(name="Acme", url="https://github.com/acme"),
            repository=Repository(
                id=repository_id,
                name="widgets",
                url="https://github.com/acme/widgets",
                stargazers_count=stars,
                viewer_has_starred=starred,
            ),
            issues=tuple(issues),
            total_count=total_count,
            page_info=PageInfo(end_cursor=end_cursor, has_next_page=has_next_page),
        ),
    )


def error_response(*messages: str) -> IssuesPageResponse:
    return IssuesPageResponse(page=None, errors=tuple(messages))


class FakeGitHubGateway(IGitHubGateway):
    """
    Serves queued responses in order and records every call.

    Queue an exception instance to have the call raise it. Set `gate` (page
    fetches) or `star_gate` (star mutations) to an asyncio.Event to hold
    those calls until the event is set.
    """

    def __init__(self) -> None:
        self.pages: list = []
        self.star_results: list = []
        self.calls: list[tuple] = []
        self.gate: asyncio.Event | None = None
        self.star_gate: asyncio.Event | None = None
        self.organization = Organization(name="Acme", url="https://github.com/acme")

    @staticmethod
    async def _wait(gate: asyncio.Event | None) -> None:
        if gate is not None:
            await gate.wait()

    @staticmethod
    def _next(queue: list):
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def fetch_organization(self, login: str) -> Organization | None:
        self.calls.append(("fetch_organization", login))
        return self.organization if login == "acme" else None

    async def fetch_repository_of_organization(self, login: str, name: str):
        self.calls.append(("fetch_repository_of_organization", login, name))
        if login != "acme":
            return None
        summary = RepositorySummary(name=name, url=f"https://github.com/acme/{name}") if name == "widgets" else None
        return self.organization, summary

    async def fetch_issues_page(self, path: FetchPath, end_cursor: str | None = None) -> IssuesPageResponse:
        self.calls.append(("fetch_issues_page", str(path), end_cursor))
        await self._wait(self.gate)
        return self._next(self.pages)

    async def add_star(self, repository_id: str) -> StarMutationResult:
        self.calls.append(("add_star", repository_id))
        await self._wait(self.star_gate)
        return self._next(self.star_results)

    async def remove_star(self, repository_id: str) -> StarMutationResult:
        self.calls.append(("remove_star", repository_id))
        await self._wait(self.star_gate)
        return self._next(self.star_results)
