"""
Domain Layer — Interfaces (Abstract Contracts)
-----------------------------------------------
The application layer talks to GitHub only through IGitHubGateway.
GitHubClient (infrastructure) implements it over HTTP; tests implement it
with an in-memory fake that records every call.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from .entities import (
    FetchPath,
    IssuesPageResponse,
    Organization,
    RepositorySummary,
    StarMutationResult,
)


class IGitHubGateway(ABC):
    """
    Contract for the fixed set of operations the browser performs.
    Nothing else is ever sent to the API.
    """

    @abstractmethod
    async def fetch_organization(self, login: str) -> Organization | None:
        """lookup-organization. None when the organization does not exist."""
        ...

    @abstractmethod
    async def fetch_repository_of_organization(self, login: str, name: str) -> tuple[Organization, RepositorySummary | None] | None:
        """lookup-repository-of-organization."""
        ...

    @abstractmethod
    async def fetch_issues_page(self, path: FetchPath, end_cursor: str | None = None) -> IssuesPageResponse:
        """
        paginate-issues. Fetch one page of open issues.

        GraphQL-level errors are returned in the response, not raised.
        Transport failures raise TransportError.
        """
        ...

    @abstractmethod
    async def add_star(self, repository_id: str) -> StarMutationResult:
        """add-star. Raises StarMutationError when the server rejects it."""
        ...

    @abstractmethod
    async def remove_star(self, repository_id: str) -> StarMutationResult:
        """remove-star. Raises StarMutationError when the server rejects it."""
        ...
