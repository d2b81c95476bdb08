from __future__ import annotations

import logging

import httpx

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
    StarDirection,
    StarMutationResult,
)
from issue_browser.domain.errors import StarMutationError, TransportError
from issue_browser.domain.interfaces import IGitHubGateway
from . import query_catalog as catalog

log = logging.getLogger(__name__)

GITHUB_API_URL  = "https://api.github.com/graphql"
REQUEST_TIMEOUT = 30.0


class GitHubClient(IGitHubGateway):
    """
    Concrete implementation of IGitHubGateway for GitHub's GraphQL API.

    The constructor receives an httpx.AsyncClient (injected) rather than
    creating one internally. The caller owns its lifecycle; tests pass a
    client built on httpx.MockTransport.

    Failed requests are not retried. A transport failure is raised as
    TransportError and the caller decides what to do with it.
    """

    def __init__(self, token: str, client: httpx.AsyncClient, url: str = GITHUB_API_URL) -> None:
        self._client = client
        self._url    = url
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type":  "application/json",
        }

    async def execute(self, query: str, variables: dict) -> dict:
        """
        POST one GraphQL document and return the decoded body,
        `{"data": ..., "errors": [...]}`. GraphQL errors are left in the body.
        """
        try:
            response = await self._client.post(
                self._url,
                headers=self._headers,
                json={"query": query, "variables": variables},
                timeout=REQUEST_TIMEOUT,
            )
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPStatusError, httpx.RequestError) as exc:
            raise TransportError(f"GraphQL request failed: {exc}") from exc
        except ValueError as exc:
            raise TransportError(f"GraphQL response was not JSON: {exc}") from exc

        if not isinstance(body, dict):
            raise TransportError(f"Unexpected GraphQL response body: {body!r:.80}")
        return body

    # Anti-Corruption Layer
    @staticmethod
    def _error_messages(body: dict) -> tuple[str, ...] | None:
        errors = body.get("errors")
        if not errors:
            return None
        return tuple(err.get("message", "") if isinstance(err, dict) else str(err) for err in errors)

    @staticmethod
    def _parse_organization(node: dict) -> Organization:
        return Organization(name=node.get("name"), url=node.get("url"))

    @staticmethod
    def _parse_reaction(edge: dict) -> Reaction | None:
        try:
            node = edge["node"]
            return Reaction(id=node["id"], content=node["content"])
        except (KeyError, TypeError) as exc:
            log.debug("Skipping malformed reaction edge: %s", exc)
            return None

    def _parse_issue(self, edge: dict) -> Issue | None:
        """
        ANTI-CORRUPTION LAYER — GitHub nests everything in edges/node;
        the domain Issue is flat and carries its reactions as a tuple.

        If GitHub renames a field, fix it HERE only.
        """
        try:
            node = edge["node"]
            reaction_edges = (node.get("reactions") or {}).get("edges") or []
            return Issue(
                id        = node["id"],
                title     = node["title"],
                url       = node["url"],
                reactions = tuple(r for e in reaction_edges if (r := self._parse_reaction(e)) is not None),
            )
        except (KeyError, TypeError) as exc:
            log.debug("Skipping malformed issue edge: %s", exc)
            return None

    @staticmethod
    def _parse_repository(node: dict) -> Repository:
        return Repository(
            id                 = node["id"],
            name               = node["name"],
            url                = node["url"],
            stargazers_count   = (node.get("stargazers") or {}).get("totalCount") or 0,
            viewer_has_starred = bool(node.get("viewerHasStarred", False)),
        )

    @staticmethod
    def _parse_repository_summary(node: dict | None) -> RepositorySummary | None:
        if not node:
            return None
        try:
            return RepositorySummary(name=node["name"], url=node["url"])
        except (KeyError, TypeError) as exc:
            log.debug("Skipping malformed repository summary: %s", exc)
            return None

    def _parse_issues_page(self, data: dict | None) -> IssuesPage | None:
        organization_node = (data or {}).get("organization")
        if not organization_node:
            return None

        organization    = self._parse_organization(organization_node)
        repository_node = organization_node.get("repository")
        if not repository_node:
            return IssuesPage(organization=organization, repository=None)

        try:
            repository = self._parse_repository(repository_node)
        except (KeyError, TypeError) as exc:
            log.debug("Malformed repository node: %s", exc)
            return IssuesPage(organization=organization, repository=None)

        issues_node = repository_node.get("issues") or {}
        page_info   = issues_node.get("pageInfo") or {}

        return IssuesPage(
            organization = organization,
            repository   = repository,
            issues       = tuple(i for e in issues_node.get("edges") or [] if (i := self._parse_issue(e)) is not None),
            total_count  = issues_node.get("totalCount") or 0,
            page_info    = PageInfo(
                end_cursor    = page_info.get("endCursor"),
                has_next_page = bool(page_info.get("hasNextPage", False)),
            ),
        )

    # IGitHubGateway implementation
    async def fetch_organization(self, login: str) -> Organization | None:
        body = await self.execute(catalog.GET_ORGANIZATION, catalog.organization_variables(login))
        node = (body.get("data") or {}).get("organization")
        if not node:
            log.info("Organization %s not found: %s", login, self._error_messages(body))
            return None
        return self._parse_organization(node)

    async def fetch_repository_of_organization(self, login: str, name: str) -> tuple[Organization, RepositorySummary | None] | None:
        body = await self.execute(
            catalog.GET_REPOSITORY_OF_ORGANIZATION,
            catalog.repository_of_organization_variables(login, name),
        )
        node = (body.get("data") or {}).get("organization")
        if not node:
            log.info("Organization %s not found: %s", login, self._error_messages(body))
            return None

        summary = self._parse_repository_summary(node.get("repository"))
        return self._parse_organization(node), summary

    async def fetch_issues_page(self, path: FetchPath, end_cursor: str | None = None) -> IssuesPageResponse:
        body = await self.execute(catalog.GET_ISSUES_OF_REPOSITORY, catalog.issues_variables(path, end_cursor))
        return IssuesPageResponse(
            page   = self._parse_issues_page(body.get("data")),
            errors = self._error_messages(body),
        )

    async def add_star(self, repository_id: str) -> StarMutationResult:
        return await self._mutate_star(StarDirection.STAR, repository_id)

    async def remove_star(self, repository_id: str) -> StarMutationResult:
        return await self._mutate_star(StarDirection.UNSTAR, repository_id)

    async def _mutate_star(self, direction: StarDirection, repository_id: str) -> StarMutationResult:
        mutation, root_field = catalog.star_mutation_for(direction)
        body   = await self.execute(mutation, catalog.star_variables(repository_id))
        errors = self._error_messages(body)

        payload   = (body.get("data") or {}).get(root_field) or {}
        starrable = payload.get("starrable")
        if errors or not starrable:
            raise StarMutationError(errors)

        return StarMutationResult(viewer_has_starred=bool(starrable.get("viewerHasStarred", False)))
