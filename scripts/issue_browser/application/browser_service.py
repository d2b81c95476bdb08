from __future__ import annotations

import asyncio
import logging

from issue_browser.domain.entities import (
    FetchPath,
    Organization,
    PageRequest,
    RepositorySummary,
    Snapshot,
    StarDirection,
)
from issue_browser.domain.errors import MissingRepositoryError, RequestInFlightError, TransportError
from issue_browser.domain.interfaces import IGitHubGateway
from .pagination import PaginationDriver, can_load_more, next_fetch
from .reconciler import apply_star_toggle

log = logging.getLogger(__name__)


class IssueBrowserService:
    """
    The surface the presentation layer talks to.

    Owns the current Snapshot and is the only thing that replaces it.
    Receives the gateway via constructor injection.

    Two guards keep requests from overlapping:
      - fetch guard  → submit_path / load_more, so a continuation is only
                       merged onto a snapshot that already holds every
                       earlier page
      - toggle guard → toggle_star, so a second toggle never reads a stale
                       viewer_has_starred / count baseline
    A call that hits a held guard raises RequestInFlightError and sends nothing.
    """

    def __init__(self, gateway: IGitHubGateway) -> None:
        self._gateway     = gateway
        self._driver      = PaginationDriver(gateway)
        self._fetch_lock  = asyncio.Lock()
        self._toggle_lock = asyncio.Lock()
        self._path: FetchPath | None     = None
        self._snapshot: Snapshot | None  = None

    @property
    def path(self) -> FetchPath | None:
        return self._path

    @property
    def fetch_in_flight(self) -> bool:
        return self._fetch_lock.locked()

    @property
    def toggle_in_flight(self) -> bool:
        return self._toggle_lock.locked()

    def get_snapshot(self) -> Snapshot | None:
        return self._snapshot

    def can_load_more(self) -> bool:
        return can_load_more(self._snapshot)

    async def submit_path(self, raw_path: str) -> Snapshot:
        """
        Start a fresh lifecycle for `raw_path` and fetch its first page.
        A malformed path raises MalformedFetchPathError before anything is sent.
        The current path and snapshot are only replaced once the page arrives,
        so a failed request leaves them as they were.
        """
        path = FetchPath.parse(raw_path)
        self._ensure_idle(self._fetch_lock, "fetch")

        async with self._fetch_lock:
            log.info("Loading open issues for %s", path)
            try:
                snapshot = await self._driver.fetch(path, None, PageRequest(end_cursor=None))
            except TransportError as exc:
                log.warning("First page for %s failed: %s", path, exc)
                raise

            self._path     = path
            self._snapshot = snapshot
            return snapshot

    async def load_more(self) -> Snapshot | None:
        """
        Fetch the next page and append it. A no-op (returning the current
        snapshot) when there is nothing more to load.
        """
        self._ensure_idle(self._fetch_lock, "fetch")

        if self._path is None or not self.can_load_more():
            log.info("Nothing more to load")
            return self._snapshot

        request = next_fetch(self._snapshot)
        if request is None:
            return self._snapshot

        async with self._fetch_lock:
            try:
                snapshot = await self._driver.fetch(self._path, self._snapshot, request)
            except TransportError as exc:
                log.warning("Next page for %s failed, keeping %d issues: %s", self._path, len(self._snapshot.issues), exc)
                raise

            self._snapshot = snapshot
            log.info("Loaded %d/%d issues for %s", len(snapshot.issues), snapshot.total_count, self._path)
            return snapshot

    async def toggle_star(self) -> Snapshot:
        """
        Star the repository if the viewer has not starred it, unstar it otherwise.

        The direction and the stargazer baseline are captured now, at request
        time. The result is applied to whatever snapshot is current when the
        response arrives, unless that snapshot is for a different repository.
        """
        self._ensure_idle(self._toggle_lock, "star")

        snapshot = self._snapshot
        if snapshot is None or snapshot.repository is None:
            raise MissingRepositoryError("No repository loaded to star")

        repository = snapshot.repository
        direction  = StarDirection.for_state(repository.viewer_has_starred)
        baseline   = repository.stargazers_count

        async with self._toggle_lock:
            log.info("%s %s (%d stargazers)", direction.value.capitalize(), repository.name, baseline)

            if direction is StarDirection.UNSTAR:
                result = await self._gateway.remove_star(repository.id)
            else:
                result = await self._gateway.add_star(repository.id)

            current = self._snapshot
            if current is None or current.repository is None or current.repository.id != repository.id:
                log.warning("Repository changed while %s was in flight, discarding result", direction.value)
                return current

            self._snapshot = apply_star_toggle(current, result, direction, baseline_count=baseline)
            return self._snapshot

    async def lookup_organization(self, login: str) -> Organization | None:
        return await self._gateway.fetch_organization(login)

    async def lookup_repository(self, raw_path: str) -> tuple[Organization, RepositorySummary | None] | None:
        path = FetchPath.parse(raw_path)
        return await self._gateway.fetch_repository_of_organization(path.organization, path.repository)

    @staticmethod
    def _ensure_idle(lock: asyncio.Lock, kind: str) -> None:
        if lock.locked():
            log.debug("Rejected %s request: one is already in flight", kind)
            raise RequestInFlightError(kind)
