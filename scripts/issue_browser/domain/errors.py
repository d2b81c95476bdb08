from __future__ import annotations


class IssueBrowserError(Exception):
    """Base class for every error the browser raises on purpose."""
    pass


class MalformedFetchPathError(IssueBrowserError, ValueError):
    """Raised when a path is not of the form "organization/repository"."""

    def __init__(self, raw: str | None):
        self.raw = raw
        super().__init__(f"Expected 'organization/repository', got {raw!r}")


class TransportError(IssueBrowserError):
    """Raised when the GraphQL endpoint could not be reached or answered garbage."""
    pass


class MissingRepositoryError(IssueBrowserError):
    """Raised when a star toggle is requested with no repository loaded."""
    pass


class RequestInFlightError(IssueBrowserError):
    """Raised when a request is dispatched while an overlapping one is still pending."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"A {kind} request is already in flight")


class StarMutationError(IssueBrowserError):
    """Raised when an add-star/remove-star response carries errors or no result."""

    def __init__(self, errors: tuple[str, ...] | None):
        self.errors = errors
        detail = " ".join(errors) if errors else "no starrable in response"
        super().__init__(f"Star mutation failed: {detail}")
