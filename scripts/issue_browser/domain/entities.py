from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .errors import MalformedFetchPathError


@dataclass(frozen=True)
class FetchPath:
    """
    The user-supplied "organization/repository" pair.

    Parsing is the only place a path string becomes a request target, so a
    malformed path is rejected here, before anything goes over the wire.
    """
    organization: str
    repository:   str

    @classmethod
    def parse(cls, raw: str) -> FetchPath:
        text = (raw or "").strip().rstrip("/")
        parts = text.split("/")
        if len(parts) != 2 or not all(p.strip() for p in parts):
            raise MalformedFetchPathError(raw)
        return cls(organization=parts[0].strip(), repository=parts[1].strip())

    def __str__(self) -> str:
        return f"{self.organization}/{self.repository}"


@dataclass(frozen=True)
class Organization:
    name: str | None
    url:  str | None


@dataclass(frozen=True)
class RepositorySummary:
    """Name and url only, as returned by the repository-of-organization lookup."""
    name: str
    url:  str


@dataclass(frozen=True)
class Repository:
    """
    The repository being browsed.

    `id` is GitHub's node id and is what the star mutations target.
    `stargazers_count` and `viewer_has_starred` are the only fields the
    reconciler is allowed to touch.
    """
    id:                 str
    name:               str
    url:                str
    stargazers_count:   int
    viewer_has_starred: bool


@dataclass(frozen=True)
class Reaction:
    id:      str
    content: str


@dataclass(frozen=True)
class Issue:
    id:        str
    title:     str
    url:       str
    reactions: tuple[Reaction, ...] = ()


@dataclass(frozen=True)
class PageInfo:
    end_cursor:    str | None = None
    has_next_page: bool       = False


@dataclass(frozen=True)
class IssuesPage:
    """One page of paginate-issues data, already translated out of GitHub's shape."""
    organization: Organization
    repository:   Repository | None
    issues:       tuple[Issue, ...] = ()
    total_count:  int               = 0
    page_info:    PageInfo          = field(default_factory=PageInfo)


@dataclass(frozen=True)
class IssuesPageResponse:
    """
    What the transport hands the merge engine: parsed data (if any) plus the
    top-level GraphQL error messages (if any). Either may be absent.
    """
    page:   IssuesPage | None
    errors: tuple[str, ...] | None = None


@dataclass(frozen=True)
class StarMutationResult:
    viewer_has_starred: bool


class StarDirection(Enum):
    STAR   = "star"
    UNSTAR = "unstar"

    @property
    def delta(self) -> int:
        return 1 if self is StarDirection.STAR else -1

    @classmethod
    def for_state(cls, viewer_has_starred: bool) -> StarDirection:
        """A toggle: unstar what is starred, star everything else."""
        return cls.UNSTAR if viewer_has_starred else cls.STAR


@dataclass(frozen=True)
class PageRequest:
    """The cursor to send next. No cursor means the first page."""
    end_cursor: str | None = None

    @property
    def is_first_page(self) -> bool:
        return self.end_cursor is None


@dataclass(frozen=True)
class Snapshot:
    """
    The merged, caller-visible view of one FetchPath session.

    frozen=True: every merge or reconciliation produces a new Snapshot,
    the previous one is never modified. Renderers can hold on to a snapshot
    without it changing underneath them.
    """
    organization: Organization | None   = None
    repository:   Repository | None     = None
    issues:       tuple[Issue, ...]     = ()
    page_info:    PageInfo              = field(default_factory=PageInfo)
    total_count:  int                   = 0
    errors:       tuple[str, ...] | None = None

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def issue_ids(self) -> list[str]:
        return [issue.id for issue in self.issues]
