"""
main.py — Dependency Wiring (Composition Root)
------------------------------------------------
Wires the issue browser together and drives it from the command line.

It does NOT contain any merge, pagination or star logic. It just:
  1. Reads configuration from environment variables and arguments
  2. Creates the httpx client and the concrete GitHubClient
  3. Injects them into IssueBrowserService
  4. Forwards the user's intents (path, load more, toggle star)
  5. Renders the resulting snapshot

Dependency graph:
                main.py  (wires everything, renders snapshots)
                   │
                   ▼
          IssueBrowserService
             │          │
             ▼          ▼
   PaginationDriver   reconciler
        │
        ▼
      merge
                   │
                   ▼
     IGitHubGateway ← GitHubClient (httpx)
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
import argparse

import httpx

from issue_browser.application.browser_service import IssueBrowserService
from issue_browser.domain.entities import Snapshot
from issue_browser.domain.errors import IssueBrowserError
from issue_browser.infrastructure.github_client import GITHUB_API_URL, GitHubClient

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

DEFAULT_PATH = "the-road-to-learn-react/the-road-to-learn-react"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        datefmt="%H:%M:%S",
    )


def _read_env() -> tuple[str, str]:
    """
    Read the token and endpoint.
    Fails fast with a clear error if the token is missing.
    """
    token = os.environ.get("GITHUB_TOKEN")
    url   = os.environ.get("GITHUB_GRAPHQL_URL", GITHUB_API_URL)

    if not token:
        log.error("GITHUB_TOKEN environment variable is required")
        sys.exit(1)

    return token, url


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render(snapshot: Snapshot | None) -> str:
    if snapshot is None:
        return "No information yet ..."

    if snapshot.has_errors:
        return "Something went wrong: " + " ".join(snapshot.errors)

    lines = []
    if snapshot.organization is not None:
        lines.append(f"Issues from Organization: {snapshot.organization.name} ({snapshot.organization.url})")

    repository = snapshot.repository
    if repository is not None:
        label = "Unstar" if repository.viewer_has_starred else "Star"
        lines.append(f"In Repository: {repository.name} ({repository.url})")
        lines.append(f"[{label} {repository.stargazers_count}]")

    for issue in snapshot.issues:
        lines.append(f"  - {issue.title} ({issue.url})")
        for reaction in issue.reactions:
            lines.append(f"      {reaction.content}")

    lines.append(f"{len(snapshot.issues)} of {snapshot.total_count} open issues")
    if snapshot.page_info.has_next_page:
        lines.append("[More]")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Dependency wiring
# ---------------------------------------------------------------------------

async def build_and_run(token: str, url: str, args: argparse.Namespace) -> int:
    client = httpx.AsyncClient()

    try:
        github_client = GitHubClient(
            token  = token,
            client = client,   # injected — GitHubClient doesn't create this
            url    = url,
        )
        browser = IssueBrowserService(
            gateway = github_client,  # injected IGitHubGateway
        )

        if args.lookup:
            found = await browser.lookup_repository(args.path)
            if found is None:
                print(f"No organization for {args.path}")
            else:
                organization, repository = found
                print(f"{organization.name} ({organization.url})")
                print(f"  {repository.name} ({repository.url})" if repository else "  repository not found")
            return 0

        await browser.submit_path(args.path)

        pages = 1
        while browser.can_load_more() and (args.all or pages < args.pages):
            await browser.load_more()
            pages += 1

        if args.toggle_star:
            await browser.toggle_star()

        print(render(browser.get_snapshot()))
        return 0

    except IssueBrowserError as exc:
        log.error("%s", exc)
        print(render(browser.get_snapshot()))
        return 1

    finally:
        await client.aclose()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def run(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Browse the open issues of a GitHub repository"
    )
    parser.add_argument(
        "path",
        nargs   = "?",
        default = DEFAULT_PATH,
        help    = f"organization/repository (default: {DEFAULT_PATH})",
    )
    parser.add_argument(
        "--pages",
        type    = int,
        default = 1,
        help    = "Number of issue pages to load (default: 1)",
    )
    parser.add_argument("--all", action="store_true", help="Load every page")
    parser.add_argument("--toggle-star", action="store_true", help="Star or unstar the repository after loading")
    parser.add_argument("--lookup", action="store_true", help="Only look up the organization and repository")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    token, url = _read_env()

    return asyncio.run(build_and_run(token, url, args))


if __name__ == "__main__":
    sys.exit(run())
