from __future__ import annotations
from issue_browser.domain.entities import FetchPath, StarDirection

# ---------------------------------------------------------------------------
# Protocol parameters
# ---------------------------------------------------------------------------
# Passed through to the server as variables. The core never computes them.

ISSUES_PAGE_SIZE    = 5
REACTIONS_PER_ISSUE = 3

GET_ORGANIZATION = """
query GetOrganization($login: String!) {
  organization(login: $login) {
    name
    url
  }
}
"""

GET_REPOSITORY_OF_ORGANIZATION = """
query GetRepositoryOfOrganization($organization: String!, $repository: String!) {
  organization(login: $organization) {
    name
    url
    repository(name: $repository) {
      name
      url
    }
  }
}
"""

GET_ISSUES_OF_REPOSITORY = """
query GetIssuesOfRepository(
  $organization: String!,
  $repository: String!,
  $endCursor: String,
  $first: Int!,
  $lastReactions: Int!
) {
  organization(login: $organization) {
    name
    url
    repository(name: $repository) {
      id
      name
      url
      stargazers {
        totalCount
      }
      viewerHasStarred
      issues(first: $first, after: $endCursor, states: [OPEN]) {
        edges {
          node {
            id
            title
            url
            reactions(last: $lastReactions) {
              edges {
                node {
                  id
                  content
                }
              }
            }
          }
        }
        totalCount
        pageInfo {
          endCursor
          hasNextPage
        }
      }
    }
  }
}
"""

ADD_STAR = """
mutation AddStar($repositoryId: ID!) {
  addStar(input: {starrableId: $repositoryId}) {
    starrable {
      viewerHasStarred
    }
  }
}
"""

REMOVE_STAR = """
mutation RemoveStar($repositoryId: ID!) {
  removeStar(input: {starrableId: $repositoryId}) {
    starrable {
      viewerHasStarred
    }
  }
}
"""


def organization_variables(login: str) -> dict:
    return {"login": login}


def repository_of_organization_variables(login: str, name: str) -> dict:
    return {"organization": login, "repository": name}


def issues_variables(path: FetchPath, end_cursor: str | None = None) -> dict:
    """
    Variables for one paginate-issues request.
    endCursor is sent as null for the first page.
    """
    return {
        "organization":  path.organization,
        "repository":    path.repository,
        "endCursor":     end_cursor,
        "first":         ISSUES_PAGE_SIZE,
        "lastReactions": REACTIONS_PER_ISSUE,
    }


def star_variables(repository_id: str) -> dict:
    return {"repositoryId": repository_id}


def star_mutation_for(direction: StarDirection) -> tuple[str, str]:
    """Return (mutation document, root field of its payload)."""
    if direction is StarDirection.UNSTAR:
        return REMOVE_STAR, "removeStar"
    return ADD_STAR, "addStar"
