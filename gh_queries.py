"""
gh_queries.py
GraphQL documents for the GitHub v4 API.

Every user-supplied value travels in `variables`, never spliced into the
query text, so names with quotes or control characters cannot change the
document.
"""

from typing import Any, Dict

PAGE_SIZE = 100

IDENTITY_QUERY = """
query {
  viewer {
    login
    id
  }
}
"""

CONTRIBUTED_REPOS_QUERY = """
query($login: String!, $pageSize: Int!) {
  user(login: $login) {
    repositoriesContributedTo(last: $pageSize, includeUserRepositories: true) {
      nodes {
        isFork
        name
        owner {
          login
        }
      }
    }
  }
}
"""

COMMIT_HISTORY_QUERY = """
query($owner: String!, $name: String!, $authorId: ID!, $pageSize: Int!) {
  repository(owner: $owner, name: $name) {
    defaultBranchRef {
      target {
        ... on Commit {
          history(first: $pageSize, author: { id: $authorId }) {
            edges {
              node {
                committedDate
              }
            }
          }
        }
      }
    }
  }
}
"""


def _require(name: str, value: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string")
    return value


def build_identity_query() -> Dict[str, Any]:
    return {"query": IDENTITY_QUERY, "variables": {}}


def build_contributed_repos_query(username: str, page_size: int = PAGE_SIZE) -> Dict[str, Any]:
    return {
        "query": CONTRIBUTED_REPOS_QUERY,
        "variables": {"login": _require("username", username), "pageSize": page_size},
    }


def build_commit_history_query(identity_id: str, repo_name: str, repo_owner: str,
                               page_size: int = PAGE_SIZE) -> Dict[str, Any]:
    return {
        "query": COMMIT_HISTORY_QUERY,
        "variables": {
            "owner": _require("repo_owner", repo_owner),
            "name": _require("repo_name", repo_name),
            "authorId": _require("identity_id", identity_id),
            "pageSize": page_size,
        },
    }
