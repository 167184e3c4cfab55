"""
gh_api.py
Thin wrappers over the GitHub GraphQL endpoint and the gists REST API.
"""

from typing import Any, Dict, Optional

import requests

GITHUB_API = "https://api.github.com"
GRAPHQL_URL = f"{GITHUB_API}/graphql"
DEFAULT_TIMEOUT = 30

SESSION = requests.Session()
SESSION.headers.update({
    "Accept": "application/vnd.github.v3+json",
    "User-Agent": "commit-clock-gist",
})


class GitHubQueryError(RuntimeError):
    pass


def _auth_headers(token: Optional[str]) -> dict:
    return {"Authorization": f"token {token}"} if token else {}


def graphql_query(document: Dict[str, Any], token: Optional[str] = None,
                  timeout: float = DEFAULT_TIMEOUT) -> Dict[str, Any]:
    """
    POST a {query, variables} document and return the decoded JSON body.

    A 401 body is returned untouched so callers can inspect its `message`
    ("Bad credentials"). Transport errors, other HTTP errors, non-JSON bodies
    and payloads with `errors` but no `data` raise GitHubQueryError.
    """
    try:
        r = SESSION.post(GRAPHQL_URL, json=document, headers=_auth_headers(token), timeout=timeout)
    except requests.RequestException as e:
        raise GitHubQueryError(f"request to {GRAPHQL_URL} failed: {e}") from e
    try:
        payload = r.json()
    except ValueError as e:
        raise GitHubQueryError(f"GitHub API returned non-JSON body (HTTP {r.status_code})") from e
    if r.status_code == 401 and isinstance(payload, dict):
        return payload
    if r.status_code >= 400:
        raise GitHubQueryError(f"GitHub API error {r.status_code}: {r.text}")
    if not isinstance(payload, dict):
        raise GitHubQueryError(f"unexpected GraphQL payload: {payload!r}")
    if payload.get("errors") and payload.get("data") is None:
        messages = "; ".join(str(err.get("message", err)) for err in payload["errors"])
        raise GitHubQueryError(f"GraphQL error: {messages}")
    return payload


def get_gist(gist_id: str, token: Optional[str] = None, timeout: float = DEFAULT_TIMEOUT) -> dict:
    r = SESSION.get(f"{GITHUB_API}/gists/{gist_id}", headers=_auth_headers(token), timeout=timeout)
    r.raise_for_status()
    return r.json()


def update_gist(gist_id: str, files: Dict[str, dict], token: Optional[str] = None,
                timeout: float = DEFAULT_TIMEOUT) -> dict:
    r = SESSION.patch(f"{GITHUB_API}/gists/{gist_id}", json={"files": files},
                      headers=_auth_headers(token), timeout=timeout)
    r.raise_for_status()
    return r.json()


class GistStore:
    """Document store backed by one account's gists."""

    def __init__(self, token: Optional[str], timeout: float = DEFAULT_TIMEOUT):
        self.token = token
        self.timeout = timeout

    def get(self, gist_id: str) -> dict:
        return get_gist(gist_id, token=self.token, timeout=self.timeout)

    def update(self, gist_id: str, files: Dict[str, dict]) -> dict:
        return update_gist(gist_id, files, token=self.token, timeout=self.timeout)
