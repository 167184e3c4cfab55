"""
fetch_commits.py
Three dependent GitHub queries: viewer identity -> contributed repositories ->
commit history of every repository (fetched concurrently).

Each stage returns either its value or an Outcome; the first Outcome ends the run.
"""

import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

from gh_queries import build_commit_history_query, build_contributed_repos_query, build_identity_query
from outcomes import (
    COMMITS_FAILED,
    INVALID_TOKEN,
    REPOS_FAILED,
    USER_INFO_FAILED,
    USER_INFO_INCOMPLETE,
    Outcome,
)

QueryFn = Callable[[Dict[str, Any]], Dict[str, Any]]


@dataclass(frozen=True)
class Identity:
    login: str
    id: str


@dataclass(frozen=True)
class RepositoryRef:
    name: str
    owner: str


def _dig(obj: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj


def is_bad_credentials(payload: Any) -> bool:
    return _dig(payload, "message") == "Bad credentials"


def _invalid_token() -> Outcome:
    print("Invalid GitHub token. Please renew the GH_TOKEN", file=sys.stderr)
    return INVALID_TOKEN


def fetch_identity(query: QueryFn) -> Union[Identity, Outcome]:
    try:
        payload = query(build_identity_query())
    except Exception as e:
        print(f"Unable to get username and id\n{e}", file=sys.stderr)
        return USER_INFO_FAILED
    login = _dig(payload, "data", "viewer", "login")
    viewer_id = _dig(payload, "data", "viewer", "id")
    if not login or not viewer_id:
        print(f"Viewer login or id missing from response: {payload!r}", file=sys.stderr)
        return USER_INFO_INCOMPLETE
    return Identity(login=login, id=viewer_id)


def parse_contributed_repos(payload: Any) -> List[RepositoryRef]:
    nodes = _dig(payload, "data", "user", "repositoriesContributedTo", "nodes") or []
    repos = []
    for node in nodes:
        if not isinstance(node, dict) or node.get("isFork"):
            continue
        name = node.get("name")
        owner = _dig(node, "owner", "login")
        if name and owner:
            repos.append(RepositoryRef(name=name, owner=owner))
    return repos


def fetch_contributed_repos(query: QueryFn, identity: Identity) -> Union[List[RepositoryRef], Outcome]:
    try:
        payload = query(build_contributed_repos_query(identity.login))
    except Exception as e:
        print(f"Unable to get the contributed repo\n{e}", file=sys.stderr)
        return REPOS_FAILED
    if is_bad_credentials(payload):
        return _invalid_token()
    if not isinstance(_dig(payload, "data", "user", "repositoriesContributedTo", "nodes"), list):
        print(f"Contributed repositories missing from response: {payload!r}", file=sys.stderr)
        return REPOS_FAILED
    return parse_contributed_repos(payload)


def is_rejected(payload: Any) -> bool:
    """A bare {"message": ...} error body (401, rate limit) instead of a GraphQL result."""
    return isinstance(payload, dict) and "data" not in payload and bool(payload.get("message"))


def _stage_failed(futures, repo: RepositoryRef, reason: Any) -> Outcome:
    print(f"Unable to get the commit info ({repo.owner}/{repo.name})\n{reason}", file=sys.stderr)
    for pending in futures:
        pending.cancel()
    return COMMITS_FAILED


def commit_dates(payload: Any) -> List[Any]:
    """committedDate of every history edge; a missing branch or history yields []."""
    edges = _dig(payload, "data", "repository", "defaultBranchRef", "target", "history", "edges") or []
    return [_dig(edge, "node", "committedDate") for edge in edges]


def fetch_commit_dates(query: QueryFn, identity: Identity, repos: List[RepositoryRef],
                       max_workers: Optional[int] = None) -> Union[List[Any], Outcome]:
    """
    Query every repository's history at once and flatten the committed dates.

    All or nothing: the first failed request cancels the requests that have
    not started yet, waits for the running ones, and discards every result.
    """
    if not repos:
        return []
    results: List[Any] = [None] * len(repos)
    with ThreadPoolExecutor(max_workers=max_workers or len(repos)) as ex:
        futures = {
            ex.submit(query, build_commit_history_query(identity.id, repo.name, repo.owner)): idx
            for idx, repo in enumerate(repos)
        }
        for fut in as_completed(futures):
            idx = futures[fut]
            try:
                payload = fut.result()
            except Exception as e:
                return _stage_failed(futures, repos[idx], e)
            if is_rejected(payload):
                return _stage_failed(futures, repos[idx], payload["message"])
            results[idx] = payload
    dates: List[Any] = []
    for payload in results:
        dates.extend(commit_dates(payload))
    return dates


def fetch_commit_timestamps(query: QueryFn, max_workers: Optional[int] = None) -> Union[List[Any], Outcome]:
    identity = fetch_identity(query)
    if isinstance(identity, Outcome):
        return identity
    print(f"Fetching contributed repositories for {identity.login}...")
    repos = fetch_contributed_repos(query, identity)
    if isinstance(repos, Outcome):
        return repos
    print(f"Fetching commit history across {len(repos)} repos (up to 100 commits per repo)...")
    return fetch_commit_dates(query, identity, repos, max_workers=max_workers)
