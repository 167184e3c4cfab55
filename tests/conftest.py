import threading

import pytest

from gh_queries import COMMIT_HISTORY_QUERY, CONTRIBUTED_REPOS_QUERY, IDENTITY_QUERY


def viewer_payload(login="octocat", viewer_id="MDQ6VXNlcjE="):
    return {"data": {"viewer": {"login": login, "id": viewer_id}}}


def repos_payload(*nodes):
    return {"data": {"user": {"repositoriesContributedTo": {"nodes": list(nodes)}}}}


def repo_node(name, owner="octocat", is_fork=False):
    return {"isFork": is_fork, "name": name, "owner": {"login": owner}}


def history_payload(*dates):
    edges = [{"node": {"committedDate": d}} for d in dates]
    return {"data": {"repository": {"defaultBranchRef": {"target": {"history": {"edges": edges}}}}}}


class FakeQuery:
    """Stands in for the GraphQL endpoint; answers by which document it gets."""

    def __init__(self, identity=None, repos=None, histories=None):
        self.identity = identity if identity is not None else viewer_payload()
        self.repos = repos if repos is not None else repos_payload()
        # "owner/name" -> payload, or an exception instance to raise
        self.histories = histories or {}
        self.calls = []
        self._lock = threading.Lock()

    def _answer(self, value):
        if isinstance(value, Exception):
            raise value
        if callable(value):
            return value()
        return value

    def __call__(self, document):
        with self._lock:
            self.calls.append(document)
        query = document["query"]
        if query == IDENTITY_QUERY:
            return self._answer(self.identity)
        if query == CONTRIBUTED_REPOS_QUERY:
            return self._answer(self.repos)
        if query == COMMIT_HISTORY_QUERY:
            v = document["variables"]
            return self._answer(self.histories.get(f"{v['owner']}/{v['name']}", history_payload()))
        raise AssertionError(f"unexpected query: {query}")

    def history_calls(self):
        return [c for c in self.calls if c["query"] == COMMIT_HISTORY_QUERY]


class FakeStore:
    def __init__(self, files=None, get_error=None):
        self.gist = {"id": "abc123", "files": files if files is not None else {"clock.txt": {"filename": "clock.txt"}}}
        self.get_error = get_error
        self.gets = []
        self.updates = []

    def get(self, gist_id):
        self.gets.append(gist_id)
        if self.get_error:
            raise self.get_error
        return self.gist

    def update(self, gist_id, files):
        self.updates.append((gist_id, files))
        return self.gist


@pytest.fixture
def make_query():
    return FakeQuery


@pytest.fixture
def make_store():
    return FakeStore


@pytest.fixture
def payloads():
    class P:
        viewer = staticmethod(viewer_payload)
        repos = staticmethod(repos_payload)
        repo = staticmethod(repo_node)
        history = staticmethod(history_payload)
    return P
