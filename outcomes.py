"""
outcomes.py
Terminal results of one update run. Each pipeline stage either hands its
value to the next stage or returns one of these.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Outcome:
    status: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


GIST_UPDATED = Outcome(200, "Success to update the gist 🎉")
NO_COMMIT_DATA = Outcome(200, "No commit data found")
INVALID_TOKEN = Outcome(401, "Invalid GitHub token")
NO_GIST_FILES = Outcome(404, "No gist files found")
USER_INFO_FAILED = Outcome(500, "Failed to get user info")
USER_INFO_INCOMPLETE = Outcome(500, "User info incomplete")
REPOS_FAILED = Outcome(500, "Failed to get contributed repos")
COMMITS_FAILED = Outcome(500, "Failed to get commit info")
GIST_FAILED = Outcome(500, "Failed to get gist")
INTERNAL_ERROR = Outcome(500, "Internal Server Error")
