#!/usr/bin/env python3
"""
update_gist.py
Count the viewer's commits by time of day across the repositories they
contributed to and publish the chart to a gist. Reads env (or .env):
  GH_TOKEN  (personal access token) -- required; GH_PAT / GITHUB_TOKEN also accepted
  GIST_ID   (gist to overwrite) -- required
  TIMEZONE  (IANA name, e.g. Asia/Seoul) -- defaults to the host timezone
  GH_TIMEOUT (seconds per request) -- default 30
"""

import os
import sys
from dataclasses import dataclass
from functools import partial
from http.server import BaseHTTPRequestHandler
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

import gh_api
from commit_buckets import aggregate
from fetch_commits import fetch_commit_timestamps
from outcomes import INTERNAL_ERROR, Outcome
from publish_report import publish_report


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class Config:
    token: str
    gist_id: str
    timezone: Optional[ZoneInfo] = None
    timeout: float = gh_api.DEFAULT_TIMEOUT


def load_config(env=None) -> Config:
    if env is None:
        load_dotenv()
        env = os.environ
    token = env.get("GH_TOKEN") or env.get("GH_PAT") or env.get("GITHUB_TOKEN")
    if not token:
        raise ConfigError("GH_TOKEN is not set")
    gist_id = env.get("GIST_ID")
    if not gist_id:
        raise ConfigError("GIST_ID is not set")
    tz = None
    tz_name = env.get("TIMEZONE")
    if tz_name:
        try:
            tz = ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigError(f"unknown TIMEZONE {tz_name!r}") from e
    try:
        timeout = float(env.get("GH_TIMEOUT") or gh_api.DEFAULT_TIMEOUT)
    except ValueError as e:
        raise ConfigError(f"GH_TIMEOUT must be a number, got {env.get('GH_TIMEOUT')!r}") from e
    return Config(token=token, gist_id=gist_id, timezone=tz, timeout=timeout)


def run(config: Config, query=None, store=None) -> Outcome:
    """One full update. Always returns exactly one Outcome."""
    if query is None:
        query = partial(gh_api.graphql_query, token=config.token, timeout=config.timeout)
    if store is None:
        store = gh_api.GistStore(config.token, timeout=config.timeout)
    try:
        timestamps = fetch_commit_timestamps(query)
        if isinstance(timestamps, Outcome):
            return timestamps
        counts = aggregate(timestamps, config.timezone)
        print(f"Counted {counts.total} commits: {counts}")
        return publish_report(store, config.gist_id, counts)
    except Exception as e:
        print("Unexpected error:", repr(e), file=sys.stderr)
        return INTERNAL_ERROR


_CONFIG: Optional[Config] = None


def _config() -> Config:
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = load_config()
    return _CONFIG


class handler(BaseHTTPRequestHandler):
    """Serverless entrypoint: every GET runs one update and replies with its outcome."""

    def do_GET(self):
        try:
            outcome = run(_config())
        except ConfigError as e:
            print("Configuration error:", e, file=sys.stderr)
            outcome = INTERNAL_ERROR
        body = outcome.body.encode("utf-8")
        self.send_response(outcome.status)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)


def main():
    try:
        config = load_config()
    except ConfigError as e:
        print("Configuration error:", e, file=sys.stderr)
        sys.exit(1)
    outcome = run(config)
    print(f"{outcome.status} {outcome.body}")
    sys.exit(0 if outcome.ok else 1)


if __name__ == "__main__":
    main()
