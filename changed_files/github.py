from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import requests

from changed_files import __version__
from changed_files.errors import RemoteOrderingWarning, RemoteStatusError
from changed_files.models import ChangeRecord, EventContext
from changed_files.reporting import Reporter

DEFAULT_API_URL = "https://api.github.com"


@dataclass(frozen=True)
class CompareResult:
    status_code: int
    status: str | None
    files: list[dict[str, Any]] = field(default_factory=list)


class GitHubClient:
    """Thin wrapper over the REST endpoints this tool needs."""

    def __init__(self, token: str, api_url: str = DEFAULT_API_URL, timeout: int = 30):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "User-Agent": f"changed-files/{__version__}",
            }
        )

    def compare_commits(self, owner: str, repo: str, base: str, head: str) -> CompareResult:
        # https://docs.github.com/en/rest/commits/commits#compare-two-commits
        url = f"{self.api_url}/repos/{owner}/{repo}/compare/{base}...{head}"
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise RemoteStatusError(f"Request to compare {base}...{head} failed: {exc}") from exc

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        return CompareResult(
            status_code=resp.status_code,
            status=data.get("status"),
            files=data.get("files") or [],
        )


def get_changed_files_from_github(
    context: EventContext, base: str, head: str, reporter: Reporter
) -> list[ChangeRecord]:
    result = context.client.compare_commits(context.owner, context.repo, base, head)

    if result.status_code != 200:
        reporter.fail(
            f"The GitHub API for comparing the base and head commits for this {context.event_name} event "
            f"returned {result.status_code}, expected 200. "
            "Please submit an issue on this action's GitHub repo."
        )

    if result.status != "ahead":
        warning = RemoteOrderingWarning(
            f"The head commit for this {context.event_name} event is not ahead of the base commit. "
            "Please submit an issue on this action's GitHub repo."
        )
        reporter.warning(str(warning))

    return [ChangeRecord(name=f["filename"], status=f["status"]) for f in result.files]
