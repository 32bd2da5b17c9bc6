"""GitHub pull request event parsing and API calls."""

from __future__ import annotations

import json
from dataclasses import dataclass

from github import Auth, Github, GithubException


class GitHubError(Exception):
    """Raised when the event payload is unusable or a GitHub call fails."""


@dataclass(frozen=True)
class PullRequestEvent:
    event_name: str
    owner: str
    repo: str
    number: int
    title: str
    body: str
    head_branch: str
    base_branch: str

    @property
    def is_pull_request(self) -> bool:
        return self.event_name in ("pull_request", "pull_request_target")


def parse_event(payload: dict, event_name: str = "pull_request") -> PullRequestEvent:
    """Build a PullRequestEvent from a GitHub Actions webhook payload.

    Raises:
        GitHubError: If the repository or pull request is missing
    """
    repository = payload.get("repository")
    if not repository:
        raise GitHubError("Missing 'repository' from github action context.")

    pull_request = payload.get("pull_request")
    if not pull_request:
        raise GitHubError(f"Event '{event_name}' carries no pull request.")

    owner = (repository.get("owner") or {}).get("login") or (
        payload.get("organization") or {}
    ).get("login")
    if not owner:
        raise GitHubError("Unable to determine the repository owner.")

    repo = repository.get("name")
    if not repo:
        raise GitHubError("Missing 'repository.name' from github action context.")

    return PullRequestEvent(
        event_name=event_name,
        owner=owner,
        repo=repo,
        number=pull_request.get("number") or 0,
        title=pull_request.get("title") or "",
        body=pull_request.get("body") or "",
        head_branch=(pull_request.get("head") or {}).get("ref") or "",
        base_branch=(pull_request.get("base") or {}).get("ref") or "",
    )


def load_event(path: str | None, event_name: str = "pull_request") -> PullRequestEvent:
    """Read the event file GitHub Actions exposes via GITHUB_EVENT_PATH.

    Raises:
        GitHubError: If the file is missing or not valid JSON
    """
    if not path:
        raise GitHubError("GITHUB_EVENT_PATH is not set; not running in GitHub Actions?")

    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except OSError as e:
        raise GitHubError(f"Unable to read GitHub event file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise GitHubError(f"GitHub event file {path} is not valid JSON: {e}") from e

    return parse_event(payload, event_name)


class GitHubClient:
    """Pull request updates through the GitHub REST API."""

    def __init__(self, token: str) -> None:
        self._github = Github(auth=Auth.Token(token))

    def _get_pull(self, owner: str, repo: str, number: int):
        return self._github.get_repo(f"{owner}/{repo}").get_pull(number)

    def update_pull_request(self, owner: str, repo: str, number: int, body: str) -> None:
        """Replace the pull request description.

        Raises:
            GitHubError: If the API call fails
        """
        try:
            self._get_pull(owner, repo, number).edit(body=body)
        except GithubException as e:
            raise GitHubError(
                f"Failed to update PR #{number} in {owner}/{repo}: {e.status} {e.data}"
            ) from e

    def add_comment(self, owner: str, repo: str, number: int, body: str) -> None:
        """Post a comment on the pull request conversation.

        Raises:
            GitHubError: If the API call fails
        """
        try:
            self._get_pull(owner, repo, number).create_issue_comment(body)
        except GithubException as e:
            raise GitHubError(
                f"Failed to comment on PR #{number} in {owner}/{repo}: {e.status} {e.data}"
            ) from e
