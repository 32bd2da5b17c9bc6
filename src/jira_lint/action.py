"""Pull request lint flow run once per CI event."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from jira_lint.branch_utils import find_issue_key, should_skip_branch
from jira_lint.pr_formatter import (
    build_pr_description,
    format_no_id_comment,
    format_title_comment,
    should_update_pr_description,
)

if TYPE_CHECKING:
    from jira_lint.config import ActionInputs
    from jira_lint.github_client import GitHubClient, PullRequestEvent
    from jira_lint.jira_client import JiraClient

EXIT_OK = 0
EXIT_FAILURE = 1


def run_action(
    inputs: ActionInputs,
    event: PullRequestEvent,
    jira: JiraClient,
    github: GitHubClient,
) -> int:
    """Lint a pull request and inject the Jira details block.

    Tracker and GitHub failures are not handled here; they propagate to
    the caller, and the description is either fully rewritten or untouched.

    Returns:
        Process exit code
    """
    owner, repo, number = event.owner, event.repo, event.number

    if not event.head_branch and not event.base_branch:
        github.add_comment(
            owner, repo, number, "jira-lint is unable to determine the head and base branch"
        )
        click.secho("Error: Unable to get the head and base branch", fg="red", err=True)
        return EXIT_FAILURE

    click.echo(f"Base branch: {event.base_branch}")
    click.echo(f"Head branch: {event.head_branch}")

    if should_skip_branch(event.head_branch, inputs.skip_branches):
        return EXIT_OK

    source = "title" if inputs.use_title else "branch"
    text = event.title if inputs.use_title else event.head_branch
    issue_key = find_issue_key(text, inputs)

    if not issue_key:
        github.add_comment(owner, repo, number, format_no_id_comment(text, source))
        click.secho(f"Jira issue id is missing in your {source}, doing nothing", fg="red", err=True)
        return EXIT_FAILURE

    click.echo(f"Jira key: {issue_key}")

    details = jira.get_ticket_details(issue_key)

    if not should_update_pr_description(event.body):
        click.secho("PR description already contains the Jira details.", fg="yellow")
        return EXIT_OK

    github.update_pull_request(owner, repo, number, build_pr_description(event.body, details))
    click.secho(f"PR #{number} description updated with {details.key}.", fg="green")

    title_comment = format_title_comment(details.summary, event.title)
    if title_comment:
        click.echo("Adding comment for the PR title")
        github.add_comment(owner, repo, number, title_comment)

    return EXIT_OK
