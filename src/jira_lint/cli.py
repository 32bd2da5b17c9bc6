"""Command-line interface for jira-lint."""

import click

from jira_lint.action import EXIT_FAILURE, run_action
from jira_lint.branch_utils import PatternError, find_issue_key, should_skip_branch
from jira_lint.config import ActionInputs, ConfigError, load_inputs
from jira_lint.github_client import GitHubClient, GitHubError, load_event
from jira_lint.jira_client import (
    JiraClient,
    JiraClientError,
    clear_credentials,
    store_credentials,
)


def _envvars(name: str) -> list[str]:
    """Plain and GitHub Actions (INPUT_*) environment names for an input."""
    return [name.upper().replace("-", "_"), f"INPUT_{name.upper()}"]


def _fail(message: str) -> None:
    click.secho(f"Error: {message}", fg="red", err=True)
    # Surfaces as an annotation in the GitHub Actions run summary
    click.echo(f"::error::{message}", err=True)
    raise SystemExit(EXIT_FAILURE)


@click.group()
@click.version_option(package_name="jira-lint")
def main() -> None:
    """jira-lint - link pull requests to Jira issues."""


@main.command()
@click.option("--jira-token", envvar=_envvars("jira-token"), help="Jira API token")
@click.option("--jira-base-url", envvar=_envvars("jira-base-url"), help="Jira server URL")
@click.option("--jira-email", envvar=_envvars("jira-email"), help="Jira account email (Cloud)")
@click.option("--github-token", envvar=_envvars("github-token"), help="GitHub token")
@click.option(
    "--skip-branches",
    envvar=_envvars("skip-branches"),
    default="",
    help="Regular expression of branches to skip",
)
@click.option("--jira-project-key", envvar=_envvars("jira-project-key"), default="")
@click.option(
    "--custom-issue-number-regexp",
    envvar=_envvars("custom-issue-number-regexp"),
    default="",
    help="Regular expression capturing the ticket number (needs --jira-project-key)",
)
@click.option(
    "--use-title",
    is_flag=True,
    envvar=_envvars("use-title"),
    help="Read the issue key from the PR title instead of the branch",
)
@click.option("--event-path", envvar="GITHUB_EVENT_PATH", help="Webhook payload file")
@click.option("--event-name", envvar="GITHUB_EVENT_NAME", default="pull_request")
def run(
    jira_token: str | None,
    jira_base_url: str | None,
    jira_email: str | None,
    github_token: str | None,
    skip_branches: str,
    jira_project_key: str,
    custom_issue_number_regexp: str,
    use_title: bool,
    event_path: str | None,
    event_name: str,
) -> None:
    """Inject Jira issue details into the pull request description.

    Meant to run as a GitHub Actions step on pull_request events.
    Exits 0 when the branch is skipped or the PR was updated, 1 when
    the issue key is missing or anything fails.
    """
    try:
        inputs = load_inputs(
            jira_token=jira_token,
            jira_base_url=jira_base_url,
            github_token=github_token,
            skip_branches=skip_branches,
            jira_project_key=jira_project_key,
            custom_issue_number_regexp=custom_issue_number_regexp,
            jira_email=jira_email,
            use_title=use_title,
        )
        event = load_event(event_path, event_name)
        if not event.is_pull_request:
            click.secho(f"Event '{event.event_name}' is not a pull request, skipping.", fg="yellow")
            raise SystemExit(0)

        jira = JiraClient(inputs.jira_base_url, inputs.jira_token, email=inputs.jira_email)
        github = GitHubClient(inputs.github_token)
        exit_code = run_action(inputs, event, jira, github)
    except (ConfigError, PatternError, JiraClientError, GitHubError) as e:
        _fail(str(e))

    raise SystemExit(exit_code)


@main.command()
@click.argument("branch")
@click.option("--skip-branches", default="", help="Regular expression of branches to skip")
@click.option("--jira-project-key", default="")
@click.option("--custom-issue-number-regexp", default="")
def check(
    branch: str,
    skip_branches: str,
    jira_project_key: str,
    custom_issue_number_regexp: str,
) -> None:
    """Show how a branch name would be linted, without calling any API."""
    inputs = ActionInputs(
        jira_token="",
        jira_base_url="",
        github_token="",
        skip_branches=skip_branches,
        jira_project_key=jira_project_key,
        custom_issue_number_regexp=custom_issue_number_regexp,
    )
    try:
        if should_skip_branch(branch, inputs.skip_branches):
            click.secho(f"Branch '{branch}' would be skipped", fg="yellow")
            return
        issue_key = find_issue_key(branch, inputs)
    except PatternError as e:
        _fail(str(e))

    if issue_key:
        click.secho(f"Detected ticket: {issue_key}", fg="green")
    else:
        click.secho(f"No ticket ID detected in branch '{branch}'", fg="red", err=True)
        raise SystemExit(EXIT_FAILURE)


@main.command()
def login() -> None:
    """Validate Jira credentials and store them in the system keyring."""
    click.echo("Jira Authentication Setup")
    click.echo("=" * 40)
    click.echo()

    server = click.prompt(
        "Jira server URL",
        default="https://yourcompany.atlassian.net",
    )
    email = click.prompt("Email address (leave empty for a personal access token)", default="")
    token = click.prompt("API token", hide_input=True)

    click.echo()
    click.echo("Validating credentials...")

    try:
        store_credentials(server, token, email=email or None)
    except JiraClientError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(EXIT_FAILURE) from None

    click.secho("Successfully authenticated!", fg="green")
    click.echo(f"Credentials stored in system keyring for {server.rstrip('/')}")


@main.command()
def logout() -> None:
    """Remove stored Jira credentials."""
    clear_credentials()
    click.secho("Credentials removed from keyring.", fg="yellow")


if __name__ == "__main__":
    main()
