"""Action inputs resolved once at startup."""

from __future__ import annotations

from dataclasses import dataclass

import keyring

from jira_lint.jira_client import StoredCredentials, load_credentials


class ConfigError(Exception):
    """Raised when a required input is missing."""


@dataclass(frozen=True)
class ActionInputs:
    jira_token: str
    jira_base_url: str
    github_token: str
    skip_branches: str = ""
    jira_project_key: str = ""
    custom_issue_number_regexp: str = ""
    jira_email: str | None = None
    use_title: bool = False

    @property
    def use_custom_regexp(self) -> bool:
        """Custom numbering applies only when both inputs are given."""
        return bool(self.custom_issue_number_regexp and self.jira_project_key)


def load_inputs(
    jira_token: str | None,
    jira_base_url: str | None,
    github_token: str | None,
    skip_branches: str | None = None,
    jira_project_key: str | None = None,
    custom_issue_number_regexp: str | None = None,
    jira_email: str | None = None,
    use_title: bool = False,
    use_keyring: bool = True,
) -> ActionInputs:
    """Validate raw inputs and build ActionInputs.

    Jira credentials missing from the environment fall back to the ones
    saved by ``jira-lint login``.

    Raises:
        ConfigError: If any required input is missing
    """
    if use_keyring and not (jira_token and jira_base_url):
        try:
            stored = load_credentials()
        except keyring.errors.KeyringError:
            # Headless CI runners have no keyring backend
            stored = StoredCredentials(server=None, email=None, token=None)
        jira_base_url = jira_base_url or stored.server
        jira_token = jira_token or stored.token
        jira_email = jira_email or stored.email

    missing = [
        name
        for name, value in [
            ("jira-token", jira_token),
            ("jira-base-url", jira_base_url),
            ("github-token", github_token),
        ]
        if not value
    ]
    if missing:
        raise ConfigError(f"Input required and not supplied: {', '.join(missing)}")

    return ActionInputs(
        jira_token=jira_token,
        jira_base_url=jira_base_url.rstrip("/"),
        github_token=github_token,
        skip_branches=skip_branches or "",
        jira_project_key=jira_project_key or "",
        custom_issue_number_regexp=custom_issue_number_regexp or "",
        jira_email=jira_email or None,
        use_title=use_title,
    )
