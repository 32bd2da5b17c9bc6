"""Shared test fixtures for the jira_lint test suite.

No fixture here talks to Jira, GitHub or the real system keyring.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from jira_lint.config import ActionInputs
from jira_lint.github_client import PullRequestEvent
from jira_lint.jira_client import IssueDetails, IssueType, StoredCredentials


@pytest.fixture(autouse=True)
def _no_keyring(monkeypatch):
    """Pretend nothing was ever stored with ``jira-lint login``."""
    monkeypatch.setattr(
        "jira_lint.config.load_credentials",
        lambda: StoredCredentials(server=None, email=None, token=None),
    )


# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def details():
    return IssueDetails(
        key="ABC-123",
        url="https://jira.example.com/browse/ABC-123",
        summary="Story title or summary",
        type=IssueType(name="feature", icon="https://jira.example.com/feature.svg"),
    )


@pytest.fixture
def inputs():
    return ActionInputs(
        jira_token="jira-token",
        jira_base_url="https://jira.example.com",
        github_token="gh-token",
    )


@pytest.fixture
def make_event():
    def _make(**kwargs):
        defaults = dict(
            event_name="pull_request",
            owner="acme",
            repo="widgets",
            number=7,
            title="Story title or summary",
            body="Some description",
            head_branch="feature/login-abc-123",
            base_branch="master",
        )
        defaults.update(kwargs)
        return PullRequestEvent(**defaults)

    return _make


@pytest.fixture
def jira(details):
    client = MagicMock()
    client.get_ticket_details.return_value = details
    return client


@pytest.fixture
def github():
    return MagicMock()


@pytest.fixture
def keyring_unavailable(monkeypatch):
    """Use the real credential lookup against a keyring with no backend, as on CI runners."""
    import keyring
    from keyring.backends import fail

    from jira_lint import jira_client

    monkeypatch.setattr("jira_lint.config.load_credentials", jira_client.load_credentials)
    previous = keyring.get_keyring()
    keyring.set_keyring(fail.Keyring())
    yield
    keyring.set_keyring(previous)
