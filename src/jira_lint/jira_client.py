"""Jira API client with keyring-based credential storage."""

from __future__ import annotations

import contextlib
from dataclasses import dataclass

import keyring
from jira import JIRA
from jira.exceptions import JIRAError

SERVICE_NAME = "jira-lint"
KEYRING_SERVER_KEY = "jira_server"
KEYRING_EMAIL_KEY = "jira_email"
KEYRING_TOKEN_KEY = "jira_token"


class JiraClientError(Exception):
    """Raised when a Jira request fails."""


@dataclass(frozen=True)
class IssueType:
    name: str
    icon: str


@dataclass(frozen=True)
class IssueDetails:
    key: str
    url: str
    summary: str
    type: IssueType


@dataclass(frozen=True)
class StoredCredentials:
    server: str | None
    email: str | None
    token: str | None


def load_credentials() -> StoredCredentials:
    """Load Jira credentials saved by ``jira-lint login``."""
    return StoredCredentials(
        server=keyring.get_password(SERVICE_NAME, KEYRING_SERVER_KEY),
        email=keyring.get_password(SERVICE_NAME, KEYRING_EMAIL_KEY),
        token=keyring.get_password(SERVICE_NAME, KEYRING_TOKEN_KEY),
    )


def store_credentials(server: str, token: str, email: str | None = None) -> None:
    """Validate credentials against Jira and store them in the keyring.

    Raises:
        JiraClientError: If the credentials are rejected
    """
    server = server.rstrip("/")
    JiraClient(server, token, email=email).verify()

    keyring.set_password(SERVICE_NAME, KEYRING_SERVER_KEY, server)
    keyring.set_password(SERVICE_NAME, KEYRING_TOKEN_KEY, token)
    if email:
        keyring.set_password(SERVICE_NAME, KEYRING_EMAIL_KEY, email)
    else:
        with contextlib.suppress(keyring.errors.PasswordDeleteError):
            keyring.delete_password(SERVICE_NAME, KEYRING_EMAIL_KEY)


def clear_credentials() -> None:
    """Remove stored credentials from the keyring."""
    for key in [KEYRING_SERVER_KEY, KEYRING_EMAIL_KEY, KEYRING_TOKEN_KEY]:
        with contextlib.suppress(keyring.errors.PasswordDeleteError):
            keyring.delete_password(SERVICE_NAME, key)


class JiraClient:
    """Thin wrapper over the ``jira`` library returning plain values."""

    def __init__(self, server: str, token: str, email: str | None = None) -> None:
        self._server = server.rstrip("/")
        self._token = token
        self._email = email
        self._client: JIRA | None = None

    @property
    def server_url(self) -> str:
        return self._server

    def _get_client(self) -> JIRA:
        """Get or create the authenticated Jira client."""
        if self._client is None:
            try:
                if self._email:
                    # Atlassian Cloud: email + API token
                    self._client = JIRA(
                        server=self._server,
                        basic_auth=(self._email, self._token),
                    )
                else:
                    # Server / Data Center personal access token
                    self._client = JIRA(server=self._server, token_auth=self._token)
            except JIRAError as e:
                raise JiraClientError(f"Authentication failed: {e.text}") from e
            except Exception as e:
                raise JiraClientError(f"Connection failed: {e}") from e
        return self._client

    def verify(self) -> None:
        """Check the credentials by fetching the current user.

        Raises:
            JiraClientError: If the API call fails
        """
        try:
            self._get_client().myself()
        except JIRAError as e:
            raise JiraClientError(f"Authentication failed: {e.text}") from e
        except JiraClientError:
            raise
        except Exception as e:
            raise JiraClientError(f"Connection failed: {e}") from e

    def get_ticket_details(self, key: str) -> IssueDetails:
        """Fetch issue details from Jira.

        Args:
            key: Issue key (e.g., PROJ-123)

        Returns:
            IssueDetails with key, browse URL, summary and issue type

        Raises:
            JiraClientError: If the issue cannot be fetched
        """
        client = self._get_client()
        try:
            issue = client.issue(key, fields="summary,issuetype")
        except JIRAError as e:
            raise JiraClientError(f"Failed to fetch issue {key}: {e.text}") from e
        except Exception as e:
            raise JiraClientError(f"Connection failed while fetching {key}: {e}") from e

        issue_type = issue.fields.issuetype
        return IssueDetails(
            key=issue.key,
            url=f"{self._server}/browse/{issue.key}",
            summary=issue.fields.summary,
            type=IssueType(
                name=issue_type.name,
                icon=getattr(issue_type, "iconUrl", "") or "",
            ),
        )
