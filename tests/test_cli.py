"""Tests for jira_lint.cli. Commands run through click's CliRunner."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from jira_lint.cli import main
from jira_lint.jira_client import JiraClientError


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def event_file(tmp_path):
    path = tmp_path / "event.json"
    path.write_text(
        json.dumps(
            {
                "repository": {"name": "widgets", "owner": {"login": "acme"}},
                "pull_request": {
                    "number": 7,
                    "title": "Story title or summary",
                    "body": "Some description",
                    "head": {"ref": "feature/abc-123"},
                    "base": {"ref": "main"},
                },
            }
        )
    )
    return str(path)


def _run_args(event_file, *extra):
    return [
        "run",
        "--jira-token", "jira-token",
        "--jira-base-url", "https://jira.example.com/",
        "--github-token", "gh-token",
        "--event-path", event_file,
        "--event-name", "pull_request",
        *extra,
    ]


class TestCheck:
    def test_detects_ticket(self, runner):
        result = runner.invoke(main, ["check", "feature/login-es-43"])

        assert result.exit_code == 0
        assert "Detected ticket: ES-43" in result.output

    def test_skipped_branch(self, runner):
        result = runner.invoke(main, ["check", "dependabot/pip/requests"])

        assert result.exit_code == 0
        assert "would be skipped" in result.output

    def test_missing_ticket(self, runner):
        result = runner.invoke(main, ["check", "feature/missingKey"])

        assert result.exit_code == 1

    def test_custom_issue_number(self, runner):
        result = runner.invoke(
            main,
            ["check", "43-login", "--jira-project-key", "QQ", "--custom-issue-number-regexp", r"^\d+"],
        )

        assert "Detected ticket: QQ-43" in result.output

    def test_invalid_skip_pattern(self, runner):
        result = runner.invoke(main, ["check", "feature/x", "--skip-branches", "(oops"])

        assert result.exit_code == 1
        assert "::error::" in result.output


class TestRun:
    def test_updates_pull_request(self, runner, event_file, details):
        with patch("jira_lint.cli.JiraClient") as jira_cls, \
             patch("jira_lint.cli.GitHubClient") as github_cls:
            jira_cls.return_value.get_ticket_details.return_value = details
            result = runner.invoke(main, _run_args(event_file))

        assert result.exit_code == 0, result.output
        jira_cls.assert_called_once_with("https://jira.example.com", "jira-token", email=None)
        github_cls.assert_called_once_with("gh-token")
        github_cls.return_value.update_pull_request.assert_called_once()

    def test_missing_config(self, runner, event_file):
        result = runner.invoke(main, ["run", "--event-path", event_file], env={
            "JIRA_TOKEN": None, "JIRA_BASE_URL": None, "GITHUB_TOKEN": None,
            "INPUT_JIRA-TOKEN": None, "INPUT_JIRA-BASE-URL": None, "INPUT_GITHUB-TOKEN": None,
        })

        assert result.exit_code == 1
        assert "Input required and not supplied" in result.output

    def test_missing_config_without_keyring_backend(self, runner, event_file, keyring_unavailable):
        result = runner.invoke(main, ["run", "--github-token", "g", "--event-path", event_file], env={
            "JIRA_TOKEN": "", "JIRA_BASE_URL": "",
            "INPUT_JIRA-TOKEN": None, "INPUT_JIRA-BASE-URL": None,
        })

        assert result.exit_code == 1
        assert "::error::Input required and not supplied: jira-token, jira-base-url" in result.output

    def test_inputs_from_actions_environment(self, runner, event_file, details):
        env = {
            "INPUT_JIRA-TOKEN": "from-env",
            "INPUT_JIRA-BASE-URL": "https://env.example.com",
            "INPUT_GITHUB-TOKEN": "gh-env",
            "GITHUB_EVENT_PATH": event_file,
            "GITHUB_EVENT_NAME": "pull_request",
        }
        with patch("jira_lint.cli.JiraClient") as jira_cls, \
             patch("jira_lint.cli.GitHubClient"):
            jira_cls.return_value.get_ticket_details.return_value = details
            result = runner.invoke(main, ["run"], env=env)

        assert result.exit_code == 0, result.output
        jira_cls.assert_called_once_with("https://env.example.com", "from-env", email=None)

    def test_jira_failure_exits_non_zero(self, runner, event_file):
        with patch("jira_lint.cli.JiraClient") as jira_cls, \
             patch("jira_lint.cli.GitHubClient") as github_cls:
            jira_cls.return_value.get_ticket_details.side_effect = JiraClientError("Issue gone")
            result = runner.invoke(main, _run_args(event_file))

        assert result.exit_code == 1
        assert "::error::Issue gone" in result.output
        github_cls.return_value.update_pull_request.assert_not_called()

    def test_skipped_branch_exits_zero(self, runner, tmp_path):
        path = tmp_path / "event.json"
        path.write_text(json.dumps({
            "repository": {"name": "widgets", "owner": {"login": "acme"}},
            "pull_request": {"number": 1, "head": {"ref": "dependabot/npm/x"}, "base": {"ref": "main"}},
        }))
        with patch("jira_lint.cli.JiraClient") as jira_cls, \
             patch("jira_lint.cli.GitHubClient"):
            result = runner.invoke(main, _run_args(str(path)))

        assert result.exit_code == 0
        jira_cls.return_value.get_ticket_details.assert_not_called()

    def test_non_pull_request_event(self, runner, event_file):
        args = _run_args(event_file)
        args[args.index("--event-name") + 1] = "pull_request_review"
        with patch("jira_lint.cli.JiraClient") as jira_cls:
            result = runner.invoke(main, args)

        assert result.exit_code == 0
        jira_cls.assert_not_called()


class TestLogout:
    def test_clears_keyring(self, runner):
        with patch("jira_lint.cli.clear_credentials") as clear:
            result = runner.invoke(main, ["logout"])

        assert result.exit_code == 0
        clear.assert_called_once()
