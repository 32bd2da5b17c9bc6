"""Issue key extraction and branch skip rules."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from jira_lint.config import ActionInputs

# Match Jira issue keys: PROJECT-NUMBER
DEFAULT_KEY_PATTERN = r"([A-Z0-9]{1,10})-(\d+)"

BOT_BRANCH_PATTERNS = (
    re.compile(r"^dependabot"),
    re.compile(r"^all-contributors"),
)

DEFAULT_BRANCH_PATTERNS = (
    re.compile(r"^master$"),
    re.compile(r"^production$"),
    re.compile(r"^gh-pages$"),
)


class PatternError(Exception):
    """Raised when a user-supplied regular expression does not compile."""


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a user-supplied regular expression.

    Raises:
        PatternError: If the expression is malformed
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError(f"Invalid regular expression '{pattern}': {e}") from e


def extract_keys(text: str, pattern: str = DEFAULT_KEY_PATTERN) -> list[str]:
    """Extract every issue key from a branch name or title.

    The input is uppercased before matching, so ``fix/login-es-43``
    yields ``ES-43``.

    Args:
        text: Branch name or PR title
        pattern: Regular expression to apply

    Returns:
        All whole matches in order of appearance (may be empty)
    """
    regex = compile_pattern(pattern)
    return [match.group(0) for match in regex.finditer(text.upper())]


def extract_key(text: str, pattern: str = DEFAULT_KEY_PATTERN) -> str | None:
    """Return the first issue key found in ``text`` or None."""
    keys = extract_keys(text, pattern)
    return keys[0] if keys else None


def extract_last_key(text: str, pattern: str = DEFAULT_KEY_PATTERN) -> str | None:
    """Return the last issue key found in ``text`` or None.

    Branch names usually end with the ticket, e.g.
    ``feature/MOJO-1-then-ES-43`` resolves to ``ES-43``.
    """
    keys = extract_keys(text, pattern)
    return keys[-1] if keys else None


def extract_key_with_project_prefix(
    text: str,
    number_pattern: str,
    project_key: str,
) -> str | None:
    """Build an issue key from a bare ticket number.

    Only the first match of ``number_pattern`` is used.

    Args:
        text: Branch name or PR title
        number_pattern: Regular expression capturing the ticket number
        project_key: Jira project key to prefix (e.g., PRJ)

    Returns:
        Issue key like ``PRJ-18`` or None if the number is not found
    """
    number = extract_key(text, number_pattern)
    return f"{project_key}-{number}" if number else None


def find_issue_key(text: str, inputs: ActionInputs) -> str | None:
    """Resolve the issue key for ``text`` using the configured policy."""
    if inputs.use_custom_regexp:
        return extract_key_with_project_prefix(
            text,
            inputs.custom_issue_number_regexp,
            inputs.jira_project_key,
        )
    return extract_last_key(text)


def should_skip_branch(branch: str, custom_pattern: str | None = None) -> bool:
    """Decide whether linting should be skipped for a branch.

    Bot branches and default branches are always skipped. A non-empty
    ``custom_pattern`` skips any branch it matches anywhere.

    Raises:
        PatternError: If ``custom_pattern`` is not a valid expression
    """
    if any(pattern.search(branch) for pattern in BOT_BRANCH_PATTERNS):
        click.echo("You look like a bot, so we're letting you off the hook!")
        return True

    if any(pattern.search(branch) for pattern in DEFAULT_BRANCH_PATTERNS):
        click.echo(f"Ignoring check for default branch {branch}")
        return True

    if custom_pattern and compile_pattern(custom_pattern).search(branch):
        click.echo(
            f"Branch '{branch}' ignored as it matches the ignore pattern "
            f"'{custom_pattern}' provided in skip-branches"
        )
        return True

    return False
