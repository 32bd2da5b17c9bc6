"""PR description and comment formatting with Jira references."""

from __future__ import annotations

from difflib import SequenceMatcher
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jira_lint.jira_client import IssueDetails

HIDDEN_MARKER = "<!--jira-lint-hidden-marker-->"

# Below this ratio the PR title is considered unrelated to the ticket
TITLE_SIMILARITY_THRESHOLD = 0.4


def should_update_pr_description(body: str | None) -> bool:
    """Check whether the PR body still lacks the generated Jira block."""
    return isinstance(body, str) and HIDDEN_MARKER not in body


def build_pr_description(body: str | None, details: IssueDetails) -> str:
    """Prepend the Jira details block to a PR body.

    The author's body is kept verbatim after the horizontal rule. The
    hidden marker lets later runs detect that the block is already there.

    Args:
        body: Current PR description (None is treated as empty)
        details: Ticket fetched from Jira

    Returns:
        New PR description markdown
    """
    display_key = details.key.upper()
    lines = [
        "<details open>",
        f'  <summary><a href="{details.url}" title="{display_key}" '
        f'target="_blank">{display_key}</a></summary>',
        "  <br />",
        "  <table>",
        "    <tr>",
        "      <th>Summary</th>",
        f"      <td>{details.summary}</td>",
        "    </tr>",
        "    <tr>",
        "      <th>Type</th>",
        "      <td>",
        f'        <img alt="{details.type.name}" src="{details.type.icon}" />',
        f"        {details.type.name}",
        "      </td>",
        "    </tr>",
        "  </table>",
        "</details>",
        "<!--",
        "  do not remove this marker as it will break jira-lint's functionality.",
        f"  {HIDDEN_MARKER}",
        "-->",
        "",
        "---",
        "",
    ]
    return "\n".join(lines) + (body or "")


NO_ID_EXAMPLES = {
    "branch": [
        "feature/shiny-new-feature--mojo-10",
        "chore/changelogUpdate_mojo-123",
        "bugfix/fix-some-strange-bug_GAL-2345",
    ],
    "title": [
        "MOJO-10 Add shiny new feature",
        "[MOJO-123] Update changelog",
        "Fix some strange bug (GAL-2345)",
    ],
}


def format_no_id_comment(text: str, source: str = "branch") -> str:
    """Comment posted when no issue key is found.

    Args:
        text: The branch name or PR title that was searched
        source: ``"branch"`` or ``"title"``
    """
    label = "PR title" if source == "title" else "branch name"
    samples = [f"    <li><code>{sample}</code></li>" for sample in NO_ID_EXAMPLES[source]]
    return "\n".join(
        [
            "<p>",
            f"  A JIRA Issue ID is missing from your {label}! 🦄",
            "  <br />",
            f"  Your {label}: <code>{text}</code>",
            "</p>",
            "<p>",
            "  If this is your first time contributing to this repository, welcome!",
            "</p>",
            "<hr />",
            "<p>",
            "  Please refer to "
            '<a href="https://github.com/cleartax/jira-lint">jira-lint</a> '
            "to get started.",
            "  <br />",
            f"  Without the JIRA Issue ID in your {label} you would lose out "
            "on automatic updates to JIRA via SMART commits.",
            "</p>",
            "<p>",
            f"  Valid sample {label}s:",
            "  <ul>",
            *samples,
            "  </ul>",
            "</p>",
        ]
    )


def title_similarity(issue_title: str, pr_title: str) -> float:
    """Return a 0..1 similarity ratio between two titles, ignoring case."""
    return SequenceMatcher(None, issue_title.lower(), pr_title.lower()).ratio()


def format_title_comment(issue_title: str, pr_title: str) -> str | None:
    """Build a comment when the PR title drifts from the Jira summary.

    Returns:
        Comment markdown, or None if the titles are similar enough
    """
    score = title_similarity(issue_title, pr_title)
    if score >= TITLE_SIMILARITY_THRESHOLD:
        return None

    return (
        f"Knock Knock! 🔍\n\n"
        f"Just thought I'd let you know that your <em>PR title</em> and "
        f"<em>story title</em> look **quite different** "
        f"({round(score * 100)}% similar). "
        f"Are you sure they are related?\n\n"
        f"- **Story title:** {issue_title}\n"
        f"- **PR title:** {pr_title}\n\n"
        f"Check out this [guide](https://chris.beams.io/posts/git-commit/) "
        f"to learn more about writing good titles."
    )
