"""jira-lint - link GitHub pull requests to Jira issues."""
