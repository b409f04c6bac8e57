"""GitHub REST access: HTTP client, records, and listers."""

from gh_inbox.github.client import GitHubClient
from gh_inbox.github.listing import (
    ALL_REPOS,
    list_assigned_issues,
    list_authored_pull_requests,
    resolve_repo_selection,
)
from gh_inbox.github.models import Issue, Label, PullRequest, RepoPullRequests

__all__ = [
    "ALL_REPOS",
    "GitHubClient",
    "Issue",
    "Label",
    "PullRequest",
    "RepoPullRequests",
    "list_assigned_issues",
    "list_authored_pull_requests",
    "resolve_repo_selection",
]
