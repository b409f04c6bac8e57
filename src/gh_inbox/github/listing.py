"""Issue and pull request listing.

The REST pulls endpoint cannot filter by author, so authored pull requests are
selected client-side by exact login match.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Final

from gh_inbox.config import InboxSettings, RepoRef
from gh_inbox.errors import HttpStatusError, InputValidationError, TransportError
from gh_inbox.github.client import GitHubClient
from gh_inbox.github.models import Issue, PullRequest, RepoPullRequests

logger = logging.getLogger(__name__)


class _AllRepos(Enum):
    ALL = "all"


ALL_REPOS: Final = _AllRepos.ALL

RepoSelection = RepoRef | _AllRepos


def _json_list(payload: Any, *, url: str) -> list[dict[str, Any]]:
    if not isinstance(payload, list):
        raise HttpStatusError(status_code=200, url=url, message="expected a JSON array")
    return [item for item in payload if isinstance(item, dict)]


def list_assigned_issues(client: GitHubClient, settings: InboxSettings) -> list[Issue]:
    """Open issues in the configured issues repository assigned to the target user.

    Returns an empty list when nothing matches. Client errors propagate.
    """

    path = client.repo_path(settings.issues_repo, "issues")
    payload = client.get(path, params={"assignee": settings.target_user, "sorted": "updated"})
    issues = [Issue.from_json(item) for item in _json_list(payload, url=client.url_for(path))]
    logger.info(
        "Fetched assigned issues",
        extra={"repo": settings.issues_repo, "count": len(issues)},
    )
    return issues


def fetch_authored_pull_requests(
    client: GitHubClient, repo: RepoRef, *, author: str
) -> list[PullRequest]:
    """Open pull requests in ``repo`` whose author login equals ``author`` exactly."""

    path = client.repo_path(repo.full_name, "pulls")
    payload = client.get(path, params={"state": "open"})
    pulls = [PullRequest.from_json(item) for item in _json_list(payload, url=client.url_for(path))]
    return [pr for pr in pulls if pr.author_login == author]


def selected_repos(settings: InboxSettings, selection: RepoSelection) -> tuple[RepoRef, ...]:
    if selection is ALL_REPOS:
        return settings.repo_refs
    return (selection,)


def list_authored_pull_requests(
    client: GitHubClient, settings: InboxSettings, selection: RepoSelection
) -> dict[RepoRef, RepoPullRequests]:
    """Authored pull requests per repository, in configured order.

    Repositories are fetched one after another. A failed fetch is recorded on that
    repository's entry and the remaining repositories are still fetched.
    """

    results: dict[RepoRef, RepoPullRequests] = {}
    for repo in selected_repos(settings, selection):
        try:
            pulls = fetch_authored_pull_requests(client, repo, author=settings.target_user)
        except (TransportError, HttpStatusError) as e:
            logger.warning(
                "Failed to fetch pull requests",
                extra={"repo": repo.full_name, "error": str(e)},
            )
            results[repo] = RepoPullRequests(repo=repo, error=e)
            continue

        logger.info(
            "Fetched authored pull requests",
            extra={"repo": repo.full_name, "count": len(pulls)},
        )
        results[repo] = RepoPullRequests(repo=repo, pull_requests=pulls)
    return results


def resolve_repo_selection(raw: str, repo_refs: tuple[RepoRef, ...]) -> RepoSelection:
    """Map 1-based menu input onto a repository, or ``N+1`` onto all of them.

    Raises:
        InputValidationError for anything outside ``1..N+1``.
    """

    text = raw.strip().lower()
    if not text.isdecimal():
        raise InputValidationError(f"Invalid repo choice: {raw.strip()!r}")
    index = int(text)
    if 1 <= index <= len(repo_refs):
        return repo_refs[index - 1]
    if index == len(repo_refs) + 1:
        return ALL_REPOS
    raise InputValidationError(f"Invalid repo choice: {raw.strip()!r}")
