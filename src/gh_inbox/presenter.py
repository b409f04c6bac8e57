"""Render listing results as terminal text.

Pure formatting: every function returns a string and touches neither the network
nor the filesystem. Colour is cosmetic; with ``color=False`` the output is plain.
"""

from __future__ import annotations

import io
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

from rich.color import ColorParseError
from rich.console import Console, RenderableType
from rich.style import Style
from rich.table import Table
from rich.text import Text

from gh_inbox.cleanup import DeletionResult
from gh_inbox.config import RepoRef
from gh_inbox.github.models import Issue, Label, PullRequest, RepoPullRequests

DEFAULT_WIDTH = 160

ISSUE_COLUMNS = ("Number", "Title", "URL", "State", "Labels")
PULL_REQUEST_COLUMNS = ("Number", "Title", "URL", "State")


def _render(renderables: Iterable[RenderableType], *, color: bool, width: int) -> str:
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=width,
        force_terminal=color,
        color_system="truecolor" if color else None,
        markup=False,
        highlight=False,
        emoji=False,
    )
    for renderable in renderables:
        console.print(renderable)
    return buffer.getvalue()


def _heading(text: str) -> Text:
    return Text(text, style="bold bright_blue")


def _repo_banner(full_name: str, web_url: str) -> Text:
    return Text(f"{full_name}: {web_url}", style="white on blue")


def _notice(text: str, style: str = "cyan") -> Text:
    return Text(text, style=style)


def _table(columns: Sequence[str]) -> Table:
    table = Table(show_header=True, header_style="magenta", show_lines=False)
    for name in columns:
        table.add_column(name, no_wrap=name in {"Number", "URL", "State"})
    return table


def _state_cell(state: str) -> Text:
    return Text(state, style="black on bright_green")


def _label_text(label: Label) -> Text:
    try:
        style = Style(bgcolor=f"#{label.color}") if label.color else Style()
    except ColorParseError:
        # Odd colours still render, just without a background.
        style = Style()
    return Text(label.name, style=style)


def _labels_cell(labels: Sequence[Label]) -> Text:
    return Text(", ").join(_label_text(label) for label in labels)


def repo_web_url(web_domain: str, repo: RepoRef | str) -> str:
    full_name = repo.full_name if isinstance(repo, RepoRef) else repo.strip("/")
    return f"{web_domain.rstrip('/')}/{full_name}"


def issues_table(issues: Sequence[Issue]) -> Table:
    table = _table(ISSUE_COLUMNS)
    for issue in issues:
        table.add_row(
            Text(str(issue.number)),
            Text(issue.title),
            Text(issue.url),
            _state_cell(issue.state),
            _labels_cell(issue.labels),
        )
    return table


def pull_requests_table(pull_requests: Sequence[PullRequest]) -> Table:
    table = _table(PULL_REQUEST_COLUMNS)
    for pr in pull_requests:
        table.add_row(
            Text(str(pr.number)),
            Text(pr.title),
            Text(pr.url),
            _state_cell(pr.state),
        )
    return table


def render_issues(
    issues: Sequence[Issue],
    *,
    repository: str,
    web_domain: str,
    target_user: str,
    color: bool = False,
    width: int = DEFAULT_WIDTH,
) -> str:
    """Render assigned issues, or an explicit notice when there are none."""

    parts: list[RenderableType] = [
        _heading("ISSUES"),
        _repo_banner(repository, repo_web_url(web_domain, repository)),
    ]
    if issues:
        parts.append(issues_table(issues))
    else:
        parts.append(_notice(f"No issues assigned to {target_user}"))
    return _render(parts, color=color, width=width)


def render_pull_requests(
    results: Mapping[RepoRef, RepoPullRequests],
    *,
    web_domain: str,
    target_user: str,
    color: bool = False,
    width: int = DEFAULT_WIDTH,
) -> str:
    """Render one section per repository, in mapping order."""

    parts: list[RenderableType] = [_heading("Pull Requests")]
    for repo, result in results.items():
        parts.append(Text(""))
        parts.append(_repo_banner(repo.full_name, repo_web_url(web_domain, repo)))
        if result.error is not None:
            parts.append(_notice(f"Error fetching pull requests: {result.error}", style="red"))
        elif not result.pull_requests:
            parts.append(
                _notice(f"No pull requests authored by {target_user}", style="yellow")
            )
        else:
            parts.append(
                _notice(f"Pull requests authored by {target_user} in {repo.repo_name}:")
            )
            parts.append(pull_requests_table(result.pull_requests))
    return _render(parts, color=color, width=width)


def render_deletions(
    results: Sequence[DeletionResult],
    *,
    directory: Path,
    color: bool = False,
    width: int = DEFAULT_WIDTH,
) -> str:
    if not results:
        return _render(
            [_notice(f"No screenshots found in {directory}", style="yellow")],
            color=color,
            width=width,
        )

    parts: list[RenderableType] = []
    for result in results:
        if result.deleted:
            parts.append(_notice(f"Deleted {result.path.name}", style="green"))
        else:
            parts.append(
                _notice(f"Failed to delete {result.path.name}: {result.error}", style="red")
            )
    return _render(parts, color=color, width=width)
