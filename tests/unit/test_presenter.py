"""Unit tests for text rendering."""

from __future__ import annotations

from pathlib import Path

from gh_inbox.cleanup import DeletionResult
from gh_inbox.config import RepoRef
from gh_inbox.errors import TransportError
from gh_inbox.github.models import Issue, Label, PullRequest, RepoPullRequests
from gh_inbox.presenter import render_deletions, render_issues, render_pull_requests

REPO_A = RepoRef("octo-org", "a")
REPO_B = RepoRef("octo-org", "b")


def _issue(number: int, labels: tuple[Label, ...] = ()) -> Issue:
    return Issue(
        number=number,
        title=f"Issue title {number}",
        url=f"https://github.test/octo-org/tracker/issues/{number}",
        state="open",
        labels=labels,
    )


def _pr(number: int) -> PullRequest:
    return PullRequest(
        number=number,
        title=f"PR title {number}",
        url=f"https://github.test/octo-org/a/pull/{number}",
        state="open",
        author_login="octocat",
    )


def _line_with(text: str, needle: str) -> str:
    return next(line for line in text.splitlines() if needle in line)


def test_render_issues_empty_has_explicit_message_and_no_table() -> None:
    out = render_issues(
        [],
        repository="octo-org/tracker",
        web_domain="https://github.test",
        target_user="octocat",
    )

    assert "No issues assigned to octocat" in out
    assert "octo-org/tracker: https://github.test/octo-org/tracker" in out
    assert "Number" not in out


def test_render_issues_fields_in_fixed_order() -> None:
    out = render_issues(
        [_issue(42, (Label("bug", "d73a4a"), Label("help wanted", "008672"))), _issue(7)],
        repository="octo-org/tracker",
        web_domain="https://github.test/",
        target_user="octocat",
    )

    header = _line_with(out, "Number")
    assert (
        header.index("Number")
        < header.index("Title")
        < header.index("URL")
        < header.index("State")
        < header.index("Labels")
    )

    row = _line_with(out, "/issues/42")
    assert (
        row.index("42")
        < row.index("Issue title 42")
        < row.index("https://github.test/octo-org/tracker/issues/42")
        < row.index("open")
        < row.index("bug")
        < row.index("help wanted")
    )
    assert out.index("/issues/42") < out.index("/issues/7")
    assert "No issues" not in out


def test_render_issues_tolerates_unparseable_label_colors() -> None:
    out = render_issues(
        [_issue(1, (Label("odd", "not-a-color"), Label("blank", "")))],
        repository="octo-org/tracker",
        web_domain="https://github.test",
        target_user="octocat",
        color=True,
    )

    assert "odd" in out
    assert "blank" in out


def test_render_issues_with_color_emits_ansi_codes() -> None:
    out = render_issues(
        [_issue(1, (Label("bug", "d73a4a"),))],
        repository="octo-org/tracker",
        web_domain="https://github.test",
        target_user="octocat",
        color=True,
    )

    assert "\x1b[" in out


def test_render_plain_output_has_no_ansi_codes() -> None:
    out = render_issues(
        [_issue(1)],
        repository="octo-org/tracker",
        web_domain="https://github.test",
        target_user="octocat",
    )

    assert "\x1b[" not in out


def test_titles_with_brackets_are_not_treated_as_markup() -> None:
    issue = Issue(number=3, title="[bold]Fix[/bold] parser", url="u", state="open")

    out = render_issues(
        [issue],
        repository="octo-org/tracker",
        web_domain="https://github.test",
        target_user="octocat",
    )

    assert "[bold]Fix[/bold] parser" in out


def test_render_pull_requests_one_section_per_repo() -> None:
    results = {
        REPO_A: RepoPullRequests(repo=REPO_A, pull_requests=[_pr(1), _pr(2)]),
        REPO_B: RepoPullRequests(repo=REPO_B),
    }

    out = render_pull_requests(
        results, web_domain="https://github.test", target_user="octocat"
    )

    section_a = out.index("octo-org/a: https://github.test/octo-org/a")
    section_b = out.index("octo-org/b: https://github.test/octo-org/b")
    assert section_a < section_b
    assert section_a < out.index("/pull/1") < out.index("/pull/2") < section_b
    assert "Pull requests authored by octocat in a:" in out
    assert out.index("No pull requests authored by octocat") > section_b
    assert out.count("No pull requests authored by octocat") == 1

    row = _line_with(out, "/pull/1")
    assert row.index("1") < row.index("PR title 1") < row.index("/pull/1") < row.index("open")


def test_render_pull_requests_reports_failed_repo() -> None:
    error = TransportError("Could not reach host", url="https://api.github.test/x")
    results = {
        REPO_A: RepoPullRequests(repo=REPO_A, error=error),
        REPO_B: RepoPullRequests(repo=REPO_B, pull_requests=[_pr(9)]),
    }

    out = render_pull_requests(
        results, web_domain="https://github.test", target_user="octocat"
    )

    assert "Error fetching pull requests: Could not reach host" in out
    assert "No pull requests" not in out
    assert "/pull/9" in out


def test_render_deletions(tmp_path: Path) -> None:
    results = [
        DeletionResult(path=tmp_path / "Screenshot 1.png", deleted=True),
        DeletionResult(path=tmp_path / "Screenshot 2.png", deleted=False, error="denied"),
    ]

    out = render_deletions(results, directory=tmp_path)

    assert "Deleted Screenshot 1.png" in out
    assert "Failed to delete Screenshot 2.png: denied" in out


def test_render_deletions_when_nothing_matched(tmp_path: Path) -> None:
    out = render_deletions([], directory=tmp_path)

    assert f"No screenshots found in {tmp_path}" in out
