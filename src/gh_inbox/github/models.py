"""Records built from REST API payloads.

Values are carried through as the API returns them; nothing here is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from gh_inbox.config import RepoRef
from gh_inbox.errors import InboxError


@dataclass(frozen=True, slots=True)
class Label:
    name: str
    # Raw hex string from the API (e.g. "d73a4a"), never normalised.
    color: str


@dataclass(frozen=True, slots=True)
class Issue:
    number: int
    title: str
    url: str
    state: str
    labels: tuple[Label, ...] = ()

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Issue:
        raw_labels = data.get("labels")
        labels: list[Label] = []
        if isinstance(raw_labels, list):
            for item in raw_labels:
                if isinstance(item, dict):
                    labels.append(
                        Label(name=_str(item.get("name")), color=_str(item.get("color")))
                    )
        return cls(
            number=_int(data.get("number")),
            title=_str(data.get("title")),
            url=_str(data.get("html_url")),
            state=_str(data.get("state")),
            labels=tuple(labels),
        )


@dataclass(frozen=True, slots=True)
class PullRequest:
    number: int
    title: str
    url: str
    state: str
    author_login: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> PullRequest:
        user = data.get("user")
        login = user.get("login") if isinstance(user, dict) else None
        return cls(
            number=_int(data.get("number")),
            title=_str(data.get("title")),
            url=_str(data.get("html_url")),
            state=_str(data.get("state")),
            author_login=_str(login),
        )


@dataclass(frozen=True, slots=True)
class RepoPullRequests:
    """Outcome of fetching one repository's pull requests.

    An empty ``pull_requests`` with ``error`` unset means no PR matched; a set
    ``error`` means the fetch itself failed.
    """

    repo: RepoRef
    pull_requests: list[PullRequest] = field(default_factory=list)
    error: InboxError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _str(value: object) -> str:
    return value if isinstance(value, str) else ""


def _int(value: object) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return 0
    return 0
