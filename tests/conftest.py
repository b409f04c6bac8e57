"""Test configuration and fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest
import requests

from gh_inbox.config import InboxSettings
from gh_inbox.github.client import GitHubClient


def make_settings(**overrides: Any) -> InboxSettings:
    """Build settings without reading `.env`, using env-var style keys."""

    values: dict[str, Any] = {
        "GITHUB_TOKEN": "test-token",
        "MASTER": "octocat",
        "ISSUES_REPO": "octo-org/tracker",
        "PR_REPOS": "octo-org/a,octo-org/b",
        "API_DOMAIN": "https://api.github.test",
        "ORG_GITHUB_DOMAIN": "https://github.test",
    }
    values.update(overrides)
    return InboxSettings(_env_file=None, **values)


def make_response(status_code: int = 200, payload: Any = None, reason: str = "") -> Mock:
    resp = Mock(spec=requests.Response)
    resp.status_code = status_code
    resp.reason = reason
    if isinstance(payload, Exception):
        resp.json.side_effect = payload
    else:
        resp.json.return_value = payload
    return resp


@pytest.fixture
def settings(tmp_path: Path) -> InboxSettings:
    """Provide settings with two PR repositories and a temporary desktop folder."""
    return make_settings(SCREENSHOTS_DIR=str(tmp_path / "Desktop"))


@pytest.fixture
def session() -> Mock:
    """Provide a fake requests session with real header storage."""
    fake = Mock(spec=requests.Session())
    fake.headers = {}
    return fake


@pytest.fixture
def client(settings: InboxSettings, session: Mock) -> GitHubClient:
    return GitHubClient.from_settings(settings, session=session)


@pytest.fixture
def settings_factory() -> Any:
    return make_settings


@pytest.fixture
def response_factory() -> Any:
    return make_response
