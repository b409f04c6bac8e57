"""GitHub REST client.

A thin wrapper around a single `requests.Session` so the listers never touch HTTP
details and tests can inject a fake session.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from gh_inbox.config import InboxSettings
from gh_inbox.errors import HttpStatusError, TransportError

logger = logging.getLogger(__name__)

ACCEPT_MEDIA_TYPE = "application/vnd.github+json"
API_VERSION = "2022-11-28"
USER_AGENT = "gh-inbox"


class GitHubClient:
    """Issue authenticated GET requests against the REST API.

    One attempt per call: no retries, no caching.
    """

    def __init__(
        self,
        *,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float | None = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")

        self._rest_base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": ACCEPT_MEDIA_TYPE,
                "X-GitHub-Api-Version": API_VERSION,
                "User-Agent": USER_AGENT,
            }
        )

    @classmethod
    def from_settings(
        cls, settings: InboxSettings, *, session: requests.Session | None = None
    ) -> GitHubClient:
        return cls(
            token=settings.github_token,
            base_url=settings.api_domain,
            timeout=settings.request_timeout,
            session=session,
        )

    @property
    def base_url(self) -> str:
        return self._rest_base_url

    @staticmethod
    def repo_path(repository: str, suffix: str = "") -> str:
        """Build ``repos/{owner}/{repo}[/suffix]`` without stray slashes."""

        repo = repository.strip().strip("/")
        suffix = suffix.strip("/")
        return f"repos/{repo}/{suffix}" if suffix else f"repos/{repo}"

    def url_for(self, path: str) -> str:
        return f"{self._rest_base_url}/{path.lstrip('/')}"

    def get(self, path: str, params: dict[str, str] | None = None) -> Any:
        """GET a REST path and return the decoded JSON body.

        Raises:
            TransportError if no response was received.
            HttpStatusError if the response is not a 2xx JSON document.
        """

        url = self.url_for(path)
        logger.debug("GET request", extra={"url": url, "params": params or {}})
        try:
            resp = self._session.get(url, params=params, timeout=self._timeout)
        except requests.RequestException as e:
            logger.warning("Request failed before a response", extra={"url": url})
            raise TransportError(f"Could not reach {url}: {e}", url=url) from e

        if not 200 <= resp.status_code < 300:
            message = _error_message(resp)
            logger.warning(
                "Request returned an error status",
                extra={"url": url, "status_code": resp.status_code},
            )
            raise HttpStatusError(status_code=resp.status_code, url=url, message=message)

        try:
            return resp.json()
        except ValueError as e:
            raise HttpStatusError(
                status_code=resp.status_code, url=url, message="response body is not JSON"
            ) from e

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _error_message(resp: requests.Response) -> str:
    try:
        payload = resp.json()
    except ValueError:
        return (resp.reason or "").strip()
    if isinstance(payload, dict):
        msg = payload.get("message")
        if isinstance(msg, str) and msg.strip():
            return msg
    return (resp.reason or "").strip()
