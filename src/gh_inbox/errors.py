"""Error taxonomy for gh-inbox.

Every error raised by a menu action derives from :class:`InboxError` so the
interactive loop can report it as a single line and carry on.
"""

from __future__ import annotations


class InboxError(Exception):
    """Base class for all gh-inbox errors."""


class ConfigError(InboxError):
    """A required setting is missing or malformed."""


class TransportError(InboxError):
    """The request never produced a response (DNS, connection, timeout...)."""

    def __init__(self, message: str, *, url: str) -> None:
        super().__init__(message)
        self.url = url


class HttpStatusError(InboxError):
    """The server answered, but not with a usable 2xx JSON response."""

    def __init__(self, *, status_code: int, url: str, message: str = "") -> None:
        self.status_code = status_code
        self.url = url
        self.message = message
        detail = f": {message}" if message else ""
        super().__init__(f"HTTP {status_code} for {url}{detail}")


class InputValidationError(InboxError, ValueError):
    """A menu or repository selection is outside the valid set."""


class CleanupError(InboxError):
    """The screenshot folder itself could not be read."""

    def __init__(self, message: str, *, directory: str) -> None:
        super().__init__(message)
        self.directory = directory
