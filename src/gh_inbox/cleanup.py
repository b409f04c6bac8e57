"""Delete screenshot and screen recording files from a desktop folder."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from gh_inbox.errors import CleanupError

logger = logging.getLogger(__name__)

SCREENSHOT_PREFIXES: tuple[str, ...] = ("Screenshot", "Screen Shot", "Screen Recording")
SCREENSHOT_SUFFIXES: frozenset[str] = frozenset({".png", ".jpg", ".jpeg", ".mov"})


@dataclass(frozen=True, slots=True)
class DeletionResult:
    path: Path
    deleted: bool
    error: str | None = None


def is_screenshot(path: Path) -> bool:
    if not path.name.startswith(SCREENSHOT_PREFIXES):
        return False
    return path.suffix.lower() in SCREENSHOT_SUFFIXES


def find_screenshots(directory: Path) -> list[Path]:
    """Screenshot files directly inside ``directory``, sorted by name.

    A missing directory yields an empty list.

    Raises:
        CleanupError if the directory exists but cannot be listed.
    """

    try:
        if not directory.is_dir():
            return []
        matches = [p for p in directory.iterdir() if p.is_file() and is_screenshot(p)]
    except OSError as e:
        logger.warning(
            "Failed to list screenshot folder", extra={"path": str(directory), "error": str(e)}
        )
        raise CleanupError(f"Could not read {directory}: {e}", directory=str(directory)) from e
    return sorted(matches, key=lambda p: p.name)


def delete_screenshots(directory: Path) -> list[DeletionResult]:
    """Delete every screenshot in ``directory``.

    A failure on one file is recorded and the remaining files are still processed.
    """

    results: list[DeletionResult] = []
    for path in find_screenshots(directory):
        try:
            path.unlink()
        except OSError as e:
            logger.warning("Failed to delete file", extra={"path": str(path), "error": str(e)})
            results.append(DeletionResult(path=path, deleted=False, error=str(e)))
            continue
        logger.info("Deleted file", extra={"path": str(path)})
        results.append(DeletionResult(path=path, deleted=True))
    return results
