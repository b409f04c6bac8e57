"""CLI entrypoint for gh-inbox.

Loads settings once, configures logging, then hands control to the interactive
menu until the user quits.
"""

from __future__ import annotations

import logging
import shutil
import sys

from gh_inbox.config import load_settings
from gh_inbox.errors import ConfigError
from gh_inbox.github.client import GitHubClient
from gh_inbox.logging import configure_logging
from gh_inbox.menu import InteractiveLoop
from gh_inbox.presenter import DEFAULT_WIDTH

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNEXPECTED_ERROR = 1
EXIT_CONFIG_ERROR = 2


def output_width(interactive: bool) -> int:
    """Terminal width when attached to one, the fixed default otherwise."""

    if not interactive:
        return DEFAULT_WIDTH
    return shutil.get_terminal_size((DEFAULT_WIDTH, 24)).columns


def main() -> int:
    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    configure_logging(settings.log_level)
    logger.info(
        "Starting gh-inbox",
        extra={
            "api_domain": settings.api_domain,
            "issues_repo": settings.issues_repo,
            "pr_repos": [ref.full_name for ref in settings.repo_refs],
        },
    )

    client = GitHubClient.from_settings(settings)
    try:
        interactive = sys.stdout.isatty()
        loop = InteractiveLoop(
            settings=settings,
            client=client,
            color=interactive,
            width=output_width(interactive),
        )
        loop.run()
    except Exception:
        logger.exception("gh-inbox stopped unexpectedly")
        return EXIT_UNEXPECTED_ERROR
    finally:
        client.close()
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
