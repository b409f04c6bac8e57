"""Interactive menu loop.

The loop is an explicit state machine. Menu input maps onto a closed set of
commands and every command has exactly one handler. Errors raised by a handler
are reported as one line and the loop goes back to the main menu.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from gh_inbox.cleanup import delete_screenshots
from gh_inbox.config import InboxSettings
from gh_inbox.errors import InboxError, InputValidationError
from gh_inbox.github.client import GitHubClient
from gh_inbox.github.listing import (
    list_assigned_issues,
    list_authored_pull_requests,
    resolve_repo_selection,
)
from gh_inbox.presenter import (
    DEFAULT_WIDTH,
    render_deletions,
    render_issues,
    render_pull_requests,
)

logger = logging.getLogger(__name__)

MENU_PROMPT = (
    "\nWhat do you want to do? "
    "(1. view issues / 2. view prs / 3. delete screenshots / 4. chat / 5. quit): "
)
CHAT_PLACEHOLDER = "Chat is not available yet."
INVALID_CHOICE = "Invalid choice."
INVALID_REPO_CHOICE = "Invalid repo choice."


class LoopState(str, Enum):
    AWAITING_MENU_CHOICE = "awaiting_menu_choice"
    AWAITING_REPO_CHOICE = "awaiting_repo_choice"
    EXECUTING = "executing"
    TERMINATED = "terminated"


ALLOWED_TRANSITIONS: dict[LoopState, set[LoopState]] = {
    LoopState.AWAITING_MENU_CHOICE: {
        LoopState.AWAITING_MENU_CHOICE,
        LoopState.AWAITING_REPO_CHOICE,
        LoopState.EXECUTING,
        LoopState.TERMINATED,
    },
    LoopState.AWAITING_REPO_CHOICE: {
        LoopState.EXECUTING,
        LoopState.AWAITING_MENU_CHOICE,
        LoopState.TERMINATED,
    },
    LoopState.EXECUTING: {LoopState.AWAITING_MENU_CHOICE},
    LoopState.TERMINATED: set(),
}


class IllegalTransitionError(ValueError):
    pass


class Command(str, Enum):
    VIEW_ISSUES = "1"
    VIEW_PRS = "2"
    DELETE_SCREENSHOTS = "3"
    CHAT = "4"
    QUIT = "5"
    INVALID = "invalid"


def parse_command(raw: str) -> Command:
    """Map raw menu input onto a command; anything unknown is ``Command.INVALID``."""

    text = raw.strip().lower()
    for command in Command:
        if command is not Command.INVALID and command.value == text:
            return command
    return Command.INVALID


InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


class InteractiveLoop:
    """Drive the menu until the user quits or input ends."""

    def __init__(
        self,
        *,
        settings: InboxSettings,
        client: GitHubClient,
        input_fn: InputFn | None = None,
        output_fn: OutputFn | None = None,
        color: bool = False,
        width: int = DEFAULT_WIDTH,
    ) -> None:
        self._settings = settings
        self._client = client
        self._input = input_fn or input
        self._output = output_fn or print
        self._color = color
        self._width = width
        self._state = LoopState.AWAITING_MENU_CHOICE

        self._handlers: dict[Command, Callable[[], None]] = {
            Command.VIEW_ISSUES: self._view_issues,
            Command.VIEW_PRS: self._view_pull_requests,
            Command.DELETE_SCREENSHOTS: self._delete_screenshots,
            Command.CHAT: self._chat,
            Command.QUIT: self._quit,
            Command.INVALID: self._invalid,
        }

    @property
    def state(self) -> LoopState:
        return self._state

    def _transition(self, to: LoopState) -> None:
        if to not in ALLOWED_TRANSITIONS[self._state]:
            raise IllegalTransitionError(f"Illegal transition: {self._state.value} -> {to.value}")
        logger.debug("Loop transition", extra={"from": self._state.value, "to": to.value})
        self._state = to

    def _read(self, prompt: str) -> str | None:
        try:
            return self._input(prompt)
        except (EOFError, KeyboardInterrupt):
            return None

    def run(self) -> None:
        while self._state is not LoopState.TERMINATED:
            self.step()

    def step(self) -> None:
        """Read one menu choice and handle it."""

        raw = self._read(MENU_PROMPT)
        if raw is None:
            self._transition(LoopState.TERMINATED)
            return
        command = parse_command(raw)
        logger.debug("Menu choice", extra={"command": command.name})
        self._handlers[command]()

    def _execute(self, action: str, work: Callable[[], str]) -> None:
        self._transition(LoopState.EXECUTING)
        try:
            self._output(work().rstrip("\n"))
        except InboxError as e:
            logger.warning("Action failed", extra={"action": action, "error": str(e)})
            self._output(f"Error {action}: {e}")
        finally:
            self._transition(LoopState.AWAITING_MENU_CHOICE)

    def _view_issues(self) -> None:
        def work() -> str:
            issues = list_assigned_issues(self._client, self._settings)
            return render_issues(
                issues,
                repository=self._settings.issues_repo,
                web_domain=self._settings.web_domain,
                target_user=self._settings.target_user,
                color=self._color,
                width=self._width,
            )

        self._execute("fetching issues", work)

    def repo_prompt(self) -> str:
        refs = self._settings.repo_refs
        options = [f"{i}: {ref.full_name}" for i, ref in enumerate(refs, start=1)]
        options.append(f"{len(refs) + 1}: all")
        return f"Which repo? ({', '.join(options)}): "

    def _view_pull_requests(self) -> None:
        self._transition(LoopState.AWAITING_REPO_CHOICE)
        raw = self._read(self.repo_prompt())
        if raw is None:
            self._transition(LoopState.TERMINATED)
            return

        try:
            selection = resolve_repo_selection(raw, self._settings.repo_refs)
        except InputValidationError as e:
            logger.info("Rejected repo choice", extra={"error": str(e)})
            self._output(INVALID_REPO_CHOICE)
            self._transition(LoopState.AWAITING_MENU_CHOICE)
            return

        def work() -> str:
            results = list_authored_pull_requests(self._client, self._settings, selection)
            return render_pull_requests(
                results,
                web_domain=self._settings.web_domain,
                target_user=self._settings.target_user,
                color=self._color,
                width=self._width,
            )

        self._execute("fetching pull requests", work)

    def _delete_screenshots(self) -> None:
        directory = self._settings.screenshots_path

        def work() -> str:
            results = delete_screenshots(directory)
            return render_deletions(
                results, directory=directory, color=self._color, width=self._width
            )

        self._execute("deleting screenshots", work)

    def _chat(self) -> None:
        self._output(CHAT_PLACEHOLDER)
        self._transition(LoopState.AWAITING_MENU_CHOICE)

    def _quit(self) -> None:
        self._transition(LoopState.TERMINATED)

    def _invalid(self) -> None:
        self._output(INVALID_CHOICE)
        self._transition(LoopState.AWAITING_MENU_CHOICE)
