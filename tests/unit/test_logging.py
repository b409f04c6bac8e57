"""Unit tests for structured logging."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from gh_inbox.logging import HANDLER_NAME, JsonFormatter, configure_logging, normalize_level


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="gh_inbox.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Failed to fetch %s",
        args=("pulls",),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_puts_extra_fields_under_context() -> None:
    payload = json.loads(JsonFormatter().format(_record(repo="octo-org/a")))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "gh_inbox.test"
    assert payload["message"] == "Failed to fetch pulls"
    assert payload["context"] == {"repo": "octo-org/a"}


def test_json_formatter_omits_context_without_extra_fields() -> None:
    payload = json.loads(JsonFormatter().format(_record()))

    assert "context" not in payload


def test_json_formatter_stringifies_non_json_values() -> None:
    payload = json.loads(JsonFormatter().format(_record(path=Path("/tmp/Screenshot 1.png"))))

    assert payload["context"] == {"path": "/tmp/Screenshot 1.png"}


@pytest.mark.parametrize(("raw", "expected"), [("debug", "DEBUG"), (" Warning ", "WARNING")])
def test_normalize_level_accepts_known_names(raw: str, expected: str) -> None:
    assert normalize_level(raw) == expected


def test_normalize_level_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="unknown log level 'verbose'"):
        normalize_level("verbose")


def test_configure_logging_replaces_only_its_own_handler(restore_root_logger: None) -> None:
    root = logging.getLogger()
    foreign = logging.NullHandler()
    root.addHandler(foreign)
    stream = io.StringIO()

    configure_logging("debug", stream=stream)
    handler = configure_logging("info", stream=stream)
    logging.getLogger("gh_inbox.test").info("hello", extra={"count": 2})

    ours = [h for h in root.handlers if h.get_name() == HANDLER_NAME]
    assert ours == [handler]
    assert foreign in root.handlers
    assert root.level == logging.INFO
    lines = stream.getvalue().splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["context"] == {"count": 2}


def test_configure_logging_keeps_urllib3_quiet(restore_root_logger: None) -> None:
    configure_logging("DEBUG", stream=io.StringIO())

    assert logging.getLogger("urllib3").level == logging.WARNING


def test_configure_logging_rejects_unknown_level(restore_root_logger: None) -> None:
    with pytest.raises(ValueError):
        configure_logging("chatty", stream=io.StringIO())
