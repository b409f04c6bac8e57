"""Configuration for gh-inbox.

Configuration is loaded once at startup from:
- environment variables
- and a `.env` file next to the program (the project root), if present

Environment variables win over the `.env` file. The resulting settings object is
frozen and passed explicitly to every component.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gh_inbox.errors import ConfigError
from gh_inbox.logging import normalize_level

# src/gh_inbox/config.py -> project root
PROGRAM_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_ENV_FILE = PROGRAM_ROOT / ".env"

REPO_DELIMITER = "/"


@dataclass(frozen=True, slots=True)
class RepoRef:
    """One remote repository, identified by organization and name."""

    organization: str
    repo_name: str

    @property
    def full_name(self) -> str:
        return f"{self.organization}{REPO_DELIMITER}{self.repo_name}"

    @classmethod
    def parse(cls, value: str) -> RepoRef:
        """Parse an ``org/repo`` string.

        Raises:
            ValueError if the value does not split into exactly two non-empty parts.
        """

        parts = [p.strip() for p in value.strip().split(REPO_DELIMITER)]
        if len(parts) != 2 or not all(parts):
            raise ValueError(f"expected 'org/repo', got {value!r}")
        return cls(organization=parts[0], repo_name=parts[1])


def parse_repo_list(value: str) -> tuple[RepoRef, ...]:
    """Parse a comma-separated list of ``org/repo`` entries, keeping order."""

    entries = [e for e in (part.strip() for part in value.split(",")) if e]
    return tuple(RepoRef.parse(e) for e in entries)


class InboxSettings(BaseSettings):
    """Settings for gh-inbox.

    Environment variables:
    - GITHUB_TOKEN
    - MASTER              (the target user login)
    - ISSUES_REPO         ("org/repo")
    - PR_REPOS            (comma-separated "org/repo" list)
    - API_DOMAIN          (optional)
    - ORG_GITHUB_DOMAIN   (optional)
    - LOG_LEVEL           (optional)
    - REQUEST_TIMEOUT_SECONDS (optional)
    - SCREENSHOTS_DIR     (optional)

    Notes:
        Tests can point at a different env file with
        `InboxSettings(_env_file=path_to_env)` or disable it with `_env_file=None`.
    """

    api_domain: str = Field(
        default="https://api.github.com",
        validation_alias="API_DOMAIN",
        description="REST API base URL (useful for GitHub Enterprise)",
    )
    web_domain: str = Field(
        default="https://github.com",
        validation_alias="ORG_GITHUB_DOMAIN",
        description="Web base URL used to print repository links",
    )

    # Required values default to empty; the validator below rejects blanks.
    github_token: str = Field(
        default="",
        validation_alias="GITHUB_TOKEN",
        description="Token used for API authentication",
    )
    target_user: str = Field(
        default="",
        validation_alias="MASTER",
        description="Login whose issues and pull requests are listed",
    )
    issues_repo: str = Field(
        default="",
        validation_alias="ISSUES_REPO",
        description="Repository searched for assigned issues, as 'org/repo'",
    )
    pr_repos: str = Field(
        default="",
        validation_alias="PR_REPOS",
        description="Comma-separated 'org/repo' list searched for authored pull requests",
    )

    log_level: str = Field(
        default="WARNING",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        ge=0.0,
        validation_alias="REQUEST_TIMEOUT_SECONDS",
        description="Per-request timeout in seconds (0 disables the timeout)",
    )
    screenshots_dir: Path = Field(
        default=Path("~/Desktop"),
        validation_alias="SCREENSHOTS_DIR",
        description="Folder purged by the screenshot cleanup action",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=DEFAULT_ENV_FILE,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        return normalize_level(value)

    @model_validator(mode="after")
    def _require_values(self) -> InboxSettings:
        required = {
            "GITHUB_TOKEN": self.github_token,
            "MASTER": self.target_user,
            "ISSUES_REPO": self.issues_repo,
            "PR_REPOS": self.pr_repos,
            "API_DOMAIN": self.api_domain,
            "ORG_GITHUB_DOMAIN": self.web_domain,
        }
        missing = [name for name, value in required.items() if not value.strip()]
        if missing:
            raise ValueError(f"missing required settings: {', '.join(missing)}")

        try:
            RepoRef.parse(self.issues_repo)
        except ValueError as e:
            raise ValueError(f"ISSUES_REPO is malformed: {e}") from e

        try:
            refs = parse_repo_list(self.pr_repos)
        except ValueError as e:
            raise ValueError(f"PR_REPOS is malformed: {e}") from e
        if not refs:
            raise ValueError("PR_REPOS must list at least one 'org/repo'")
        return self

    @property
    def repo_refs(self) -> tuple[RepoRef, ...]:
        """Pull request repositories in configured order."""

        return parse_repo_list(self.pr_repos)

    @property
    def issues_repo_ref(self) -> RepoRef:
        return RepoRef.parse(self.issues_repo)

    @property
    def screenshots_path(self) -> Path:
        return self.screenshots_dir.expanduser()

    @property
    def request_timeout(self) -> float | None:
        return self.request_timeout_seconds or None


def load_settings(env_file: Path | str | None = DEFAULT_ENV_FILE) -> InboxSettings:
    """Resolve settings once, translating validation failures into ConfigError."""

    try:
        return InboxSettings(_env_file=env_file)
    except ValidationError as e:
        messages = []
        for err in e.errors():
            loc = ".".join(str(part) for part in err.get("loc", ()) if part != "__root__")
            msg = str(err.get("msg", "")).removeprefix("Value error, ")
            messages.append(f"{loc}: {msg}" if loc else msg)
        raise ConfigError("; ".join(messages) or str(e)) from e
