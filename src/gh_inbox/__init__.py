"""gh-inbox.

An interactive terminal helper that lists:
- open issues assigned to you in one repository
- open pull requests you authored across a set of repositories

Settings come from the environment and a `.env` file next to the program.
"""

__version__ = "0.1.0"

from gh_inbox.config import InboxSettings, RepoRef, load_settings

__all__ = ["__version__", "InboxSettings", "RepoRef", "load_settings"]
