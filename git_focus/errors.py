"""Error types raised by the analysis pipeline."""


class GitFocusError(Exception):
    """Base class for git-focus errors."""


class UserNotFoundError(GitFocusError):
    """The GitHub profile lookup returned not-found."""

    def __init__(self, username: str):
        super().__init__(f"GitHub user '{username}' not found.")
        self.username = username


class DataFetchError(GitFocusError):
    """Network, rate-limit or API errors while fetching account data."""
