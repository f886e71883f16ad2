"""
Configuration management for git-focus.

Loads settings from:
1. .git-focus.toml (local config)
2. pyproject.toml (project-level config)
"""

import os
import tomllib
from pathlib import Path
from typing import Any

# project_root is the parent directory of git_focus/
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Global configuration for SSL verification
# Default: True (verify SSL certificates)
# Can be set to False by CLI --insecure flag
VERIFY_SSL = True

# Cache configuration
# Default cache directory: ~/.cache/git-focus
DEFAULT_CACHE_DIR = Path.home() / ".cache" / "git-focus"
# Results older than 4 hours are stale (still displayable)
DEFAULT_CACHE_TTL = 4 * 60 * 60

# Global cache settings (can be overridden)
_CACHE_DIR: Path | None = None
_CACHE_TTL: int | None = None


def load_config_file(config_path: Path) -> dict:
    """Load a TOML configuration file."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}") from e


def _load_tool_config() -> dict[str, Any]:
    """
    Return the ``[tool.git-focus]`` table.

    .git-focus.toml wins over pyproject.toml; the two are not merged.
    """
    for filename in (".git-focus.toml", "pyproject.toml"):
        config_path = PROJECT_ROOT / filename
        if config_path.exists():
            section = load_config_file(config_path).get("tool", {}).get("git-focus")
            if section:
                return section
    return {}


def get_excluded_repositories() -> list[str]:
    """
    Load excluded repository names from configuration files.

    Entries may be bare names ("dotfiles") or full names ("octocat/dotfiles").

    Returns:
        List of excluded repository names.
    """
    excluded = _load_tool_config().get("exclude", [])
    return list(set(excluded))  # Remove duplicates


def is_repository_excluded(name: str, full_name: str | None = None) -> bool:
    """
    Check if a repository is in the excluded list.

    Args:
        name: Repository name.
        full_name: Optional ``owner/name``.

    Returns:
        True if the repository is excluded, False otherwise.
    """
    excluded = [repo.lower() for repo in get_excluded_repositories()]
    if name.lower() in excluded:
        return True
    return full_name is not None and full_name.lower() in excluded


def get_scoring_overrides() -> dict[str, dict[str, Any]]:
    """
    Load per-rule scoring overrides.

    Example:
        [tool.git-focus.scoring.stale_pull_request]
        threshold = 14
    """
    return _load_tool_config().get("scoring", {})


def set_verify_ssl(verify: bool) -> None:
    """
    Set the SSL verification setting globally.

    Args:
        verify: Whether to verify SSL certificates.
    """
    global VERIFY_SSL
    VERIFY_SSL = verify


def get_verify_ssl() -> bool:
    """
    Get the current SSL verification setting.

    Returns:
        Whether SSL verification is enabled.
    """
    return VERIFY_SSL


def get_cache_dir() -> Path:
    """
    Get the cache directory path.

    Priority:
    1. Explicitly set value via set_cache_dir()
    2. GIT_FOCUS_CACHE_DIR environment variable
    3. .git-focus.toml / pyproject.toml config
    4. Default: ~/.cache/git-focus

    Returns:
        Path to the cache directory.
    """
    if _CACHE_DIR is not None:
        return _CACHE_DIR

    env_cache_dir = os.getenv("GIT_FOCUS_CACHE_DIR")
    if env_cache_dir:
        return Path(env_cache_dir).expanduser()

    cache_config = _load_tool_config().get("cache", {})
    if "directory" in cache_config:
        return Path(cache_config["directory"]).expanduser()

    return DEFAULT_CACHE_DIR


def set_cache_dir(path: Path | str | None) -> None:
    """
    Set the cache directory path explicitly.

    Args:
        path: Path to the cache directory, or None to restore the default lookup.
    """
    global _CACHE_DIR
    _CACHE_DIR = Path(path).expanduser() if path is not None else None


def get_cache_ttl() -> int:
    """
    Get the freshness window of cached results in seconds.

    Priority:
    1. Explicitly set value via set_cache_ttl()
    2. GIT_FOCUS_CACHE_TTL environment variable
    3. .git-focus.toml / pyproject.toml config
    4. Default: 14400 (4 hours)

    Returns:
        TTL in seconds.
    """
    if _CACHE_TTL is not None:
        return _CACHE_TTL

    env_cache_ttl = os.getenv("GIT_FOCUS_CACHE_TTL")
    if env_cache_ttl:
        try:
            return int(env_cache_ttl)
        except ValueError:
            pass

    cache_config = _load_tool_config().get("cache", {})
    if "ttl_seconds" in cache_config:
        return int(cache_config["ttl_seconds"])

    return DEFAULT_CACHE_TTL


def set_cache_ttl(seconds: int | None) -> None:
    """
    Set the cache TTL (Time To Live) explicitly.

    Args:
        seconds: TTL in seconds, or None to restore the default lookup.
    """
    global _CACHE_TTL
    _CACHE_TTL = seconds


def is_cache_enabled() -> bool:
    """
    Check if cache is enabled.

    Priority:
    1. .git-focus.toml / pyproject.toml config
    2. Default: True

    Returns:
        Whether cache is enabled.
    """
    cache_config = _load_tool_config().get("cache", {})
    if "enabled" in cache_config:
        return bool(cache_config["enabled"])
    return True
