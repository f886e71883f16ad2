"""
Result cache for git-focus.

Keeps the last analysis result per username on disk so repeated lookups skip
the GitHub round-trips. Entries go stale after the freshness window but stay
readable, so callers can show the old result while offering a re-scan.
"""

import gzip
import json
import zlib
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Callable, NamedTuple

from git_focus.config import get_cache_dir, get_cache_ttl
from git_focus.models import AnalysisResult

SCHEMA_VERSION = "1.0"


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


class CacheState(str, Enum):
    """Lifecycle of a cache entry: absent -> fresh -> stale, any -> absent."""

    ABSENT = "absent"
    FRESH = "fresh"
    STALE = "stale"


class CacheEntry(NamedTuple):
    """A cached result for one username."""

    username: str
    result: AnalysisResult
    timestamp: int  # epoch milliseconds


class CacheLookup(NamedTuple):
    """Outcome of a cache read."""

    entry: CacheEntry | None
    state: CacheState


def is_fresh(entry: CacheEntry, now: int, ttl_seconds: int | None = None) -> bool:
    """
    Check whether an entry is within the freshness window.

    Args:
        entry: Cached entry.
        now: Current time in epoch milliseconds.
        ttl_seconds: Freshness window; defaults to the configured TTL (4 hours).
    """
    if ttl_seconds is None:
        ttl_seconds = get_cache_ttl()
    return now - entry.timestamp < ttl_seconds * 1000


def entry_state(
    entry: CacheEntry | None, now: int, ttl_seconds: int | None = None
) -> CacheState:
    """Classify an entry (or its absence) at time ``now``."""
    if entry is None:
        return CacheState.ABSENT
    if is_fresh(entry, now, ttl_seconds):
        return CacheState.FRESH
    return CacheState.STALE


def _normalize_username(username: str) -> str:
    return username.strip().lower()


class ResultCache:
    """Per-username store of analysis results, last write wins."""

    def __init__(
        self,
        cache_dir: Path | str | None = None,
        ttl_seconds: int | None = None,
        clock: Callable[[], int] | None = None,
    ):
        """
        Initialize the cache.

        Args:
            cache_dir: Directory holding one record per username. Defaults to
                the configured cache directory.
            ttl_seconds: Freshness window. Defaults to the configured TTL.
            clock: Returns the current time in epoch milliseconds.
        """
        self.cache_dir = Path(cache_dir) if cache_dir is not None else get_cache_dir()
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else get_cache_ttl()
        self.clock = clock or now_ms
        # Timestamps of invalidated entries; a re-scan must stamp past them
        self._invalidated_at: dict[str, int] = {}

    def _path(self, username: str) -> Path:
        return self.cache_dir / f"{_normalize_username(username)}.json.gz"

    def _read_record(self, path: Path) -> dict[str, Any] | None:
        try:
            with gzip.open(path, "rt", encoding="utf-8") as f:
                record = json.load(f)
        except (json.JSONDecodeError, OSError, EOFError, UnicodeDecodeError, zlib.error):
            # Corrupted cache - treat as a miss
            return None
        if not isinstance(record, dict):
            return None
        if record.get("schema_version") != SCHEMA_VERSION:
            return None
        return record

    def get(self, username: str) -> CacheEntry | None:
        """
        Look up the cached result for a username (case-insensitive).

        Returns:
            The entry, or None when absent or unreadable.
        """
        path = self._path(username)
        if not path.exists():
            return None
        record = self._read_record(path)
        if record is None:
            return None
        try:
            result = AnalysisResult.from_dict(record)
        except (KeyError, TypeError, ValueError):
            return None
        return CacheEntry(
            username=_normalize_username(username),
            result=result,
            timestamp=result.timestamp,
        )

    def put(self, username: str, result: AnalysisResult) -> CacheEntry:
        """
        Store a result, replacing any previous entry for the username.

        The entry is stamped with the current time; a re-scan always ends up
        with a timestamp strictly greater than the entry it replaces.
        """
        timestamp = self.clock()
        previous = self.get(username)
        floor = self._invalidated_at.pop(_normalize_username(username), None)
        if previous is not None:
            floor = previous.timestamp if floor is None else max(floor, previous.timestamp)
        if floor is not None and timestamp <= floor:
            timestamp = floor + 1

        stamped = result._replace(timestamp=timestamp)
        record = stamped.to_dict()
        record["schema_version"] = SCHEMA_VERSION

        self.cache_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(username)
        tmp_path = path.with_name(path.name + ".tmp")
        with gzip.open(tmp_path, "wt", encoding="utf-8") as f:
            json.dump(record, f, ensure_ascii=False)
        tmp_path.replace(path)

        return CacheEntry(
            username=_normalize_username(username),
            result=stamped,
            timestamp=timestamp,
        )

    def is_fresh(self, entry: CacheEntry, now: int | None = None) -> bool:
        """Check an entry against this cache's freshness window."""
        return is_fresh(entry, self.clock() if now is None else now, self.ttl_seconds)

    def lookup(self, username: str, now: int | None = None) -> CacheLookup:
        """Read an entry together with its state (absent, fresh or stale)."""
        entry = self.get(username)
        current = self.clock() if now is None else now
        return CacheLookup(entry, entry_state(entry, current, self.ttl_seconds))

    def invalidate(self, username: str) -> bool:
        """
        Remove the entry for a username.

        Returns:
            True if an entry was removed.
        """
        path = self._path(username)
        if not path.exists():
            return False
        previous = self.get(username)
        if previous is not None:
            self._invalidated_at[previous.username] = previous.timestamp
        path.unlink()
        return True

    def clear(self) -> int:
        """
        Remove every cached entry.

        Returns:
            Number of entries removed.
        """
        if not self.cache_dir.exists():
            return 0
        cleared = 0
        for cache_file in self.cache_dir.glob("*.json.gz"):
            cache_file.unlink()
            cleared += 1
        return cleared

    def stats(self, now: int | None = None) -> dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dictionary with the cache directory and entry counts by state.
        """
        if not self.cache_dir.exists():
            return {
                "cache_dir": str(self.cache_dir),
                "exists": False,
                "total_entries": 0,
                "fresh_entries": 0,
                "stale_entries": 0,
                "unreadable_entries": 0,
            }

        current = self.clock() if now is None else now
        fresh = stale = unreadable = 0
        for cache_file in self.cache_dir.glob("*.json.gz"):
            username = cache_file.name.removesuffix(".json.gz")
            state = entry_state(self.get(username), current, self.ttl_seconds)
            if state is CacheState.FRESH:
                fresh += 1
            elif state is CacheState.STALE:
                stale += 1
            else:
                unreadable += 1

        return {
            "cache_dir": str(self.cache_dir),
            "exists": True,
            "total_entries": fresh + stale + unreadable,
            "fresh_entries": fresh,
            "stale_entries": stale,
            "unreadable_entries": unreadable,
        }
