"""Shared progress counters and found-target bookkeeping."""

from __future__ import annotations

from threading import Lock

from .models import ProgressState
from .targets import target_key


class SearchCoordinator:
    """Thread-safe progress and dedup state for one search run.

    Every method holds the lock only for a few in-memory operations;
    callers must not do I/O while a claim is being decided.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._completed = 0
        self._total = 0
        self._registered = False
        self._found: set[str] = set()

    def register(self, total: int) -> None:
        """Fix the number of targets for this run."""
        if total < 0:
            raise ValueError("total must be >= 0.")
        with self._lock:
            if self._registered:
                raise RuntimeError("Target total is already registered for this run.")
            self._total = total
            self._registered = True

    def mark_target_done(self) -> ProgressState:
        """Count one finished target search and return the new progress."""
        with self._lock:
            if self._completed >= self._total:
                raise RuntimeError("More targets completed than were registered.")
            self._completed += 1
            return ProgressState(completed=self._completed, total=self._total)

    def try_claim(self, target: str) -> bool:
        """Record target as found; False if another task already claimed it."""
        key = target_key(target)
        with self._lock:
            if key in self._found:
                return False
            self._found.add(key)
            return True

    def is_claimed(self, target: str) -> bool:
        key = target_key(target)
        with self._lock:
            return key in self._found

    def snapshot(self) -> ProgressState:
        with self._lock:
            return ProgressState(completed=self._completed, total=self._total)
