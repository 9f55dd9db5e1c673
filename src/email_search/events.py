"""One-directional event channel between the engine and its consumer."""

from __future__ import annotations

import queue
from dataclasses import dataclass

LOG = "log"
PROGRESS = "progress"
DONE = "done"
EVENT_KINDS = frozenset({LOG, PROGRESS, DONE})


@dataclass(frozen=True)
class SearchEvent:
    kind: str
    message: str


class EventChannel:
    """Unbounded queue of events; producers never wait on the consumer."""

    def __init__(self) -> None:
        self._queue: queue.Queue[SearchEvent] = queue.Queue()

    def emit(self, kind: str, message: str) -> None:
        if kind not in EVENT_KINDS:
            raise ValueError(f"Unknown event kind: {kind!r}")
        self._queue.put_nowait(SearchEvent(kind=kind, message=message))

    def drain(self) -> list[SearchEvent]:
        """Return every queued event without blocking."""
        events: list[SearchEvent] = []
        while True:
            try:
                events.append(self._queue.get_nowait())
            except queue.Empty:
                return events


class NullEventSink:
    """Event sink that discards everything."""

    def emit(self, kind: str, message: str) -> None:
        return None


def progress_message(completed: int, total: int) -> str:
    return f"Progress: {completed}/{total}"


def completion_message(matched: int, total: int) -> str:
    return f"Search complete: {matched} of {total} targets found"
