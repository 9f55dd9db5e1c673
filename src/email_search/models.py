"""Protocols and lightweight model types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class EventSink(Protocol):
    """Contract for anything that receives search events."""

    def emit(self, kind: str, message: str) -> None:
        """Deliver one event without blocking."""


@dataclass(frozen=True)
class Row:
    """One decoded line split into trimmed fields."""

    index: int
    fields: tuple[str, ...]
    raw: str


@dataclass(frozen=True)
class MatchRecord:
    """A confirmed match for one target."""

    target: str
    path: str
    row_index: int
    raw_row: str

    def to_line(self) -> str:
        """Render the record in the results-file line format."""
        return f"{self.row_index},{self.raw_row}\n"


@dataclass(frozen=True)
class ProgressState:
    """Snapshot of completed/total target counts."""

    completed: int
    total: int

    @property
    def finished(self) -> bool:
        return self.total > 0 and self.completed == self.total


@dataclass(frozen=True)
class SearchSummary:
    """Outcome of one search run."""

    total: int
    completed: int
    matched: int
    failed: int
    output: str
