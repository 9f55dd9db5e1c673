"""Append-only results file."""

from __future__ import annotations

from pathlib import Path
from threading import Lock
from types import TracebackType
from typing import TextIO

from .errors import ResultSinkError
from .models import MatchRecord


class ResultSink:
    """Writes match lines as they are found, one locked write per record."""

    def __init__(self, handle: TextIO, path: str) -> None:
        self._handle = handle
        self._lock = Lock()
        self._closed = False
        self.path = path
        self.written = 0

    @classmethod
    def open(cls, path: str) -> ResultSink:
        """Create or truncate the results file."""
        try:
            handle = Path(path).open("w", encoding="utf-8", newline="")
        except OSError as exc:
            raise ResultSinkError(f"Cannot create results file {path}: {exc}") from exc
        return cls(handle, path)

    def append(self, record: MatchRecord) -> None:
        line = record.to_line()
        with self._lock:
            if self._closed:
                raise ResultSinkError(f"Results file {self.path} is already closed.")
            try:
                self._handle.write(line)
                self._handle.flush()
            except OSError as exc:
                raise ResultSinkError(f"Cannot write to results file {self.path}: {exc}") from exc
            self.written += 1

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._handle.close()

    def __enter__(self) -> ResultSink:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()
