"""Per-target search across every candidate file under a root."""

from __future__ import annotations

import logging
import threading
from contextlib import closing
from pathlib import Path

from .coordinator import SearchCoordinator
from .decoder import iter_rows
from .events import LOG, NullEventSink
from .models import EventSink, MatchRecord, Row
from .sink import ResultSink
from .targets import target_key
from .walker import iter_candidate_files

# Primary and secondary email columns of the exports this tool reads.
# Not user-configurable; nothing upstream documents why these two.
MATCH_COLUMNS = (0, 2)


def row_matches(fields: tuple[str, ...], key: str) -> bool:
    """Return True when a match column equals key, ignoring case.

    Rows too short to hold every match column never match.
    """
    if len(fields) <= max(MATCH_COLUMNS):
        return False
    return any(fields[column].lower() == key for column in MATCH_COLUMNS)


def find_in_file(
    path: Path,
    key: str,
    *,
    delimiter: str,
    events: EventSink,
    logger: logging.Logger,
) -> Row | None:
    """Return the first matching row of one file, or None."""

    def on_decode_error(bad_path: Path, index: int, exc: UnicodeDecodeError) -> None:
        logger.warning("Error reading line %d of %s: %s. Skipping...", index, bad_path, exc)
        events.emit(LOG, f"Error reading line {index} of {bad_path}: {exc}. Skipping...")

    with closing(iter_rows(path, delimiter=delimiter, on_decode_error=on_decode_error)) as rows:
        for row in rows:
            if row_matches(row.fields, key):
                return row
    return None


def search_target(
    target: str,
    root: str | Path,
    *,
    coordinator: SearchCoordinator,
    sink: ResultSink,
    events: EventSink | None = None,
    extensions: tuple[str, ...] = (".csv",),
    delimiter: str = ",",
    exclude: tuple[str | Path, ...] = (),
    cancel: threading.Event | None = None,
    logger: logging.Logger,
) -> MatchRecord | None:
    """Find and persist the first row under root matching target.

    Returns None when nothing matches, when the target was already found
    by another task, or when cancel is set. Cancellation and the found
    check are evaluated between files.
    """
    events = events or NullEventSink()
    key = target_key(target)
    if not key:
        return None
    if cancel is not None and cancel.is_set():
        return None
    if coordinator.is_claimed(target):
        logger.debug("Skipping %s: already found in this run", target)
        return None

    def on_dir_error(exc: OSError) -> None:
        reason = exc.strerror or exc
        logger.warning("Cannot read directory %s: %s", exc.filename, reason)
        events.emit(LOG, f"Cannot read directory {exc.filename}: {reason}")

    events.emit(LOG, f"Searching for {target} in {root}")
    for path in iter_candidate_files(
        root, extensions=extensions, exclude=exclude, on_error=on_dir_error
    ):
        if cancel is not None and cancel.is_set():
            logger.debug("Search for %s cancelled", target)
            return None
        if coordinator.is_claimed(target):
            return None
        logger.debug("Searching %s for %s", path, target)
        try:
            row = find_in_file(path, key, delimiter=delimiter, events=events, logger=logger)
        except OSError as exc:
            reason = exc.strerror or exc
            logger.warning("Cannot read file %s: %s", path, reason)
            events.emit(LOG, f"Cannot read file {path}: {reason}")
            continue
        if row is None:
            continue
        if not coordinator.try_claim(target):
            return None
        record = MatchRecord(target=target, path=str(path), row_index=row.index, raw_row=row.raw)
        sink.append(record)
        logger.info("Found %s in file: %s, Row %d: %s", target, path, row.index, row.raw)
        events.emit(LOG, f"Found {target} in file: {path}, Row {row.index}: {row.raw}")
        return record

    events.emit(LOG, f"{target} not found in any file under {root}")
    return None
