"""Core orchestration pipeline."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed

from tqdm import tqdm

from .config import SearchConfig
from .coordinator import SearchCoordinator
from .events import DONE, LOG, PROGRESS, NullEventSink, completion_message, progress_message
from .matcher import search_target
from .models import EventSink, MatchRecord, SearchSummary
from .sink import ResultSink
from .targets import TargetRegistry


def _search_and_count(
    target: str,
    config: SearchConfig,
    *,
    coordinator: SearchCoordinator,
    sink: ResultSink,
    events: EventSink,
    cancel: threading.Event | None,
    logger: logging.Logger,
) -> MatchRecord | None:
    try:
        return search_target(
            target,
            config.root,
            coordinator=coordinator,
            sink=sink,
            events=events,
            extensions=config.extensions,
            delimiter=config.delimiter,
            exclude=(config.output,),
            cancel=cancel,
            logger=logger,
        )
    finally:
        state = coordinator.mark_target_done()
        events.emit(PROGRESS, progress_message(state.completed, state.total))


def search_targets(
    config: SearchConfig,
    *,
    registry: TargetRegistry,
    coordinator: SearchCoordinator,
    sink: ResultSink,
    events: EventSink,
    cancel: threading.Event | None = None,
    logger: logging.Logger,
) -> tuple[int, int]:
    """Search every registered target in parallel; return (matched, failed)."""
    coordinator.register(len(registry))
    events.emit(PROGRESS, progress_message(0, len(registry)))
    logger.info(
        "Searching %d targets (%d unique) under %s",
        len(registry),
        registry.unique_count(),
        config.root,
    )

    matched = 0
    failed = 0
    with ThreadPoolExecutor(max_workers=config.workers) as executor:
        futures = {
            executor.submit(
                _search_and_count,
                target,
                config,
                coordinator=coordinator,
                sink=sink,
                events=events,
                cancel=cancel,
                logger=logger,
            ): target
            for target in registry
        }
        iterator = as_completed(futures)
        if config.show_progress:
            iterator = tqdm(iterator, total=len(futures), desc="searching targets")
        for future in iterator:
            target = futures[future]
            try:
                record = future.result()
            except Exception as exc:
                failed += 1
                logger.error("Search for %s failed: %s", target, exc)
                events.emit(LOG, f"Search for {target} failed: {exc}")
                continue
            if record is not None:
                matched += 1
    return matched, failed


def run_search(
    config: SearchConfig,
    *,
    events: EventSink | None = None,
    cancel: threading.Event | None = None,
    logger: logging.Logger,
) -> SearchSummary:
    """Open the results file, run the search, and summarize the run.

    ResultSinkError from opening the results file propagates before any
    target is dispatched.
    """
    events = events or NullEventSink()
    registry = TargetRegistry(config.targets)
    coordinator = SearchCoordinator()
    with ResultSink.open(config.output) as sink:
        events.emit(LOG, "Starting search...")
        matched, failed = search_targets(
            config,
            registry=registry,
            coordinator=coordinator,
            sink=sink,
            events=events,
            cancel=cancel,
            logger=logger,
        )
    state = coordinator.snapshot()
    events.emit(DONE, completion_message(matched, state.total))
    logger.info("Matched %d of %d targets; %d searches failed", matched, state.total, failed)
    return SearchSummary(
        total=state.total,
        completed=state.completed,
        matched=matched,
        failed=failed,
        output=config.output,
    )
