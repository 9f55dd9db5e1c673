"""Recursive discovery of delimited-text files."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path

WalkErrorHandler = Callable[[OSError], None]


def _list_dir(path: str, on_error: WalkErrorHandler | None) -> Iterator[os.DirEntry[str]] | None:
    try:
        with os.scandir(path) as entries:
            listing = sorted(entries, key=lambda entry: entry.name)
    except OSError as exc:
        if on_error is None:
            raise
        on_error(exc)
        return None
    return iter(listing)


def _is_dir(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def iter_candidate_files(
    root: str | Path,
    *,
    extensions: tuple[str, ...] = (".csv",),
    exclude: tuple[str | Path, ...] = (),
    on_error: WalkErrorHandler | None = None,
) -> Iterator[Path]:
    """Yield files under root whose suffix is in extensions, depth-first.

    Entries are visited in name order and a subdirectory is fully walked
    before its later siblings. An unreadable directory is passed to
    on_error and skipped; without a handler the OSError propagates.
    Symlinked directories are not followed.
    """
    wanted = {ext.lower() for ext in extensions}
    excluded = {os.path.abspath(path) for path in exclude}

    top = _list_dir(os.fspath(root), on_error)
    if top is None:
        return
    stack = [top]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue
        if _is_dir(entry):
            children = _list_dir(entry.path, on_error)
            if children is not None:
                stack.append(children)
            continue
        if os.path.splitext(entry.name)[1].lower() not in wanted:
            continue
        if os.path.abspath(entry.path) in excluded:
            continue
        yield Path(entry.path)
