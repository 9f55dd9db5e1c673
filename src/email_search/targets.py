"""Target list loading."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path


def load_targets(path: str) -> list[str]:
    """Load one target per line from a UTF-8 text file, skipping blank lines."""
    content = Path(path).read_text(encoding="utf-8-sig")
    return [line.strip() for line in content.splitlines() if line.strip()]


def target_key(target: str) -> str:
    """Comparison form of a target; the original spelling is kept for logs."""
    return target.strip().lower()


class TargetRegistry:
    """Ordered, read-only list of targets for one run.

    Duplicates are kept on purpose: each entry is dispatched, and the
    coordinator's claim makes sure only one of them records a match.
    """

    def __init__(self, targets: list[str] | tuple[str, ...]) -> None:
        self._targets = tuple(targets)

    def __iter__(self) -> Iterator[str]:
        return iter(self._targets)

    def __len__(self) -> int:
        return len(self._targets)

    def unique_count(self) -> int:
        return len({target_key(target) for target in self._targets})
