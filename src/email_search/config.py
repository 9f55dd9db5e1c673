"""Runtime configuration model."""

from __future__ import annotations

from dataclasses import dataclass

from .validation import validate_runtime_constraints

DEFAULT_WORKERS = 8
DEFAULT_EXTENSIONS = (".csv",)
DEFAULT_DELIMITER = ","
DEFAULT_OUTPUT_NAME = "email_search_results.csv"


@dataclass(frozen=True)
class SearchConfig:
    """Validated configuration used by the search pipeline."""

    targets: tuple[str, ...]
    root: str
    output: str
    workers: int = DEFAULT_WORKERS
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    delimiter: str = DEFAULT_DELIMITER
    show_progress: bool = True

    def __post_init__(self) -> None:
        validate_runtime_constraints(
            targets=self.targets,
            root=self.root,
            output=self.output,
            workers=self.workers,
            extensions=self.extensions,
            delimiter=self.delimiter,
        )
