"""Validation and runtime guardrails."""

from __future__ import annotations

from pathlib import Path

from .errors import ConfigError


def normalize_extensions(extensions: list[str] | tuple[str, ...]) -> tuple[str, ...]:
    """Lower-case and dedupe extensions, adding a leading dot where missing."""
    output: list[str] = []
    for raw in extensions:
        value = raw.strip().lower()
        if not value:
            continue
        if not value.startswith("."):
            value = "." + value
        if value not in output:
            output.append(value)
    return tuple(output)


def validate_runtime_constraints(
    *,
    targets: tuple[str, ...],
    root: str,
    output: str,
    workers: int,
    extensions: tuple[str, ...],
    delimiter: str,
) -> None:
    """Validate CLI/runtime configuration and raise ConfigError on invalid values."""
    if not any(target.strip() for target in targets):
        raise ConfigError("Provide at least one target via --targets-file or --email.")
    if not Path(root).is_dir():
        raise ConfigError(f"--root is not a directory: {root}")
    if not output:
        raise ConfigError("--output must not be empty.")
    if Path(output).is_dir():
        raise ConfigError(f"--output points at a directory: {output}")
    if workers < 1:
        raise ConfigError("--workers must be >= 1.")
    if not extensions:
        raise ConfigError("Provide at least one --extension.")
    if any(not ext.startswith(".") or len(ext) < 2 for ext in extensions):
        raise ConfigError("--extension values must look like '.csv'.")
    if len(delimiter) != 1:
        raise ConfigError("--delimiter must be a single character.")
