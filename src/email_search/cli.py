"""CLI entrypoint for email-match-search."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

from .config import (
    DEFAULT_DELIMITER,
    DEFAULT_EXTENSIONS,
    DEFAULT_OUTPUT_NAME,
    DEFAULT_WORKERS,
    SearchConfig,
)
from .errors import ConfigError, ResultSinkError
from .logging_utils import configure_logging, get_logger
from .pipeline import run_search
from .targets import load_targets
from .validation import normalize_extensions


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(
        description="Email Match Search - find the first CSV row holding each target email."
    )
    source_group = parser.add_mutually_exclusive_group(required=True)
    source_group.add_argument(
        "--targets-file", help="Path to target email file (one address per line)."
    )
    source_group.add_argument("--email", help="Search for a single email address.")
    parser.add_argument("--root", required=True, help="Directory to search recursively.")
    parser.add_argument(
        "--output",
        help=f"Results file path (default: <root>/{DEFAULT_OUTPUT_NAME}).",
    )
    parser.add_argument(
        "--workers", type=int, default=DEFAULT_WORKERS, help="Number of worker threads."
    )
    parser.add_argument(
        "--extension",
        action="append",
        help="File extension to scan; repeat for several (default: .csv).",
    )
    parser.add_argument(
        "--delimiter", default=DEFAULT_DELIMITER, help="Field delimiter (default: ',')."
    )
    parser.add_argument("--no-progress", action="store_true", help="Disable tqdm progress bars.")
    parser.add_argument("--log-file", help="Also append log output to this file.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI input."""
    return build_parser().parse_args(argv)


def _materialize_targets(args: argparse.Namespace) -> tuple[str, ...]:
    if args.email:
        return (args.email.strip(),)
    try:
        return tuple(load_targets(args.targets_file))
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read targets file {args.targets_file}: {exc}") from exc


def namespace_to_config(args: argparse.Namespace) -> SearchConfig:
    """Convert CLI args to validated SearchConfig."""
    output = args.output or str(Path(args.root) / DEFAULT_OUTPUT_NAME)
    return SearchConfig(
        targets=_materialize_targets(args),
        root=args.root,
        output=output,
        workers=args.workers,
        extensions=normalize_extensions(args.extension or DEFAULT_EXTENSIONS),
        delimiter=args.delimiter,
        show_progress=not args.no_progress,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint."""
    args = parse_args(argv)
    configure_logging(args.verbose, args.log_file)
    logger = get_logger()
    try:
        config = namespace_to_config(args)
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    try:
        summary = run_search(config, logger=logger)
    except ResultSinkError as exc:
        logger.error("%s", exc)
        return 1
    logger.info("Wrote %d matches to %s", summary.matched, summary.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
