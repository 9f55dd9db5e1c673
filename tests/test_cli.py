from pathlib import Path

import pytest

from email_search import cli
from email_search.config import DEFAULT_OUTPUT_NAME
from email_search.errors import ResultSinkError


def test_parse_args_with_targets_file() -> None:
    args = cli.parse_args(["--targets-file", "targets.txt", "--root", "data"])
    assert args.targets_file == "targets.txt"
    assert args.root == "data"


def test_parse_args_requires_exactly_one_source() -> None:
    with pytest.raises(SystemExit):
        cli.parse_args(["--root", "data"])
    with pytest.raises(SystemExit):
        cli.parse_args(["--root", "data", "--email", "a@x.com", "--targets-file", "t.txt"])


def test_namespace_to_config_defaults_output_inside_root(tmp_path: Path) -> None:
    args = cli.parse_args(
        ["--email", " a@x.com ", "--root", str(tmp_path), "--extension", "CSV", "--extension", ".txt"]
    )
    config = cli.namespace_to_config(args)
    assert config.targets == ("a@x.com",)
    assert config.output == str(tmp_path / DEFAULT_OUTPUT_NAME)
    assert config.extensions == (".csv", ".txt")


def test_main_runs_search_end_to_end(tmp_path: Path) -> None:
    (tmp_path / "a.csv").write_text("alice@x.com,Jane,bob@x.com\n", encoding="utf-8")
    targets = tmp_path / "targets.txt"
    targets.write_text("bob@x.com\n", encoding="utf-8")

    code = cli.main(["--targets-file", str(targets), "--root", str(tmp_path), "--no-progress"])

    assert code == 0
    results = (tmp_path / DEFAULT_OUTPUT_NAME).read_text(encoding="utf-8")
    assert results == "1,alice@x.com,Jane,bob@x.com\n"


def test_main_returns_two_on_invalid_config(tmp_path: Path) -> None:
    assert cli.main(["--email", "a@x.com", "--root", str(tmp_path), "--workers", "0"]) == 2
    assert cli.main(["--email", "a@x.com", "--root", str(tmp_path / "missing")]) == 2
    assert cli.main(["--targets-file", str(tmp_path / "none.txt"), "--root", str(tmp_path)]) == 2


def test_main_returns_one_when_results_file_cannot_be_created(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def failing_run_search(config, logger):
        raise ResultSinkError(f"Cannot create results file {config.output}")

    monkeypatch.setattr(cli, "run_search", failing_run_search)
    assert cli.main(["--email", "a@x.com", "--root", str(tmp_path)]) == 1
