"""CLI parser and command behaviour tests."""

from __future__ import annotations

import json

import pytest

from manifestgen.cli import _build_parser, main


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "generate"])
    assert args.verbose is True
    assert args.command == "generate"
    assert args.path == "."


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["inspect", "--verbose"])
    assert args.verbose is True
    assert args.command == "inspect"


def test_cli_accepts_generate_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        ["generate", "docs", "--catalog", "examples.yml", "--output-dir", "out", "--dry-run"]
    )
    assert args.path == "docs"
    assert args.catalog == "examples.yml"
    assert args.output_dir == "out"
    assert args.dry_run is True


def test_cli_inspect_prints_json(project_builder, capsys) -> None:
    project_builder.config("project: QtWidgets\ncatalog: examples.yml\n")
    project_builder.catalog(
        """
        - name: widgets/analogclock
          title: Analog Clock
          files: [analogclock/analogclock.cpp, analogclock/main.cpp]
        """
    )

    main(["inspect", str(project_builder.path())])

    payload = json.loads(capsys.readouterr().out)
    [entry] = payload["examples"]
    assert entry["tags"] == ["analog", "clock", "qt", "widgets"]
    assert entry["files"] == [{"path": "analogclock/analogclock.cpp", "priority": 1, "main": True}]
    assert "widgets/analogclock: missing attribute imageUrl" in payload["warnings"]


def test_cli_generate_exits_on_missing_catalog(project_builder, capsys) -> None:
    project_builder.config("project: QtWidgets\n")

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(project_builder.path())])

    assert excinfo.value.code == 1
    assert "No example catalog" in capsys.readouterr().err


def test_cli_log_file_records_debug_output(project_builder, capsys) -> None:
    project_builder.config("project: QtWidgets\ncatalog: examples.yml\n")
    project_builder.catalog(
        """
        - name: widgets/analogclock
          title: Analog Clock
          files: [analogclock/analogclock.cpp]
        """
    )
    log_file = project_builder.path() / "logs" / "manifestgen.log"

    main(["inspect", str(project_builder.path()), "--log-file", str(log_file)])

    log_text = log_file.read_text(encoding="utf-8")
    assert "DEBUG manifestgen.orchestrator: Catalog lists 1 example(s)" in log_text
    assert "widgets/analogclock: missing attribute imageUrl" in log_text
    stderr = capsys.readouterr().err
    assert "Catalog lists" not in stderr
    assert "[manifestgen] WARNING widgets/analogclock: missing attribute imageUrl" in stderr


def test_cli_inspect_exits_when_catalog_is_a_directory(project_builder, capsys) -> None:
    project_builder.config("project: QtWidgets\n")
    catalog_dir = project_builder.path() / "catalog"
    catalog_dir.mkdir()

    with pytest.raises(SystemExit) as excinfo:
        main(["inspect", str(project_builder.path()), "--catalog", str(catalog_dir)])

    assert excinfo.value.code == 1
    assert "manifestgen inspect failed" in capsys.readouterr().err
