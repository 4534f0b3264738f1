from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner

from harmonylayers.infrastructure.db import get_connection
from harmonylayers.infrastructure.db.repositories import LayerRepository
from harmonylayers.interfaces.cli import layers


def _seed(db_file: Path, rows: dict[str, str]) -> None:
    with get_connection(db_file) as conn:
        repo = LayerRepository(conn)
        for title, config in rows.items():
            repo.add(title, config)


def test_list_layers(tmp_path: Path) -> None:
    db_file = tmp_path / "layers.db"
    _seed(db_file, {"base": "[Subsystems]\n", "mig1": "x = 1\n", "blank": ""})
    runner = CliRunner()

    result = runner.invoke(layers, ["--db", str(db_file), "list"])

    assert result.exit_code == 0
    assert "base" in result.output
    assert "mig1" in result.output
    assert "blank" not in result.output


def test_list_layers_empty(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(layers, ["--db", str(tmp_path / "layers.db"), "list"])

    assert result.exit_code == 0
    assert "No layers found" in result.output


def test_show_layer(tmp_path: Path) -> None:
    db_file = tmp_path / "layers.db"
    _seed(db_file, {"base": "[Subsystems]\n  EnableWindowPost = true\n"})
    runner = CliRunner()

    result = runner.invoke(layers, ["--db", str(db_file), "show", "base"])

    assert result.exit_code == 0
    assert "EnableWindowPost = true" in result.output


def test_show_missing_layer(tmp_path: Path) -> None:
    db_file = tmp_path / "layers.db"
    _seed(db_file, {"blank": ""})
    runner = CliRunner()

    missing = runner.invoke(layers, ["--db", str(db_file), "show", "prod"])
    blank = runner.invoke(layers, ["--db", str(db_file), "show", "blank"])

    assert missing.exit_code == 1
    assert "not found" in missing.output
    assert blank.exit_code == 1


def test_unreachable_database_reports_error(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    db_file = blocker / "layers.db"
    runner = CliRunner()

    show_result = runner.invoke(layers, ["--db", str(db_file), "show", "base"])
    list_result = runner.invoke(layers, ["--db", str(db_file), "list"])

    assert show_result.exit_code == 1
    assert "Failed to connect to database" in show_result.output
    assert list_result.exit_code == 1
