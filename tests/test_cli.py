"""Tests for the show, convert and config subcommands."""

from __future__ import annotations

from pathlib import Path

import pytest

pytest.importorskip("rich")

from click.testing import CliRunner

from simetimer import cli
from simetimer.chunks import TimeChunk
from simetimer.codec import FileFormat, load_project, save_project
from simetimer.project import Project


@pytest.fixture(autouse=True)
def no_log_files(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda debug=False: None)


def _saved(tmp_path: Path, fmt: FileFormat) -> Path:
    path = tmp_path / f"work.{fmt.value}"
    save_project(Project([TimeChunk(1000, 500, "design"), TimeChunk(2000, 250, "")]), path, fmt)
    return path


def test_show_prints_rows_and_total(tmp_path: Path) -> None:
    path = _saved(tmp_path, FileFormat.PLAIN)
    result = CliRunner().invoke(cli.main, ["show", str(path), "--format", "plain"])
    assert result.exit_code == 0, result.output
    assert "design" in result.output
    assert "0:00:00.750" in result.output


def test_show_uses_configured_format(tmp_path: Path, monkeypatch) -> None:
    path = _saved(tmp_path, FileFormat.BYTE)
    monkeypatch.setattr(cli, "load_config", lambda: {"file_format": "byte"})
    result = CliRunner().invoke(cli.main, ["show", str(path)])
    assert result.exit_code == 0, result.output
    assert "design" in result.output


def test_show_missing_file_fails(tmp_path: Path) -> None:
    result = CliRunner().invoke(cli.main, ["show", str(tmp_path / "nope.stp"), "--format", "plain"])
    assert result.exit_code == 1
    assert "could not be found" in result.output


def test_show_corrupt_file_fails(tmp_path: Path) -> None:
    path = tmp_path / "bad.stp"
    path.write_text("not a project\n", encoding="utf-8")
    result = CliRunner().invoke(cli.main, ["show", str(path), "--format", "plain"])
    assert result.exit_code == 1
    assert "could not be read" in result.output


def test_show_rejects_unknown_format(tmp_path: Path) -> None:
    path = _saved(tmp_path, FileFormat.PLAIN)
    result = CliRunner().invoke(cli.main, ["show", str(path), "--format", "xml"])
    assert result.exit_code == 2


def test_convert_plain_to_byte(tmp_path: Path) -> None:
    source = _saved(tmp_path, FileFormat.PLAIN)
    target = tmp_path / "work.bin"
    result = CliRunner().invoke(
        cli.main, ["convert", str(source), str(target), "--from", "plain", "--to", "byte"],
    )
    assert result.exit_code == 0, result.output
    assert load_project(target, FileFormat.BYTE) == load_project(source, FileFormat.PLAIN)


def test_convert_legacy_plain(tmp_path: Path) -> None:
    source = tmp_path / "old.stp"
    source.write_text("1000\t500\n", encoding="utf-8")
    target = tmp_path / "new.stp"
    result = CliRunner().invoke(
        cli.main,
        ["convert", str(source), str(target), "--from", "plain", "--to", "plain", "--legacy"],
    )
    assert result.exit_code == 0, result.output
    assert list(load_project(target, FileFormat.PLAIN)) == [TimeChunk(1000, 500)]


def test_config_show(isolated_config) -> None:
    result = CliRunner().invoke(cli.main, ["config", "--show"])
    assert result.exit_code == 0, result.output
    assert "file_format" in result.output
    assert isolated_config.exists()
