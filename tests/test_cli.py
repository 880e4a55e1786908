"""Tests for the buildlog-compdb CLI."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from buildlog_compdb.cli import main
from buildlog_compdb.database import DATABASE_FILENAME


class TestUsage:
    def test_no_arguments(self):
        result = CliRunner().invoke(main, [])
        assert result.exit_code != 0
        assert "Usage:" in result.output

    def test_too_many_arguments(self):
        result = CliRunner().invoke(main, ["a.log", "b.log"])
        assert result.exit_code != 0
        assert "Usage:" in result.output


class TestRun:
    def test_writes_database(self, log_file: Path):
        result = CliRunner().invoke(main, [str(log_file)])
        db = log_file.parent / DATABASE_FILENAME

        assert result.exit_code == 0, result.output
        assert "There are 0 existing compile commands and 3 new compile commands" in result.output
        assert f"Successfully wrote compile commands to {db}" in result.output
        assert len(json.loads(db.read_text())) == 3

    def test_counts_existing(self, log_file: Path):
        runner = CliRunner()
        runner.invoke(main, [str(log_file)])
        result = runner.invoke(main, [str(log_file)])
        assert "There are 3 existing compile commands and 3 new compile commands" in result.output

    def test_output_option(self, log_file: Path, tmp_path: Path):
        out = tmp_path / "custom.json"
        result = CliRunner().invoke(main, [str(log_file), "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert out.exists()

    def test_flush_trailing_flag(self, tmp_path: Path):
        log = tmp_path / "buildfre.log"
        log.write_text("0001>BUILDMSG: Processing /src/a\n0001>cl /c a.c")
        result = CliRunner().invoke(main, [str(log), "--flush-trailing"])
        assert result.exit_code == 0, result.output
        assert "1 new compile commands" in result.output

    def test_flush_trailing_env(self, tmp_path: Path):
        log = tmp_path / "buildfre.log"
        log.write_text("0001>BUILDMSG: Processing /src/a\n0001>cl /c a.c")
        result = CliRunner().invoke(main, [str(log)], env={"COMPDB_FLUSH_TRAILING": "1"})
        assert "1 new compile commands" in result.output

    def test_timings(self, log_file: Path):
        result = CliRunner().invoke(main, [str(log_file), "--timings"])
        assert result.exit_code == 0, result.output
        assert "Pipeline summary" in result.output
        assert "[+] parse" in result.output


class TestErrors:
    def test_missing_log(self, tmp_path: Path):
        missing = tmp_path / "nope.log"
        result = CliRunner().invoke(main, [str(missing)])
        assert result.exit_code == 1
        assert "Failed to read build log" in result.output
        assert not (tmp_path / DATABASE_FILENAME).exists()

    def test_missing_thread_directory(self, tmp_path: Path):
        log = tmp_path / "buildfre.log"
        log.write_text("0042>cl /c a.c\nBUILD: done\n")
        result = CliRunner().invoke(main, [str(log)])
        assert result.exit_code == 1
        assert "thread 0042" in result.output
        assert not (tmp_path / DATABASE_FILENAME).exists()

    def test_corrupt_database(self, log_file: Path):
        db = log_file.parent / DATABASE_FILENAME
        db.write_text("not json")
        result = CliRunner().invoke(main, [str(log_file)])
        assert result.exit_code == 1
        assert str(db) in result.output
        assert db.read_text() == "not json"
