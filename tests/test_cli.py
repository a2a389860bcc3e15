"""
Test suite for the main CLI interface.
"""

import json

import pytest
from typer.testing import CliRunner

from todotree import __version__
from todotree.cli import app

runner = CliRunner()

NOW = "2025-03-01T12:00:00+00:00"


class TestCLI:
    """Test cases for the main CLI application."""

    def test_cli_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "todotree" in result.stdout

    def test_cli_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    @pytest.mark.parametrize("command", ["tree", "due", "check", "init"])
    def test_command_exists(self, command):
        result = runner.invoke(app, [command, "--help"])
        assert result.exit_code == 0

    def test_tree_outline(self, write_task_file, school_document):
        path = write_task_file(school_document)
        result = runner.invoke(app, ["tree", "--file", str(path), "--now", NOW])
        assert result.exit_code == 0, result.output
        lines = result.stdout.splitlines()
        assert lines == [
            "[2] School",
            "  [2] AP CSP",
            "    [ ] Computering (in 1 hour)",
            "    [X] Computering alos (1 hour ago)",
        ]

    def test_tree_collapsed_group(self, write_task_file, school_document):
        school_document["tasks"][0]["children"][0]["collapsed"] = True
        path = write_task_file(school_document)
        result = runner.invoke(app, ["tree", "--file", str(path), "--now", NOW])
        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines() == ["[2] School", "  [2] AP CSP"]

        result = runner.invoke(app, ["tree", "--expand-all", "--file", str(path), "--now", NOW])
        assert result.exit_code == 0, result.output
        assert "    [ ] Computering (in 1 hour)" in result.stdout.splitlines()

    def test_tree_all_shows_expired(self, write_task_file, school_document):
        path = write_task_file(school_document)
        result = runner.invoke(app, ["tree", "--all", "--file", str(path), "--now", NOW])
        assert result.exit_code == 0, result.output
        assert "[*] Computering alos2" in result.stdout

    def test_tree_json(self, write_task_file, school_document):
        path = write_task_file(school_document)
        result = runner.invoke(app, ["tree", "--json", "--file", str(path), "--now", NOW])
        assert result.exit_code == 0, result.output
        rows = json.loads(result.stdout)
        assert [(r["label"], r["depth"], r["status"]) for r in rows] == [
            ("School", 0, "late"),
            ("AP CSP", 1, "late"),
            ("Computering", 2, "open"),
            ("Computering alos", 2, "late"),
        ]

    def test_due_listing(self, write_task_file, school_document):
        path = write_task_file(school_document)
        result = runner.invoke(app, ["due", "--file", str(path), "--now", NOW])
        assert result.exit_code == 0, result.output
        assert "Late (1)" in result.stdout
        assert "Computering alos" in result.stdout
        assert "School > AP CSP" in result.stdout
        assert "Due: nothing" in result.stdout
        assert "Complete: nothing" in result.stdout

    def test_due_json_with_separator(self, write_task_file, school_document):
        path = write_task_file(school_document)
        result = runner.invoke(app, ["due", "--json", "--separator", "/", "--file", str(path), "--now", NOW])
        assert result.exit_code == 0, result.output
        buckets = json.loads(result.stdout)
        assert list(buckets) == ["late", "due", "complete"]
        assert [(e["label"], e["breadcrumb"]) for e in buckets["late"]] == [("Computering alos", "School/AP CSP")]

    def test_due_later_moves_task_to_due(self, write_task_file, school_document):
        path = write_task_file(school_document)
        result = runner.invoke(app, ["due", "--json", "--file", str(path), "--now", "2025-03-01T14:00:00+00:00"])
        buckets = json.loads(result.stdout)
        assert [e["label"] for e in buckets["due"]] == ["Computering"]

    def test_check(self, write_task_file, school_document):
        path = write_task_file(school_document)
        result = runner.invoke(app, ["check", "--file", str(path), "--now", NOW])
        assert result.exit_code == 0, result.output
        assert "5 tasks, 3 leaves" in result.stdout
        assert "done-expired" in result.stdout

    def test_init_then_tree(self, tmp_path):
        path = tmp_path / "conf" / "tasks.json"
        result = runner.invoke(app, ["init", "--file", str(path)])
        assert result.exit_code == 0, result.output
        assert path.exists()

        result = runner.invoke(app, ["tree", "--file", str(path)])
        assert result.exit_code == 0, result.output
        assert "[4] Welcome" in result.stdout
        assert "  [1] Subgroup" in result.stdout

    def test_init_refuses_to_overwrite(self, write_task_file, school_document):
        path = write_task_file(school_document)
        result = runner.invoke(app, ["init", "--file", str(path)])
        assert result.exit_code == 1
        assert "School" in path.read_text()

        result = runner.invoke(app, ["init", "--force", "--file", str(path)])
        assert result.exit_code == 0
        assert "Welcome" in path.read_text()

    def test_file_from_environment(self, monkeypatch, write_task_file, school_document):
        path = write_task_file(school_document)
        monkeypatch.setenv("TODOTREE_FILE", str(path))
        result = runner.invoke(app, ["tree", "--now", NOW])
        assert result.exit_code == 0, result.output
        assert "School" in result.stdout


class TestCLIErrors:
    """Test error handling in CLI commands."""

    def test_invalid_command(self):
        result = runner.invoke(app, ["nonexistent-command"])
        assert result.exit_code != 0

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["tree", "--file", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_rejected_deadlines(self, write_task_file):
        path = write_task_file({"tasks": [{"label": "a", "dueDate": "2025-03-02T00:00:00Z", "lateDate": "2025-03-01T00:00:00Z"}]})
        result = runner.invoke(app, ["due", "--file", str(path)])
        assert result.exit_code == 1
        assert "becomes late" in result.output

    def test_unusable_window(self, write_task_file):
        path = write_task_file('{"tasks": [{"label": "a", "doneVisibleHours": NaN}]}')
        result = runner.invoke(app, ["tree", "--file", str(path)])
        assert result.exit_code == 1
        assert "doneVisibleHours" in result.output

    def test_init_into_directory(self, tmp_path):
        result = runner.invoke(app, ["init", "--force", "--file", str(tmp_path)])
        assert result.exit_code == 1
        assert "Could not write" in result.output

    def test_unparseable_now(self, write_task_file, school_document):
        path = write_task_file(school_document)
        result = runner.invoke(app, ["tree", "--file", str(path), "--now", "zzqx not a date"])
        assert result.exit_code == 2


if __name__ == "__main__":
    pytest.main([__file__])
