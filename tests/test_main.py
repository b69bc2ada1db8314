"""Unit tests for the command line."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from main import cli


class TestCommands:
    """Tests for one-shot commands against a temp document."""

    @pytest.fixture
    def runner(self) -> CliRunner:
        return CliRunner()

    @pytest.fixture
    def doc(self, tmp_path: Path) -> Path:
        return tmp_path / "tasks.json"

    def _invoke(self, runner: CliRunner, doc: Path, *args: str):
        return runner.invoke(cli, ["--file", str(doc), *args])

    def test_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Personal task boards" in result.output

    def test_add_and_show(self, runner: CliRunner, doc: Path) -> None:
        result = self._invoke(runner, doc, "add", "buy", "milk")
        assert result.exit_code == 0
        assert "Task 1 added." in result.output

        result = self._invoke(runner, doc)
        assert result.exit_code == 0
        assert "@actual" in result.output
        assert "1. [ ] buy milk" in result.output
        assert "0% of all tasks complete" in result.output

    def test_done_and_stats(self, runner: CliRunner, doc: Path) -> None:
        for text in ("a", "b", "c", "d"):
            self._invoke(runner, doc, "add", text)
        for tid in ("1", "2", "3"):
            assert self._invoke(runner, doc, "done", tid).exit_code == 0

        result = self._invoke(runner, doc, "stats")
        assert result.exit_code == 0
        assert "75% of all tasks complete" in result.output
        assert "3 done | 1 in progress" in result.output

        data = json.loads(doc.read_text(encoding="utf-8"))
        assert [t["status"] for t in data["boards"][0]["tasks"]] == [True, True, True, False]

    def test_board_then_add_to_it(self, runner: CliRunner, doc: Path) -> None:
        assert self._invoke(runner, doc, "board", "Work", "--active").exit_code == 0
        result = self._invoke(runner, doc, "add", "-b", "work", "ship")
        assert result.exit_code == 0
        data = json.loads(doc.read_text(encoding="utf-8"))
        assert data["boards"] == [
            {"id": 1, "name": "Work", "status": True,
             "tasks": [{"id": 1, "name": "ship", "status": False}]},
        ]

    def test_show_pattern(self, runner: CliRunner, doc: Path) -> None:
        self._invoke(runner, doc, "add", "buy milk")
        self._invoke(runner, doc, "add", "fix bike")
        result = self._invoke(runner, doc, "show", "bke")
        assert "fix bike" in result.output
        assert "buy milk" not in result.output

    def test_empty_store(self, runner: CliRunner, doc: Path) -> None:
        result = self._invoke(runner, doc, "show")
        assert result.exit_code == 0
        assert "No tasks were found." in result.output

    @pytest.mark.parametrize("args,message", [
        (("board", "bad name"), "must not contain spaces"),
        (("board", "actual"), "already exists"),
        (("add", "-b", "nowhere", "x"), 'Board "nowhere" not found.'),
        (("done", "9"), "Task id 9 not found"),
    ])
    def test_domain_errors_exit_nonzero(self, runner: CliRunner, doc: Path,
                                        args, message: str) -> None:
        self._invoke(runner, doc, "add", "first")
        before = doc.read_text(encoding="utf-8")
        result = self._invoke(runner, doc, *args)
        assert result.exit_code == 1
        assert message in result.output
        assert doc.read_text(encoding="utf-8") == before

    def test_corrupt_document(self, runner: CliRunner, doc: Path) -> None:
        doc.write_text("{broken", encoding="utf-8")
        result = self._invoke(runner, doc, "stats")
        assert result.exit_code == 1
        assert "invalid JSON" in result.output

    def test_file_from_env(self, runner: CliRunner, tmp_path: Path) -> None:
        target = tmp_path / "from-env.json"
        result = runner.invoke(cli, ["add", "x"], env={"TASKBOARD_FILE": str(target)})
        assert result.exit_code == 0
        assert target.exists()

    def test_done_rejects_non_positive_id(self, runner: CliRunner, doc: Path) -> None:
        result = self._invoke(runner, doc, "done", "0")
        assert result.exit_code == 2
