"""Tests for the calcgraph command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from calcgraph.cli import main


def _run(*args: str):
    runner = CliRunner()
    return runner.invoke(main, list(args))


class TestEvalCommand:
    def test_eval(self) -> None:
        result = _run("eval", "1 + 2 * 3")
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == ["1 + 2 * 3 = 7", "( 1 + ( 2 * 3 ) )"]

    def test_eval_no_tree(self) -> None:
        result = _run("eval", "--no-tree", "Add(2, 3)")
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "Add(2, 3) = 5"

    def test_eval_with_assignments(self) -> None:
        result = _run("eval", "[price] * qty", "--set", "price=2.5", "--set", "qty=4")
        assert result.exit_code == 0, result.output
        assert "prop1 * qty = 10" in result.output

    def test_eval_json(self) -> None:
        result = _run("eval", "--json", "Add(2, 3)")
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["value"] == "5"
        assert data["rendered"] == "( Add ( 2 , 3 ) )"

    def test_eval_leading_minus(self) -> None:
        result = _run("eval", "--", "-5 + 3")
        assert result.exit_code == 0, result.output
        assert "-5 + 3 = -2" in result.output

    def test_eval_error(self) -> None:
        result = _run("eval", "(1 + 2")
        assert result.exit_code == 1
        assert "mismatching brackets" in result.output

    def test_eval_bad_assignment(self) -> None:
        result = _run("eval", "x", "--set", "x")
        assert result.exit_code == 1
        assert "name=value" in result.output

    def test_eval_with_project_logs(self, tmp_path: Path) -> None:
        (tmp_path / "calcgraph.yaml").write_text("variables:\n  x: 4\n")
        result = _run("eval", "x * 2", "--project", str(tmp_path))
        assert result.exit_code == 0, result.output
        assert "x * 2 = 8" in result.output

        logs = _run("logs", "--project", str(tmp_path))
        assert logs.exit_code == 0, logs.output
        assert "formula_evaluated" in logs.output
        assert "x * 2 = 8" in logs.output


class TestOtherCommands:
    def test_tokens(self) -> None:
        result = _run("tokens", "a + 1")
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert len(lines) == 3
        assert "NAME" in lines[0]
        assert "OPERATOR" in lines[1]
        assert "NUMBER" in lines[2]

    def test_functions(self) -> None:
        result = _run("functions")
        assert result.exit_code == 0, result.output
        assert "Add  (2 argument(s))" in result.output
        assert "Substr" in result.output

    def test_logs_empty(self, tmp_path: Path) -> None:
        result = _run("logs", "--project", str(tmp_path))
        assert result.exit_code == 0, result.output
        assert "No events." in result.output

    def test_version(self) -> None:
        result = _run("--version")
        assert result.exit_code == 0
        assert "0.1.0" in result.output
