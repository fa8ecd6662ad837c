"""Tests for the lines and filter commands."""

from __future__ import annotations

import json
import os

import pytest
from click.testing import CliRunner

from diffgate.cli.main import cli
from diffgate.diff.algorithms import ALGORITHMS


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def repo(repo_builder):
    repo_builder.commit({"a.txt": "x\ny\nz\n", "gone.txt": "1\n"})
    repo_builder.commit({"a.txt": "x\nY\nz\nw\n", "gone.txt": None})
    return repo_builder


class TestLinesCommand:
    """diffgate lines."""

    def test_text_output(self, runner: CliRunner, repo) -> None:
        result = runner.invoke(cli, ["lines", "HEAD~1", "HEAD", "--repo", str(repo.path)])
        assert result.exit_code == 0, result.output
        assert "a.txt (modify): 2, 4" in result.stdout
        assert "gone.txt (delete): no added lines" in result.stdout

    def test_default_new_revision_is_head(self, runner: CliRunner, repo) -> None:
        result = runner.invoke(cli, ["lines", "HEAD~1", "--repo", str(repo.path)])
        assert result.exit_code == 0, result.output
        assert "a.txt (modify): 2, 4" in result.stdout

    def test_no_changes(self, runner: CliRunner, repo) -> None:
        result = runner.invoke(cli, ["lines", "HEAD", "HEAD", "--repo", str(repo.path)])
        assert result.exit_code == 0
        assert result.stdout.strip() == "No changes."

    def test_json_output(self, runner: CliRunner, repo) -> None:
        result = runner.invoke(cli, ["lines", "HEAD~1", "--repo", str(repo.path), "--json"])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        files = {f["path"]: f for f in payload["files"]}
        assert files["a.txt"]["ranges"] == [[2, 2], [4, 4]]
        assert files["a.txt"]["change"] == "modify"
        assert files["gone.txt"]["delete_only"] is True

    def test_staged(self, runner: CliRunner, repo) -> None:
        repo.stage({"b.txt": "1\n2\n3\n4\n5\n"})
        result = runner.invoke(cli, ["lines", "HEAD~1", "--repo", str(repo.path), "--staged"])
        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines()[0] == "b.txt (add): 1-5"

    def test_algorithm_option(self, runner: CliRunner, repo) -> None:
        result = runner.invoke(
            cli, ["lines", "HEAD~1", "--repo", str(repo.path), "--algorithm", "difflib"]
        )
        assert result.exit_code == 0, result.output
        assert "a.txt (modify): 2, 4" in result.stdout

    def test_algorithm_choices_follow_registry(self, runner: CliRunner, repo) -> None:
        result = runner.invoke(
            cli, ["lines", "HEAD~1", "--repo", str(repo.path), "--algorithm", "histogram"]
        )
        assert result.exit_code == 2
        for name in ALGORITHMS:
            assert name in result.output

    def test_unknown_revision(self, runner: CliRunner, repo) -> None:
        result = runner.invoke(cli, ["lines", "no-such-ref", "--repo", str(repo.path)])
        assert result.exit_code == 1
        assert "no-such-ref" in result.output


class TestFilterCommand:
    """diffgate filter."""

    def test_filters_stdin(self, runner: CliRunner, repo) -> None:
        diagnostics = [
            {"path": "a.txt", "line": 1, "message": "untouched"},
            {"path": "a.txt", "line": 2, "message": "modified", "source": "ruff", "code": "E1"},
            {"path": str(repo.path / "a.txt"), "line": 4, "message": "added"},
        ]

        result = runner.invoke(
            cli,
            ["filter", "HEAD~1", "--repo", str(repo.path)],
            input=json.dumps(diagnostics),
        )

        assert result.exit_code == 0, result.output
        kept = json.loads(result.stdout)
        assert [d["message"] for d in kept] == ["modified", "added"]
        assert kept[0]["source"] == "ruff"
        assert kept[0]["code"] == "E1"

    def test_symlinked_repo_keeps_absolute_paths(self, runner: CliRunner, repo, tmp_path) -> None:
        link = tmp_path / "checkout"
        os.symlink(repo.path, link)
        diagnostics = [{"path": str(link / "a.txt"), "line": 2, "message": "modified"}]

        result = runner.invoke(
            cli, ["filter", "HEAD~1", "--repo", str(link)], input=json.dumps(diagnostics)
        )

        assert result.exit_code == 0, result.output
        assert [d["message"] for d in json.loads(result.stdout)] == ["modified"]

    def test_input_file(self, runner: CliRunner, repo, tmp_path) -> None:
        input_file = tmp_path / "diags.json"
        input_file.write_text(json.dumps([{"path": "a.txt", "line": 4, "message": "m"}]))
        result = runner.invoke(
            cli, ["filter", "HEAD~1", "--repo", str(repo.path), "--input", str(input_file)]
        )
        assert result.exit_code == 0, result.output
        assert len(json.loads(result.stdout)) == 1

    def test_invalid_json(self, runner: CliRunner, repo) -> None:
        result = runner.invoke(cli, ["filter", "HEAD~1", "--repo", str(repo.path)], input="{oops")
        assert result.exit_code == 1
        assert "not valid JSON" in result.output

    def test_not_an_array(self, runner: CliRunner, repo) -> None:
        result = runner.invoke(
            cli, ["filter", "HEAD~1", "--repo", str(repo.path)], input='{"path": "a"}'
        )
        assert result.exit_code == 1
        assert "JSON array" in result.output

    def test_missing_field(self, runner: CliRunner, repo) -> None:
        result = runner.invoke(
            cli, ["filter", "HEAD~1", "--repo", str(repo.path)], input='[{"path": "a.txt"}]'
        )
        assert result.exit_code == 1
        assert "Invalid diagnostic" in result.output


class TestMain:
    """Top-level group."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert "lines" in result.output
        assert "filter" in result.output
