"""Tests for the command-line interface."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from runwright.cli import main

SUITE = """
import time

from runwright import assertions
from runwright.discovery import fixture, tag, test, test_class, use_fixture


@fixture(name="TestList")
def test_list():
    yield [1, 2, 3]


@test_class
class Sample:
    @test
    @tag("Fast")
    @use_fixture("TestList")
    def test_fast(self, values):
        values.append(4)
        assertions.are_equal(4, len(values))

    @test
    @tag("Slow")
    def test_slow(self):
        time.sleep(0.05)
"""

FAILING_SUITE = """
from runwright import assertions
from runwright.discovery import tag, test, test_class, use_fixture


@test_class
class Broken:
    @test
    @tag("Fast")
    def test_wrong(self):
        assertions.are_equal(42, 7)

    @test
    @use_fixture("Missing")
    def test_missing(self, value):
        pass

    @test
    @tag("Hang")
    def test_hang(self):
        import time
        time.sleep(2)
"""


@pytest.fixture
def runner():
    return CliRunner()


class TestRunCommand:
    """Tests for `runwright run`."""

    def test_all_pass(self, runner, write_module):
        path = write_module("cli_passing_suite", SUITE)

        result = runner.invoke(main, ["run", str(path)])

        assert result.exit_code == 0, result.output
        assert "All tests passed!" in result.output

    def test_failures_exit_one(self, runner, write_module, tmp_path):
        path = write_module("cli_failing_suite", FAILING_SUITE)
        json_path = tmp_path / "out.json"

        result = runner.invoke(
            main, ["run", str(path), "--timeout", "0.2", "--json", str(json_path)]
        )

        assert result.exit_code == 1, result.output
        data = json.loads(json_path.read_text())
        outcomes = {r["test_name"]: r for r in data["results"]}
        assert outcomes["Broken.test_wrong"]["outcome"] == "failed"
        assert outcomes["Broken.test_missing"]["outcome"] == "error"
        assert "Missing" in outcomes["Broken.test_missing"]["message"]
        assert outcomes["Broken.test_hang"]["outcome"] == "timed_out"
        assert data["metadata"]["timeout_seconds"] == 0.2

    def test_tag_filters(self, runner, write_module, tmp_path):
        path = write_module("cli_tagged_suite", SUITE)
        json_path = tmp_path / "tagged.json"

        result = runner.invoke(
            main,
            ["run", str(path), "--include-tags", "Fast,Slow", "--exclude-tags", "Slow", "--json", str(json_path)],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(json_path.read_text())
        assert [r["test_name"] for r in data["results"]] == ["Sample.test_fast"]
        assert data["results"][0]["tags"] == ["Fast"]

    def test_nothing_admitted_is_not_a_crash(self, runner, write_module):
        path = write_module("cli_empty_suite", SUITE)

        result = runner.invoke(main, ["run", str(path), "--include-tags", "Nope"])

        assert result.exit_code == 0, result.output
        assert "No tests were run" in result.output

    def test_parallel_option(self, runner, write_module):
        path = write_module("cli_parallel_suite", SUITE)
        result = runner.invoke(main, ["run", str(path), "--parallel", "1"])
        assert result.exit_code == 0, result.output

    def test_invalid_parallel(self, runner, write_module):
        path = write_module("cli_invalid_suite", SUITE)
        result = runner.invoke(main, ["run", str(path), "--parallel", "0"])
        assert result.exit_code == 1
        assert "Invalid option" in result.output

    def test_missing_module_is_metadata_error(self, runner, tmp_path):
        result = runner.invoke(main, ["run", str(tmp_path / "absent.py")])

        assert result.exit_code == 2
        assert "Error loading tests" in result.output

    def test_import_failure_is_metadata_error(self, runner, write_module):
        path = write_module("cli_broken_suite", "raise ImportError('nope')\n")

        result = runner.invoke(main, ["run", str(path)])

        assert result.exit_code == 2
        assert "Error loading tests" in result.output

    def test_html_report(self, runner, write_module, tmp_path):
        path = write_module("cli_html_suite", SUITE)

        with runner.isolated_filesystem(temp_dir=tmp_path) as workdir:
            result = runner.invoke(main, ["run", str(path), "--html"])
            assert result.exit_code == 0, result.output
            report = Path(workdir) / "reports" / "test_report.html"
            assert report.exists()

    def test_config_file(self, runner, write_module, tmp_path):
        path = write_module("cli_config_suite", SUITE)
        config_path = tmp_path / "runwright.json"
        config_path.write_text(json.dumps({"execution": {"exclude_tags": ["Fast"]}}))
        json_path = tmp_path / "configured.json"

        result = runner.invoke(
            main, ["--config", str(config_path), "run", str(path), "--json", str(json_path)]
        )

        assert result.exit_code == 0, result.output
        data = json.loads(json_path.read_text())
        assert [r["test_name"] for r in data["results"]] == ["Sample.test_slow"]


class TestInitCommand:
    """Tests for `runwright init`."""

    def test_creates_config(self, runner, tmp_path):
        output = tmp_path / "runwright.json"

        result = runner.invoke(main, ["init", "--output", str(output)])

        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text())["execution"]["timeout_seconds"] == 60.0

    def test_refuses_to_overwrite(self, runner, tmp_path):
        output = tmp_path / "runwright.json"
        output.write_text("{}")

        result = runner.invoke(main, ["init", "--output", str(output)])

        assert result.exit_code == 1
        assert "already exists" in result.output


class TestListCommand:
    """Tests for `runwright list`."""

    def test_lists_cases(self, runner, write_module):
        path = write_module("cli_list_suite", SUITE)

        result = runner.invoke(main, ["list", str(path), "--exclude-tags", "Slow"])

        assert result.exit_code == 0, result.output
        assert "Sample.test_fast" in result.output
        assert "Sample.test_slow" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "runwright" in result.output
