"""Tests for the configuration module."""

import json
import os

import pytest
from pydantic import ValidationError

from runwright.config import (
    ExecutionConfig,
    LoggingConfig,
    ReportConfig,
    RunwrightConfig,
    create_example_config,
    get_default_config,
)


class TestExecutionConfig:
    """Tests for ExecutionConfig."""

    def test_default_values(self):
        """Test default values are set correctly."""
        config = ExecutionConfig()
        assert config.timeout_seconds == 60.0
        assert config.max_parallelism == (os.cpu_count() or 1)
        assert config.include_tags == []
        assert config.exclude_tags == []

    def test_timeout_validation(self):
        with pytest.raises(ValueError):
            ExecutionConfig(timeout_seconds=0)

    def test_parallelism_validation(self):
        with pytest.raises(ValueError):
            ExecutionConfig(max_parallelism=0)

    def test_tags_from_csv(self):
        config = ExecutionConfig(include_tags="Fast, Unit,,", exclude_tags="Slow")
        assert config.include_tags == ["Fast", "Unit"]
        assert config.exclude_tags == ["Slow"]


class TestLoggingConfig:
    """Tests for LoggingConfig."""

    def test_level_is_normalized(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            LoggingConfig(level="chatty")


class TestRunwrightConfig:
    """Tests for RunwrightConfig."""

    def test_default_config(self):
        config = get_default_config()
        assert config.execution.timeout_seconds == 60.0
        assert config.report.output_dir == "./reports"
        assert config.logging.level == "WARNING"

    def test_from_file(self, tmp_path):
        path = tmp_path / "runwright.json"
        path.write_text(
            json.dumps(
                {
                    "execution": {"max_parallelism": 3, "timeout_seconds": 5, "exclude_tags": ["Slow"]},
                    "report": {"title": "Nightly"},
                }
            )
        )

        config = RunwrightConfig.from_file(path)

        assert config.execution.max_parallelism == 3
        assert config.execution.timeout_seconds == 5.0
        assert config.execution.exclude_tags == ["Slow"]
        assert config.report.title == "Nightly"

    def test_from_file_not_found(self):
        with pytest.raises(FileNotFoundError):
            RunwrightConfig.from_file("/nonexistent/path.json")

    def test_find_and_load_searches_parents(self, tmp_path):
        (tmp_path / ".runwright.json").write_text(json.dumps({"execution": {"timeout_seconds": 7}}))
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert RunwrightConfig.find(nested) == (tmp_path / ".runwright.json").resolve()
        assert RunwrightConfig.find_and_load(nested).execution.timeout_seconds == 7.0

    def test_to_file_roundtrip(self, tmp_path):
        config = get_default_config()
        config.report.title = "Saved"
        path = tmp_path / "nested" / "config.json"

        config.to_file(path)

        assert RunwrightConfig.from_file(path).report.title == "Saved"

    def test_create_example_config(self, tmp_path):
        path = tmp_path / "example.json"
        assert create_example_config(path) == path

        data = json.loads(path.read_text())
        assert set(data) == {"execution", "report", "logging"}
        assert data["execution"]["exclude_tags"] == ["Slow"]

    def test_with_overrides(self):
        config = RunwrightConfig(execution=ExecutionConfig(max_parallelism=2, include_tags=["Unit"]))

        updated = config.with_overrides(include_tags="Fast", timeout_seconds=1.5)

        assert updated.execution.include_tags == ["Fast"]
        assert updated.execution.timeout_seconds == 1.5
        assert updated.execution.max_parallelism == 2
        assert config.execution.include_tags == ["Unit"]

    def test_with_overrides_validates(self):
        with pytest.raises(ValidationError):
            RunwrightConfig().with_overrides(max_parallelism=0)

    def test_get_report_dir(self, tmp_path):
        config = RunwrightConfig(report=ReportConfig(output_dir="out"))
        report_dir = config.get_report_dir(tmp_path)
        assert report_dir.is_absolute()
        assert report_dir == (tmp_path / "out").resolve()
