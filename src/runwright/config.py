"""Configuration management for Runwright."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from runwright.core.filtering import parse_tag_list


def _default_parallelism() -> int:
    return os.cpu_count() or 1


class ExecutionConfig(BaseModel):
    """Test execution configuration."""

    max_parallelism: int = Field(
        default_factory=_default_parallelism,
        description="Maximum number of test cases running at once (default: CPU count)",
    )
    timeout_seconds: float = Field(default=60.0, description="Per-test timeout")
    include_tags: list[str] = Field(
        default_factory=list, description="Run only tests carrying one of these tags"
    )
    exclude_tags: list[str] = Field(
        default_factory=list, description="Never run tests carrying one of these tags"
    )

    @field_validator("max_parallelism")
    @classmethod
    def validate_parallelism(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Parallelism must be at least 1")
        return v

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v

    @field_validator("include_tags", "exclude_tags", mode="before")
    @classmethod
    def split_tags(cls, v):
        if isinstance(v, str):
            return sorted(parse_tag_list(v))
        return v


class ReportConfig(BaseModel):
    """Report generation configuration."""

    output_dir: str = Field(default="./reports", description="Directory for report output")
    json_filename: str = Field(default="results.json", description="JSON report filename")
    html_filename: str = Field(default="test_report.html", description="HTML report filename")
    title: str = Field(default="Test Results", description="Report title")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="WARNING", description="Log level name")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level


class RunwrightConfig(BaseModel):
    """Main configuration for Runwright."""

    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "RunwrightConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "r") as f:
            data = json.load(f)

        return cls.model_validate(data)

    @classmethod
    def find(cls, start_dir: Path | str | None = None) -> Optional[Path]:
        """Find a configuration file, searching up the directory tree."""
        if start_dir is None:
            start_dir = Path.cwd()
        else:
            start_dir = Path(start_dir)

        config_names = ["runwright.json", ".runwright.json"]

        current = start_dir.resolve()
        for directory in [current, *current.parents]:
            for name in config_names:
                config_path = directory / name
                if config_path.exists():
                    return config_path
        return None

    @classmethod
    def find_and_load(cls, start_dir: Path | str | None = None) -> "RunwrightConfig":
        """Find and load a configuration file, falling back to defaults."""
        config_path = cls.find(start_dir)
        if config_path is None:
            return cls()
        return cls.from_file(config_path)

    def to_file(self, path: Path | str) -> None:
        """Save configuration to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)

    def with_overrides(
        self,
        include_tags: Optional[str] = None,
        exclude_tags: Optional[str] = None,
        max_parallelism: Optional[int] = None,
        timeout_seconds: Optional[float] = None,
    ) -> "RunwrightConfig":
        """Return a copy with command-line values applied on top."""
        updates = {}
        if include_tags is not None:
            updates["include_tags"] = include_tags
        if exclude_tags is not None:
            updates["exclude_tags"] = exclude_tags
        if max_parallelism is not None:
            updates["max_parallelism"] = max_parallelism
        if timeout_seconds is not None:
            updates["timeout_seconds"] = timeout_seconds

        execution = ExecutionConfig.model_validate(
            {**self.execution.model_dump(), **updates}
        )
        return self.model_copy(update={"execution": execution})

    def get_report_dir(self, base_dir: Path | str | None = None) -> Path:
        """Get the absolute report output directory."""
        if base_dir is None:
            base_dir = Path.cwd()
        else:
            base_dir = Path(base_dir)

        return (base_dir / self.report.output_dir).resolve()


def get_default_config() -> RunwrightConfig:
    """Return a default configuration."""
    return RunwrightConfig(
        execution=ExecutionConfig(timeout_seconds=60.0),
        report=ReportConfig(output_dir="./reports"),
        logging=LoggingConfig(level="WARNING"),
    )


def create_example_config(output_path: Path | str) -> Path:
    """Create an example configuration file."""
    output_path = Path(output_path)
    config = get_default_config()
    config.execution.exclude_tags = ["Slow"]
    config.to_file(output_path)
    return output_path
