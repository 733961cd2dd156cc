"""Report file generation: JSON export and Jinja2 HTML."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from runwright.config import RunwrightConfig
from runwright.core.models import RunSummary, TestOutcome, TestResult


class ReportGenerator:
    """Writes test results to report files."""

    def __init__(self, config: RunwrightConfig, base_dir: Path):
        """Initialize the report generator.

        Args:
            config: Runwright configuration
            base_dir: Directory report paths are resolved against
        """
        self.config = config
        self.base_dir = base_dir

        template_dir = Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml"]),
        )

        self.env.filters["duration_format"] = self._format_duration
        self.env.filters["datetime_format"] = self._format_datetime
        self.env.filters["percentage"] = self._format_percentage

    @property
    def output_dir(self) -> Path:
        return self.config.get_report_dir(self.base_dir)

    def build_payload(
        self,
        results: list[TestResult],
        metadata: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """Build the serializable form of a run."""
        summary = RunSummary.from_results(results)
        return {
            "generated_at": datetime.now().isoformat(),
            "summary": summary.to_dict(),
            "metadata": metadata or {},
            "results": [r.to_dict() for r in sorted(results, key=lambda r: r.test_name)],
        }

    def write_json(
        self,
        results: list[TestResult],
        path: Optional[Path] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> Path:
        """Write results as JSON and return the file path."""
        if path is None:
            path = self.output_dir / self.config.report.json_filename
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        payload = self.build_payload(results, metadata)
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return path

    def write_html(
        self,
        results: list[TestResult],
        metadata: Optional[dict[str, Any]] = None,
    ) -> Path:
        """Render the HTML report and return the file path."""
        context = self._prepare_context(results, metadata or {})

        template = self.env.get_template("report.html")
        html_content = template.render(**context)

        output_dir = self.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)

        report_path = output_dir / self.config.report.html_filename
        report_path.write_text(html_content, encoding="utf-8")

        return report_path

    def _prepare_context(
        self,
        results: list[TestResult],
        metadata: dict[str, Any],
    ) -> dict[str, Any]:
        summary = RunSummary.from_results(results)
        pass_rate = (summary.passed / summary.total * 100) if summary.total > 0 else 0

        by_outcome = {outcome: [] for outcome in TestOutcome}
        for result in results:
            by_outcome[result.outcome].append(result.to_dict())

        # Slowest first
        for group in by_outcome.values():
            group.sort(key=lambda r: r["duration"], reverse=True)

        return {
            "title": self.config.report.title,
            "generated_at": datetime.now(),
            "metadata": metadata,
            "summary": summary,
            "pass_rate": pass_rate,
            "not_passed": (
                by_outcome[TestOutcome.FAILED]
                + by_outcome[TestOutcome.ERROR]
                + by_outcome[TestOutcome.TIMED_OUT]
            ),
            "passed_tests": by_outcome[TestOutcome.PASSED],
        }

    @staticmethod
    def _format_duration(seconds: float) -> str:
        """Format a duration in seconds to a human-readable string."""
        if seconds < 1:
            return f"{seconds * 1000:.0f}ms"
        elif seconds < 60:
            return f"{seconds:.2f}s"
        else:
            minutes = int(seconds // 60)
            return f"{minutes}m {seconds % 60:.1f}s"

    @staticmethod
    def _format_datetime(dt: Any) -> str:
        """Format datetime object or string."""
        if isinstance(dt, str):
            try:
                dt = datetime.fromisoformat(dt)
            except ValueError:
                return dt

        if isinstance(dt, datetime):
            return dt.strftime("%Y-%m-%d %H:%M:%S")

        return str(dt)

    @staticmethod
    def _format_percentage(value: float) -> str:
        """Format a number as percentage."""
        return f"{value:.1f}%"
