"""Command-line interface for Runwright."""

import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from runwright import __version__
from runwright.config import RunwrightConfig, create_example_config

console = Console()

EXIT_METADATA_ERROR = 2


def print_banner() -> None:
    """Print the Runwright banner."""
    console.print(
        Panel.fit(
            "[bold blue]Runwright[/bold blue] - Concurrent Test Execution",
            subtitle=f"v{__version__}",
        )
    )


def _load_config(config_path: Optional[str]) -> RunwrightConfig:
    try:
        if config_path:
            return RunwrightConfig.from_file(config_path)
        return RunwrightConfig.find_and_load()
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)
    except (ValidationError, ValueError) as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="runwright")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False),
    help="Path to configuration file (default: runwright.json)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, config: Optional[str], verbose: bool) -> None:
    """Runwright - run declared tests concurrently with timeouts and tags."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config


@main.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default="runwright.json",
    help="Output path for configuration file",
)
@click.option("--force", "-f", is_flag=True, help="Overwrite existing configuration")
def init(output: str, force: bool) -> None:
    """Initialize a new Runwright configuration file."""
    print_banner()

    output_path = Path(output)
    if output_path.exists() and not force:
        console.print(f"[yellow]Configuration file already exists:[/yellow] {output_path}")
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        create_example_config(output_path)
        console.print(f"[green]Created configuration file:[/green] {output_path}")
    except OSError as e:
        console.print(f"[red]Error creating configuration:[/red] {escape(str(e))}")
        sys.exit(1)


@main.command()
@click.argument("module")
@click.option("--include-tags", help="Comma-separated tags; run only tests carrying one of them")
@click.option("--exclude-tags", help="Comma-separated tags; skip tests carrying any of them")
@click.option("--parallel", "-p", type=int, help="Maximum tests running at once")
@click.option("--timeout", "-t", type=float, help="Per-test timeout in seconds")
@click.option(
    "--json",
    "json_path",
    type=click.Path(dir_okay=False),
    help="Also write results as JSON to this path",
)
@click.option("--html/--no-html", default=False, help="Generate an HTML report")
@click.pass_context
def run(
    ctx: click.Context,
    module: str,
    include_tags: Optional[str],
    exclude_tags: Optional[str],
    parallel: Optional[int],
    timeout: Optional[float],
    json_path: Optional[str],
    html: bool,
) -> None:
    """Run the tests declared in MODULE (a .py path or dotted name)."""
    print_banner()

    verbose = ctx.obj.get("verbose", False)
    config = _load_config(ctx.obj.get("config_path"))

    try:
        config = config.with_overrides(
            include_tags=include_tags,
            exclude_tags=exclude_tags,
            max_parallelism=parallel,
            timeout_seconds=timeout,
        )
    except ValidationError as e:
        console.print(f"[red]Invalid option:[/red] {escape(str(e))}")
        sys.exit(1)

    from runwright.core.scheduler import ExecutionScheduler
    from runwright.discovery.loader import ModuleLoader
    from runwright.errors import MetadataError
    from runwright.logs import configure_logging
    from runwright.report.generator import ReportGenerator
    from runwright.report.terminal import TerminalReporter

    configure_logging("DEBUG" if verbose else config.logging.level)

    # Metadata failures abort before any result exists
    try:
        registry = ModuleLoader(module).load()
        test_cases = registry.test_cases()
        fixtures = registry.fixture_manager()
    except MetadataError as e:
        console.print(f"[red]Error loading tests:[/red] {escape(str(e))}")
        sys.exit(EXIT_METADATA_ERROR)

    execution = config.execution
    if verbose:
        console.print(
            f"[dim]Discovered {len(test_cases)} test case(s), {len(fixtures)} fixture(s)[/dim]"
        )

    scheduler = ExecutionScheduler(
        fixtures=fixtures,
        max_parallelism=execution.max_parallelism,
        timeout_seconds=execution.timeout_seconds,
    )
    results = scheduler.run(test_cases, execution.include_tags, execution.exclude_tags)

    summary = TerminalReporter(console, verbose=verbose).report(results)

    if scheduler.abandoned_count:
        console.print(
            f"[yellow]Warning:[/yellow] {scheduler.abandoned_count} timed-out test(s) "
            "could not be stopped and may still hold resources"
        )

    metadata = {
        "module": module,
        "include_tags": execution.include_tags,
        "exclude_tags": execution.exclude_tags,
        "max_parallelism": execution.max_parallelism,
        "timeout_seconds": execution.timeout_seconds,
    }
    generator = ReportGenerator(config, Path.cwd())
    if json_path:
        written = generator.write_json(results, Path(json_path), metadata)
        console.print(f"[green]JSON results written:[/green] {written}")
    if html:
        written = generator.write_html(results, metadata)
        console.print(f"[green]Report generated:[/green] {written}")

    sys.exit(0 if summary.success else 1)


@main.command(name="list")
@click.argument("module")
@click.option("--include-tags", help="Comma-separated tags to include")
@click.option("--exclude-tags", help="Comma-separated tags to exclude")
@click.pass_context
def list_tests(
    ctx: click.Context,
    module: str,
    include_tags: Optional[str],
    exclude_tags: Optional[str],
) -> None:
    """List the tests declared in MODULE without running them."""
    from runwright.core.filtering import TagFilter
    from runwright.discovery.loader import ModuleLoader
    from runwright.errors import MetadataError

    config = _load_config(ctx.obj.get("config_path"))
    try:
        config = config.with_overrides(include_tags=include_tags, exclude_tags=exclude_tags)
    except ValidationError as e:
        console.print(f"[red]Invalid option:[/red] {escape(str(e))}")
        sys.exit(1)

    try:
        test_cases = ModuleLoader(module).load().test_cases()
    except MetadataError as e:
        console.print(f"[red]Error loading tests:[/red] {escape(str(e))}")
        sys.exit(EXIT_METADATA_ERROR)

    tag_filter = TagFilter(
        frozenset(config.execution.include_tags), frozenset(config.execution.exclude_tags)
    )

    table = Table(title="Discovered Tests")
    table.add_column("Test", style="cyan")
    table.add_column("Tags", style="dim")
    table.add_column("Fixtures")
    table.add_column("Runs", justify="center")

    for test_case in test_cases:
        admitted = tag_filter.admits(test_case)
        table.add_row(
            escape(test_case.name),
            escape(", ".join(test_case.tags)) or "-",
            escape(", ".join(test_case.fixtures)) or "-",
            "[green]yes[/green]" if admitted else "[dim]no[/dim]",
        )

    console.print(table)


if __name__ == "__main__":
    main()
