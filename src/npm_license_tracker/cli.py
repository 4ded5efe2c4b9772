"""Command-line interface for npm_license_tracker.

Provides the main entry point and subcommands for generating the dependency
license report and inspecting its cache.
"""

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
)

from npm_license_tracker.cache import (
    DEFAULT_MAX_AGE_DAYS,
    MAX_AGE_DAYS_LIMIT,
    ReportCache,
)
from npm_license_tracker.layout import WARNING_GLYPH
from npm_license_tracker.models import DependencySpec
from npm_license_tracker.pipeline import (
    DEFAULT_CONCURRENCY,
    DependencyPipeline,
    PipelineResult,
)
from npm_license_tracker.reporters import MarkdownReporter
from npm_license_tracker.resolvers import NpmRegistryResolver
from npm_license_tracker.scanners import get_scanner

DEFAULT_MANIFEST = Path("package.json")
DEFAULT_OUTPUT = Path("dependencies.md")

app = typer.Typer(
    name="npm-license-tracker",
    help="License report generator for npm project dependencies.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger("npm_license_tracker")


def _setup_logging(verbose: bool) -> None:
    """Configure logging level based on verbosity flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger("npm_license_tracker").setLevel(level)


async def _resolve(
    specs: list[DependencySpec],
    cache: ReportCache,
    concurrency: int,
    progress: Progress,
) -> PipelineResult:
    """Run the fetch/cache pipeline with a progress bar."""
    task = progress.add_task("Resolving licenses...", total=len(specs))

    def _advance(completed: int, total: int) -> None:
        progress.update(task, completed=completed, total=total)

    async with NpmRegistryResolver() as resolver:
        pipeline = DependencyPipeline(resolver, cache, concurrency=concurrency)
        return await pipeline.run(specs, on_progress=_advance)


@app.command()
def gen(
    manifest: Annotated[
        Path,
        typer.Option(
            "--manifest",
            "-m",
            help="Path to the project manifest (package.json)",
        ),
    ] = DEFAULT_MANIFEST,
    output: Annotated[
        Path,
        typer.Option(
            "--output",
            "-o",
            help="Report file path, also read back as the cache",
        ),
    ] = DEFAULT_OUTPUT,
    template: Annotated[
        Optional[Path],
        typer.Option(
            "--template",
            "-t",
            help="Custom Jinja2 template file",
            exists=True,
            readable=True,
        ),
    ] = None,
    concurrency: Annotated[
        int,
        typer.Option(
            "--concurrency",
            min=1,
            help="Maximum number of registry requests in flight",
        ),
    ] = DEFAULT_CONCURRENCY,
    max_age_days: Annotated[
        int,
        typer.Option(
            "--max-age-days",
            min=0,
            max=MAX_AGE_DAYS_LIMIT,
            help="Days before a cached report entry is fetched again",
        ),
    ] = DEFAULT_MAX_AGE_DAYS,
    no_cache: Annotated[
        bool,
        typer.Option(
            "--no-cache",
            help="Ignore the previous report and fetch every dependency",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output",
        ),
    ] = False,
) -> None:
    """Generate the dependency license report.

    Reads the manifest, reuses fresh entries from the previous report,
    fetches the rest from the npm registry and rewrites the report.

    Exit codes:
        0 - Report written (non-permissive licenses do not fail the run)
        1 - Manifest unreadable or report could not be written
    """
    _setup_logging(verbose)

    try:
        scanner = get_scanner(manifest)
        specs = scanner.scan()
    except (ValueError, FileNotFoundError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    if verbose:
        console.print(f"[dim]Using scanner: {scanner.source_name}[/dim]")

    if no_cache:
        cache = ReportCache(max_age_days=max_age_days)
    else:
        cache = ReportCache.load(output, max_age_days=max_age_days)
        if verbose:
            console.print(f"[dim]Loaded {len(cache)} cached entries from {output}[/dim]")

    console.print(f"Found [bold]{len(specs)}[/bold] dependencies")

    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    ) as progress:
        result = asyncio.run(_resolve(specs, cache, concurrency, progress))

    reporter = MarkdownReporter(template_path=template) if template else MarkdownReporter()

    try:
        reporter.write(result.records, output)
    except Exception as e:
        err_console.print(f"[red]Error writing output:[/red] {e}")
        raise typer.Exit(code=1)

    console.print(f"[green]Generated:[/green] {output}")
    console.print(f"Cached dependencies used: {result.cached}")

    if result.non_permissive > 0:
        console.print(
            f"[yellow]{WARNING_GLYPH} Warning: {result.non_permissive} dependencies "
            "have potentially non-permissive licenses. Please review the output file.[/yellow]"
        )

    raise typer.Exit(code=0)


@app.command()
def cache(
    action: Annotated[
        str,
        typer.Argument(help="Cache action: 'show'"),
    ],
    output: Annotated[
        Path,
        typer.Option(
            "--output",
            "-o",
            help="Report file path used as the cache",
        ),
    ] = DEFAULT_OUTPUT,
    max_age_days: Annotated[
        int,
        typer.Option(
            "--max-age-days",
            min=0,
            max=MAX_AGE_DAYS_LIMIT,
            help="Days before a cached report entry is fetched again",
        ),
    ] = DEFAULT_MAX_AGE_DAYS,
) -> None:
    """Inspect the report-backed cache.

    Actions:
        show  - Display the report location and its fresh/stale entry counts
    """
    if action != "show":
        err_console.print(f"[red]Unknown action:[/red] {action}")
        err_console.print("Valid actions: show")
        raise typer.Exit(code=1)

    cache_instance = ReportCache.load(output, max_age_days=max_age_days)
    info = cache_instance.stats(datetime.now())

    console.print(f"[bold]Cache Location:[/bold] {output}")
    console.print(f"[bold]Entries:[/bold] {info['count']}")
    console.print(f"[bold]Fresh:[/bold] {info['fresh']}")
    console.print(f"[bold]Stale:[/bold] {info['stale']}")


if __name__ == "__main__":
    app()
