"""
droidplace CLI.

Command-line interface for resolving and placing generated files in an
Android project.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .core.config import Config, get_config
from .core.logging import bind_context, clear_context, setup_logging
from .core.types import PlacementOutcome, PlacementStatus

app = typer.Typer(
    name="droidplace",
    help="Classify generated files and place them in an Android project",
    add_completion=False,
)

console = Console()

_STATUS_STYLES = {
    PlacementStatus.WRITTEN: "[green]written[/green]",
    PlacementStatus.SKIPPED_EXISTING: "[yellow]skipped (exists)[/yellow]",
    PlacementStatus.FAILED: "[red]failed[/red]",
}


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from . import __version__
        console.print(f"droidplace v{__version__}")
        raise typer.Exit()


def _read_source(source: Path) -> str:
    if str(source) == "-":
        return sys.stdin.read()
    return source.read_text(encoding=get_config().placement.encoding)


def _configure(project: Path, verbose: bool = False) -> Config:
    config = get_config()
    if verbose:
        config = config.model_copy(update={"log_level": "DEBUG"})
    setup_logging(config)
    clear_context()
    bind_context(project=str(project))
    return config


def _print_outcome(outcome: PlacementOutcome) -> None:
    console.print(f"{_STATUS_STYLES[outcome.status]} {outcome.path or ''}")
    if outcome.reason and outcome.status is PlacementStatus.FAILED:
        console.print(f"  [dim]{outcome.reason}[/dim]")


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """droidplace: artifact classification and placement for Android projects."""
    pass


@app.command()
def resolve(
    source: Path = typer.Argument(..., help="File holding the candidate content ('-' for stdin)"),
    project: Path = typer.Option(
        Path("."),
        "--project",
        "-p",
        help="Android project root",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Declared language"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Suggested file name"),
    directory: Optional[str] = typer.Option(None, "--dir", "-d", help="Project-relative directory"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging"),
) -> None:
    """Show where a candidate file would be placed, without writing it."""
    from .models import ArtifactRequest
    from .services import PathResolver

    config = _configure(project, verbose)

    request = ArtifactRequest(
        content=_read_source(source),
        declared_language=language,
        suggested_name=name,
        project_root=project,
        directory_hint=directory,
    )
    decision = PathResolver(config).resolve(request)

    table = Table(title="Placement")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    classification = decision.classification
    if classification is not None:
        table.add_row("Surface", classification.surface_kind.value)
        if classification.resource_category is not None:
            table.add_row("Resource Category", classification.resource_category.value)
        table.add_row("Android Component", str(classification.is_android_component))
    table.add_row("File Name", decision.file_name)
    table.add_row("Directory", decision.directory_path or ".")
    table.add_row("Conflicts Existing", "[yellow]yes[/yellow]" if decision.conflicts_existing else "no")

    console.print(table)


@app.command()
def place(
    source: Path = typer.Argument(..., help="File holding the candidate content ('-' for stdin)"),
    project: Path = typer.Option(
        Path("."),
        "--project",
        "-p",
        help="Android project root",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Declared language"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Suggested file name"),
    directory: Optional[str] = typer.Option(None, "--dir", "-d", help="Project-relative directory"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging"),
) -> None:
    """Resolve a candidate file and write it unless the target exists."""
    from .models import ArtifactRequest
    from .services import PathResolver, PlacementGuard

    config = _configure(project, verbose)

    content = _read_source(source)
    request = ArtifactRequest(
        content=content,
        declared_language=language,
        suggested_name=name,
        project_root=project,
        directory_hint=directory,
    )
    resolver = PathResolver(config)
    tree = resolver.tree_for(request)
    decision = resolver.resolve(request, tree)

    guard = PlacementGuard(tree, config.placement)
    outcome = asyncio.run(guard.place(decision, content))
    _print_outcome(outcome)

    if outcome.status is PlacementStatus.FAILED:
        raise typer.Exit(1)


@app.command()
def extract(
    response: Path = typer.Argument(..., help="Markdown model response ('-' for stdin)"),
    project: Path = typer.Option(
        Path("."),
        "--project",
        "-p",
        help="Android project root",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
    write: bool = typer.Option(False, "--write", "-w", help="Place every generatable block"),
) -> None:
    """List the fenced code blocks of a response and where they would go."""
    from .services import CodeBlockExtractor, PathResolver, PlacementGuard
    from .storage import LocalProjectTree

    config = _configure(project)

    blocks = CodeBlockExtractor().extract(_read_source(response))
    if not blocks:
        console.print("[yellow]No code blocks found[/yellow]")
        return

    resolver = PathResolver(config)
    tree = LocalProjectTree(project, encoding=config.placement.encoding)
    guard = PlacementGuard(tree, config.placement)

    table = Table(title="Code Blocks")
    table.add_column("#", style="cyan")
    table.add_column("Language")
    table.add_column("Target")
    table.add_column("Status")

    async def run_async() -> bool:
        failed = False
        for block in blocks:
            if not block.generatable:
                table.add_row(str(block.index), block.language_tag or "-", "-", "[dim]not a file[/dim]")
                continue

            decision = resolver.resolve(block.to_request(project), tree)

            if not write:
                status = "[yellow]exists[/yellow]" if decision.conflicts_existing else "ready"
            else:
                outcome = await guard.place(decision, block.code)
                status = _STATUS_STYLES[outcome.status]
                failed = failed or outcome.status is PlacementStatus.FAILED

            table.add_row(str(block.index), block.language_tag or "-", decision.relative_path, status)
        return failed

    failed = asyncio.run(run_async())
    console.print(table)

    if failed:
        raise typer.Exit(1)


@app.command()
def config() -> None:
    """Show the effective configuration."""
    cfg = get_config()

    table = Table(title="Current Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Log Level", cfg.log_level)
    table.add_row("App Module", cfg.layout.app_module)
    table.add_row("Kotlin Tree", cfg.layout.kotlin_root)
    table.add_row("Java Tree", cfg.layout.java_root)
    table.add_row("Resources", cfg.layout.resource_root)
    table.add_row("Manifest", cfg.layout.manifest_path)
    table.add_row("Source Scan Limit", str(cfg.inference.source_scan_limit))
    table.add_row("Entry Point Markers", ", ".join(cfg.inference.entry_point_markers))
    table.add_row("Fallback Package", f"{cfg.inference.fallback_prefix}.<project>")
    table.add_row("Language Markers", ", ".join(cfg.placement.language_markers))

    console.print(table)

    console.print("\n[dim]Configure via environment variables:[/dim]")
    console.print("  DROIDPLACE_LOG_LEVEL, DROIDPLACE_APP_MODULE, DROIDPLACE_SOURCE_SCAN_LIMIT")
    console.print("  DROIDPLACE_FALLBACK_PREFIX, DROIDPLACE_ENCODING")


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
