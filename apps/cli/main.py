"""CLI application for spm-outdated."""

import asyncio
import os
from pathlib import Path

import typer
from rich.console import Console

from spm_outdated.collect import VersionCollector
from spm_outdated.errors import OutdatedError
from spm_outdated.log_config import setup_logging
from spm_outdated.manifest import filter_direct_dependencies, read_direct_dependencies
from spm_outdated.models import PackageCollection
from spm_outdated.output import (
    OutputFormat,
    format_json_output,
    format_xcode_output,
    render_markdown,
)
from spm_outdated.resolved import current_package_pins

__version__ = "0.1.0"

console = Console()


def is_running_in_xcode() -> bool:
    """Check whether we run inside an Xcode build phase."""
    return "XCODE_VERSION_ACTUAL" in os.environ


def print_collection(collection: PackageCollection, output_format: OutputFormat) -> None:
    """Print the collection in the requested format."""
    if output_format == OutputFormat.JSON:
        typer.echo(format_json_output(collection))
    elif output_format == OutputFormat.XCODE:
        output = format_xcode_output(collection)
        if output:
            typer.echo(output)
    else:
        render_markdown(collection, console)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"spm-outdated {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="spm-outdated",
    help="spm-outdated - Check for outdated Swift package dependencies",
    add_completion=False,
)


@app.command()
def check(
    path: Path = typer.Argument(
        Path("."),
        help="The directory containing the Package.resolved file",
        show_default=False,
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.MARKDOWN, "--format", "-f", help="The output format"
    ),
    ignore_prerelease: bool = typer.Option(
        False, "--ignore-prerelease", "-i", help="Ignore pre-release versions"
    ),
    only_major: bool = typer.Option(
        False, "--only-major", help="Output only packages with major version updates"
    ),
    ignore_transitive: bool = typer.Option(
        False,
        "--ignore-transitive",
        help="Ignore transitive dependencies (dependencies of your direct dependencies)",
    ),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Verbose output"),
    timeout: float = typer.Option(
        30.0, "--timeout", envvar="SPM_OUTDATED_TIMEOUT", help="Seconds to wait for each repository"
    ),
    max_concurrency: int = typer.Option(
        6,
        "--max-concurrency",
        min=1,
        envvar="SPM_OUTDATED_MAX_CONCURRENCY",
        help="Maximum concurrent repository lookups",
    ),
    version: bool = typer.Option(
        False, "--version", callback=version_callback, is_eager=True, help="Show version"
    ),
) -> None:
    """Check for outdated dependencies.

    Dependencies pinned to specific revisions or branches are ignored (and
    shown as such). Inside an Xcode run script phase warnings are emitted for
    Xcode's issue navigator.
    """
    setup_logging(verbose)

    try:
        pins = current_package_pins(path)

        if ignore_transitive:
            pins = filter_direct_dependencies(pins, read_direct_dependencies(path))

        collector = VersionCollector(timeout=timeout, max_concurrency=max_concurrency)
        collection = asyncio.run(
            collector.collect(
                pins,
                ignore_prerelease=ignore_prerelease,
                only_major_updates=only_major,
            )
        )

    except OutdatedError as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(1)

    print_collection(collection, OutputFormat.XCODE if is_running_in_xcode() else output_format)


if __name__ == "__main__":
    app()
