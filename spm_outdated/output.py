"""Rendering of collection results."""

import json
from enum import Enum

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .models import OutdatedPackage, PackageCollection


class OutputFormat(str, Enum):
    """Supported output formats."""

    MARKDOWN = "markdown"
    JSON = "json"
    XCODE = "xcode"


def version_style(package: OutdatedPackage) -> str:
    """Colour for the latest version, by how many major versions behind the pin is."""
    behind = package.major_versions_behind
    if behind <= 0:
        return ""
    if behind == 1:
        return "green"
    if behind == 2:
        return "yellow"
    return "red"


def build_table(collection: PackageCollection) -> Table:
    """Markdown-style table of outdated packages."""
    table = Table(box=box.MARKDOWN, show_edge=True)
    table.add_column("Package")
    table.add_column("Current")
    table.add_column("Latest")
    table.add_column("URL", overflow="fold")

    for package in collection.outdated_packages:
        table.add_row(
            package.identity,
            str(package.current_version),
            Text(str(package.latest_version), style=version_style(package)),
            package.url,
        )
    return table


def render_markdown(collection: PackageCollection, console: Console) -> None:
    """Print outdated packages as a table followed by ignored pins."""
    if collection.outdated_packages:
        console.print(build_table(collection))
    else:
        console.print("Everything is up-to-date!", style="green")

    if collection.ignored_packages:
        names = ", ".join(pin.identity for pin in collection.ignored_packages)
        console.print()
        console.print(f"Ignored because of revision/branch pins: {names}", style="dim")


def format_json_output(collection: PackageCollection) -> str:
    """Format JSON output."""
    return json.dumps(collection.to_dict(), indent=2)


def format_xcode_output(collection: PackageCollection) -> str:
    """Format warnings for Xcode's issue navigator."""
    lines = [
        f"warning: Dependency {package.identity} is outdated "
        f"({package.current_version} < {package.latest_version})"
        for package in collection.outdated_packages
    ]
    return "\n".join(lines)
