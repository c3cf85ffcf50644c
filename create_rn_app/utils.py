"""Shared utility functions for create-rn-app.

Provides the Rich console used for every line of user-facing output, small
message helpers, and the file-system pre-flight checks run before a project
directory is touched.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from pathlib import Path

from rich.console import Console
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def print_summary_table(data: Mapping[str, object], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Option", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_dependency_list(title: str, packages: Iterable[str]) -> None:
    """Print a heading followed by one cyan bullet per package."""
    console.print(f"\n{title}")
    for package in packages:
        console.print(f"- [cyan]{package}[/cyan]")


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def is_writeable(directory: str | Path) -> bool:
    """Return ``True`` if the current user can create files in *directory*."""
    return os.access(directory, os.W_OK)


# Files that may already exist in a fresh project folder without getting in
# the way of the generated tree.
TOLERATED_FILES: frozenset[str] = frozenset(
    {
        ".DS_Store",
        ".git",
        ".gitattributes",
        ".gitignore",
        ".gitlab-ci.yml",
        ".hg",
        ".hgcheck",
        ".hgignore",
        ".idea",
        ".npmignore",
        ".travis.yml",
        "LICENSE",
        "Thumbs.db",
        "docs",
        "mkdocs.yml",
        "npm-debug.log",
        "yarn-debug.log",
        "yarn-error.log",
        "yarnrc.yml",
        ".yarn",
    }
)


def folder_conflicts(root: str | Path) -> list[str]:
    """Return the entries in *root* that would collide with a new project.

    A missing directory has no conflicts.  IntelliJ module files (``*.iml``)
    are tolerated alongside :data:`TOLERATED_FILES`.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        return []
    return sorted(
        entry.name
        for entry in root_path.iterdir()
        if entry.name not in TOLERATED_FILES and not entry.name.endswith(".iml")
    )


def is_folder_empty(root: str | Path, name: str) -> bool:
    """Report conflicting files in *root*; ``True`` when there are none."""
    conflicts = folder_conflicts(root)
    if not conflicts:
        return True

    console.print(f"The directory [green]{name}[/green] contains files that could conflict:")
    console.print()
    for entry in conflicts:
        suffix = "/" if (Path(root) / entry).is_dir() else ""
        console.print(f"  [blue]{entry}{suffix}[/blue]")
    console.print()
    console.print("Either try using a new directory name, or remove the files listed above.")
    console.print()
    return False
