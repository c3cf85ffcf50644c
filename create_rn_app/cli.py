"""Command line entry point for create-rn-app.

Usage::

    create-rn-app my-app
    create-rn-app my-app --js --no-eslint --use-yarn
    create-rn-app my-app --src-dir --import-alias "~/*"
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from . import __version__
from .config import DEFAULT_IMPORT_ALIAS, AppOptions, ScaffoldConfig
from .package_manager import PackageManager, get_pkg_manager
from .scaffolder import ProjectGenerator
from .utils import (
    console,
    is_folder_empty,
    is_writeable,
    print_error,
    print_success,
    print_summary_table,
)
from .validation import validate_npm_name

PROG = "create-rn-app"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Create a new React Native app from a template",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            f"  {PROG} my-app\n"
            f"  {PROG} my-app --js --no-eslint --use-yarn\n"
            f'  {PROG} my-app --src-dir --import-alias "~/*"\n'
        ),
    )
    parser.add_argument("project_directory", nargs="?", default="", help="Directory to create the app in")
    parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {__version__}")

    language = parser.add_mutually_exclusive_group()
    language.add_argument(
        "--ts", "--typescript", dest="mode", action="store_const", const="ts",
        help="Initialize as a TypeScript project (default)",
    )
    language.add_argument(
        "--js", "--javascript", dest="mode", action="store_const", const="js",
        help="Initialize as a JavaScript project",
    )

    parser.add_argument(
        "--eslint", action=argparse.BooleanOptionalAction, default=True,
        help="Initialize with ESLint config (default: on)",
    )
    parser.add_argument(
        "--src-dir", action=argparse.BooleanOptionalAction, default=False,
        help="Initialize inside a `src/` directory",
    )
    parser.add_argument(
        "--import-alias", default=DEFAULT_IMPORT_ALIAS,
        help=f'Import alias to configure (default "{DEFAULT_IMPORT_ALIAS}")',
    )

    managers = parser.add_mutually_exclusive_group()
    for manager in ("npm", "pnpm", "yarn", "bun"):
        managers.add_argument(
            f"--use-{manager}", dest="package_manager", action="store_const", const=manager,
            help=f"Bootstrap the application using {manager}",
        )
    return parser


def _print_next_steps(app_name: str, app_path: str, package_manager: PackageManager) -> None:
    run = "" if package_manager == "yarn" else "run "
    console.print(f"[green]Success![/green] Created {app_name} at {app_path}")
    console.print("Inside that directory, you can run several commands:")
    console.print()
    console.print(f"  [cyan]{package_manager} install[/cyan]")
    console.print("    Installs the dependencies listed in package.json.")
    console.print()
    console.print(f"  [cyan]{package_manager} start[/cyan]")
    console.print("    Starts the Metro bundler.")
    console.print()
    console.print(f"  [cyan]{package_manager} {run}android[/cyan]")
    console.print(f"  [cyan]{package_manager} {run}ios[/cyan]")
    console.print("    Builds and launches the app on a device or simulator.")
    console.print()
    console.print("We suggest that you begin by typing:")
    console.print()
    console.print(f"  [cyan]cd[/cyan] {app_path}")
    console.print(f"  [cyan]{package_manager} install[/cyan]")
    console.print()


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for ``create-rn-app`` / ``python -m create_rn_app``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    project_directory = args.project_directory.strip()
    if not project_directory:
        print_error("Please specify the project directory:")
        console.print(f"  [cyan]{PROG}[/cyan] [green]<project-directory>[/green]")
        console.print(f"Run [cyan]{PROG} --help[/cyan] to see all options.")
        sys.exit(1)

    root = Path(project_directory).expanduser().resolve()
    app_name = root.name

    validation = validate_npm_name(app_name)
    if not validation.valid:
        print_error(f'Could not create a project called "{app_name}" because of naming restrictions:')
        for problem in validation.problems:
            console.print(f"    [bold red]*[/bold red] {problem}")
        sys.exit(1)

    try:
        options = AppOptions(
            app_path=root,
            package_manager=args.package_manager or get_pkg_manager(),
            mode=args.mode or "ts",
            eslint=args.eslint,
            src_dir=args.src_dir,
            import_alias=args.import_alias,
        )
    except ValidationError as exc:
        for error in exc.errors():
            print_error(f"Error: {error['msg']}")
        sys.exit(1)

    if not is_writeable(root.parent):
        print_error(
            "The application path is not writable, please check folder permissions and try again."
        )
        console.print("It is likely you do not have write permissions for this folder.")
        sys.exit(1)

    if root.exists() and not is_folder_empty(root, app_name):
        sys.exit(1)

    console.print()
    console.print(f"Creating a new React Native app in [green]{root}[/green].")
    console.print()
    print_summary_table(
        {
            "Language": "TypeScript" if options.typescript else "JavaScript",
            "ESLint": options.eslint,
            "src/ directory": options.src_dir,
            "Import alias": options.import_alias,
            "Package manager": options.package_manager,
        },
        title="Options",
    )

    generator = ProjectGenerator(options, ScaffoldConfig.from_env())
    try:
        asyncio.run(generator.generate())
    except Exception as exc:
        console.print()
        console.print("Aborting installation.")
        print_error(f"{type(exc).__name__}: {exc}")
        console.print()
        sys.exit(1)

    _print_next_steps(app_name, project_directory, options.package_manager)
    print_success("Done.")


if __name__ == "__main__":
    main()
