"""Materialise a template tree into a project directory.

Every file under the source tree is written to the target tree after two
substitutions:

* path segments wrapped in double underscores are replaced by the matching
  substitution value (``ios/__className__/Info.plist`` becomes
  ``ios/MyCoolApp/Info.plist``), and
* text contents are rendered through Jinja2 against the same table
  (``{{ className }}`` becomes ``MyCoolApp``).

Binary files are copied byte for byte.  A trailing ``.template`` extension is
dropped so that files such as ``build.gradle.template`` do not confuse
editors and tooling inside the template tree.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..utils import print_warning
from .templates import TemplateRenderer, is_binary_path


TEMPLATE_SUFFIX = ".template"

GRADLE_WRAPPERS = ("gradlew", "gradlew.bat")

GRADLE_WRAPPER_MODE = 0o775


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class EmptySourceError(Exception):
    """Raised when the template source directory contains no files."""

    def __init__(self, source: Path) -> None:
        self.source = source
        super().__init__(
            f'generate_files: No files found in "{source}". '
            "Are you sure you specified the correct path?"
        )


class GradlePermissionError(Exception):
    """Raised when the gradle wrapper scripts cannot be made executable."""

    def __init__(self, android_dir: Path) -> None:
        self.android_dir = android_dir
        super().__init__(f"chmod failed gradlew file under {android_dir}")


class TemplateWriteError(Exception):
    """Raised in strict mode when rendered files could not be written."""

    def __init__(self, failures: list[tuple[Path, BaseException]]) -> None:
        self.failures = failures
        paths = ", ".join(str(path) for path, _ in failures)
        super().__init__(f"{len(failures)} file(s) could not be written: {paths}")


# ---------------------------------------------------------------------------
# Tree walking and path computation
# ---------------------------------------------------------------------------


def all_files_in_dir(parent: str | Path) -> list[Path]:
    """Return every non-directory entry below *parent*.

    Uses an explicit stack instead of recursion so deeply nested trees do not
    depend on the interpreter's recursion limit.  Directory symlinks are not
    followed.  Entries that cannot be listed are skipped.
    """
    files: list[Path] = []
    stack: list[Path] = [Path(parent)]
    while stack:
        directory = stack.pop()
        try:
            entries = list(os.scandir(directory))
        except OSError:
            continue
        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                continue
            if is_dir:
                stack.append(Path(entry.path))
            else:
                files.append(Path(entry.path))
    return files


def compute_path(
    source: str | Path,
    target: str | Path,
    file_path: str | Path,
    substitutions: Mapping[str, Any],
) -> Path:
    """Compute where *file_path* from the *source* tree lands under *target*."""
    computed = Path(target) / Path(file_path).relative_to(source)

    name = computed.name
    if name.endswith(TEMPLATE_SUFFIX):
        name = name[: -len(TEMPLATE_SUFFIX)]
    # Xcode only picks up the environment file as a dotfile.
    if name == "xcode.env":
        name = ".xcode.env"
    computed_str = str(computed.with_name(name))

    for key, value in substitutions.items():
        computed_str = computed_str.replace(f"__{key}__", str(value))
    return Path(computed_str)


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


def _write_file(path: Path, content: bytes) -> OSError | None:
    """Create parent dirs and write *content*; return the error instead of raising."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    except OSError as exc:
        return exc
    return None


def chmod_android_gradlew_files(android_dir: Path) -> None:
    """Make the gradle wrapper scripts under *android_dir* executable."""
    for name in GRADLE_WRAPPERS:
        wrapper = android_dir / name
        if wrapper.is_file():
            wrapper.chmod(GRADLE_WRAPPER_MODE)


def chmod_android_gradlew_files_task(android_dir: Path) -> None:
    try:
        chmod_android_gradlew_files(android_dir)
    except OSError as exc:
        raise GradlePermissionError(android_dir) from exc


async def generate_files(
    source: str | Path,
    target: str | Path,
    substitutions: Mapping[str, Any],
    *,
    renderer: TemplateRenderer | None = None,
    strict_writes: bool = False,
) -> list[Path]:
    """Render every file under *source* into *target*.

    Args:
        source: Template tree root.
        target: Project root to write into; created as needed.
        substitutions: Values for ``__key__`` path tokens and ``{{ key }}``
            template expressions.
        renderer: Renderer rooted at *source*.  One is created when omitted.
        strict_writes: Raise :class:`TemplateWriteError` if any write failed
            instead of only reporting it.

    Returns:
        The computed target path of every file.

    Raises:
        EmptySourceError: *source* contains no files.  Nothing is written.
        jinja2.TemplateError: A text template failed to render.  Files
            rendered before it stay on disk; the failing one is not written.
        GradlePermissionError: The gradle wrappers could not be made
            executable.
    """
    source = Path(source)
    target = Path(target)

    files = await asyncio.to_thread(all_files_in_dir, source)
    if not files:
        raise EmptySourceError(source)

    if renderer is None:
        renderer = TemplateRenderer(source)

    writes: list[tuple[Path, asyncio.Task[OSError | None]]] = []
    try:
        for file_path in files:
            computed = compute_path(source, target, file_path, substitutions)
            if is_binary_path(file_path):
                content = await asyncio.to_thread(file_path.read_bytes)
            else:
                rendered = await asyncio.to_thread(
                    renderer.render, file_path.relative_to(source), substitutions
                )
                content = rendered.encode("utf-8")
            task = asyncio.create_task(asyncio.to_thread(_write_file, computed, content))
            writes.append((computed, task))
    finally:
        outcomes = await asyncio.gather(*(task for _, task in writes), return_exceptions=True)

    failures: list[tuple[Path, BaseException]] = []
    for (path, _), outcome in zip(writes, outcomes):
        if outcome is not None:
            print_warning(f"Could not write {path}: {outcome}")
            failures.append((path, outcome))
    if failures and strict_writes:
        raise TemplateWriteError(failures)

    await asyncio.to_thread(chmod_android_gradlew_files_task, target / "android")
    return [path for path, _ in writes]
