"""Glob-driven raw file copy.

Patterns are evaluated in order against paths relative to ``cwd``.  A
pattern prefixed with ``!`` removes what it matches from the working set, so
``["**", "!eslintrc.json"]`` copies everything except the ESLint config and a
later positive pattern can bring excluded files back.
"""

from __future__ import annotations

import asyncio
import shutil
from collections.abc import Callable, Sequence
from fnmatch import fnmatchcase
from pathlib import Path

from .files import all_files_in_dir


NEGATION_MARKER = "!"

RenameFunc = Callable[[str], str]


def matches(relative: str, pattern: str) -> bool:
    """Return ``True`` if the POSIX-style *relative* path matches *pattern*.

    ``*`` also matches across ``/``; a leading ``**/`` matches zero or more
    directories, so ``**/*.png`` covers ``icon.png`` at the root as well.
    """
    if pattern in ("**", "**/*"):
        return True
    if fnmatchcase(relative, pattern):
        return True
    if pattern.startswith("**/"):
        return fnmatchcase(relative, pattern[3:])
    return False


def select_files(patterns: Sequence[str], cwd: str | Path) -> list[str]:
    """Resolve *patterns* to a sorted list of relative POSIX paths under *cwd*."""
    root = Path(cwd)
    candidates = sorted(path.relative_to(root).as_posix() for path in all_files_in_dir(root))

    selected: set[str] = set()
    for pattern in patterns:
        if pattern.startswith(NEGATION_MARKER):
            excluded = pattern[len(NEGATION_MARKER):]
            selected = {relative for relative in selected if not matches(relative, excluded)}
        else:
            selected.update(relative for relative in candidates if matches(relative, pattern))
    return [relative for relative in candidates if relative in selected]


def _copy_file(source: Path, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, destination)


async def copy(
    patterns: Sequence[str],
    target: str | Path,
    *,
    cwd: str | Path,
    rename: RenameFunc | None = None,
    parents: bool = True,
) -> list[Path]:
    """Copy the files selected by *patterns* from *cwd* into *target*.

    Args:
        patterns: Ordered glob patterns; ``!`` negates.
        target: Destination root.
        cwd: Source root the patterns are relative to.
        rename: Applied to each file's base name before writing.
        parents: Keep the relative directory structure.  When ``False`` every
            file lands directly in *target*.

    Returns:
        The destination paths, in source order.
    """
    source_root = Path(cwd)
    target_root = Path(target)
    selected = await asyncio.to_thread(select_files, patterns, source_root)

    destinations: list[Path] = []
    for relative in selected:
        relative_path = Path(relative)
        name = rename(relative_path.name) if rename else relative_path.name
        parent = relative_path.parent if parents else Path()
        destinations.append(target_root / parent / name)

    outcomes = await asyncio.gather(
        *(
            asyncio.to_thread(_copy_file, source_root / relative, destination)
            for relative, destination in zip(selected, destinations)
        ),
        return_exceptions=True,
    )
    # Every copy has settled; surface the first failure.
    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            raise outcome
    return destinations
