"""Import alias handling for generated projects.

The templates import through the default ``@/*`` alias.  When the user picks
a different one, the compiler config gets its ``paths`` key patched and every
other file in the tree gets the alias prefix swapped.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from ..config import DEFAULT_IMPORT_ALIAS, TemplateMode
from .files import all_files_in_dir


# Patched separately by :func:`patch_compiler_config`.
COMPILER_CONFIG_FILES = frozenset({"tsconfig.json", "jsconfig.json"})

DEFAULT_CONCURRENCY = 8

WILDCARD = "*"


def compiler_config_name(mode: TemplateMode) -> str:
    return "jsconfig.json" if mode == "js" else "tsconfig.json"


async def patch_compiler_config(
    root: str | Path,
    mode: TemplateMode,
    src_dir: bool,
    import_alias: str,
) -> Path:
    """Point the alias at ``./src/*`` if needed and rename it to *import_alias*."""
    config_file = Path(root) / compiler_config_name(mode)
    text = await asyncio.to_thread(config_file.read_text, encoding="utf-8")

    default_paths = f'"{DEFAULT_IMPORT_ALIAS}": ["./*"]'
    if src_dir:
        text = text.replace(default_paths, f'"{DEFAULT_IMPORT_ALIAS}": ["./src/*"]')
    text = text.replace(f'"{DEFAULT_IMPORT_ALIAS}":', f'"{import_alias}":')

    await asyncio.to_thread(config_file.write_bytes, text.encode("utf-8"))
    return config_file


def _rewrite_file(path: Path, old: bytes, new: bytes) -> bool:
    """Replace *old* with *new* in *path*; ``False`` for non-regular files."""
    if path.is_symlink() or not path.is_file():
        return False
    content = path.read_bytes()
    if old not in content:
        return True
    path.write_bytes(content.replace(old, new))
    return True


async def rewrite_import_alias(
    root: str | Path,
    old_alias: str,
    new_alias: str,
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> list[Path]:
    """Swap the *old_alias* prefix for *new_alias* in every file under *root*.

    The wildcard is stripped from both aliases, so rewriting ``@/*`` to
    ``~/*`` turns ``from '@/components'`` into ``from '~/components'``.
    The root compiler config files are left alone, as are symlinks and other
    non-regular entries.  At most *concurrency* files are open at once.

    Returns:
        The files that were visited (whether or not they contained the alias).

    Raises:
        ValueError: *concurrency* is below 1.
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be at least 1, got {concurrency}")
    if old_alias == new_alias:
        return []

    root_path = Path(root)
    old = old_alias.replace(WILDCARD, "").encode("utf-8")
    new = new_alias.replace(WILDCARD, "").encode("utf-8")

    files = [
        path
        for path in await asyncio.to_thread(all_files_in_dir, root_path)
        if path.relative_to(root_path).as_posix() not in COMPILER_CONFIG_FILES
    ]
    if not files:
        return []

    semaphore = asyncio.Semaphore(min(concurrency, len(files)))

    async def _rewrite(path: Path) -> bool:
        async with semaphore:
            return await asyncio.to_thread(_rewrite_file, path, old, new)

    outcomes = await asyncio.gather(*(_rewrite(path) for path in files), return_exceptions=True)
    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            raise outcome
    return [path for path, outcome in zip(files, outcomes) if outcome]
