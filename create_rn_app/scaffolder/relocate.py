"""Move the app entry point into a nested ``src/`` directory."""

from __future__ import annotations

import asyncio
from pathlib import Path

from ..config import TemplateMode


SRC_TS_FILE_NAMES = ("App.tsx",)
SRC_JS_FILE_NAMES = ("App.jsx",)

OLD_ENTRY_IMPORT = "../App"
NEW_ENTRY_IMPORT = "../src/App"


def src_file_names(mode: TemplateMode) -> tuple[str, ...]:
    return SRC_TS_FILE_NAMES if mode == "ts" else SRC_JS_FILE_NAMES


def app_test_path(root: Path, mode: TemplateMode) -> Path:
    """The generated test that imports the entry point."""
    name = "App.test.jsx" if mode == "js" else "App.test.tsx"
    return root / "__tests__" / name


def _move(source: Path, destination: Path) -> None:
    try:
        source.rename(destination)
    except FileNotFoundError:
        pass


def _patch_test_file(path: Path) -> bool:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return False
    path.write_bytes(text.replace(OLD_ENTRY_IMPORT, NEW_ENTRY_IMPORT).encode("utf-8"))
    return True


async def relocate_to_src(root: str | Path, mode: TemplateMode) -> Path:
    """Move the entry-point files of *mode* from *root* into ``root/src``.

    Files that are already gone are skipped; any other failure to move
    propagates.  The generated app test is then pointed at the new location.

    Returns:
        The ``src`` directory.
    """
    root_path = Path(root)
    src = root_path / "src"
    await asyncio.to_thread(src.mkdir, parents=True, exist_ok=True)

    outcomes = await asyncio.gather(
        *(asyncio.to_thread(_move, root_path / name, src / name) for name in src_file_names(mode)),
        return_exceptions=True,
    )
    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            raise outcome

    await asyncio.to_thread(_patch_test_file, app_test_path(root_path, mode))
    return src
