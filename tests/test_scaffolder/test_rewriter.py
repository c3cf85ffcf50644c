"""Tests for import alias handling (create_rn_app.scaffolder.rewriter).

Covers:
- patch_compiler_config for ts/js, with and without ``src/``
- rewrite_import_alias: prefix swap, root config files untouched,
  no-op when aliases match, symlinks skipped, concurrency ceiling
"""

from __future__ import annotations

import threading
import time
from pathlib import Path

import pytest

from create_rn_app.scaffolder import rewriter
from create_rn_app.scaffolder.rewriter import (
    compiler_config_name,
    patch_compiler_config,
    rewrite_import_alias,
)


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


TSCONFIG = """{
  "compilerOptions": {
    "baseUrl": ".",
    "paths": {
      "@/*": ["./*"]
    }
  }
}
"""


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project(tree_factory) -> Path:
    """A generated project that imports through the default alias."""
    return tree_factory(
        "project",
        {
            "tsconfig.json": TSCONFIG,
            "jsconfig.json": TSCONFIG,
            "src/App.tsx": "import Button from '@/components/Button';\n",
            "src/components/Button.tsx": "import theme from '@/theme';\nexport default theme;\n",
            "README.md": "No alias here.\n",
        },
    )


# ---------------------------------------------------------------------------
# patch_compiler_config
# ---------------------------------------------------------------------------


class TestPatchCompilerConfig:
    def test_config_name(self) -> None:
        assert compiler_config_name("ts") == "tsconfig.json"
        assert compiler_config_name("js") == "jsconfig.json"

    @pytest.mark.asyncio
    async def test_default_alias_unchanged(self, project: Path) -> None:
        path = await patch_compiler_config(project, "ts", False, "@/*")
        assert path == project / "tsconfig.json"
        assert path.read_text() == TSCONFIG

    @pytest.mark.asyncio
    async def test_custom_alias(self, project: Path) -> None:
        await patch_compiler_config(project, "ts", False, "~/*")
        text = (project / "tsconfig.json").read_text()
        assert '"~/*": ["./*"]' in text
        assert '"@/*"' not in text

    @pytest.mark.asyncio
    async def test_src_dir(self, project: Path) -> None:
        await patch_compiler_config(project, "ts", True, "@/*")
        assert '"@/*": ["./src/*"]' in (project / "tsconfig.json").read_text()

    @pytest.mark.asyncio
    async def test_src_dir_and_custom_alias(self, project: Path) -> None:
        await patch_compiler_config(project, "js", True, "#app/*")
        assert '"#app/*": ["./src/*"]' in (project / "jsconfig.json").read_text()
        assert (project / "tsconfig.json").read_text() == TSCONFIG

    @pytest.mark.asyncio
    async def test_missing_config(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            await patch_compiler_config(tmp_path, "ts", False, "~/*")


# ---------------------------------------------------------------------------
# rewrite_import_alias
# ---------------------------------------------------------------------------


class TestRewriteImportAlias:
    """Tests for the tree-wide alias swap."""

    @pytest.mark.asyncio
    async def test_rewrites_sources(self, project: Path) -> None:
        await rewrite_import_alias(project, "@/*", "~/*")

        assert (project / "src" / "App.tsx").read_text() == (
            "import Button from '~/components/Button';\n"
        )
        assert (project / "src" / "components" / "Button.tsx").read_text() == (
            "import theme from '~/theme';\nexport default theme;\n"
        )

    @pytest.mark.asyncio
    async def test_root_configs_untouched(self, project: Path) -> None:
        await rewrite_import_alias(project, "@/*", "~/*")
        assert (project / "tsconfig.json").read_text() == TSCONFIG
        assert (project / "jsconfig.json").read_text() == TSCONFIG

    @pytest.mark.asyncio
    async def test_nested_config_is_rewritten(self, project: Path) -> None:
        (project / "src" / "tsconfig.json").write_text('{"paths": {"@/*": ["./*"]}}\n')
        await rewrite_import_alias(project, "@/*", "~/*")
        assert (project / "src" / "tsconfig.json").read_text() == '{"paths": {"~/*": ["./*"]}}\n'

    @pytest.mark.asyncio
    async def test_returns_visited_files(self, project: Path) -> None:
        visited = await rewrite_import_alias(project, "@/*", "~/*")
        assert sorted(path.relative_to(project).as_posix() for path in visited) == [
            "README.md",
            "src/App.tsx",
            "src/components/Button.tsx",
        ]

    @pytest.mark.asyncio
    async def test_same_alias_is_noop(self, project: Path) -> None:
        before = (project / "src" / "App.tsx").stat().st_mtime_ns
        assert await rewrite_import_alias(project, "@/*", "@/*") == []
        assert (project / "src" / "App.tsx").stat().st_mtime_ns == before

    @pytest.mark.asyncio
    async def test_file_without_alias_not_rewritten(self, project: Path) -> None:
        before = (project / "README.md").stat().st_mtime_ns
        await rewrite_import_alias(project, "@/*", "~/*")
        assert (project / "README.md").stat().st_mtime_ns == before

    @pytest.mark.asyncio
    async def test_symlinks_skipped(self, project: Path, tree_factory) -> None:
        outside = tree_factory("outside", {"shared.ts": "import x from '@/x';\n"})
        (project / "src" / "shared.ts").symlink_to(outside / "shared.ts")

        visited = await rewrite_import_alias(project, "@/*", "~/*")

        assert (outside / "shared.ts").read_text() == "import x from '@/x';\n"
        assert project / "src" / "shared.ts" not in visited

    @pytest.mark.asyncio
    async def test_binary_content(self, project: Path) -> None:
        payload = b"\x00\xff@/asset\xfe"
        (project / "blob.bin").write_bytes(payload)
        await rewrite_import_alias(project, "@/*", "~/*")
        assert (project / "blob.bin").read_bytes() == b"\x00\xff~/asset\xfe"

    @pytest.mark.asyncio
    async def test_empty_tree(self, tmp_path: Path) -> None:
        assert await rewrite_import_alias(tmp_path, "@/*", "~/*") == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("concurrency", [0, -1])
    async def test_rejects_non_positive_concurrency(self, project: Path, concurrency: int) -> None:
        with pytest.raises(ValueError, match="concurrency must be at least 1"):
            await rewrite_import_alias(project, "@/*", "~/*", concurrency=concurrency)
        assert "'@/components/Button'" in (project / "src" / "App.tsx").read_text()

    @pytest.mark.asyncio
    async def test_single_worker(self, project: Path) -> None:
        visited = await rewrite_import_alias(project, "@/*", "~/*", concurrency=1)
        assert len(visited) == 3
        assert "'~/components/Button'" in (project / "src" / "App.tsx").read_text()

    @pytest.mark.asyncio
    async def test_concurrency_ceiling(
        self, tree_factory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        root = tree_factory(
            "many", {f"src/file{i}.ts": "import a from '@/a';\n" for i in range(20)}
        )
        lock = threading.Lock()
        active = 0
        peak = 0
        original = rewriter._rewrite_file

        def _tracking(path: Path, old: bytes, new: bytes) -> bool:
            nonlocal active, peak
            with lock:
                active += 1
                peak = max(peak, active)
            try:
                time.sleep(0.01)
                return original(path, old, new)
            finally:
                with lock:
                    active -= 1

        monkeypatch.setattr(rewriter, "_rewrite_file", _tracking)

        visited = await rewrite_import_alias(root, "@/*", "~/*", concurrency=3)

        assert len(visited) == 20
        assert 1 <= peak <= 3
        assert all(
            path.read_text() == "import a from '~/a';\n" for path in (root / "src").iterdir()
        )
