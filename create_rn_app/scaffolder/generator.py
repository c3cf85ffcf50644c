"""Main scaffolding orchestrator.

Takes an ``AppOptions`` and materialises a React Native project: the native
skeleton rendered with the project's names, the per-language JavaScript
skeleton copied verbatim, the import alias applied, and a ``package.json``
assembled from pinned versions.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from ..config import DEFAULT_IMPORT_ALIAS, AppOptions, ScaffoldConfig
from ..names import derive_names
from ..utils import console, print_dependency_list
from .copier import copy
from .files import generate_files
from .manifest import assemble_manifest, write_manifest
from .relocate import relocate_to_src
from .rewriter import patch_compiler_config, rewrite_import_alias


# Template files stored without their leading dot so packaging tools do not
# treat them as their own config.
DOTFILES = frozenset({"gitignore", "eslintrc.json", "prettierrc.json"})

README_TEMPLATE = "README-template.md"


def rename_template_file(name: str) -> str:
    """Map a file name in the template tree to its name in the project."""
    if name in DOTFILES:
        return f".{name}"
    if name == README_TEMPLATE:
        return "README.md"
    return name


def build_substitutions(app_name: str, src_dir: bool) -> Mapping[str, str]:
    """Build the read-only substitution table for one run."""
    names = derive_names(app_name)
    return MappingProxyType(
        {
            "className": names.class_name,
            "propertyName": names.property_name,
            "constantName": names.constant_name,
            "fileName": names.file_name,
            "displayName": names.class_name,
            "lowerCaseName": names.class_name.lower(),
            "entryApp": "./src/App" if src_dir else "./App",
        }
    )


class ProjectGenerator:
    """Main scaffolding orchestrator.

    Given an ``AppOptions``, generates the project tree in strict order:

    - native skeleton rendered from ``templates/files``
    - JavaScript skeleton copied from ``templates/<template>/<mode>``
    - compiler config alias patched, other files rewritten if the alias changed
    - entry point moved into ``src/`` when requested
    - ``package.json`` written last
    """

    def __init__(self, options: AppOptions, config: ScaffoldConfig | None = None) -> None:
        self.options = options
        self.config = config or ScaffoldConfig()

    # -- Public API --------------------------------------------------------

    async def generate(self) -> Path:
        """Generate the complete project structure.

        Returns:
            Path to the generated project root.
        """
        options = self.options
        root = options.root
        await asyncio.to_thread(root.mkdir, parents=True, exist_ok=True)

        console.print(f"[bold]Using {options.package_manager}.[/bold]")
        console.print(f"\nInitializing project with template: {self.config.template}\n")

        # 1. Native skeleton with name substitution
        substitutions = build_substitutions(options.app_name, options.src_dir)
        await generate_files(
            self.config.files_dir,
            root,
            substitutions,
            strict_writes=self.config.strict_writes,
        )

        # 2. JavaScript skeleton for the selected language
        await self._copy_mode_files(root)

        # 3. Import alias
        await patch_compiler_config(root, options.mode, options.src_dir, options.import_alias)
        if options.import_alias != DEFAULT_IMPORT_ALIAS:
            await rewrite_import_alias(
                root,
                DEFAULT_IMPORT_ALIAS,
                options.import_alias,
                concurrency=self.config.max_concurrent_rewrites,
            )

        # 4. Nested source directory
        if options.src_dir:
            await relocate_to_src(root, options.mode)

        # 5. package.json
        manifest = assemble_manifest(
            options.app_name, options.mode, options.package_manager, options.eslint
        )
        await write_manifest(root, manifest)
        self._report_dependencies(manifest)

        return root

    # -- Steps -------------------------------------------------------------

    async def _copy_mode_files(self, root: Path) -> list[Path]:
        patterns = ["**"]
        if not self.options.eslint:
            patterns.append("!eslintrc.json")
        return await copy(
            patterns,
            root,
            cwd=self.config.mode_dir(self.options.mode),
            rename=rename_template_file,
        )

    def _report_dependencies(self, manifest: Mapping[str, Any]) -> None:
        print_dependency_list("Dependencies:", manifest["dependencies"])
        if "devDependencies" in manifest:
            print_dependency_list("devDependencies:", manifest["devDependencies"])
        console.print()
