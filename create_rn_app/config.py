"""create-rn-app configuration.

Two typed models, both Pydantic v2:

* ``AppOptions`` -- the user's choices for one generated project.  Built once
  by the CLI and never mutated afterwards; every scaffolding step reads from
  the same instance.
* ``ScaffoldConfig`` -- tuning knobs for the scaffolder itself (template
  location, rewrite concurrency, write-failure policy), overridable from the
  environment.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .package_manager import PackageManager


DEFAULT_IMPORT_ALIAS = "@/*"

_IMPORT_ALIAS_PATTERN = re.compile(r".+/\*")

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "scaffolder" / "templates"

TemplateMode = Literal["ts", "js"]


class AppOptions(BaseModel):
    """Everything the scaffolder needs to know about the project to create."""

    model_config = ConfigDict(frozen=True)

    app_path: Path = Field(..., description="Directory the project is generated into")
    package_manager: PackageManager = Field(default="npm")
    mode: TemplateMode = Field(default="ts", description="Target language of the template")
    eslint: bool = Field(default=True, description="Include ESLint config and dependencies")
    src_dir: bool = Field(default=False, description="Move entry points into ``src/``")
    import_alias: str = Field(default=DEFAULT_IMPORT_ALIAS)
    is_online: bool = Field(
        default=True,
        description="Registry reachable; consumed by the install step that runs after scaffolding",
    )

    @field_validator("import_alias")
    @classmethod
    def _check_import_alias(cls, value: str) -> str:
        if not _IMPORT_ALIAS_PATTERN.fullmatch(value):
            raise ValueError("Import alias must follow the pattern <prefix>/*")
        return value

    @property
    def root(self) -> Path:
        """Absolute path of the project root."""
        return self.app_path.expanduser().resolve()

    @property
    def app_name(self) -> str:
        """Project name, taken from the last segment of the root path."""
        return self.root.name

    @property
    def typescript(self) -> bool:
        return self.mode == "ts"


class ScaffoldConfig(BaseModel):
    """Scaffolder settings that are not part of the user's project choices."""

    template_dir: Path = Field(default=_DEFAULT_TEMPLATE_DIR)
    template: str = Field(default="default", description="Template family under ``template_dir``")
    max_concurrent_rewrites: int = Field(
        default=8, ge=1, description="Ceiling for concurrent import-alias rewrites"
    )
    strict_writes: bool = Field(
        default=False,
        description="Abort the run when a rendered file could not be written",
    )

    @property
    def files_dir(self) -> Path:
        """Name-templated native skeleton rendered through Jinja2."""
        return self.template_dir / "files"

    def mode_dir(self, mode: TemplateMode) -> Path:
        """Per-language project skeleton copied verbatim."""
        return self.template_dir / self.template / mode

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            RN_APP_TEMPLATE_DIR, RN_APP_MAX_CONCURRENT_REWRITES,
            RN_APP_STRICT_WRITES.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("RN_APP_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["RN_APP_TEMPLATE_DIR"])
        if os.environ.get("RN_APP_MAX_CONCURRENT_REWRITES"):
            kwargs["max_concurrent_rewrites"] = int(os.environ["RN_APP_MAX_CONCURRENT_REWRITES"])
        if os.environ.get("RN_APP_STRICT_WRITES"):
            kwargs["strict_writes"] = os.environ["RN_APP_STRICT_WRITES"].strip().lower() in {
                "1",
                "true",
                "yes",
            }
        return cls(**kwargs)
