"""``package.json`` assembly for generated projects.

Every version comes from :data:`VERSIONS` so two runs with the same options
produce byte-identical manifests.  The manifest is built as a chain of frozen
snapshots: a fixed base, then one ``with_*`` step per optional dependency
group.
"""

from __future__ import annotations

import asyncio
import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..config import TemplateMode
from ..package_manager import PackageManager


MANIFEST_FILE = "package.json"

VERSIONS: dict[str, str] = {
    # react
    "react": "18.2.0",
    "reactTestRenderer": "18.2.0",
    # react-native
    "reactNative": "0.72.7",
    "reactNativeESLintConfig": "^0.72.2",
    "reactNativeMetroConfig": "^0.72.11",
    "reactNativeCommunityCliPlatformAndroid": "13.0.0",
    "reactNativeCommunityCliPlatformIOS": "13.0.0",
    # babel
    "babelCore": "^7.20.0",
    "babelPresetEnv": "^7.20.0",
    "babelRuntime": "^7.20.0",
    # typescript
    "typescript": "4.8.4",
    "typesReact": "^18.0.24",
    "typesReactTestRenderer": "^18.0.0",
    "tsConfigReactNative": "^3.0.0",
    # eslint
    "eslint": "^8.19.0",
    # jest
    "jest": "^29.2.1",
    "babelJest": "^29.2.1",
    # metro
    "metroReactNativeBabelPreset": "0.76.8",
    # formatting
    "prettier": "^2.4.1",
}

SCRIPTS: dict[str, str] = {
    "android": "react-native run-android",
    "ios": "react-native run-ios",
    "lint": "eslint .",
    "start": "react-native start",
    "test": "jest",
}

ENGINES: dict[str, str] = {"node": ">=16"}


# ---------------------------------------------------------------------------
# Manifest snapshots
# ---------------------------------------------------------------------------


class Manifest(BaseModel):
    """Immutable snapshot of a ``package.json`` under construction."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str = "0.0.1"
    private: bool = True
    scripts: dict[str, str] = Field(default_factory=lambda: dict(SCRIPTS))
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict)
    engines: dict[str, str] = Field(default_factory=lambda: dict(ENGINES))

    def with_dev_dependencies(self, extra: Mapping[str, str]) -> "Manifest":
        """Return a new snapshot with *extra* merged into the dev dependencies."""
        return self.model_copy(update={"dev_dependencies": {**self.dev_dependencies, **extra}})

    def to_dict(self) -> dict[str, Any]:
        """Serialisable form: nested mappings sorted, empty devDependencies dropped."""
        data: dict[str, Any] = {
            "name": self.name,
            "version": self.version,
            "private": self.private,
            "scripts": self.scripts,
            "dependencies": self.dependencies,
            "devDependencies": self.dev_dependencies,
            "engines": self.engines,
        }
        if not self.dev_dependencies:
            del data["devDependencies"]
        return {
            key: sort_by_keys(value) if isinstance(value, Mapping) else value
            for key, value in data.items()
        }


def sort_by_keys(mapping: Mapping[str, Any]) -> dict[str, Any]:
    """Return *mapping* with its keys, and those of nested mappings, sorted."""
    return {
        key: sort_by_keys(value) if isinstance(value, Mapping) else value
        for key, value in sorted(mapping.items())
    }


# ---------------------------------------------------------------------------
# Builder steps
# ---------------------------------------------------------------------------


def base_manifest(app_name: str, package_manager: PackageManager) -> Manifest:
    """Dependencies every generated project gets."""
    dev_dependencies = {
        "@babel/core": VERSIONS["babelCore"],
        "@babel/preset-env": VERSIONS["babelPresetEnv"],
        "@babel/runtime": VERSIONS["babelRuntime"],
        "@react-native/metro-config": VERSIONS["reactNativeMetroConfig"],
        "babel-jest": VERSIONS["babelJest"],
        "jest": VERSIONS["jest"],
        "metro-react-native-babel-preset": VERSIONS["metroReactNativeBabelPreset"],
        "prettier": VERSIONS["prettier"],
        "react-test-renderer": VERSIONS["reactTestRenderer"],
    }
    # pnpm does not hoist the platform CLIs pulled in by react-native.
    if package_manager == "pnpm":
        dev_dependencies["@react-native-community/cli-platform-ios"] = VERSIONS[
            "reactNativeCommunityCliPlatformIOS"
        ]
        dev_dependencies["@react-native-community/cli-platform-android"] = VERSIONS[
            "reactNativeCommunityCliPlatformAndroid"
        ]

    return Manifest(
        name=app_name,
        dependencies={
            "react": VERSIONS["react"],
            "react-native": VERSIONS["reactNative"],
        },
        dev_dependencies=dev_dependencies,
    )


def with_typescript(manifest: Manifest) -> Manifest:
    return manifest.with_dev_dependencies(
        {
            "typescript": VERSIONS["typescript"],
            "@types/react": VERSIONS["typesReact"],
            "@types/react-test-renderer": VERSIONS["typesReactTestRenderer"],
            "@tsconfig/react-native": VERSIONS["tsConfigReactNative"],
        }
    )


def with_eslint(manifest: Manifest) -> Manifest:
    return manifest.with_dev_dependencies(
        {
            "eslint": VERSIONS["eslint"],
            "@react-native/eslint-config": VERSIONS["reactNativeESLintConfig"],
        }
    )


def build_manifest(
    app_name: str,
    mode: TemplateMode,
    package_manager: PackageManager,
    eslint: bool,
) -> Manifest:
    """Apply the optional dependency groups selected by the options."""
    manifest = base_manifest(app_name, package_manager)
    if mode == "ts":
        manifest = with_typescript(manifest)
    if eslint:
        manifest = with_eslint(manifest)
    return manifest


def assemble_manifest(
    app_name: str,
    mode: TemplateMode,
    package_manager: PackageManager,
    eslint: bool,
) -> dict[str, Any]:
    """Return the ``package.json`` object for a new project, ready to serialise."""
    return build_manifest(app_name, mode, package_manager, eslint).to_dict()


def serialize_manifest(manifest: Mapping[str, Any]) -> str:
    """Two-space indented JSON with a trailing platform line terminator."""
    return json.dumps(manifest, indent=2, ensure_ascii=False) + os.linesep


async def write_manifest(root: str | Path, manifest: Mapping[str, Any]) -> Path:
    """Write *manifest* to ``package.json`` in *root*."""
    path = Path(root) / MANIFEST_FILE
    content = serialize_manifest(manifest).encode("utf-8")
    await asyncio.to_thread(path.write_bytes, content)
    return path
