"""Shared pytest fixtures for the create-rn-app test suite.

Provides reusable fixtures for:
- Small hand-built template trees
- The substitution table of a typical run
- ``AppOptions`` / ``ScaffoldConfig`` pointing at the bundled templates
- A clean environment for package-manager detection
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from create_rn_app.config import AppOptions, ScaffoldConfig
from create_rn_app.scaffolder.generator import build_substitutions


# 1x1 transparent PNG; contains bytes that are not valid UTF-8.
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c63646060f80f0000020101001e2a4b"
    "0e0000000049454e44ae426082"
)


# ---------------------------------------------------------------------------
# Template trees
# ---------------------------------------------------------------------------


def write_tree(root: Path, files: dict[str, str | bytes]) -> Path:
    """Write ``{relative_path: content}`` under *root* and return *root*."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def tree_factory(tmp_path: Path) -> Callable[..., Path]:
    """Build a directory of files below ``tmp_path``."""

    def _build(name: str, files: dict[str, str | bytes]) -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        return write_tree(root, files)

    return _build


@pytest.fixture
def template_dir(tree_factory) -> Path:
    """A miniature native template tree covering every path rule."""
    return tree_factory(
        "template",
        {
            "app.json": '{"name": "{{ className }}", "displayName": "{{ displayName }}"}\n',
            "index.js": "import App from '{{ entryApp }}';\n",
            "android/gradlew": "#!/bin/sh\necho {{ className }}\n",
            "android/gradlew.bat": b"@echo off\r\nrem {{ className }}\r\n",
            "android/app/build.gradle.template": 'namespace "com.{{ lowerCaseName }}"\n',
            "android/app/src/main/java/com/__lowerCaseName__/MainActivity.java": (
                "package com.{{ lowerCaseName }};\n"
            ),
            "android/app/src/main/res/mipmap-mdpi/ic_launcher.png": PNG_BYTES,
            "ios/xcode.env": "export NODE_BINARY=$(command -v node)\n",
            "ios/__className__/AppDelegate.mm": 'self.moduleName = @"{{ className }}";\n',
        },
    )


@pytest.fixture
def substitutions() -> dict[str, str]:
    """The substitution table for a project called ``my-cool-app``."""
    return dict(build_substitutions("my-cool-app", src_dir=False))


# ---------------------------------------------------------------------------
# Options and config
# ---------------------------------------------------------------------------


@pytest.fixture
def scaffold_config() -> ScaffoldConfig:
    """Config pointing at the templates shipped with the package."""
    return ScaffoldConfig()


@pytest.fixture
def make_options(tmp_path: Path) -> Callable[..., AppOptions]:
    """Build ``AppOptions`` for a project under ``tmp_path``."""

    def _make(name: str = "my-cool-app", **overrides: Any) -> AppOptions:
        return AppOptions(app_path=tmp_path / name, **overrides)

    return _make


@pytest.fixture
def clean_user_agent(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove any package-manager hint inherited from the test runner."""
    monkeypatch.delenv("npm_config_user_agent", raising=False)
