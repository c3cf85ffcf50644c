"""create-rn-app scaffolder -- materialises React Native project trees.

This package takes an ``AppOptions`` and renders a ready-to-install project
directory: native Android/iOS skeleton, JavaScript or TypeScript app shell,
import alias configuration, and a pinned ``package.json``.

Quick usage::

    from create_rn_app.config import AppOptions
    from create_rn_app.scaffolder import ProjectGenerator

    options = AppOptions(app_path="my-app", mode="ts", eslint=True)
    project_path = await ProjectGenerator(options).generate()
"""

from create_rn_app.scaffolder.files import (
    EmptySourceError,
    GradlePermissionError,
    TemplateWriteError,
    generate_files,
)
from create_rn_app.scaffolder.generator import ProjectGenerator
from create_rn_app.scaffolder.manifest import assemble_manifest
from create_rn_app.scaffolder.templates import TemplateRenderer

__all__ = [
    "EmptySourceError",
    "GradlePermissionError",
    "ProjectGenerator",
    "TemplateRenderer",
    "TemplateWriteError",
    "assemble_manifest",
    "generate_files",
]
