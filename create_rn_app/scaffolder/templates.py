"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads text templates from a
template root and renders them against the substitution table of a run.
Binary files (images, fonts, archives, keystores, ...) are recognised by
extension and never go through the renderer.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined


# ---------------------------------------------------------------------------
# Binary file detection
# ---------------------------------------------------------------------------

BINARY_EXTENSIONS: frozenset[str] = frozenset(
    {
        # images
        "png", "jpg", "jpeg", "gif", "bmp", "ico", "icns", "webp", "tif",
        "tiff", "psd", "heic", "avif", "cur", "dds", "tga", "xcf",
        # fonts
        "ttf", "otf", "woff", "woff2", "eot",
        # audio / video
        "mp3", "mp4", "m4a", "m4v", "wav", "ogg", "oga", "flac", "aac",
        "mov", "avi", "mkv", "webm", "wma", "wmv", "3gp", "caf",
        # archives
        "zip", "gz", "tgz", "bz2", "xz", "7z", "rar", "tar", "jar", "war",
        "aar", "apk", "aab", "ipa", "dmg", "pkg", "deb", "rpm", "xpi",
        # compiled / native
        "class", "dex", "so", "a", "o", "dll", "dylib", "exe", "lib", "obj",
        "pyc", "wasm", "node", "bin", "dat",
        # documents / data
        "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "odt", "ods",
        "odp", "sqlite", "db", "realm",
        # signing
        "keystore", "jks", "p12", "mobileprovision", "cer",
    }
)


def is_binary_path(path: str | Path) -> bool:
    """Return ``True`` if *path* has a known binary file extension."""
    suffix = Path(path).suffix
    return bool(suffix) and suffix[1:].lower() in BINARY_EXTENSIONS


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------

CRLF = "\r\n"


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    Templates reference substitution keys as ``{{ className }}``.  Undefined
    keys are errors (``StrictUndefined``): a template asking for a value the
    run does not provide must fail instead of producing an empty string.

    Jinja2 normalises line endings to a single sequence per environment, so
    templates containing ``\\r\\n`` are rendered through a CRLF overlay and
    keep their Windows line endings.
    """

    def __init__(self, template_dir: str | Path) -> None:
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.crlf_env = self.env.overlay(newline_sequence=CRLF)

    def render(self, template_path: str | Path, context: Mapping[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"ios/__className__/AppDelegate.mm"``).
            context: Values available inside the template.

        Returns:
            The rendered template content as a string, with the line endings
            of the source file.
        """
        name = Path(template_path).as_posix()
        source, _, _ = self.env.loader.get_source(self.env, name)
        env = self.crlf_env if CRLF in source else self.env
        return env.get_template(name).render(**context)
