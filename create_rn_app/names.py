"""Identifier variants derived from a raw project name.

A project called ``my-cool-app`` needs to appear as ``MyCoolApp`` in native
class names, ``myCoolApp`` in JavaScript properties, ``MY_COOL_APP`` in
constants and ``my-cool-app`` in file names.  All four are derived from the
same segmentation so they never drift apart.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict


_LOWER_TO_UPPER = re.compile(r"([a-z\d])([A-Z])")
_ACRONYM_TO_WORD = re.compile(r"([A-Z]+)([A-Z][a-z])")
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


class ProjectNames(BaseModel):
    """The four case variants of a project name."""

    model_config = ConfigDict(frozen=True)

    class_name: str
    property_name: str
    constant_name: str
    file_name: str


def split_segments(raw: str) -> list[str]:
    """Split *raw* on separators and case transitions.

    Examples::

        split_segments("my-cool-app")   -> ["my", "cool", "app"]
        split_segments("MyCoolApp")     -> ["My", "Cool", "App"]
        split_segments("HTTPServer v2") -> ["HTTP", "Server", "v2"]
    """
    spaced = _LOWER_TO_UPPER.sub(r"\1 \2", raw)
    spaced = _ACRONYM_TO_WORD.sub(r"\1 \2", spaced)
    return [part for part in _NON_ALNUM.split(spaced) if part]


def to_class_name(raw: str) -> str:
    """``my-cool-app`` -> ``MyCoolApp``."""
    return "".join(segment.capitalize() for segment in split_segments(raw))


def to_property_name(raw: str) -> str:
    """``my-cool-app`` -> ``myCoolApp``."""
    segments = split_segments(raw)
    if not segments:
        return ""
    head, *rest = segments
    return head.lower() + "".join(segment.capitalize() for segment in rest)


def to_constant_name(raw: str) -> str:
    """``my-cool-app`` -> ``MY_COOL_APP``."""
    return "_".join(segment.upper() for segment in split_segments(raw))


def to_file_name(raw: str) -> str:
    """``My Cool_App`` -> ``my-cool-app``."""
    return "-".join(segment.lower() for segment in split_segments(raw))


def derive_names(raw: str) -> ProjectNames:
    """Derive every identifier variant for *raw*.

    Never raises.  Input without any alphanumeric characters yields empty
    strings; project names are validated before they get here.
    """
    return ProjectNames(
        class_name=to_class_name(raw),
        property_name=to_property_name(raw),
        constant_name=to_constant_name(raw),
        file_name=to_file_name(raw),
    )
