"""Project name validation.

A generated project is published under its directory name in ``package.json``
so the name has to satisfy npm's rules for new packages.  On top of that,
names that collide with the framework itself or with Java keywords (the
Android package is derived from the project name) are rejected.
"""

from __future__ import annotations

import re
from urllib.parse import quote

from pydantic import BaseModel, Field


MAX_NAME_LENGTH = 214

# https://docs.oracle.com/javase/tutorial/java/nutsandbolts/_keywords.html
JAVA_KEYWORDS: frozenset[str] = frozenset(
    {
        "abstract", "assert", "boolean", "break", "byte", "case", "catch",
        "char", "class", "const", "continue", "default", "do", "double",
        "else", "enum", "extends", "final", "finally", "float", "for",
        "goto", "if", "implements", "import", "instanceof", "int",
        "interface", "long", "native", "new", "package", "private",
        "protected", "public", "return", "short", "static", "strictfp",
        "super", "switch", "synchronized", "this", "throw", "throws",
        "transient", "try", "void", "volatile", "while",
    }
)

RESERVED_NAMES: frozenset[str] = frozenset({"react", "react-native"}) | JAVA_KEYWORDS

BLACKLISTED_NAMES: frozenset[str] = frozenset({"node_modules", "favicon.ico"})

NODE_BUILTINS: frozenset[str] = frozenset(
    {
        "assert", "buffer", "child_process", "cluster", "console", "constants",
        "crypto", "dgram", "dns", "domain", "events", "fs", "http", "http2",
        "https", "inspector", "module", "net", "os", "path", "perf_hooks",
        "process", "punycode", "querystring", "readline", "repl", "stream",
        "string_decoder", "sys", "timers", "tls", "trace_events", "tty", "url",
        "util", "v8", "vm", "wasi", "worker_threads", "zlib",
    }
)

_SCOPED_NAME = re.compile(r"^(?:@([^/]+?)[/])?([^/]+?)$")
_SPECIAL_CHARACTERS = re.compile(r"[~'!()*]")


class ValidationResult(BaseModel):
    """Outcome of :func:`validate_npm_name`."""

    valid: bool
    problems: list[str] = Field(default_factory=list)


def _url_safe(value: str) -> bool:
    return quote(value, safe="-_.!~*'()") == value


def npm_name_problems(name: str) -> list[str]:
    """Return every npm rule *name* breaks for a newly published package."""
    problems: list[str] = []

    if not name:
        return ["name length must be greater than zero"]
    if name.startswith("."):
        problems.append("name cannot start with a period")
    if name.startswith("_"):
        problems.append("name cannot start with an underscore")
    if name.strip() != name:
        problems.append("name cannot contain leading or trailing spaces")
    if name.lower() in BLACKLISTED_NAMES:
        problems.append(f"{name} is a blacklisted name")
    if name.lower() in NODE_BUILTINS:
        problems.append(f"{name} is a core module name")
    if len(name) > MAX_NAME_LENGTH:
        problems.append(f"name can no longer contain more than {MAX_NAME_LENGTH} characters")
    if name.lower() != name:
        problems.append("name can no longer contain capital letters")
    if _SPECIAL_CHARACTERS.search(name.split("/")[-1]):
        problems.append("name can no longer contain special characters (\"~'!()*\")")

    if not _url_safe(name):
        match = _SCOPED_NAME.match(name)
        scoped_ok = (
            match is not None
            and match.group(1) is not None
            and _url_safe(match.group(1))
            and _url_safe(match.group(2))
        )
        if not scoped_ok:
            problems.append("name can only contain URL-friendly characters")

    return problems


def validate_npm_name(name: str) -> ValidationResult:
    """Check that *name* can be used for a new React Native project."""
    if name.lower() in RESERVED_NAMES:
        return ValidationResult(valid=False, problems=["Please do not use a reserved word."])

    problems = npm_name_problems(name)
    return ValidationResult(valid=not problems, problems=problems)
