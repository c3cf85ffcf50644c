"""Package manager identifiers and detection."""

from __future__ import annotations

import os
from typing import Literal

PackageManager = Literal["npm", "pnpm", "yarn", "bun"]

PACKAGE_MANAGERS: tuple[PackageManager, ...] = ("npm", "pnpm", "yarn", "bun")


def get_pkg_manager(user_agent: str | None = None) -> PackageManager:
    """Guess the package manager that launched us.

    npm, pnpm, yarn and bun all export ``npm_config_user_agent`` to the
    scripts they run (``"yarn/1.22.19 npm/? node/v18.17.0 darwin x64"``).
    Falls back to ``npm`` when the variable is missing or unrecognised.
    """
    if user_agent is None:
        user_agent = os.environ.get("npm_config_user_agent", "")

    for manager in ("yarn", "pnpm", "bun"):
        if user_agent.startswith(manager):
            return manager
    return "npm"
