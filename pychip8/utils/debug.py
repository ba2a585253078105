"""Category-filtered debug printing for the CHIP-8 interpreter.

Categories are enabled through the ``CHIP8_DEBUG`` environment variable, e.g.
``CHIP8_DEBUG=cpu,opcode`` or ``CHIP8_DEBUG=all``. The interpreter logs under
the names in :data:`CATEGORIES`; unknown names in the variable are ignored
with a single warning line so typos do not silently disable output.
"""

from __future__ import annotations

import os
import sys
from typing import FrozenSet

ENV_VARIABLE = "CHIP8_DEBUG"

# cpu: every fetched word, opcode: invalid words, input: keypad levels,
# loader: program images, perf: frame timing, trace: fault dumps,
# overlay: register panel in the window
CATEGORIES: FrozenSet[str] = frozenset({"cpu", "opcode", "input", "loader", "perf", "trace", "overlay"})
ALL = "all"

_enabled: FrozenSet[str] | None = None


def parse_categories(value: str) -> FrozenSet[str]:
    """Turn a comma separated category list into the set of enabled names."""

    names = {part.strip().lower() for part in value.split(",")}
    names.discard("")
    if ALL in names:
        return CATEGORIES
    unknown = names - CATEGORIES
    if unknown:
        print(f"[CHIP8] ignoring unknown debug categories: {', '.join(sorted(unknown))}", file=sys.stderr)
    return frozenset(names & CATEGORIES)


def reload_categories() -> FrozenSet[str]:
    """Read ``CHIP8_DEBUG`` again, replacing the cached selection."""

    global _enabled
    _enabled = parse_categories(os.environ.get(ENV_VARIABLE, ""))
    return _enabled


def enabled_categories() -> FrozenSet[str]:
    if _enabled is None:
        return reload_categories()
    return _enabled


def debug_enabled(category: str | None = None) -> bool:
    """Return True if ``category`` (or, without one, any category) is on."""

    enabled = enabled_categories()
    if category is None:
        return bool(enabled)
    return category.lower() in enabled


def debug_log(category: str, message: str, *args) -> None:
    if not debug_enabled(category):
        return
    if args:
        try:
            message = message % args
        except (TypeError, ValueError):
            message = f"{message} {args!r}"
    print(f"[CHIP8][{category}] {message}")
