"""Argument-name normalization for tool calls recovered from text.

Models asked to call tools through plain text drift on argument names. This
is a heuristic, not a schema: swap ``normalize_arguments`` for a strict
validator when the backend supports structured calling.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

ArgumentNormalizer = Callable[[dict[str, Any]], dict[str, Any]]

# Checked in order; the first present alias fills a missing canonical key
FILENAME_ALIASES: tuple[str, ...] = ("file_path", "path")


def normalize_arguments(arguments: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``arguments`` with ``filename`` filled from an alias.

    An explicit ``filename`` always wins; alias keys are left in place.
    """
    normalized = dict(arguments)
    if "filename" not in normalized:
        for alias in FILENAME_ALIASES:
            if alias in normalized:
                normalized["filename"] = normalized[alias]
                break
    return normalized


def passthrough_arguments(arguments: dict[str, Any]) -> dict[str, Any]:
    """Normalizer that leaves arguments untouched."""
    return dict(arguments)
