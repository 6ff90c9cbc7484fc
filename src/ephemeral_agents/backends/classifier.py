"""Heuristic task classification into backend tiers."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ephemeral_agents.backends.registry import Tier

_REASONING_PATTERNS = (
    r"\bstep[- ]by[- ]step\b",
    r"\bprove\b",
    r"\bproof\b",
    r"\bderive\b",
    r"\btrade-?offs?\b",
    r"\bwhy\b.*\bwould\b",
    r"\bplan\b.*\bstrategy\b",
    r"\broot cause\b",
    r"\breason(?:ing)? about\b",
)

_CODE_PATTERNS = (
    r"```",
    r"\bdef\b",
    r"\bclass\b",
    r"\bimport\b",
    r"\bfunction\b",
    r"\brefactor\b",
    r"\bdebug\b",
    r"\bimplement\b",
    r"\.(py|js|ts|java|go|rs|cpp|c|cs|rb|php|sh)\b",
)

_MODERATE_PATTERNS = (
    r"\bsummari[sz]e\b",
    r"\bsummary\b",
    r"\bexplain\b",
    r"\bcompare\b",
    r"\boverview\b",
    r"\bkey points\b",
    r"\banaly[sz]e\b",
    r"\bresearch\b",
)

# Tasks at or above this many words are never treated as simple lookups
_SIMPLE_MAX_WORDS = 12
# Tasks at or above this many words, or with this many enumerated parts, count as complex
_COMPLEX_MIN_WORDS = 120
_COMPLEX_MIN_PARTS = 3


@dataclass(frozen=True)
class Classification:
    """Outcome of classifying a task.

    Attributes:
        tier: The tier the task was assigned to.
        reason: Short description of the rule that matched.
    """

    tier: Tier
    reason: str


def _matches(patterns: tuple[str, ...], text: str) -> str | None:
    for pattern in patterns:
        if re.search(pattern, text, re.IGNORECASE):
            return pattern
    return None


def _enumerated_parts(text: str) -> int:
    return len(re.findall(r"^\s*(?:\d+[.)]|[-*])\s+", text, re.MULTILINE))


class TierClassifier:
    """Assign a ``Tier`` to task text using keyword and size heuristics.

    Rules are checked from most to least demanding:

    1. Explicit reasoning cues (step-by-step, prove, trade-offs) -> reasoning.
    2. Code cues, very long tasks, or several enumerated parts -> complex.
    3. Summarize / explain / compare / research cues -> moderate.
    4. Short tasks -> simple; anything else -> moderate.
    """

    def classify(self, text: str) -> Classification:
        words = len(text.split())

        pattern = _matches(_REASONING_PATTERNS, text)
        if pattern:
            return Classification(Tier.REASONING, f"reasoning cue {pattern!r}")

        pattern = _matches(_CODE_PATTERNS, text)
        if pattern:
            return Classification(Tier.COMPLEX, f"code cue {pattern!r}")
        if words >= _COMPLEX_MIN_WORDS:
            return Classification(Tier.COMPLEX, f"long task ({words} words)")
        parts = _enumerated_parts(text)
        if parts >= _COMPLEX_MIN_PARTS:
            return Classification(Tier.COMPLEX, f"multi-part task ({parts} parts)")

        pattern = _matches(_MODERATE_PATTERNS, text)
        if pattern:
            return Classification(Tier.MODERATE, f"analysis cue {pattern!r}")

        if words < _SIMPLE_MAX_WORDS:
            return Classification(Tier.SIMPLE, f"short task ({words} words)")
        return Classification(Tier.MODERATE, "default")
