"""Recover a tool call from free-form model text.

Backends without native structured calling are told to answer with a JSON
object such as ``{"action": "heartware_read", "filename": "notes.md"}``. The
extractor takes the span from the first ``{`` to the last ``}``, parses it,
and reports one of three outcomes:

- ``FOUND``: a tool call was recovered.
- ``NOT_FOUND``: the text holds no brace pair, or the object names no
  action; the text is a final answer.
- ``MALFORMED``: a brace pair is present but does not parse to an object
  with a usable action name.

Only ``FOUND`` continues the tool loop. The extractor never raises.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum

from ephemeral_agents.messages import ToolCallRecord
from ephemeral_agents.subagents.arguments import ArgumentNormalizer, normalize_arguments

logger = logging.getLogger(__name__)

# Checked in order; the first present key names the tool
ACTION_KEYS: tuple[str, ...] = ("action", "tool", "name")


class ExtractionStatus(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of one extraction attempt.

    Attributes:
        status: Which of the three outcomes occurred.
        call: The recovered call when ``status`` is ``FOUND``.
        reason: Why nothing was recovered, for logging.
    """

    status: ExtractionStatus
    call: ToolCallRecord | None = None
    reason: str = ""

    @property
    def found(self) -> bool:
        return self.status is ExtractionStatus.FOUND

    @classmethod
    def not_found(cls, reason: str) -> ExtractionResult:
        return cls(ExtractionStatus.NOT_FOUND, reason=reason)

    @classmethod
    def malformed(cls, reason: str) -> ExtractionResult:
        return cls(ExtractionStatus.MALFORMED, reason=reason)


class ToolCallExtractor:
    """Brace-span tool-call extractor.

    Args:
        normalizer: Applied to the argument mapping of every recovered call.
    """

    def __init__(self, normalizer: ArgumentNormalizer = normalize_arguments) -> None:
        self._normalizer = normalizer

    def extract(self, text: str | None) -> ExtractionResult:
        if not text:
            return ExtractionResult.not_found("empty text")

        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end == -1:
            return ExtractionResult.not_found("no braces")
        if end <= start:
            return ExtractionResult.not_found("closing brace precedes opening brace")

        raw = text[start : end + 1]
        try:
            parsed = json.loads(raw)
        except (json.JSONDecodeError, RecursionError) as exc:
            return ExtractionResult.malformed(f"invalid JSON: {exc}")

        if not isinstance(parsed, dict):
            return ExtractionResult.malformed("JSON payload is not an object")

        action_key = next((key for key in ACTION_KEYS if key in parsed), None)
        if action_key is None:
            return ExtractionResult.not_found("no action key")

        tool_name = parsed[action_key]
        if not isinstance(tool_name, str) or not tool_name.strip():
            return ExtractionResult.malformed(f"'{action_key}' is not a non-empty string")

        arguments = {key: value for key, value in parsed.items() if key not in ACTION_KEYS}
        try:
            arguments = self._normalizer(arguments)
        except Exception as exc:
            logger.debug("Argument normalizer failed for '%s': %s", tool_name, exc)
            return ExtractionResult.malformed(f"argument normalization failed: {exc}")

        return ExtractionResult(
            ExtractionStatus.FOUND,
            call=ToolCallRecord.create(tool_name.strip(), arguments),
        )


_default_extractor = ToolCallExtractor()


def extract_tool_call(text: str | None) -> ExtractionResult:
    """Extract with the default argument normalization."""
    return _default_extractor.extract(text)
