"""Best-effort extraction of the JSON object embedded in narrative text."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Sequence

logger = logging.getLogger(__name__)

_FENCED_OBJECT = re.compile(r"```(?:json)?\s*(\{[\s\S]*?\})\s*```")
_BARE_OBJECT = re.compile(r"(\{[\s\S]*\})")

INVALID_JSON_MESSAGE = "Invalid JSON format in analysis data"
UNEXPECTED_SHAPE_MESSAGE = "Analysis data doesn't match the expected structure"


@dataclass
class NarrativeParseResult:
    raw_text: str
    analysis: dict[str, Any] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.analysis is not None


def extract_json_candidate(text: str) -> str:
    """Return the most plausible JSON span: fenced block, then outer braces, then the text."""

    match = _FENCED_OBJECT.search(text)
    if match:
        return match.group(1).strip()
    match = _BARE_OBJECT.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def parse_narrative(text: str, citations: Sequence[str] | None = None) -> NarrativeParseResult:
    """Parse narrative text into an analysis mapping; failures are reported, never raised."""

    candidate = extract_json_candidate(text or "")
    try:
        analysis = json.loads(candidate)
    except (json.JSONDecodeError, TypeError) as exc:
        logger.warning("Narrative text is not valid JSON: %s", exc)
        return NarrativeParseResult(raw_text=text, error=INVALID_JSON_MESSAGE)

    if (
        not isinstance(analysis, dict)
        or not isinstance(analysis.get("legs"), list)
        or not isinstance(analysis.get("parlay_analysis"), dict)
    ):
        return NarrativeParseResult(raw_text=text, error=UNEXPECTED_SHAPE_MESSAGE)

    if citations and not analysis.get("citations"):
        analysis["citations"] = list(citations)
    return NarrativeParseResult(raw_text=text, analysis=analysis)
