"""Clean-up and parsing of the vision model's bet slip JSON."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from betbuddy.agents.prompts import INVALID_BET_SLIP_SENTINEL
from betbuddy.errors import ExtractionParseError

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"```json\n?")
_FENCE_CLOSE = re.compile(r"```\n?")
# "odds": +150 / "parlayOdds": +516 are not valid JSON numbers
_SIGNED_ODDS = re.compile(r'("[A-Za-z_]*[Oo]dds"\s*:\s*)\+(\d+(?:\.\d+)?)')


def is_invalid_sentinel(text: str) -> bool:
    return text.strip().strip('"').strip() == INVALID_BET_SLIP_SENTINEL


def strip_code_fences(text: str) -> str:
    """Remove markdown code fence markers and surrounding whitespace."""

    return _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", text)).strip()


def repair_signed_odds(text: str) -> str:
    """Quote American odds written with a leading plus sign."""

    return _SIGNED_ODDS.sub(r'\1"+\2"', text)


def parse_extraction(text: str) -> dict[str, Any]:
    """Return the structured slip from raw vision text or raise ExtractionParseError."""

    cleaned = repair_signed_odds(strip_code_fences(text))
    logger.debug("Cleaned vision response: %s", cleaned)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.warning("Could not parse vision response as JSON: %s", exc)
        raise ExtractionParseError("Invalid bet slip data format", raw_text=cleaned) from exc
    if not isinstance(data, dict):
        raise ExtractionParseError("Invalid bet slip data format", raw_text=cleaned)
    return data
