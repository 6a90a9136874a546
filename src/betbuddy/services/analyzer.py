"""Bet slip analysis orchestration: vision extraction, then narrative analysis."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from fastapi import status

from betbuddy.agents.narrative_client import NarrativeClient, NarrativeResult
from betbuddy.agents.prompts import narrative_prompt
from betbuddy.agents.vision_client import media_type_for, read_bet_slip
from betbuddy.config import get_settings
from betbuddy.errors import InvalidBetSlipError, InvalidImageError
from betbuddy.parsing.slip import is_invalid_sentinel, parse_extraction

logger = logging.getLogger(__name__)

NO_IMAGE_MESSAGE = "No image provided or invalid image format"
INVALID_SLIP_MESSAGE = "Invalid bet slip. Please submit a valid betting slip image."


@dataclass
class SlipAnalysis:
    extraction: Dict[str, Any]
    narrative_text: str
    citations: List[str] = field(default_factory=list)


def validate_image(image_bytes: bytes | None, content_type: str | None) -> None:
    if not image_bytes:
        raise InvalidImageError(NO_IMAGE_MESSAGE)
    if content_type and not content_type.startswith("image/"):
        raise InvalidImageError(NO_IMAGE_MESSAGE)
    limit = get_settings().max_upload_bytes
    if len(image_bytes) > limit:
        raise InvalidImageError(
            f"Image too large. Maximum file size is {limit // (1024 * 1024)}MB",
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        )


def request_narrative(extraction: Dict[str, Any]) -> NarrativeResult:
    with NarrativeClient() as client:
        return client.analyze(narrative_prompt(extraction))


def analyze_slip(image_bytes: bytes | None, content_type: str | None) -> SlipAnalysis:
    """Run one image through both models; every failure is raised as a BetBuddyError."""

    validate_image(image_bytes, content_type)
    raw = read_bet_slip(image_bytes, media_type_for(content_type))
    if is_invalid_sentinel(raw):
        logger.info("Vision model rejected the image as not a bet slip")
        raise InvalidBetSlipError(INVALID_SLIP_MESSAGE)

    extraction = parse_extraction(raw)
    logger.info("Requesting narrative analysis for %s", extraction.get("description") or "bet slip")
    narrative = request_narrative(extraction)
    logger.info("Received narrative analysis (%d citations)", len(narrative.citations))
    return SlipAnalysis(
        extraction=extraction,
        narrative_text=narrative.text,
        citations=narrative.citations,
    )
