"""OpenAI Chat Completions helper for reading bet slip images."""

from __future__ import annotations

import base64
import logging
from typing import Any, Dict, List

from openai import OpenAI, OpenAIError

from betbuddy.agents.prompts import VISION_INSTRUCTIONS
from betbuddy.config import get_openai_api_key, get_settings
from betbuddy.errors import UpstreamServiceError

logger = logging.getLogger(__name__)

SUPPORTED_MEDIA_TYPES = ("image/jpeg", "image/png", "image/webp")

_openai: OpenAI | None = None


def _client() -> OpenAI:
    global _openai
    if _openai is None:
        try:
            api_key = get_openai_api_key()
        except RuntimeError as exc:
            raise UpstreamServiceError(str(exc)) from exc
        _openai = OpenAI(api_key=api_key)
    return _openai


def media_type_for(content_type: str | None) -> str:
    """Map an upload's content type onto one the vision API accepts; JPEG otherwise."""

    if content_type in SUPPORTED_MEDIA_TYPES:
        return content_type
    return "image/jpeg"


def chat_completion(messages: List[Dict[str, Any]], max_tokens: int | None = None) -> str:
    settings = get_settings()
    try:
        response = _client().chat.completions.create(
            model=settings.vision_model,
            max_tokens=max_tokens or settings.vision_max_tokens,
            messages=messages,
        )
    except OpenAIError as exc:
        raise UpstreamServiceError(f"Vision service request failed: {exc}") from exc
    content = response.choices[0].message.content if response.choices else None
    if not content:
        raise UpstreamServiceError("Could not extract bet slip data from vision response")
    return content


def read_bet_slip(image_bytes: bytes, media_type: str) -> str:
    """Send a slip image to the vision model and return its raw text reply."""

    encoded = base64.b64encode(image_bytes).decode("utf-8")
    messages = [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": VISION_INSTRUCTIONS},
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:{media_type};base64,{encoded}"},
                },
            ],
        }
    ]
    logger.info("Sending %s image (%d bytes) to vision model", media_type, len(image_bytes))
    text = chat_completion(messages)
    logger.debug("Raw vision response: %s", text)
    return text
