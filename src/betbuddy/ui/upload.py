"""Browser-side upload helper: posts a slip image and validates the reply."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from betbuddy.config import get_settings

logger = logging.getLogger(__name__)

ACCEPTED_EXTENSIONS = ["jpg", "jpeg", "png", "webp"]
ANALYZE_PATH = "/api/analyze"


class UploadError(Exception):
    """Raised with a user-facing message when an upload does not yield an analysis."""

    def __init__(self, message: str, raw_text: str | None = None) -> None:
        super().__init__(message)
        self.raw_text = raw_text


def submit_slip(
    filename: str | None,
    data: bytes | None,
    content_type: str | None,
    *,
    base_url: str | None = None,
    transport: httpx.BaseTransport | None = None,
) -> dict[str, Any]:
    """POST one image to the analysis endpoint and return the completed payload."""

    if not data:
        raise UploadError("Please select an image to upload")

    settings = get_settings()
    url = f"{(base_url or settings.api_base_url).rstrip('/')}{ANALYZE_PATH}"
    files = {"image": (filename or "slip", data, content_type or "application/octet-stream")}
    # the API waits on the narrative model, so allow for its timeout plus the vision call
    timeout = settings.narrative_timeout_seconds + 120.0
    try:
        with httpx.Client(timeout=timeout, transport=transport) as client:
            response = client.post(url, files=files)
    except httpx.HTTPError as exc:
        logger.error("Upload to %s failed: %s", url, exc)
        raise UploadError(str(exc) or "Failed to upload image") from exc

    logger.debug("Analysis response %s: %s", response.status_code, response.text[:500])
    try:
        payload = response.json()
    except ValueError as exc:
        raise UploadError("Invalid JSON response from server") from exc
    if not isinstance(payload, dict):
        raise UploadError("Invalid response from analysis API")

    if not response.is_success:
        raise UploadError(
            payload.get("error") or f"HTTP Error: {response.status_code}",
            raw_text=payload.get("rawText"),
        )
    if payload.get("status") == "error":
        raise UploadError(payload.get("error") or "Analysis failed")
    if payload.get("status") != "complete" or not payload.get("narrativeText"):
        raise UploadError("API response missing required data")
    return payload
