"""Thin client for the Perplexity chat completions API."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from betbuddy.config import get_perplexity_api_key, get_settings
from betbuddy.errors import UpstreamServiceError

logger = logging.getLogger(__name__)


@dataclass
class NarrativeResult:
    text: str
    citations: List[str] = field(default_factory=list)


class NarrativeClient:
    """Convenient wrapper for the Perplexity API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        if api_key is None:
            try:
                api_key = get_perplexity_api_key()
            except RuntimeError as exc:
                raise UpstreamServiceError(str(exc)) from exc
        self.api_key = api_key
        self.model = settings.narrative_model
        self.base_url = (base_url or settings.perplexity_base_url).rstrip("/")
        self._client = httpx.Client(
            timeout=settings.narrative_timeout_seconds,
            headers={"Authorization": f"Bearer {self.api_key}"},
            transport=transport,
        )

    def __enter__(self) -> "NarrativeClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self._client.post(url, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamServiceError(
                f"Failed to get analysis from narrative service: {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamServiceError(f"Failed to reach narrative service: {exc}") from exc
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamServiceError("Narrative service returned a non-JSON body") from exc

    def analyze(self, prompt: str) -> NarrativeResult:
        """Request a narrative analysis and return its text plus any citations."""

        payload = {"model": self.model, "messages": [{"role": "user", "content": prompt}]}
        data = self._request("/chat/completions", payload)
        logger.debug("Narrative service response: %s", data)
        try:
            text = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            text = None
        if not text or not isinstance(text, str):
            logger.error("Missing content in narrative service response: %s", data)
            raise UpstreamServiceError("Could not extract analysis from narrative service response")
        citations = data.get("citations")
        if not isinstance(citations, list):
            citations = []
        return NarrativeResult(text=text, citations=[str(c) for c in citations])
