"""Pydantic schemas for the BetBuddy API."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class AnalysisResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: Literal["complete"] = "complete"
    structured_extraction: dict[str, Any] = Field(alias="structuredExtraction")
    narrative_text: str = Field(alias="narrativeText")
    citations: list[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: Literal["error"] = "error"
    error: str
    raw_text: str | None = Field(default=None, alias="rawText")


class VersionResponse(BaseModel):
    name: str
    version: str
    vision_model: str
    narrative_model: str
