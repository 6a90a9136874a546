"""FastAPI backend for BetBuddy."""

from __future__ import annotations

import logging

from fastapi import FastAPI, File, Request, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from betbuddy import __version__
from betbuddy.api.schemas import AnalysisResponse, ErrorResponse, VersionResponse
from betbuddy.config import get_settings
from betbuddy.errors import BetBuddyError, ExtractionParseError, InvalidImageError
from betbuddy.services.analyzer import NO_IMAGE_MESSAGE, analyze_slip

logger = logging.getLogger(__name__)

app = FastAPI(
    title="BetBuddy API",
    version=__version__,
    description="Reads a bet slip image and returns an AI analysis of every leg.",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, message: str, raw_text: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=message, raw_text=raw_text)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


@app.exception_handler(BetBuddyError)
async def handle_betbuddy_error(request: Request, exc: BetBuddyError) -> JSONResponse:
    logger.warning("%s %s failed (%s): %s", request.method, request.url.path, exc.status_code, exc.message)
    raw_text = exc.raw_text if isinstance(exc, ExtractionParseError) else None
    return _error_response(exc.status_code, exc.message, raw_text)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return _error_response(status.HTTP_400_BAD_REQUEST, NO_IMAGE_MESSAGE)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/version", response_model=VersionResponse)
def version() -> VersionResponse:
    settings = get_settings()
    return VersionResponse(
        name="betbuddy",
        version=__version__,
        vision_model=settings.vision_model,
        narrative_model=settings.narrative_model,
    )


@app.post(
    "/api/analyze",
    response_model=AnalysisResponse,
    responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def analyze(image: UploadFile | None = File(default=None)) -> AnalysisResponse:
    if image is None:
        raise InvalidImageError(NO_IMAGE_MESSAGE)
    image_bytes = image.file.read()
    try:
        result = analyze_slip(image_bytes, image.content_type)
    except BetBuddyError:
        raise
    except Exception as exc:  # pragma: no cover - unexpected failure
        logger.exception("Unexpected failure while analyzing %s", image.filename)
        raise BetBuddyError(str(exc) or "Failed to process image") from exc
    return AnalysisResponse(
        structured_extraction=result.extraction,
        narrative_text=result.narrative_text,
        citations=result.citations,
    )
