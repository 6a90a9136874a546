"""Error taxonomy for the slip analysis flow."""

from __future__ import annotations

from fastapi import status


class BetBuddyError(Exception):
    """Base class for failures that are reported back to the caller."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidImageError(BetBuddyError):
    """The request carried no usable image."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidBetSlipError(BetBuddyError):
    """The vision model judged the image not to be a bet slip."""

    status_code = status.HTTP_400_BAD_REQUEST


class ExtractionParseError(BetBuddyError):
    """The vision model's JSON could not be parsed, even after repair."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, raw_text: str) -> None:
        super().__init__(message)
        self.raw_text = raw_text


class UpstreamServiceError(BetBuddyError):
    """A remote model call failed or returned no content."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
