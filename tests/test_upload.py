"""Upload helper tests."""

from __future__ import annotations

import httpx
import pytest

from betbuddy.ui import upload

COMPLETE = {
    "status": "complete",
    "structuredExtraction": {"type": "Parlay"},
    "narrativeText": '{"legs": []}',
    "citations": [],
}


def _submit(handler, data: bytes | None = b"img") -> dict:
    return upload.submit_slip(
        "slip.jpg",
        data,
        "image/jpeg",
        base_url="http://api.test/",
        transport=httpx.MockTransport(handler),
    )


def test_no_file_is_rejected_before_any_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover - must not run
        raise AssertionError("request should not be sent")

    with pytest.raises(upload.UploadError, match="Please select an image to upload"):
        _submit(handler, data=None)


def test_complete_payload_is_returned() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=COMPLETE)

    assert _submit(handler) == COMPLETE
    assert str(seen[0].url) == "http://api.test/api/analyze"
    assert b'name="image"' in seen[0].content
    assert b'filename="slip.jpg"' in seen[0].content


def test_error_body_message_is_surfaced() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"status": "error", "error": "Invalid bet slip."})

    with pytest.raises(upload.UploadError, match="Invalid bet slip."):
        _submit(handler)


def test_http_error_without_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={})

    with pytest.raises(upload.UploadError, match="HTTP Error: 500"):
        _submit(handler)


def test_error_status_on_success_code() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "error"})

    with pytest.raises(upload.UploadError, match="Analysis failed"):
        _submit(handler)


@pytest.mark.parametrize(
    "payload",
    [{"status": "pending", "narrativeText": "x"}, {"status": "complete", "narrativeText": ""}],
)
def test_incomplete_payload_is_rejected(payload) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    with pytest.raises(upload.UploadError, match="API response missing required data"):
        _submit(handler)


def test_non_json_reply_is_rejected() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>Bad Gateway</html>")

    with pytest.raises(upload.UploadError, match="Invalid JSON response from server"):
        _submit(handler)


def test_transport_failure_is_surfaced() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(upload.UploadError, match="connection refused"):
        _submit(handler)


def test_raw_text_from_failed_extraction_is_kept() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400,
            json={"status": "error", "error": "Invalid bet slip data format", "rawText": "{type: Parlay"},
        )

    with pytest.raises(upload.UploadError, match="Invalid bet slip data format") as excinfo:
        _submit(handler)
    assert excinfo.value.raw_text == "{type: Parlay"


def test_errors_without_raw_text_leave_it_empty() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"status": "error", "error": "Invalid bet slip."})

    with pytest.raises(upload.UploadError) as excinfo:
        _submit(handler)
    assert excinfo.value.raw_text is None
