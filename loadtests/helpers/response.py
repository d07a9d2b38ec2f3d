"""Response error extraction for load test observability.

Parses checkout API error responses into human-readable messages.
Handles the envelope shape ``{"success": false, "message": "...", "error": "..."}``
and falls back to FastAPI's ``{"detail": ...}`` shape.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    """
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    if "message" in body:
        if body.get("error"):
            return f"{body['message']}: {body['error']}"
        return str(body["message"])

    if "detail" in body:
        detail = body["detail"]
        if isinstance(detail, list):
            return " | ".join(str(err.get("msg", err)) for err in detail)
        return str(detail)

    return str(body)[:300]
