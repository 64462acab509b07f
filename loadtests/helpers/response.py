"""Response error extraction for load test observability.

Parses storefront API error responses into human-readable messages. Every
error body has an ``error`` key holding one of:

- a message string (404, 409, 503 and state errors)
- a ``{"field": ["msg", ...]}`` mapping (domain validation)
- a list of ``{"loc": [...], "msg": "..."}`` entries (request body validation)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a compact error message suitable for Locust failure messages."""
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict) or "error" not in body:
        return str(body)[:300]

    error = body["error"]
    if isinstance(error, list):
        parts = []
        for err in error:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        return " | ".join(parts)
    if isinstance(error, dict):
        return " | ".join(f"{k}: {v}" for k, v in error.items())
    return str(error)
