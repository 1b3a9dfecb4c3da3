"""Audit provider client — POSTs a URL to the Lighthouse backend via httpx."""

from __future__ import annotations

import asyncio
import logging
from urllib.parse import urlparse

import httpx

from frontal.config import FrontalConfig
from frontal.errors import AuditError, InvalidUrlError

logger = logging.getLogger(__name__)

HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
    "Cache-Control": "no-store",
}


def validate_url(url: str) -> str:
    """Return the trimmed URL if it is http(s), else raise InvalidUrlError."""
    url = (url or "").strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidUrlError(f"Invalid URL: {url!r}. Use http or https.")
    return url


async def fetch_audit(
    url: str,
    config: FrontalConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict:
    """Run the external audit for ``url`` and return the raw report payload.

    The whole request is bounded by ``config.audit_timeout``; it is never
    retried.
    """
    try:
        return await asyncio.wait_for(
            _request_audit(url, config, transport),
            timeout=config.audit_timeout,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException) as e:
        logger.warning("Audit of %s timed out after %.0fs", url, config.audit_timeout)
        raise AuditError("Audit timed out. Please try again.", "timeout") from e
    except AuditError:
        raise
    except httpx.HTTPError as e:
        logger.warning("Audit of %s failed: %s", url, e)
        raise AuditError("Network error while running audit.", "network_error") from e


async def _request_audit(
    url: str,
    config: FrontalConfig,
    transport: httpx.AsyncBaseTransport | None,
) -> dict:
    async with httpx.AsyncClient(
        headers=HEADERS,
        timeout=config.audit_timeout,
        transport=transport,
    ) as client:
        response = await client.post(config.audit_url, json={"url": url})

    payload = _parse_response(response)

    if response.is_error:
        message = "Audit request failed."
        if isinstance(payload, dict) and payload.get("error"):
            message = str(payload["error"])
        raise AuditError(message, "http_error", status=response.status_code)

    if not isinstance(payload, dict) or not payload:
        raise AuditError("Unexpected response from audit server.", "invalid_response")

    return payload


def _parse_response(response: httpx.Response):
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text


def friendly_message(error: Exception | None) -> str:
    """User-facing text for an audit failure."""
    if error is None:
        return "Audit failed. Please try again."
    code = getattr(error, "code", None)
    if code == "timeout":
        return "Audit timed out. Please try again with a faster page or later."
    if code == "http_error":
        return str(error) or "Audit failed. Please verify the URL."
    return "Audit failed. Please check that the backend server is running."
