"""Fetch a page and split it into HTML, inline CSS and inline JS sources."""

from __future__ import annotations

import logging

import httpx

from frontal.config import FrontalConfig
from frontal.errors import ResourceFetchError
from frontal.scanner.models import Language, SourceFile
from frontal.scanner.patterns import HTML_SCRIPT, HTML_STYLE_BLOCK

logger = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": "FrontAl-Analyzer/1.0",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}


def extract_resources(html: str) -> list[SourceFile]:
    """Page markup plus its concatenated <style> and <script> bodies."""
    files = [SourceFile(name="index.html", language=Language.HTML, content=html)]

    css = "".join(m.group(1) + "\n\n" for m in HTML_STYLE_BLOCK.finditer(html))
    if css.strip():
        files.append(SourceFile(name="inline-styles.css", language=Language.CSS, content=css))

    js = "".join(
        body + "\n\n"
        for body in (m.group(2).strip() for m in HTML_SCRIPT.finditer(html))
        if body
    )
    if js:
        files.append(SourceFile(name="inline-scripts.js", language=Language.JS, content=js))

    return files


async def fetch_resources(
    url: str,
    config: FrontalConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[SourceFile]:
    """Download ``url`` and return its analyzable sources."""
    try:
        async with httpx.AsyncClient(
            headers=HEADERS,
            follow_redirects=True,
            timeout=config.fetch_timeout,
            transport=transport,
        ) as client:
            response = await client.get(url)
    except httpx.HTTPError as e:
        raise ResourceFetchError(f"Failed to fetch resources: {e}") from e

    if response.status_code != 200:
        raise ResourceFetchError(
            f"HTTP {response.status_code}: {response.reason_phrase}"
        )

    files = extract_resources(response.text)
    logger.debug("Fetched %s: %d source files", url, len(files))
    return files
