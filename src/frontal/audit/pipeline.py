"""URL audit pipeline — external audit and static analysis of the same page."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import httpx

from frontal.audit.adapter import AuditAdaptation, adapt_external_audit
from frontal.audit.client import fetch_audit, validate_url
from frontal.audit.resources import fetch_resources
from frontal.config import FrontalConfig
from frontal.scanner.engine import AnalysisResult, analyze_files
from frontal.scoring.models import ScoreReport
from frontal.scoring.scorer import combine_scores

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UrlAuditResult:
    url: str
    audit: AuditAdaptation
    static: AnalysisResult | None
    combined: ScoreReport


async def run_url_audit(
    url: str,
    config: FrontalConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> UrlAuditResult:
    """Audit a URL and statically analyze its resources concurrently.

    An audit failure propagates. A resource-fetch failure only drops the
    static half, so the combined score falls back to the audit alone.
    """
    url = validate_url(url)

    audit_raw, resources = await asyncio.gather(
        fetch_audit(url, config, transport=transport),
        fetch_resources(url, config, transport=transport),
        return_exceptions=True,
    )

    if isinstance(audit_raw, BaseException):
        raise audit_raw

    audit = adapt_external_audit(audit_raw)

    static: AnalysisResult | None = None
    if isinstance(resources, BaseException):
        logger.warning("Skipping static analysis for %s: %s", url, resources)
    else:
        static = analyze_files(resources)

    combined = combine_scores(static.score if static else None, audit.score)
    return UrlAuditResult(url=url, audit=audit, static=static, combined=combined)
