"""Size analyzer — bundle totals, language breakdown, and size issues."""

from __future__ import annotations

import logging

from frontal.scanner.formatting import format_bytes, round_half_up
from frontal.scanner.models import (
    Finding,
    Language,
    Metric,
    Severity,
    SizeReport,
    SourceFile,
    sort_findings,
)

logger = logging.getLogger(__name__)

_BUCKETS = (Language.HTML, Language.CSS, Language.JS)

# Thresholds are strict: the boundary value itself never triggers.
LARGE_BUNDLE_BYTES = 500_000
LARGE_JS_BYTES = 250_000
LARGE_CSS_BYTES = 100_000
JS_HEAVY_PERCENT = 70


def analyze_sizes(files: list[SourceFile]) -> SizeReport:
    """Aggregate file sizes into totals, percentages, and issues."""
    by_language = {lang.value: 0 for lang in _BUCKETS}
    per_file: dict[str, int] = {}

    for f in files:
        size = f.size
        per_file[f.name] = size
        if f.language in _BUCKETS:
            by_language[f.language.value] += size

    total = sum(by_language.values())
    percents = {
        key: round_half_up(value * 100 / total, 1) if total else 0.0
        for key, value in by_language.items()
    }

    metrics = [
        Metric(label="Total Bundle Size", value=format_bytes(total)),
        Metric(
            label="HTML",
            value=f"{format_bytes(by_language['html'])} ({percents['html']:.1f}%)",
        ),
        Metric(
            label="CSS",
            value=f"{format_bytes(by_language['css'])} ({percents['css']:.1f}%)",
        ),
        Metric(
            label="JavaScript",
            value=f"{format_bytes(by_language['js'])} ({percents['js']:.1f}%)",
        ),
    ]

    issues: list[Finding] = []
    if total > LARGE_BUNDLE_BYTES:
        issues.append(
            Finding(
                severity=Severity.WARNING,
                title="Large Bundle Size",
                description=(
                    f"Total bundle size is {format_bytes(total)}. "
                    "Consider code splitting and lazy loading."
                ),
            )
        )
    if by_language["js"] > LARGE_JS_BYTES:
        issues.append(
            Finding(
                severity=Severity.ERROR,
                title="Large JavaScript Bundle",
                description=(
                    f"JavaScript bundle is {format_bytes(by_language['js'])}. "
                    "This can significantly impact page load time."
                ),
                category=Language.JS,
            )
        )
    if by_language["css"] > LARGE_CSS_BYTES:
        issues.append(
            Finding(
                severity=Severity.WARNING,
                title="Large CSS Bundle",
                description=(
                    f"CSS bundle is {format_bytes(by_language['css'])}. "
                    "Consider removing unused CSS or splitting styles."
                ),
                category=Language.CSS,
            )
        )
    if percents["js"] > JS_HEAVY_PERCENT:
        issues.append(
            Finding(
                severity=Severity.WARNING,
                title="JavaScript-Heavy Bundle",
                description=(
                    f"JavaScript makes up {percents['js']:.1f}% of your bundle. "
                    "Consider if all JS is necessary for initial load."
                ),
                category=Language.JS,
            )
        )

    logger.debug("Sized %d files: %d bytes total", len(files), total)
    return SizeReport(
        total_bytes=total,
        bytes_by_language=by_language,
        percent_by_language=percents,
        per_file_bytes=per_file,
        metrics=metrics,
        issues=sort_findings(issues),
    )
