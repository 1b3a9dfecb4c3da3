"""Audit adapter — normalizes a Lighthouse report into frontal's report shapes."""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from frontal.errors import InvalidAuditDataError
from frontal.scanner.formatting import format_ms, format_transfer_bytes, round_half_up
from frontal.scanner.models import (
    Finding,
    PerformanceReport,
    Priority,
    Recommendation,
    Severity,
)
from frontal.scoring.models import ComponentScores, ScoreCategory, ScoreReport
from frontal.scoring.scorer import grade_for

logger = logging.getLogger(__name__)

MAX_ISSUES = 8
MAX_RECOMMENDATIONS = 8
PASSING_AUDIT_SCORE = 0.9
FAILING_AUDIT_SCORE = 0.5
HIGH_SAVINGS_MS = 1200
MEDIUM_SAVINGS_MS = 300
SCOREABLE_DISPLAY_MODES = {"numeric"}
ISSUE_SUGGESTION = "Review this audit in Lighthouse for detailed guidance."
DEFAULT_IMPACT = "Review this opportunity in Lighthouse."
SUMMARY = [
    "Lighthouse audit complete. Review category scores and top opportunities.",
    "Focus on the lowest-scoring category to prioritize improvements.",
]

_MARKDOWN_RULES = [
    (re.compile(r"\[(.*?)\]\((.*?)\)"), r"\1"),
    (re.compile(r"\*\*(.*?)\*\*"), r"\1"),
    (re.compile(r"\*(.*?)\*"), r"\1"),
    (re.compile(r"`(.*?)`"), r"\1"),
]


class Rating(enum.Enum):
    GOOD = "good"
    WARNING = "warning"
    DANGER = "danger"


@dataclass(frozen=True)
class VitalSpec:
    """A core web vital with its good/warning upper bounds."""

    id: str
    label: str
    good: float
    warn: float
    fallback_id: str | None = None


CORE_VITALS = [
    VitalSpec("first-contentful-paint", "First Contentful Paint", 1800, 3000),
    VitalSpec("largest-contentful-paint", "Largest Contentful Paint", 2500, 4000),
    VitalSpec("total-blocking-time", "Total Blocking Time", 200, 600),
    VitalSpec("cumulative-layout-shift", "Cumulative Layout Shift", 0.1, 0.25),
    VitalSpec("speed-index", "Speed Index", 3400, 5800),
    VitalSpec("interactive", "Time to Interactive", 3800, 7300),
    VitalSpec(
        "interaction-to-next-paint",
        "Interaction to Next Paint",
        200,
        500,
        fallback_id="first-input-delay",
    ),
]


@dataclass(frozen=True)
class CategoryScore:
    id: str
    title: str
    score: int
    status: ScoreCategory


@dataclass(frozen=True)
class AuditMetric:
    id: str
    label: str
    value: str
    rating: Rating
    numeric_value: float | None = None


@dataclass(frozen=True)
class AuditMetrics:
    category_scores: list[CategoryScore] = field(default_factory=list)
    core_vitals: list[AuditMetric] = field(default_factory=list)


@dataclass(frozen=True)
class AuditAdaptation:
    """An audit report expressed as frontal performance, score and metrics."""

    performance: PerformanceReport
    score: ScoreReport
    metrics: AuditMetrics


def adapt_external_audit(raw: Any) -> AuditAdaptation:
    """Convert a raw Lighthouse result (optionally nested) into frontal reports."""
    report = _unwrap(raw)
    categories = report.get("categories") if isinstance(report, Mapping) else None
    audits = report.get("audits") if isinstance(report, Mapping) else None
    if not isinstance(categories, Mapping) or not isinstance(audits, Mapping):
        raise InvalidAuditDataError(
            "Invalid audit data: expected 'categories' and 'audits' maps."
        )

    category_scores = build_category_scores(categories)
    perf_score = next((c.score for c in category_scores if c.id == "performance"), 0)
    grade, _ = grade_for(perf_score)
    score = ScoreReport(
        score=perf_score,
        grade=grade,
        category=status_for(perf_score),
        component_scores=ComponentScores(performance=perf_score),
        summary=list(SUMMARY),
    )

    performance = PerformanceReport(
        issues=build_issues(audits),
        recommendations=build_recommendations(audits),
    )
    metrics = AuditMetrics(
        category_scores=category_scores,
        core_vitals=build_core_vitals(audits),
    )
    logger.debug(
        "Adapted audit: performance %d, %d issues, %d opportunities",
        perf_score,
        len(performance.issues),
        len(performance.recommendations),
    )
    return AuditAdaptation(performance=performance, score=score, metrics=metrics)


def _unwrap(raw: Any) -> Any:
    if isinstance(raw, Mapping):
        for key in ("lighthouse", "lhr"):
            if isinstance(raw.get(key), Mapping):
                return raw[key]
    return raw


def status_for(score: int) -> ScoreCategory:
    if score >= 90:
        return ScoreCategory.GOOD
    if score >= 70:
        return ScoreCategory.WARNING
    return ScoreCategory.DANGER


def strip_markdown(text: str | None) -> str:
    if not text:
        return ""
    for pattern, replacement in _MARKDOWN_RULES:
        text = pattern.sub(replacement, text)
    return text


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def build_category_scores(categories: Mapping[str, Any]) -> list[CategoryScore]:
    scores: list[CategoryScore] = []
    for key, category in categories.items():
        category = category if isinstance(category, Mapping) else {}
        raw = _number(category.get("score"))
        score = round_half_up(raw * 100) if raw is not None else 0
        scores.append(
            CategoryScore(
                id=key,
                title=category.get("title") or key,
                score=score,
                status=status_for(score),
            )
        )
    return scores


def rate(value: float | None, good: float, warn: float) -> Rating:
    if value is None:
        return Rating.WARNING
    if value <= good:
        return Rating.GOOD
    if value <= warn:
        return Rating.WARNING
    return Rating.DANGER


def build_core_vitals(audits: Mapping[str, Any]) -> list[AuditMetric]:
    """Extract the core web vitals present in the audit map."""
    vitals: list[AuditMetric] = []
    for spec in CORE_VITALS:
        audit = audits.get(spec.id)
        if audit is None and spec.fallback_id:
            audit = audits.get(spec.fallback_id)
        if not isinstance(audit, Mapping):
            continue
        numeric = _number(audit.get("numericValue"))
        vitals.append(
            AuditMetric(
                id=spec.id,
                label=spec.label,
                value=audit.get("displayValue") or format_ms(numeric),
                rating=rate(numeric, spec.good, spec.warn),
                numeric_value=numeric,
            )
        )
    return vitals


def build_issues(audits: Mapping[str, Any]) -> list[Finding]:
    """Worst-scoring failed audits, at most eight, worst first."""
    failing = [
        audit
        for audit in audits.values()
        if isinstance(audit, Mapping)
        and audit.get("scoreDisplayMode") in SCOREABLE_DISPLAY_MODES
        and _number(audit.get("score")) is not None
        and audit["score"] < PASSING_AUDIT_SCORE
    ]
    failing.sort(key=lambda a: a["score"])

    issues: list[Finding] = []
    for audit in failing[:MAX_ISSUES]:
        description = strip_markdown(audit.get("description"))
        if audit.get("displayValue"):
            description = f"{description} ({audit['displayValue']})"
        issues.append(
            Finding(
                severity=(
                    Severity.ERROR
                    if audit["score"] < FAILING_AUDIT_SCORE
                    else Severity.WARNING
                ),
                title=audit.get("title") or audit.get("id") or "Untitled audit",
                description=description.strip(),
                suggestion=ISSUE_SUGGESTION,
            )
        )
    return issues


def _savings_ms(audit: Mapping[str, Any]) -> float | None:
    return _number(audit.get("details", {}).get("overallSavingsMs"))


def build_recommendations(audits: Mapping[str, Any]) -> list[Recommendation]:
    """Opportunities ordered by estimated time savings, at most eight."""
    opportunities = [
        audit
        for audit in audits.values()
        if isinstance(audit, Mapping)
        and isinstance(audit.get("details"), Mapping)
        and audit["details"].get("type") == "opportunity"
        and _savings_ms(audit) is not None
    ]
    opportunities.sort(key=lambda a: _savings_ms(a), reverse=True)

    recommendations: list[Recommendation] = []
    for audit in opportunities[:MAX_RECOMMENDATIONS]:
        savings_ms = _savings_ms(audit) or 0
        savings_bytes = _number(audit["details"].get("overallSavingsBytes")) or 0
        if savings_ms > HIGH_SAVINGS_MS:
            priority = Priority.HIGH
        elif savings_ms > MEDIUM_SAVINGS_MS:
            priority = Priority.MEDIUM
        else:
            priority = Priority.LOW

        impact_parts = []
        if savings_ms:
            impact_parts.append(f"Estimated savings: {format_ms(savings_ms)}")
        if savings_bytes:
            impact_parts.append(f"Transfer savings: {format_transfer_bytes(savings_bytes)}")

        recommendations.append(
            Recommendation(
                priority=priority,
                title=audit.get("title") or audit.get("id") or "Untitled opportunity",
                description=strip_markdown(audit.get("description")),
                impact=" | ".join(impact_parts) or DEFAULT_IMPACT,
            )
        )
    return recommendations
