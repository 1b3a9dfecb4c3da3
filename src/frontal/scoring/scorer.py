"""Scorer — turns size, duplication and performance reports into one grade.

Each component starts at 100 and loses points per tier:

  size:         >1MB -30 | >500KB -20 | >250KB -10, plus JS share >80% -10 | >70% -5
  duplication:  >20 findings -25 | >10 -15 | >5 -10 | >0 -5
  performance:  errors x5 (max 25) + warnings x2 (max 15) + infos x1 (max 5)

The final score is ``size + duplication + performance - 200`` floored at 0,
so three perfect components give exactly 100.
"""

from __future__ import annotations

from dataclasses import replace

from frontal.scanner.formatting import round_half_up
from frontal.scanner.models import (
    DuplicationReport,
    PerformanceReport,
    Severity,
    SizeReport,
)
from frontal.scoring.models import (
    CombinationMetadata,
    ComponentScores,
    Deduction,
    Grade,
    ScoreCategory,
    ScoreReport,
)

# (bytes, points, reason); first match wins
_SIZE_TIERS = [
    (1_000_000, 30, "Bundle size > 1MB"),
    (500_000, 20, "Bundle size > 500KB"),
    (250_000, 10, "Bundle size > 250KB"),
]

_JS_SHARE_TIERS = [
    (80, 10, "JavaScript > 80% of bundle"),
    (70, 5, "JavaScript > 70% of bundle"),
]

_DUPLICATION_TIERS = [
    (20, 25, "20+ duplication issues"),
    (10, 15, "10+ duplication issues"),
    (5, 10, "5+ duplication issues"),
    (0, 5, "Some duplication detected"),
]

# severity -> (points each, cap, reason template)
_PERFORMANCE_WEIGHTS = {
    Severity.ERROR: (5, 25, "{n} critical performance issue(s)"),
    Severity.WARNING: (2, 15, "{n} performance warning(s)"),
    Severity.INFO: (1, 5, "{n} performance suggestion(s)"),
}

# (inclusive lower bound, grade, category, base summary)
_BANDS = [
    (90, Grade.A, ScoreCategory.GOOD,
     "Excellent! Your code follows performance best practices."),
    (75, Grade.B, ScoreCategory.GOOD,
     "Good job! Minor optimizations could improve performance."),
    (60, Grade.C, ScoreCategory.WARNING,
     "Decent, but there's room for improvement."),
    (40, Grade.D, ScoreCategory.WARNING,
     "Several performance issues detected. Review recommendations."),
    (0, Grade.F, ScoreCategory.DANGER,
     "Significant performance problems found. Immediate action recommended."),
]

ADVICE_THRESHOLD = 80
SIZE_ADVICE = "Focus on reducing bundle size through code splitting and minification."
DUPLICATION_ADVICE = "Eliminate duplicate code to improve maintainability and reduce size."
PERFORMANCE_ADVICE = "Address critical performance anti-patterns identified in the analysis."

EXTERNAL_ADVISORY_BELOW = 90


def _band(score: int):
    for lower, grade, category, message in _BANDS:
        if score >= lower:
            return grade, category, message
    return _BANDS[-1][1:]


def grade_for(score: int) -> tuple[Grade, ScoreCategory]:
    """Grade and category for a score, lower bounds inclusive."""
    grade, category, _ = _band(score)
    return grade, category


def generate_summary(score: int, components: ComponentScores) -> list[str]:
    messages = [_band(score)[2]]
    if components.size < ADVICE_THRESHOLD:
        messages.append(SIZE_ADVICE)
    if components.duplication < ADVICE_THRESHOLD:
        messages.append(DUPLICATION_ADVICE)
    if components.performance < ADVICE_THRESHOLD:
        messages.append(PERFORMANCE_ADVICE)
    return messages


def calculate_score(
    size: SizeReport,
    duplication: DuplicationReport,
    performance: PerformanceReport,
) -> ScoreReport:
    """Combine the three analyzer reports into a deterministic score."""
    deductions: list[Deduction] = []

    size_score = 100
    for limit, points, reason in _SIZE_TIERS:
        if size.total_bytes > limit:
            size_score -= points
            deductions.append(Deduction(reason=reason, points=points))
            break
    js_percent = float(size.percent_by_language.get("js", 0) or 0)
    for limit, points, reason in _JS_SHARE_TIERS:
        if js_percent > limit:
            size_score -= points
            deductions.append(Deduction(reason=reason, points=points))
            break

    duplication_score = 100
    duplicate_count = len(duplication.findings)
    for limit, points, reason in _DUPLICATION_TIERS:
        if duplicate_count > limit:
            duplication_score -= points
            deductions.append(Deduction(reason=reason, points=points))
            break

    performance_score = 100
    for severity, (each, cap, reason) in _PERFORMANCE_WEIGHTS.items():
        n = sum(1 for i in performance.issues if i.severity == severity)
        points = min(n * each, cap)
        if points > 0:
            performance_score -= points
            deductions.append(Deduction(reason=reason.format(n=n), points=points))

    components = ComponentScores(
        size=size_score,
        duplication=duplication_score,
        performance=performance_score,
    )
    score = max(0, size_score + duplication_score + performance_score - 200)
    return _report(score, components, deductions)


def combine_scores(
    static: ScoreReport | int | None = None,
    external: ScoreReport | int | None = None,
) -> ScoreReport:
    """Blend a static score with an external audit score.

    Both present: 50/50, rounded. One present: it carries 100% of the
    weight. Neither: a zero score. The advisory deduction added for a weak
    external score documents the gap and is not subtracted again.
    """
    static_report = _as_report(static)
    external_report = _as_report(external)

    if static_report and external_report:
        combined = round_half_up(static_report.score * 0.5 + external_report.score * 0.5)
        delta = combined - static_report.score
        components = replace(
            static_report.component_scores,
            performance=_clamp(static_report.component_scores.performance + delta),
        )
        deductions = list(static_report.deductions)
        if external_report.score < EXTERNAL_ADVISORY_BELOW:
            deductions.append(
                Deduction(
                    reason=f"External audit score {external_report.score}/100",
                    points=max(1, round_half_up((100 - external_report.score) * 0.1)),
                )
            )
        return _report(
            combined,
            components,
            deductions,
            CombinationMetadata(
                static_weight=0.5,
                external_weight=0.5,
                static_score=static_report.score,
                external_score=external_report.score,
            ),
        )

    if static_report:
        return replace(
            static_report,
            combination=CombinationMetadata(
                static_weight=1.0,
                external_weight=0.0,
                static_score=static_report.score,
            ),
        )

    if external_report:
        return replace(
            external_report,
            combination=CombinationMetadata(
                static_weight=0.0,
                external_weight=1.0,
                external_score=external_report.score,
            ),
        )

    grade, category, message = _band(0)
    return ScoreReport(
        score=0,
        grade=grade,
        category=category,
        component_scores=ComponentScores(size=0, duplication=0, performance=0),
        summary=[message],
        combination=CombinationMetadata(static_weight=0.0, external_weight=0.0),
    )


def _report(
    score: int,
    components: ComponentScores,
    deductions: list[Deduction],
    combination: CombinationMetadata | None = None,
) -> ScoreReport:
    grade, category = grade_for(score)
    return ScoreReport(
        score=score,
        grade=grade,
        category=category,
        component_scores=components,
        deductions=deductions,
        summary=generate_summary(score, components),
        combination=combination,
    )


def _as_report(value: ScoreReport | int | None) -> ScoreReport | None:
    if value is None or isinstance(value, ScoreReport):
        return value
    score = _clamp(int(value))
    return _report(score, ComponentScores(), [])


def _clamp(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, value))
