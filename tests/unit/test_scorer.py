"""Tests for score calculation, grading and score combination."""

from __future__ import annotations

import pytest

from frontal.scanner.models import (
    DuplicationReport,
    Finding,
    PerformanceReport,
    Severity,
    SizeReport,
)
from frontal.scoring.models import ComponentScores, Grade, ScoreCategory
from frontal.scoring.scorer import (
    DUPLICATION_ADVICE,
    PERFORMANCE_ADVICE,
    SIZE_ADVICE,
    calculate_score,
    combine_scores,
    generate_summary,
    grade_for,
)


def _size(total: int = 0, js_percent: float = 0.0) -> SizeReport:
    return SizeReport(
        total_bytes=total,
        percent_by_language={"html": 0.0, "css": 0.0, "js": js_percent},
    )


def _duplicates(n: int) -> DuplicationReport:
    return DuplicationReport(
        findings=[Finding(severity=Severity.INFO, title="dup", description="") for _ in range(n)]
    )


def _performance(errors: int = 0, warnings: int = 0, infos: int = 0) -> PerformanceReport:
    issues = (
        [Finding(severity=Severity.ERROR, title="e", description="")] * errors
        + [Finding(severity=Severity.WARNING, title="w", description="")] * warnings
        + [Finding(severity=Severity.INFO, title="i", description="")] * infos
    )
    return PerformanceReport(issues=issues)


class TestCalculateScore:
    def test_perfect_input(self):
        report = calculate_score(SizeReport(), DuplicationReport(), PerformanceReport())
        assert report.score == 100
        assert report.grade == Grade.A
        assert report.category == ScoreCategory.GOOD
        assert report.deductions == []
        assert report.component_scores == ComponentScores(100, 100, 100)
        assert len(report.summary) == 1

    @pytest.mark.parametrize(
        "total, expected",
        [
            (1_000_001, 70),
            (1_000_000, 80),
            (500_001, 80),
            (250_001, 90),
            (250_000, 100),
        ],
    )
    def test_size_tiers(self, total, expected):
        report = calculate_score(_size(total), DuplicationReport(), PerformanceReport())
        assert report.component_scores.size == expected

    @pytest.mark.parametrize("percent, expected", [(81, 90), (75, 95), (70, 100)])
    def test_js_share_tiers(self, percent, expected):
        report = calculate_score(_size(js_percent=percent), DuplicationReport(), PerformanceReport())
        assert report.component_scores.size == expected

    @pytest.mark.parametrize(
        "count, expected",
        [(0, 100), (1, 95), (5, 95), (6, 90), (10, 90), (11, 85), (20, 85), (21, 75)],
    )
    def test_duplication_tiers(self, count, expected):
        report = calculate_score(SizeReport(), _duplicates(count), PerformanceReport())
        assert report.component_scores.duplication == expected

    @pytest.mark.parametrize("errors, expected", [(1, 95), (5, 75), (6, 75), (20, 75)])
    def test_error_cap(self, errors, expected):
        report = calculate_score(SizeReport(), DuplicationReport(), _performance(errors=errors))
        assert report.component_scores.performance == expected

    def test_warning_and_info_caps(self):
        report = calculate_score(
            SizeReport(), DuplicationReport(), _performance(warnings=8, infos=6)
        )
        assert report.component_scores.performance == 80
        reasons = {d.reason: d.points for d in report.deductions}
        assert reasons == {
            "8 performance warning(s)": 15,
            "6 performance suggestion(s)": 5,
        }

    def test_components_combine_into_final_score(self):
        report = calculate_score(_size(1_000_001), DuplicationReport(), PerformanceReport())
        assert report.score == 70
        assert report.grade == Grade.C
        assert report.category == ScoreCategory.WARNING
        assert SIZE_ADVICE in report.summary

    def test_score_floored_at_zero(self):
        report = calculate_score(
            _size(1_000_001, js_percent=90),
            _duplicates(25),
            _performance(errors=10, warnings=10, infos=10),
        )
        assert report.score == 0
        assert report.grade == Grade.F
        assert report.category == ScoreCategory.DANGER

    def test_deterministic(self):
        args = (_size(600_000, 75), _duplicates(3), _performance(errors=2, infos=1))
        assert calculate_score(*args) == calculate_score(*args)


class TestGrading:
    @pytest.mark.parametrize(
        "score, grade",
        [
            (100, Grade.A),
            (90, Grade.A),
            (89, Grade.B),
            (75, Grade.B),
            (74, Grade.C),
            (60, Grade.C),
            (59, Grade.D),
            (40, Grade.D),
            (39, Grade.F),
            (0, Grade.F),
        ],
    )
    def test_grade_boundaries(self, score, grade):
        assert grade_for(score)[0] == grade

    def test_categories(self):
        assert grade_for(75)[1] == ScoreCategory.GOOD
        assert grade_for(74)[1] == ScoreCategory.WARNING
        assert grade_for(40)[1] == ScoreCategory.WARNING
        assert grade_for(39)[1] == ScoreCategory.DANGER

    def test_summary_advice(self):
        summary = generate_summary(50, ComponentScores(size=79, duplication=80, performance=60))
        assert summary[1:] == [SIZE_ADVICE, PERFORMANCE_ADVICE]
        assert DUPLICATION_ADVICE not in summary


class TestCombineScores:
    def test_both_present_weighted_evenly(self):
        static = calculate_score(_size(600_000), DuplicationReport(), PerformanceReport())
        combined = combine_scores(static, 61)
        assert static.score == 80
        assert combined.score == 71
        assert combined.component_scores.performance == 91
        assert combined.combination.static_weight == 0.5
        assert combined.combination.external_weight == 0.5
        assert combined.combination.static_score == 80
        assert combined.combination.external_score == 61

    def test_half_rounds_up(self):
        assert combine_scores(90, 91).score == 91

    def test_weak_external_score_adds_advisory(self):
        combined = combine_scores(100, 61)
        advisory = combined.deductions[-1]
        assert advisory.reason == "External audit score 61/100"
        assert advisory.points == 4

    def test_strong_external_score_no_advisory(self):
        assert combine_scores(100, 95).deductions == []

    def test_static_only(self):
        combined = combine_scores(85, None)
        assert combined.score == 85
        assert combined.combination.static_weight == 1.0
        assert combined.combination.external_weight == 0.0

    def test_external_only(self):
        combined = combine_scores(None, 72)
        assert combined.score == 72
        assert combined.grade == Grade.C
        assert combined.combination.external_weight == 1.0

    def test_neither_present(self):
        combined = combine_scores(None, None)
        assert combined.score == 0
        assert combined.grade == Grade.F
        assert combined.component_scores == ComponentScores(0, 0, 0)

    def test_ints_clamped(self):
        assert combine_scores(150, None).score == 100
