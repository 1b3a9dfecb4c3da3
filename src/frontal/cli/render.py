"""Rich renderables for analysis and audit results."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from frontal.audit.adapter import AuditMetrics
from frontal.scanner.models import Finding, Recommendation, Severity, SizeReport
from frontal.scoring.models import ScoreCategory, ScoreReport

_SEVERITY_COLORS = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "blue",
}

_STATUS_COLORS = {
    ScoreCategory.GOOD: "green",
    ScoreCategory.WARNING: "yellow",
    ScoreCategory.DANGER: "red",
}

_RATING_COLORS = {"good": "green", "warning": "yellow", "danger": "red"}


def print_size(console: Console, size: SizeReport) -> None:
    table = Table(title="Bundle Size", show_lines=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    for metric in size.metrics:
        table.add_row(metric.label, metric.value)
    console.print(table)


def print_findings(console: Console, title: str, findings: list[Finding]) -> None:
    if not findings:
        console.print(f"[green]{title}: none found.[/green]")
        return

    table = Table(title=title, show_lines=False)
    table.add_column("Severity", style="bold", width=8)
    table.add_column("Finding")
    table.add_column("File", style="cyan")
    table.add_column("Details", max_width=60)

    for finding in findings:
        color = _SEVERITY_COLORS.get(finding.severity, "white")
        table.add_row(
            f"[{color}]{finding.severity.value}[/{color}]",
            finding.title,
            finding.source_file or "-",
            finding.description,
        )
    console.print(table)


def print_recommendations(console: Console, recommendations: list[Recommendation]) -> None:
    if not recommendations:
        return
    table = Table(title="Recommendations", show_lines=False)
    table.add_column("Priority", style="bold", width=8)
    table.add_column("Recommendation")
    table.add_column("Impact", max_width=50)
    for rec in recommendations:
        table.add_row(rec.priority.value, rec.title, rec.impact)
    console.print(table)


def print_score(console: Console, score: ScoreReport, title: str = "Score") -> None:
    color = _STATUS_COLORS.get(score.category, "white")
    console.print(
        f"\n[bold]{title}:[/bold] [{color}]{score.score}/100 "
        f"(grade {score.grade.value})[/{color}]"
    )
    components = score.component_scores
    console.print(
        f"  size {components.size} · duplication {components.duplication} "
        f"· performance {components.performance}"
    )
    if score.combination:
        c = score.combination
        console.print(
            f"  [dim]weights: static {c.static_weight:.0%} / "
            f"external {c.external_weight:.0%}[/dim]"
        )
    for deduction in score.deductions:
        console.print(f"  [dim]-{deduction.points}  {deduction.reason}[/dim]")
    for message in score.summary:
        console.print(f"  {message}")


def print_audit_metrics(console: Console, metrics: AuditMetrics) -> None:
    table = Table(title="Lighthouse Categories", show_lines=False)
    table.add_column("Category", style="bold")
    table.add_column("Score", justify="right")
    for category in metrics.category_scores:
        color = _STATUS_COLORS.get(category.status, "white")
        table.add_row(category.title, f"[{color}]{category.score}[/{color}]")
    console.print(table)

    if not metrics.core_vitals:
        return
    vitals = Table(title="Core Web Vitals", show_lines=False)
    vitals.add_column("Metric", style="bold")
    vitals.add_column("Value", justify="right")
    for metric in metrics.core_vitals:
        color = _RATING_COLORS.get(metric.rating.value, "white")
        vitals.add_row(metric.label, f"[{color}]{metric.value}[/{color}]")
    console.print(vitals)
