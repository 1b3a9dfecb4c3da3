"""CLI command: frontal analyze <paths> — static bundle analysis."""

from __future__ import annotations

import json

import click
from rich.console import Console

from frontal.cli.render import (
    print_findings,
    print_recommendations,
    print_score,
    print_size,
)
from frontal.scanner.engine import AnalysisEngine, analyze_files
from frontal.scanner.models import to_dict

console = Console(stderr=True)


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option(
    "--exclude",
    "-e",
    multiple=True,
    help="File or directory names to skip.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON on stdout.")
@click.option(
    "--fail-under",
    type=click.IntRange(0, 100),
    default=None,
    help="Exit with status 1 if the score is below this value.",
)
@click.pass_context
def analyze(
    ctx: click.Context,
    paths: tuple[str, ...],
    exclude: tuple[str, ...],
    as_json: bool,
    fail_under: int | None,
) -> None:
    """Analyze HTML, CSS and JS files for size, duplication and performance."""
    config = ctx.obj["config"]
    engine = AnalysisEngine(exclude_patterns=[*config.exclude, *exclude])

    files = engine.load(paths)
    if not files:
        console.print("[red]No HTML, CSS or JS files found.[/red]")
        raise SystemExit(1)

    if not as_json:
        console.print(
            f"[bold]FrontAl[/bold] analyzing [cyan]{len(files)}[/cyan] file(s)\n"
        )

    result = analyze_files(files)

    if as_json:
        click.echo(json.dumps(to_dict(result), indent=2))
    else:
        print_size(console, result.size)
        print_findings(console, "Size Issues", result.size.issues)
        print_findings(console, "Duplication", result.duplication.findings)
        print_findings(console, "Performance", result.performance.issues)
        print_recommendations(console, result.performance.recommendations)
        print_score(console, result.score)

    if fail_under is not None and result.score.score < fail_under:
        console.print(
            f"\n[red]Score {result.score.score} is below --fail-under {fail_under}.[/red]"
        )
        raise SystemExit(1)
