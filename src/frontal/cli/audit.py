"""CLI command: frontal audit <url> — Lighthouse audit combined with static analysis."""

from __future__ import annotations

import asyncio
import json

import click
from rich.console import Console

from frontal.audit.client import friendly_message
from frontal.audit.pipeline import run_url_audit
from frontal.cli.render import (
    print_audit_metrics,
    print_findings,
    print_recommendations,
    print_score,
)
from frontal.errors import AuditError, InvalidAuditDataError, InvalidUrlError
from frontal.scanner.models import to_dict

console = Console(stderr=True)


@click.command()
@click.argument("url")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON on stdout.")
@click.pass_context
def audit(ctx: click.Context, url: str, as_json: bool) -> None:
    """Run an external audit of URL and combine it with static analysis."""
    config = ctx.obj["config"]

    if not as_json:
        console.print(
            f"[bold]FrontAl[/bold] auditing [cyan]{url}[/cyan] "
            f"via [cyan]{config.audit_url}[/cyan]\n"
        )

    try:
        result = asyncio.run(run_url_audit(url, config))
    except AuditError as e:
        console.print(f"[red]{friendly_message(e)}[/red]")
        raise SystemExit(2)
    except (InvalidUrlError, InvalidAuditDataError) as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(2)

    if as_json:
        click.echo(json.dumps(to_dict(result), indent=2))
        return

    print_audit_metrics(console, result.audit.metrics)
    print_findings(console, "Audit Issues", result.audit.performance.issues)
    print_recommendations(console, result.audit.performance.recommendations)

    if result.static is None:
        console.print("[yellow]Static analysis skipped: page resources unavailable.[/yellow]")
    else:
        static = result.static
        print_findings(console, "Duplication", static.duplication.findings)
        print_findings(console, "Performance", static.performance.issues)
        print_score(console, static.score, title="Static score")

    print_score(console, result.audit.score, title="Audit score")
    print_score(console, result.combined, title="Combined score")
