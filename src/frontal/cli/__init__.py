"""CLI entry point — Click group with global options."""

from __future__ import annotations

import logging

import click

from frontal import __version__
from frontal.config import FrontalConfig


@click.group()
@click.version_option(version=__version__, prog_name="frontal")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a YAML config file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """FrontAl — static performance analysis for HTML/CSS/JS bundles."""
    try:
        config = FrontalConfig.load(config_path)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--config") from e
    config.verbose = config.verbose or verbose

    level = logging.DEBUG if config.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


def _register_commands() -> None:
    from frontal.cli.analyze import analyze  # noqa: F811
    from frontal.cli.audit import audit  # noqa: F811
    from frontal.cli.server import server  # noqa: F811

    main.add_command(analyze)
    main.add_command(audit)
    main.add_command(server)


_register_commands()
