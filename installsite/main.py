"""
installsite — CLI entrypoint.

Usage:
    installsite --help
    installsite serve
    installsite scripts list
    installsite panel --variant windows-binary --copy
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from installsite import __version__
from installsite.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="installsite")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to site.yml (default: auto-detect, then packaged default).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """installsite — serve and preview the JOEL install scripts."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
        quiet_third_party=not debug,
    )


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind address.")
@click.option("--port", "-p", default=8000, type=int, help="Port number.")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int) -> None:
    """Start the install script server."""
    from installsite.core.config.loader import ConfigError
    from installsite.ui.web.server import create_app, run_server

    try:
        app = create_app(config_path=ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    site = app.config["SITE"]
    debug = ctx.obj.get("debug", False)

    click.echo()
    click.secho(f"⚡ {site.site.name} install scripts", bold=True)
    click.echo(f"   Listening: http://{host}:{port}")
    click.echo(f"   Scripts:   {app.config['SCRIPTS_DIR']}")
    for variant in site.file_variants():
        click.echo(f"     • {', '.join(variant.routes)}  → {variant.file}")
    if debug:
        click.secho("   Logging: DEBUG (all output)", fg="yellow")
    click.echo()

    run_server(app, host=host, port=port, debug=debug)


# ── Register sub-commands from installsite/ui/cli/ ─────────────────

from installsite.ui.cli.panel import panel
from installsite.ui.cli.scripts import scripts

cli.add_command(scripts)
cli.add_command(panel)


if __name__ == "__main__":
    cli()
