"""
CLI preview of the install panel.

Drives the script selector against a running script server, the way
the site's install tabs do, and prints what the panel would show.
"""

from __future__ import annotations

import sys

import click


@click.command("panel")
@click.option("--server", "server_url", default=None, help="Script server origin (default: site base_url).")
@click.option("--variant", "variant_id", default=None, help="Variant to show (default: site default).")
@click.option("--copy", "do_copy", is_flag=True, help="Copy the panel text to the clipboard.")
@click.option("--timeout", default=10.0, type=float, help="Seconds to wait for a fetch.")
@click.pass_context
def panel(
    ctx: click.Context,
    server_url: str | None,
    variant_id: str | None,
    do_copy: bool,
    timeout: float,
) -> None:
    """Show one install variant as the site's install panel renders it."""
    from installsite.adapters.clipboard import SystemClipboardAdapter
    from installsite.adapters.http_fetch import HttpScriptFetcher
    from installsite.core.config.loader import ConfigError, load_site
    from installsite.core.services.clipboard_export import ClipboardExport, CopyResult
    from installsite.core.services.fetch_dispatch import FetchDispatcher
    from installsite.core.services.script_repository import NotFoundError
    from installsite.core.services.script_selector import ScriptSelector, SelectorPhase

    try:
        site = load_site(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    with FetchDispatcher(HttpScriptFetcher(timeout=timeout)) as dispatcher:
        try:
            selector = ScriptSelector(site, dispatcher, server_url=server_url, initial=variant_id)
        except NotFoundError as e:
            click.secho(f"❌ {e}", fg="red", err=True)
            sys.exit(1)
        selector.wait(timeout)
        shown = selector.panel()

    quiet = ctx.obj.get("quiet", False)
    if not quiet:
        tabs = "  ".join(
            f"[{v.label}]" if v.id == shown.variant_id else v.label for v in selector.variants
        )
        click.secho(tabs, bold=True)
        if shown.description:
            click.secho(shown.description, dim=True)
        click.echo()

    color = {SelectorPhase.FAILED: "yellow"}.get(shown.phase)
    click.secho(shown.text, fg=color, nl=not shown.text.endswith("\n"))

    if shown.phase != SelectorPhase.LOADED:
        sys.exit(1)

    if do_copy:
        export = ClipboardExport(SystemClipboardAdapter())
        result = export.copy(shown.text)
        export.cancel()
        if result == CopyResult.COPIED:
            click.secho("📋 Copied!", fg="green", err=True)
        elif result == CopyResult.FAILED:
            click.secho("⚠️  Could not write to the clipboard", fg="yellow", err=True)
