"""
CLI commands for the install scripts themselves.

Thin wrappers over ``installsite.core.services.script_repository``.
"""

from __future__ import annotations

import json
import sys

import click


def _load(ctx: click.Context):  # type: ignore[no-untyped-def]
    """Load site config and repository, exiting 1 on config errors."""
    from installsite.core.config.loader import ConfigError, load_site, scripts_dir
    from installsite.core.services.script_repository import ScriptRepository

    config_path = ctx.obj.get("config_path")
    try:
        site = load_site(config_path)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)
    return site, ScriptRepository(site, scripts_dir(site, config_path))


@click.group("scripts")
def scripts() -> None:
    """Scripts — list, show and check the install variants."""


@scripts.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_variants(ctx: click.Context, as_json: bool) -> None:
    """List every install variant."""
    site, _ = _load(ctx)
    default_id = site.default().id

    if as_json:
        click.echo(json.dumps(
            {
                "default": default_id,
                "variants": [v.model_dump(mode="json", exclude_none=True) for v in site.variants],
            },
            indent=2,
        ))
        return

    click.secho(f"📦 {site.site.name} install variants:", fg="cyan", bold=True)
    for v in site.variants:
        marker = " (default)" if v.id == default_id else ""
        where = v.content if v.is_inline else f"{', '.join(v.routes)} ← {v.file}"
        click.echo(f"   • {v.id}{marker}  [{v.source.value}]  {v.label}")
        click.echo(f"       {where}")


@scripts.command("show")
@click.argument("variant_id")
@click.pass_context
def show(ctx: click.Context, variant_id: str) -> None:
    """Print a variant's content exactly as it is served."""
    from installsite.core.services.script_repository import NotFoundError, ReadError

    _, repo = _load(ctx)
    try:
        body = repo.resolve(variant_id)
    except NotFoundError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)
    except ReadError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    click.echo(body.text, nl=False)


@scripts.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, as_json: bool) -> None:
    """Verify every file variant can be read and served."""
    from installsite.core.use_cases.scripts_check import check_scripts

    result = check_scripts(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    click.echo(f"   Config:  {result.config_path}")
    if result.scripts_dir:
        click.echo(f"   Scripts: {result.scripts_dir}")
    for s in result.scripts:
        if s.ok:
            click.secho(f"   ✓ {s.route}  {s.file} ({s.size} bytes)", fg="green")
        else:
            click.secho(f"   ✗ {s.route}  {s.error}", fg="red")

    if result.valid:
        click.secho("✅ All install scripts can be served", fg="green", bold=True)
        return

    click.secho("❌ Install script errors:", fg="red", bold=True)
    for err in result.errors:
        click.echo(f"   • {err}")
    sys.exit(1)
