"""
Scripts check use case — confirm every file variant can be served.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from installsite.core.config.loader import ConfigError, load_site, resolve_site_file, scripts_dir
from installsite.core.services.script_repository import NotFoundError, ReadError, ScriptRepository


@dataclass
class ScriptStatus:
    """Resolution result for one file variant."""

    variant_id: str
    route: str
    file: str
    ok: bool
    size: int = 0
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "variant": self.variant_id,
            "route": self.route,
            "file": self.file,
            "ok": self.ok,
            "size": self.size,
            "error": self.error,
        }


@dataclass
class ScriptsCheckResult:
    """Result of checking a deployment's scripts."""

    valid: bool = False
    config_path: Path | None = None
    scripts_dir: Path | None = None
    scripts: list[ScriptStatus] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "scripts_dir": str(self.scripts_dir) if self.scripts_dir else None,
            "scripts": [s.to_dict() for s in self.scripts],
            "errors": self.errors,
        }


def check_scripts(config_path: Path | None = None) -> ScriptsCheckResult:
    """Resolve every file variant once and report what failed.

    Args:
        config_path: Optional explicit path to site.yml.
    """
    result = ScriptsCheckResult(config_path=resolve_site_file(config_path))

    try:
        site = load_site(config_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    result.scripts_dir = scripts_dir(site, config_path)
    repo = ScriptRepository(site, result.scripts_dir)

    for variant in site.file_variants():
        status = ScriptStatus(
            variant_id=variant.id,
            route=variant.route or "",
            file=variant.file or "",
            ok=False,
        )
        try:
            body = repo.resolve(variant.id)
        except NotFoundError as e:
            status.error = f"missing: {e}"
        except ReadError as e:
            status.error = f"unreadable: {e}"
        else:
            status.ok = True
            status.size = len(body.text.encode("utf-8"))
        result.scripts.append(status)

    result.errors.extend(
        f"{s.variant_id} ({s.route}): {s.error}" for s in result.scripts if not s.ok
    )
    result.valid = not result.errors
    return result
