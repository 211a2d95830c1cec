"""
Configuration loader — reads site.yml into domain models.

This is the primary entry point for loading site configuration.
It reads YAML, validates against Pydantic schemas, and returns
typed domain objects.  When no site.yml exists for the working
directory, the packaged default is used.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from installsite.core.data import DEFAULT_SITE_FILE
from installsite.core.models.site import SiteConfig

logger = logging.getLogger(__name__)

# Default config filename
SITE_CONFIG_FILE = "site.yml"


class ConfigError(Exception):
    """Raised when site configuration is invalid or missing."""


def find_site_file(start_dir: Path | None = None) -> Path | None:
    """Search for site.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to site.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / SITE_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def resolve_site_file(path: Path | None = None) -> Path:
    """Pick the config file to load: explicit, discovered, or packaged default."""
    if path is not None:
        return path
    found = find_site_file()
    if found is not None:
        return found
    logger.debug("No %s found, using packaged default", SITE_CONFIG_FILE)
    return DEFAULT_SITE_FILE


def load_site(path: Path | None = None) -> SiteConfig:
    """Load and validate site configuration.

    Args:
        path: Explicit path to site.yml. If None, searches upward and
            falls back to the packaged default.

    Returns:
        Validated SiteConfig model.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    path = resolve_site_file(path)

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading site config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    _expand_placeholders(data)

    try:
        site = SiteConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid site configuration in {path}: {e}") from e

    logger.info("Loaded site '%s' with %d variants", site.site.name, len(site.variants))
    return site


def scripts_dir(site: SiteConfig, config_path: Path | None = None) -> Path:
    """Directory holding file variants, relative to the config file."""
    base = resolve_site_file(config_path).parent.resolve()
    return (base / site.scripts_dir).resolve()


def _expand_placeholders(data: dict) -> None:
    """Substitute ``{base_url}`` in inline variant content."""
    site = data.get("site") or {}
    base_url = str(site.get("base_url", "https://joel.val-x.com")).rstrip("/")
    for variant in data.get("variants") or []:
        if isinstance(variant, dict) and isinstance(variant.get("content"), str):
            variant["content"] = variant["content"].replace("{base_url}", base_url)
