"""
Packaged data — the default site.yml and the installer scripts.

Used when no site.yml is found for the working directory, so that
``installsite serve`` works out of the box.
"""

from __future__ import annotations

from pathlib import Path

DATA_DIR = Path(__file__).parent

DEFAULT_SITE_FILE = DATA_DIR / "site.yml"
DEFAULT_SCRIPTS_DIR = DATA_DIR / "scripts"
