"""
Shared test fixtures and configuration.
"""

import logging
import textwrap
from pathlib import Path

import pytest

from installsite.core.config.loader import load_site

POSIX_SCRIPT = "#!/bin/sh\nset -eu\necho 'installing joel'\n"
# CRLF endings must survive unchanged
PS1_SCRIPT = "$ErrorActionPreference = \"Stop\"\r\nWrite-Host \"installing joel\"\r\n"


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """A site.yml with two inline and two file variants, plus scripts."""
    (tmp_path / "site.yml").write_text(textwrap.dedent("""\
        site:
          name: JOEL
          base_url: https://joel.example.test
          repository: https://github.com/example/joel
        scripts_dir: public
        default_variant: linux-macos
        variants:
          - id: linux-macos
            label: Linux & macOS
            source: inline
            content: "curl -fsSL {base_url}/api/install | bash"
          - id: windows-command
            label: Windows command
            source: inline
            content: 'powershell -c "irm {base_url}/install.ps1 | iex"'
          - id: posix
            label: install (sh)
            source: file
            file: install
            route: /api/install
            aliases: [/install]
          - id: windows
            label: Windows
            source: file
            file: install.ps1
            route: /api/install.ps1
            aliases: [/install.ps1]
    """), encoding="utf-8")

    public = tmp_path / "public"
    public.mkdir()
    (public / "install").write_bytes(POSIX_SCRIPT.encode("utf-8"))
    (public / "install.ps1").write_bytes(PS1_SCRIPT.encode("utf-8"))
    return tmp_path


@pytest.fixture
def site_file(site_dir: Path) -> Path:
    return site_dir / "site.yml"


@pytest.fixture
def site(site_file: Path):
    return load_site(site_file)


@pytest.fixture
def posix_script() -> str:
    return POSIX_SCRIPT


@pytest.fixture
def ps1_script() -> str:
    return PS1_SCRIPT


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """CLI tests call setup_logging(); keep its root-logger changes test-local."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
