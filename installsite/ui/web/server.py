"""
Script server — Flask app factory.

Serves each file variant's installer verbatim at its fixed route(s)
and a small JSON listing of the variant set for tab-building clients.
"""

from __future__ import annotations

import logging
from pathlib import Path

from flask import Flask, Response

from installsite.core.config.loader import load_site, scripts_dir
from installsite.core.data import DEFAULT_SCRIPTS_DIR
from installsite.core.models.site import SiteConfig
from installsite.core.services.script_repository import ScriptRepository

logger = logging.getLogger(__name__)


def create_app(
    config_path: Path | None = None,
    site: SiteConfig | None = None,
    scripts_path: Path | None = None,
) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_path: Path to site.yml (default: discovered, then packaged).
        site: Already-loaded configuration; skips loading ``config_path``.
        scripts_path: Override for the scripts directory. Defaults to the
            one next to ``config_path``, or the packaged scripts when
            ``site`` is passed without a config path.

    Returns:
        Configured Flask application.

    Raises:
        ConfigError: If the configuration cannot be loaded.
    """
    injected = site is not None
    if site is None:
        site = load_site(config_path)
    if scripts_path is None:
        # An injected site has no file of its own to resolve against
        if config_path is None and injected:
            scripts_path = DEFAULT_SCRIPTS_DIR
        else:
            scripts_path = scripts_dir(site, config_path)

    app = Flask(__name__, static_folder=None)

    app.config["CONFIG_PATH"] = str(config_path) if config_path else None
    app.config["SITE"] = site
    app.config["SCRIPTS_DIR"] = str(scripts_path)
    app.config["SCRIPT_REPOSITORY"] = ScriptRepository(site, scripts_path)

    from installsite.ui.web.routes_api import api_bp
    from installsite.ui.web.routes_install import create_install_blueprint

    app.register_blueprint(create_install_blueprint(site))
    app.register_blueprint(api_bp, url_prefix="/api")

    # Methods no rule lists never reach a view; keep their 405 bodiless too
    @app.errorhandler(405)
    def _method_not_allowed(_err):  # type: ignore[no-untyped-def]
        return Response(status=405, headers={"Allow": "GET, HEAD"})

    logger.info(
        "Script server app created (%d file variants, scripts=%s)",
        len(site.file_variants()),
        scripts_path,
    )
    return app


def run_server(
    app: Flask,
    host: str = "127.0.0.1",
    port: int = 8000,
    debug: bool = False,
) -> None:
    """Run the Flask development server."""
    logger.info("Starting script server on %s:%d", host, port)
    app.run(host=host, port=port, debug=debug, use_reloader=False)
