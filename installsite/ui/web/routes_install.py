"""
Install script routes — one fixed route per file variant.

Blueprint: built per app by create_install_blueprint(site)
Prefix: none (routes are absolute, e.g. /api/install, /install.ps1)

Every route is bound to exactly one variant id; nothing from the
request picks the file.  Responses:

    200  text/plain; charset=utf-8, Content-Disposition: inline
    404  short explanation (file missing)
    405  empty body (anything but GET/HEAD)
    500  generic explanation (read failure; detail is logged only)
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, current_app, request

from installsite.core.models.script import CONTENT_TYPE
from installsite.core.models.site import SiteConfig
from installsite.core.services.script_repository import (
    NotFoundError,
    ReadError,
    ScriptRepository,
)

logger = logging.getLogger(__name__)

_READ_METHODS = ("GET", "HEAD")

# Listed so they reach the view (and get an empty 405) instead of
# Flask's HTML error page
_ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_install_blueprint(site: SiteConfig) -> Blueprint:
    """Bind each file variant's routes to a view for that variant only."""
    bp = Blueprint("install", __name__)

    for variant in site.file_variants():
        view = _script_view(variant.id)
        endpoint = f"script_{variant.id}"
        for route in variant.routes:
            bp.add_url_rule(
                route,
                endpoint=endpoint,
                view_func=view,
                methods=_ROUTED_METHODS,
                provide_automatic_options=False,
            )
            logger.debug("Route %s → variant '%s'", route, variant.id)

    return bp


def _script_view(variant_id: str):  # type: ignore[no-untyped-def]
    def serve_script() -> Response:
        if request.method not in _READ_METHODS:
            return Response(status=405, headers={"Allow": ", ".join(_READ_METHODS)})
        return _serve(variant_id)

    serve_script.__doc__ = f"Serve the '{variant_id}' install script as plain text."
    return serve_script


def _serve(variant_id: str) -> Response:
    repo: ScriptRepository = current_app.config["SCRIPT_REPOSITORY"]
    site = repo.site

    try:
        body = repo.resolve(variant_id)
    except NotFoundError as e:
        logger.warning("Install script for '%s' not found: %s", variant_id, e)
        return _plain(
            "Install script not found.\n"
            f"See {site.site.base_url} or {site.site.repository} for installation instructions.\n",
            404,
        )
    except ReadError:
        logger.exception("Error reading install script for '%s'", variant_id)
        return _plain("Error loading install script.\n", 500)
    except Exception:
        logger.exception("Unexpected error serving install script for '%s'", variant_id)
        return _plain("Error loading install script.\n", 500)

    variant = repo.variant(variant_id)
    resp = _plain(body.text, 200)
    resp.headers["Content-Disposition"] = f'inline; filename="{variant.file}"'
    if site.cache_control:
        resp.headers["Cache-Control"] = site.cache_control
    return resp


def _plain(text: str, status: int) -> Response:
    return Response(text, status=status, content_type=CONTENT_TYPE)
