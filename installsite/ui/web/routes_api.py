"""
API routes — the variant set, for clients that build install tabs.

Blueprint: api_bp
Prefix: /api

Endpoints:
    GET /variants   — every variant with label, source and where to get it
"""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from installsite.core.models.site import SiteConfig

api_bp = Blueprint("api", __name__)


@api_bp.route("/variants")
def list_variants():  # type: ignore[no-untyped-def]
    """Variant listing; inline content is included, file content never is."""
    site: SiteConfig = current_app.config["SITE"]
    items = []
    for v in site.variants:
        item = {
            "id": v.id,
            "label": v.label,
            "source": v.source.value,
            "description": v.description,
        }
        if v.is_inline:
            item["content"] = v.content
        else:
            item["route"] = v.route
            item["url"] = site.canonical_url(v)
        items.append(item)

    return jsonify({"default": site.default().id, "variants": items})
