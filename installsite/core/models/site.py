"""
Site model — the root of site.yml.

Holds the public identity of the documentation site and the fixed
set of install variants it offers.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from installsite.core.models.script import ScriptVariant

# Paths the script server itself serves (see ui/web/routes_api.py)
RESERVED_ROUTES = frozenset({"/api/variants"})


class SiteInfo(BaseModel):
    """Public identity of the site (used for canonical links)."""

    name: str = "JOEL"
    base_url: str = "https://joel.val-x.com"
    repository: str = "https://github.com/JJ-Dynamite/JOEL"


class SiteConfig(BaseModel):
    """Validated site.yml.

    The variant list is fixed once loaded; nothing adds variants at
    runtime.
    """

    site: SiteInfo = Field(default_factory=SiteInfo)
    scripts_dir: str = "scripts"
    default_variant: str | None = None
    cache_control: str | None = None
    variants: list[ScriptVariant] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_variants(self) -> SiteConfig:
        if not self.variants:
            raise ValueError("at least one variant is required")

        ids = [v.id for v in self.variants]
        dupes = sorted({i for i in ids if ids.count(i) > 1})
        if dupes:
            raise ValueError(f"duplicate variant ids: {', '.join(dupes)}")

        routes = [r for v in self.variants for r in v.routes]
        route_dupes = sorted({r for r in routes if routes.count(r) > 1})
        if route_dupes:
            raise ValueError(f"routes bound to more than one variant: {', '.join(route_dupes)}")

        reserved = sorted(set(routes) & RESERVED_ROUTES)
        if reserved:
            raise ValueError(f"routes reserved by the script server: {', '.join(reserved)}")

        if self.default_variant is not None and self.default_variant not in ids:
            raise ValueError(f"default_variant '{self.default_variant}' is not a declared variant")
        return self

    def get_variant(self, variant_id: str) -> ScriptVariant | None:
        """Look up a variant by id."""
        for variant in self.variants:
            if variant.id == variant_id:
                return variant
        return None

    def default(self) -> ScriptVariant:
        """The variant active when a selector starts."""
        if self.default_variant is not None:
            found = self.get_variant(self.default_variant)
            if found is not None:
                return found
        return self.variants[0]

    def file_variants(self) -> list[ScriptVariant]:
        """Variants served from the scripts directory."""
        return [v for v in self.variants if not v.is_inline]

    def canonical_url(self, variant: ScriptVariant) -> str:
        """Public link to a file variant's script (or the repository for inline ones)."""
        if variant.route is None:
            return self.site.repository
        return self.site.base_url.rstrip("/") + variant.route
