"""
Tests for domain models — variants, bodies, site lookups.
"""

import pytest
from pydantic import ValidationError

from installsite.core.models import ScriptBody, ScriptVariant, SiteConfig, SourceKind


def _inline(vid: str = "cmd", content: str = "echo hi") -> ScriptVariant:
    return ScriptVariant(id=vid, label=vid, source=SourceKind.INLINE_LITERAL, content=content)


def _file(vid: str = "sh", route: str = "/api/install", aliases=()) -> ScriptVariant:
    return ScriptVariant(
        id=vid, label=vid, source=SourceKind.REMOTE_FILE, file="install", route=route, aliases=aliases,
    )


class TestScriptVariant:
    def test_inline(self):
        v = _inline()
        assert v.is_inline
        assert v.routes == ()

    def test_file_routes_primary_first(self):
        v = _file(aliases=("/install",))
        assert not v.is_inline
        assert v.routes == ("/api/install", "/install")

    def test_frozen(self):
        v = _inline()
        with pytest.raises(ValidationError):
            v.content = "rm -rf /"  # type: ignore[misc]

    def test_bad_id(self):
        with pytest.raises(ValidationError):
            ScriptVariant(id="has space", label="x", source=SourceKind.INLINE_LITERAL, content="x")

    def test_source_from_string(self):
        v = ScriptVariant.model_validate({"id": "a", "label": "A", "source": "inline", "content": "x"})
        assert v.source == SourceKind.INLINE_LITERAL


class TestScriptBody:
    def test_from_inline(self):
        body = ScriptBody.from_inline(_inline(content="curl x | sh"))
        assert body.variant_id == "cmd"
        assert body.text == "curl x | sh"
        assert body.fetched_at.tzinfo is not None

    def test_immutable(self):
        body = ScriptBody(variant_id="a", text="x")
        with pytest.raises(ValidationError):
            body.text = "y"  # type: ignore[misc]


class TestSiteConfig:
    def test_default_falls_back_to_first(self):
        site = SiteConfig(variants=[_inline("a"), _inline("b")])
        assert site.default().id == "a"

    def test_explicit_default(self):
        site = SiteConfig(default_variant="b", variants=[_inline("a"), _inline("b")])
        assert site.default().id == "b"

    def test_canonical_url(self):
        site = SiteConfig(variants=[_inline("a"), _file("sh")])
        site.site.base_url = "https://joel.example.test/"
        assert site.canonical_url(site.get_variant("sh")) == "https://joel.example.test/api/install"
        assert site.canonical_url(site.get_variant("a")) == site.site.repository

    def test_get_variant_missing(self):
        site = SiteConfig(variants=[_inline("a")])
        assert site.get_variant("zzz") is None
