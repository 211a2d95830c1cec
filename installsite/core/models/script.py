"""
Script models — the install methods the site distributes.

A variant is one platform/method-specific install script or command.
Its content is either embedded in configuration (inline) or read
from a named file at request time (file).
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

CONTENT_TYPE = "text/plain; charset=utf-8"


class SourceKind(StrEnum):
    """How a variant's content is retrieved."""

    INLINE_LITERAL = "inline"
    REMOTE_FILE = "file"


class ScriptVariant(BaseModel):
    """A distributable install method, declared in site.yml.

    Inline variants carry their content directly (short one-liners).
    File variants name a file in the scripts directory and the fixed
    route(s) that serve it.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    source: SourceKind
    description: str = ""
    content: str | None = None
    file: str | None = None
    route: str | None = None
    aliases: tuple[str, ...] = ()

    @field_validator("id")
    @classmethod
    def _id_is_slug(cls, value: str) -> str:
        if not value or not all(c.isalnum() or c in "-_" for c in value):
            raise ValueError(f"variant id must be a non-empty slug, got {value!r}")
        return value

    @field_validator("file")
    @classmethod
    def _file_is_bare_name(cls, value: str | None) -> str | None:
        if value is None:
            return value
        if not value or "/" in value or "\\" in value or value in (".", "..") or value.startswith(".."):
            raise ValueError(f"script file must be a bare file name, got {value!r}")
        return value

    @field_validator("route", "aliases")
    @classmethod
    def _routes_are_fixed(cls, value):  # type: ignore[no-untyped-def]
        if value is None:
            return value
        routes = (value,) if isinstance(value, str) else value
        for route in routes:
            if not route.startswith("/"):
                raise ValueError(f"route must start with '/', got {route!r}")
            if "<" in route or ">" in route:
                raise ValueError(f"route must be a fixed path without placeholders, got {route!r}")
        return value

    @model_validator(mode="after")
    def _check_source_fields(self) -> ScriptVariant:
        if self.source == SourceKind.INLINE_LITERAL:
            if self.content is None:
                raise ValueError(f"inline variant '{self.id}' requires 'content'")
        else:
            if not self.file or not self.route:
                raise ValueError(f"file variant '{self.id}' requires 'file' and 'route'")
        return self

    @property
    def is_inline(self) -> bool:
        return self.source == SourceKind.INLINE_LITERAL

    @property
    def routes(self) -> tuple[str, ...]:
        """Every path this variant is served at (primary route first)."""
        if self.route is None:
            return ()
        return (self.route, *self.aliases)


class ScriptBody(BaseModel):
    """The resolved text of a variant at one point in time.

    Never edited after creation; a refetch would replace it.
    """

    model_config = ConfigDict(frozen=True)

    variant_id: str
    text: str
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_inline(cls, variant: ScriptVariant) -> ScriptBody:
        """Resolve an inline variant without any I/O."""
        return cls(variant_id=variant.id, text=variant.content or "")
