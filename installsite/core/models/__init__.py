"""
Domain models — Pydantic types for the install site.

    from installsite.core.models import ScriptVariant, ScriptBody, SiteConfig
"""

from installsite.core.models.script import CONTENT_TYPE, ScriptBody, ScriptVariant, SourceKind
from installsite.core.models.site import SiteConfig, SiteInfo

__all__ = [
    "CONTENT_TYPE",
    "ScriptBody",
    "ScriptVariant",
    "SiteConfig",
    "SiteInfo",
    "SourceKind",
]
