"""
Script repository — canonical content for every install variant.

Resolution is independent of transport: the web routes, the CLI and
the tests all go through :meth:`ScriptRepository.resolve`.

Two strategies:
    inline → the content embedded in site.yml, no I/O
    file   → the named file in the scripts directory, read on every call

There is no versioning: a file variant resolves to whatever the
deployed file holds at the moment of the read.
"""

from __future__ import annotations

import logging
from pathlib import Path

from installsite.core.models.script import ScriptBody, ScriptVariant
from installsite.core.models.site import SiteConfig

logger = logging.getLogger(__name__)


class ScriptError(Exception):
    """Base for script resolution failures."""

    def __init__(self, variant_id: str, message: str):
        super().__init__(message)
        self.variant_id = variant_id


class NotFoundError(ScriptError):
    """The variant has no backing content (unknown id or missing file)."""


class ReadError(ScriptError):
    """The backing file exists but could not be read or decoded."""


class ScriptRepository:
    """Resolves variant ids to :class:`ScriptBody` values.

    Args:
        site: Validated site configuration (fixes the variant set).
        scripts_dir: Directory file variants are read from.
    """

    def __init__(self, site: SiteConfig, scripts_dir: Path):
        self._site = site
        self._scripts_dir = scripts_dir.resolve()

    @property
    def site(self) -> SiteConfig:
        return self._site

    @property
    def scripts_dir(self) -> Path:
        return self._scripts_dir

    def variant(self, variant_id: str) -> ScriptVariant:
        """Look up a declared variant.

        Raises:
            NotFoundError: If no variant has this id.
        """
        found = self._site.get_variant(variant_id)
        if found is None:
            raise NotFoundError(variant_id, f"Unknown install variant '{variant_id}'")
        return found

    def resolve(self, variant_id: str) -> ScriptBody:
        """Resolve a variant to its current content.

        Raises:
            NotFoundError: Unknown id, or the backing file is absent.
            ReadError: Any other failure reading the backing file.
        """
        variant = self.variant(variant_id)
        if variant.is_inline:
            return ScriptBody.from_inline(variant)
        return ScriptBody(variant_id=variant.id, text=self._read_file(variant))

    def path_for(self, variant: ScriptVariant) -> Path:
        """Filesystem location of a file variant's script.

        Raises:
            NotFoundError: Inline variants have no file; paths escaping
                the scripts directory are treated as absent.
        """
        if variant.file is None:
            raise NotFoundError(variant.id, f"Variant '{variant.id}' is not backed by a file")
        path = (self._scripts_dir / variant.file).resolve()
        if not path.is_relative_to(self._scripts_dir):
            raise NotFoundError(variant.id, f"Script for '{variant.id}' is outside the scripts directory")
        return path

    def _read_file(self, variant: ScriptVariant) -> str:
        path = self.path_for(variant)
        try:
            # Bytes, not read_text(): newline translation would alter CRLF scripts
            data = path.read_bytes()
        except (FileNotFoundError, IsADirectoryError) as e:
            raise NotFoundError(variant.id, f"Install script '{variant.file}' is not available") from e
        except OSError as e:
            raise ReadError(variant.id, f"Cannot read {path}: {e}") from e

        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ReadError(variant.id, f"{path} is not valid UTF-8: {e}") from e

        logger.debug("Read %s (%d bytes) for variant '%s'", path, len(data), variant.id)
        return text
