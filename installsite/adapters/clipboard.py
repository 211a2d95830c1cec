"""
System clipboard adapter — shells out to the platform copy tool.

Probe order: pbcopy (macOS), wl-copy (Wayland), xclip / xsel (X11),
clip.exe / clip (Windows and WSL).  No tool on PATH means the
clipboard is unavailable.
"""

from __future__ import annotations

import logging
import shutil
import subprocess

from installsite.adapters.base import ClipboardAdapter, ClipboardWriteError

logger = logging.getLogger(__name__)

# tool → argv that reads the clipboard payload from stdin
_COPY_COMMANDS: tuple[tuple[str, list[str]], ...] = (
    ("pbcopy", ["pbcopy"]),
    ("wl-copy", ["wl-copy"]),
    ("xclip", ["xclip", "-selection", "clipboard"]),
    ("xsel", ["xsel", "--clipboard", "--input"]),
    ("clip.exe", ["clip.exe"]),
    ("clip", ["clip"]),
)


class SystemClipboardAdapter(ClipboardAdapter):
    """Copies via the first clipboard tool found on PATH."""

    def __init__(self, timeout: float = 5.0):
        self._timeout = timeout
        self._command: list[str] | None = None
        self._probed = False

    @property
    def name(self) -> str:
        cmd = self._resolve()
        return cmd[0] if cmd else "none"

    def is_available(self) -> bool:
        return self._resolve() is not None

    def write_text(self, text: str) -> None:
        cmd = self._resolve()
        if cmd is None:
            raise ClipboardWriteError("No clipboard tool available")

        try:
            proc = subprocess.run(
                cmd,
                input=text.encode("utf-8"),
                capture_output=True,
                timeout=self._timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise ClipboardWriteError(f"{cmd[0]} failed: {e}") from e

        if proc.returncode != 0:
            stderr = proc.stderr.decode("utf-8", errors="replace").strip()
            raise ClipboardWriteError(f"{cmd[0]} exited {proc.returncode}: {stderr[:200]}")

        logger.debug("Copied %d chars with %s", len(text), cmd[0])

    def _resolve(self) -> list[str] | None:
        if not self._probed:
            self._probed = True
            for tool, argv in _COPY_COMMANDS:
                if shutil.which(tool):
                    self._command = argv
                    break
            if self._command is None:
                logger.debug("No clipboard tool found on PATH")
        return self._command
