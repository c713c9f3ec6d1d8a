# depgrep/core/filesystem.py
"""
File access used by dependency discovery and content filtering.

The walker and the content filter never touch the disk directly; they are
handed a ``FileSystem`` so they can be exercised against an in-memory tree.
"""
from pathlib import Path
from typing import Protocol

import structlog

from depgrep.util import strip_utf8_bom

log = structlog.get_logger(__name__)


class FileSystem(Protocol):
    """The file capabilities discovery needs."""

    def read_text(self, path: Path) -> str:
        """Return the full text of ``path``; raise ``OSError`` or ``UnicodeDecodeError`` on failure."""
        ...

    def is_file(self, path: Path) -> bool:
        """True if ``path`` exists and is not a directory."""
        ...

    def canonical(self, path: Path) -> Path:
        """Absolute, normalized form of ``path`` used as the visited-set key."""
        ...


class LocalFileSystem:
    """FileSystem backed by the real disk."""

    def read_text(self, path: Path) -> str:
        # strict decoding: undecodable files are reported as unreadable.
        return strip_utf8_bom(path.read_bytes()).decode("utf-8")

    def is_file(self, path: Path) -> bool:
        try:
            return path.is_file()
        except OSError as e:
            log.debug("stat_failed", path=str(path), error=str(e))
            return False

    def canonical(self, path: Path) -> Path:
        return path.resolve()
