# depgrep/core/discovery/content_filter.py
from pathlib import Path
from typing import Iterable, List, Optional

import structlog

from depgrep.core.filesystem import FileSystem, LocalFileSystem

log = structlog.get_logger(__name__)


def filter_by_content(
    paths: Iterable[Path],
    needle: str,
    fs: Optional[FileSystem] = None,
) -> List[Path]:
    """
    Keeps the paths whose content contains ``needle``.

    The match is a literal, case-sensitive substring test and the input order
    is preserved. Files that cannot be read are logged and left out. An empty
    needle matches nothing.
    """
    if not needle:
        log.warning("empty_search_text_matches_nothing")
        return []

    fs = fs or LocalFileSystem()
    matches: List[Path] = []
    for file_path in paths:
        try:
            content = fs.read_text(file_path)
        except (OSError, UnicodeDecodeError) as e:
            log.warning("content_filter_read_error", file=str(file_path), error=str(e))
            continue
        if needle in content:
            log.debug("search_text_found_in_file", file=str(file_path))
            matches.append(file_path)

    log.info("content_filter_complete", matches=len(matches))
    return matches
