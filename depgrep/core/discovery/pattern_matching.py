# depgrep/core/discovery/pattern_matching.py
from pathlib import Path
from typing import List, Optional

import pathspec
import structlog

from depgrep.exceptions import DiscoveryError

log = structlog.get_logger(__name__)


def compile_glob_patterns_to_spec(glob_patterns: List[str]) -> Optional[pathspec.PathSpec]:
    # compiles a list of glob patterns into a pathspec object for matching.
    if not glob_patterns:
        return None
    try:
        return pathspec.PathSpec.from_lines("gitwildmatch", glob_patterns)
    except Exception as e:
        raise DiscoveryError(f"error compiling glob patterns {glob_patterns}: {e}")


def is_path_excluded(path: Path, root_path: Path, exclude_spec: Optional[pathspec.PathSpec]) -> bool:
    # patterns are matched against the root-relative path; files outside the root never match.
    if exclude_spec is None:
        return False
    try:
        rel_path = path.relative_to(root_path)
    except ValueError:
        return False
    return exclude_spec.match_file(rel_path.as_posix())
