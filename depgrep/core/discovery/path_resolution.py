# depgrep/core/discovery/path_resolution.py
"""
Maps import specifiers onto files on disk.

A specifier with any suffix is checked as an exact path, so dotted names such
as `./foo.service` do not fall back to `foo.service.ts`. Only suffix-less
specifiers get the configured extensions appended.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import List, Optional

import structlog

from depgrep.core.filesystem import FileSystem

log = structlog.get_logger(__name__)

DEFAULT_EXTENSIONS = [".js", ".ts", ".jsx", ".tsx"]
DEFAULT_ALIAS_PREFIX = "@/"
DEFAULT_ALIAS_TARGET = "src"


@dataclass(frozen=True)
class ResolutionRules:
    """How a specifier string is mapped onto candidate files.

    Extensions are tried in list order and the first existing file wins, so
    the order must stay fixed for results to be deterministic.
    """
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    alias_prefix: str = DEFAULT_ALIAS_PREFIX
    alias_target: str = DEFAULT_ALIAS_TARGET


def specifier_base_path(
    specifier: str,
    importer: Path,
    root_path: Optional[Path],
    rules: ResolutionRules,
) -> Optional[Path]:
    # the path a specifier names before any extension is appended, lexically normalized.
    if rules.alias_prefix and specifier.startswith(rules.alias_prefix):
        if root_path is None:
            log.warning("alias_without_root_skipped", specifier=specifier, importer=str(importer))
            return None
        return Path(os.path.normpath(root_path / rules.alias_target / specifier[len(rules.alias_prefix):]))
    return Path(os.path.normpath(importer.parent / specifier))


def candidate_paths(base_path: Path, specifier: str, rules: ResolutionRules) -> List[Path]:
    # an explicit extension means exactly that file; otherwise each extension in order.
    if PurePosixPath(specifier).suffix:
        return [base_path]
    return [Path(f"{base_path}{ext}") for ext in rules.extensions]


def resolve_specifier(
    specifier: str,
    importer: Path,
    root_path: Optional[Path],
    fs: FileSystem,
    rules: Optional[ResolutionRules] = None,
) -> Optional[Path]:
    """
    Resolves an import specifier to a canonical file path.

    Args:
        specifier: The quoted string from the import statement.
        importer: Canonical path of the file containing the import.
        root_path: Project root; required only for alias-prefixed specifiers.
        fs: File access used for existence checks and canonicalisation.
        rules: Extension and alias rules. Defaults to ResolutionRules().

    Returns:
        The first candidate that exists and is not a directory, or None.
    """
    rules = rules or ResolutionRules()
    base_path = specifier_base_path(specifier, importer, root_path, rules)
    if base_path is None:
        return None

    for candidate in candidate_paths(base_path, specifier, rules):
        if fs.is_file(candidate):
            resolved = fs.canonical(candidate)
            log.debug("specifier_resolved", specifier=specifier, path=str(resolved))
            return resolved

    return None
