# depgrep/core/discovery/walker.py
"""
Depth-first discovery of the local files a source file transitively imports.

Discovery is text-based: each file is scanned with the import pattern from
``import_scanner`` and every specifier is resolved against the filesystem.
Each file is read and expanded at most once per run, so import cycles and
diamond dependencies terminate without special handling.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Set, Tuple

import structlog

from depgrep.core.discovery.import_scanner import find_import_specifiers
from depgrep.core.discovery.path_resolution import ResolutionRules, resolve_specifier
from depgrep.core.filesystem import FileSystem, LocalFileSystem

log = structlog.get_logger(__name__)


@dataclass
class DependencyWalker:
    """
    Walks the import graph starting from a single file.

    The result of ``discover`` is in pre-order: a file's direct import comes
    before that import's own dependencies, which come before the next import
    of the same file. Paths are de-duplicated, first discovery wins, and the
    start file is never part of its own result.

    Args:
        root_path: Project root. Only alias-prefixed specifiers use it; with
            no root those specifiers are reported as unresolved.
        fs: File access. Defaults to the local disk.
        rules: Extension and alias rules.
    """
    root_path: Optional[Path] = None
    fs: FileSystem = field(default_factory=LocalFileSystem)
    rules: ResolutionRules = field(default_factory=ResolutionRules)
    visited_files: Set[Path] = field(default_factory=set, init=False)
    unresolved_specifiers: List[Tuple[Path, str]] = field(default_factory=list, init=False)
    read_errors: List[Tuple[Path, str]] = field(default_factory=list, init=False)

    def __post_init__(self):
        if self.root_path is not None:
            self.root_path = self.fs.canonical(self.root_path)

    def _read_source(self, file_path: Path) -> Optional[str]:
        try:
            return self.fs.read_text(file_path)
        except (OSError, UnicodeDecodeError) as e:
            event = "source_is_directory" if isinstance(e, IsADirectoryError) else "failed_to_read_file"
            log.warning(event, file=str(file_path), error=str(e))
            self.read_errors.append((file_path, str(e)))
            return None

    def _resolve_imports(self, file_path: Path, source_text: str) -> List[Path]:
        # resolves every specifier of one file, in source order.
        resolved: List[Path] = []
        for specifier in find_import_specifiers(source_text):
            target = resolve_specifier(specifier, file_path, self.root_path, self.fs, self.rules)
            if target is None:
                log.warning("dependency_not_found", specifier=specifier, importer=str(file_path))
                self.unresolved_specifiers.append((file_path, specifier))
                continue
            resolved.append(target)
        return resolved

    def discover(self, start_path: Path) -> List[Path]:
        """Return every file reachable from ``start_path`` through local imports."""
        self.visited_files = set()
        self.unresolved_specifiers = []
        self.read_errors = []

        start_path = self.fs.canonical(start_path)
        dependencies: List[Path] = []
        # explicit stack instead of recursion; children are pushed reversed
        # so they pop in source order.
        stack: List[Path] = [start_path]

        log.info("dependency_discovery_started", start=str(start_path), root=str(self.root_path))

        while stack:
            current = stack.pop()
            if current in self.visited_files:
                continue
            self.visited_files.add(current)
            if current != start_path:
                dependencies.append(current)

            source_text = self._read_source(current)
            if source_text is None:
                continue

            stack.extend(reversed(self._resolve_imports(current, source_text)))

        log.info(
            "dependency_discovery_complete",
            start=str(start_path),
            dependencies=len(dependencies),
            unresolved=len(self.unresolved_specifiers),
            read_errors=len(self.read_errors),
        )
        return dependencies


def discover_dependencies(
    start_path: Path,
    root_path: Optional[Path],
    fs: Optional[FileSystem] = None,
    rules: Optional[ResolutionRules] = None,
) -> List[Path]:
    # one discovery run with a fresh visited set.
    walker = DependencyWalker(
        root_path=root_path,
        fs=fs or LocalFileSystem(),
        rules=rules or ResolutionRules(),
    )
    return walker.discover(start_path)
