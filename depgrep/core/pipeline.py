# depgrep/core/pipeline.py
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.console import Console as RichConsole
import structlog
import logging as stdlib_logging

from depgrep.config.settings import SearchConfig
from depgrep.core.discovery.content_filter import filter_by_content
from depgrep.core.discovery.pattern_matching import compile_glob_patterns_to_spec, is_path_excluded
from depgrep.core.discovery.walker import DependencyWalker
from depgrep.core.filesystem import FileSystem, LocalFileSystem
from depgrep.exceptions import DiscoveryError, EmptySearchTextError, MissingRootError
from depgrep.util import relative_label

log = structlog.get_logger(__name__)


@dataclass
class MatchItem:
    """One selectable result: a root-relative label and the absolute path."""
    label: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {"label": self.label, "description": self.description}


@dataclass
class SearchResult:
    start_path: Path
    root_path: Path
    dependencies: List[Path] = field(default_factory=list)
    matches: List[MatchItem] = field(default_factory=list)
    unresolved_count: int = 0
    unreadable_count: int = 0


class DependencySearch:
    # orchestrates validation, discovery, content filtering and labelling.
    def __init__(self, config: SearchConfig, fs: Optional[FileSystem] = None):
        self.config: SearchConfig = config
        self.fs: FileSystem = fs or LocalFileSystem()
        self.log = structlog.get_logger(f"{__name__}.{self.__class__.__name__}")

    def require_root(self) -> None:
        if self.config.root_path is None:
            raise MissingRootError("No workspace root path found.")

    def validate(self) -> None:
        # top-level errors abort before any file is read.
        self.require_root()
        if not self.config.search_text:
            raise EmptySearchTextError("No search text provided.")
        if self.config.start_path is None:
            raise DiscoveryError("No start file provided.")

    def _to_match_items(self, matches: List[Path], root_path: Path) -> List[MatchItem]:
        return [MatchItem(label=relative_label(path, root_path), description=str(path)) for path in matches]

    def run(self) -> SearchResult:
        self.validate()
        assert self.config.start_path is not None and self.config.root_path is not None
        assert self.config.search_text

        walker = DependencyWalker(
            root_path=self.config.root_path,
            fs=self.fs,
            rules=self.config.resolution_rules(),
        )
        root_path = walker.root_path
        assert root_path is not None
        exclude_spec = compile_glob_patterns_to_spec(self.config.exclude_patterns)

        app_log_level = stdlib_logging.getLogger("depgrep").getEffectiveLevel()
        progress_disabled = app_log_level > stdlib_logging.INFO or not sys.stderr.isatty()
        stderr_console = RichConsole(file=sys.stderr)

        with Progress(
            SpinnerColumn(), TextColumn("[bold blue]{task.description}"),
            transient=True, disable=progress_disabled, console=stderr_console
        ) as progress:
            discover_task = progress.add_task("discovering dependencies...", total=None)
            dependencies = walker.discover(self.config.start_path)
            progress.update(discover_task, completed=True, description=f"discovered {len(dependencies)} dependencies.")

            filter_task = progress.add_task("searching file contents...", total=None)
            matches = filter_by_content(dependencies, self.config.search_text, self.fs)
            progress.update(filter_task, completed=True, description=f"{len(matches)} files match.")

        if exclude_spec is not None:
            kept = [path for path in matches if not is_path_excluded(path, root_path, exclude_spec)]
            self.log.info("excluded_matches", removed=len(matches) - len(kept))
            matches = kept

        result = SearchResult(
            start_path=self.fs.canonical(self.config.start_path),
            root_path=root_path,
            dependencies=dependencies,
            matches=self._to_match_items(matches, root_path),
            unresolved_count=len(walker.unresolved_specifiers),
            unreadable_count=len(walker.read_errors),
        )
        self.log.info("dependency_search_complete", dependencies=len(dependencies), matches=len(result.matches))
        return result
