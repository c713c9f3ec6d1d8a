from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional
import structlog

from depgrep.core.discovery.path_resolution import (
    DEFAULT_ALIAS_PREFIX,
    DEFAULT_ALIAS_TARGET,
    DEFAULT_EXTENSIONS,
    ResolutionRules,
)

log = structlog.get_logger(__name__)

class OutputFormat(Enum):
    # defines how the match list is rendered.
    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_string(cls, s: Optional[str]) -> Optional["OutputFormat"]:
        if not s:
            return None
        try:
            return cls(s.lower())
        except ValueError:
            log.warning("invalid_output_format_string", input_string=s)
            return None

DEFAULT_OUTPUT_FORMAT = OutputFormat.TEXT
DEFAULT_CONSOLE_SHOW_SUMMARY = True

@dataclass
class SearchConfig:
    # holds all configuration parameters for a single run.
    start_path: Optional[Path] = None
    root_path: Optional[Path] = None
    search_text: Optional[str] = None
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    alias_prefix: str = DEFAULT_ALIAS_PREFIX
    alias_target: str = DEFAULT_ALIAS_TARGET
    exclude_patterns: List[str] = field(default_factory=list)
    output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT
    output_file: Optional[Path] = None
    clipboard: bool = False
    pick: bool = False
    editor: Optional[str] = None
    console_show_summary: bool = DEFAULT_CONSOLE_SHOW_SUMMARY

    def resolution_rules(self) -> ResolutionRules:
        # extensions are normalized to carry their leading dot.
        extensions = [ext if ext.startswith(".") else f".{ext}" for ext in self.extensions]
        return ResolutionRules(
            extensions=extensions,
            alias_prefix=self.alias_prefix,
            alias_target=self.alias_target,
        )
