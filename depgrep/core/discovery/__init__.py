# depgrep/core/discovery/__init__.py
"""
Dependency discovery for depgrep.

Finds the local files a source file imports, directly or transitively, and
narrows that set down to files containing a given piece of text.
"""
from .content_filter import filter_by_content
from .path_resolution import ResolutionRules, resolve_specifier
from .walker import DependencyWalker, discover_dependencies

__all__ = [
    "DependencyWalker",
    "ResolutionRules",
    "discover_dependencies",
    "filter_by_content",
    "resolve_specifier",
]
