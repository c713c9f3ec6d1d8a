"""depgrep: search the local import graph of a source file for text."""

__version__ = "0.1.0"
