import logging
import os
from pathlib import Path
from typing import Dict, Iterable

import pytest
import structlog


class InMemoryFileSystem:
    """FileSystem fake: a dict of normalized path -> text, plus directories."""

    def __init__(self, files: Dict[str, str], directories: Iterable[str] = ()):
        self.files = {self.canonical(Path(p)): text for p, text in files.items()}
        self.directories = {self.canonical(Path(d)) for d in directories}
        self.unreadable = set()
        self.reads = []

    def read_text(self, path: Path) -> str:
        path = self.canonical(path)
        self.reads.append(path)
        if path in self.directories:
            raise IsADirectoryError(21, "Is a directory", str(path))
        if path in self.unreadable:
            raise PermissionError(13, "Permission denied", str(path))
        if path not in self.files:
            raise FileNotFoundError(2, "No such file or directory", str(path))
        return self.files[path]

    def is_file(self, path: Path) -> bool:
        return self.canonical(path) in self.files

    def canonical(self, path: Path) -> Path:
        return Path(os.path.normpath(os.path.abspath(path)))


@pytest.fixture
def memory_fs():
    """Factory for in-memory file trees."""
    return InMemoryFileSystem


@pytest.fixture
def write_tree():
    """Writes {relative path: text} under a directory and returns the resolved directory."""
    def _write(base_dir: Path, files: Dict[str, str]) -> Path:
        for rel_path, text in files.items():
            target = base_dir / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        return base_dir.resolve()
    return _write


@pytest.fixture(autouse=True)
def uncached_structlog(monkeypatch):
    # cached loggers would bypass structlog.testing.capture_logs in later tests.
    real_configure = structlog.configure

    def configure(**kwargs):
        kwargs["cache_logger_on_first_use"] = False
        real_configure(**kwargs)

    monkeypatch.setattr(structlog, "configure", configure)
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def reset_depgrep_logging():
    # cli tests attach a handler bound to the runner's stderr.
    yield
    logging.getLogger("depgrep").handlers.clear()
