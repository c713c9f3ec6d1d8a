import os
from pathlib import Path

import structlog

log = structlog.get_logger(__name__)
utf8_bom = b"\xef\xbb\xbf"

def strip_utf8_bom(data: bytes) -> bytes:
    # removes the utf-8 byte order mark from byte data if present.
    if data.startswith(utf8_bom):
        return data[len(utf8_bom):]
    return data

def relative_label(path: Path, root: Path) -> str:
    # path relative to root for display; may climb out of root with '..'.
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return Path(os.path.relpath(path, root)).as_posix()
