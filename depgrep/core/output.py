import json
import sys
from pathlib import Path
from typing import List

import pyperclip  # type: ignore
import structlog

from depgrep.config.settings import OutputFormat
from depgrep.core.pipeline import MatchItem
from depgrep.exceptions import OutputError

log = structlog.get_logger(__name__)

def render_matches(matches: List[MatchItem], output_format: OutputFormat) -> str:
    # text: one root-relative label per line. json: the full label/description list.
    if output_format == OutputFormat.JSON:
        return json.dumps([item.to_dict() for item in matches], indent=2) + "\n"
    return "".join(f"{item.label}\n" for item in matches)

def write_to_stdout(text_content: str):
    # writes text to standard output.
    try:
        sys.stdout.write(text_content)
        sys.stdout.flush()
    except Exception as e:
        log.warning("stdout_write_failed_trying_binary_fallback", error=str(e))
        try:
            sys.stdout.buffer.write(text_content.encode("utf-8", errors="replace"))
            sys.stdout.buffer.flush()
        except Exception as inner_e:
            log.critical("stdout_binary_fallback_failed_critical_error", error=str(inner_e))

def write_to_file(output_file_path: Path, text_content: str):
    # writes text content to the specified file path.
    log.info("writing_output_to_file", path=str(output_file_path))
    try:
        output_file_path.write_text(text_content, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"failed to write to file '{output_file_path}': {e}") from e

def copy_to_clipboard(text_content: str) -> bool:
    """
    copies text content to the system clipboard using pyperclip.
    returns true if successful, false otherwise.
    """
    log.info("attempting_to_copy_output_to_clipboard")
    try:
        pyperclip.copy(text_content)
        log.info("successfully_copied_to_clipboard_via_pyperclip")
        return True
    except pyperclip.PyperclipException as e:  # e.g. no clipboard tool installed.
        log.warning(
            "clipboard_copy_failed_pyperclip_exception",
            error=str(e),
            note="ensure clipboard utility (xclip/pbcopy) is installed and accessible.",
        )
        return False
