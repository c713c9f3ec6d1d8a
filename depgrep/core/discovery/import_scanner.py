# depgrep/core/discovery/import_scanner.py
"""
Text-level extraction of import specifiers from JavaScript/TypeScript source.

This is a single regular expression, not a parser. It recognises:

    import x from "./x"
    import { a, b } from './y'
    import * as ns from "./z"
    import def, { a } from "./w"
    import "./side-effect"
    require("./legacy")

Known blind spots, accepted as limitations: dynamic ``import()`` calls,
template-literal specifiers, ``export ... from`` re-exports, and
``import type`` clauses. Import-looking text inside comments or strings is
matched like any other text.
"""
import re
from typing import List

import structlog

log = structlog.get_logger(__name__)

# what may sit between `import` and `from`.
_IMPORT_CLAUSE = r"(?:[\w$]+\s*,\s*)?(?:\{[^}]*\}|\*\s*as\s+[\w$]+|[\w$]+)"

IMPORT_PATTERN = re.compile(
    r"\b(?:import\s*(?:" + _IMPORT_CLAUSE + r"\s+from\s*)?|require\s*\(\s*)"
    r"""(['"])([^'"\r\n]+?)\1"""
)


def find_import_specifiers(source_text: str) -> List[str]:
    """Return every specifier in ``source_text``, in order of appearance."""
    specifiers = [match.group(2) for match in IMPORT_PATTERN.finditer(source_text)]
    log.debug("import_specifiers_found", count=len(specifiers))
    return specifiers
