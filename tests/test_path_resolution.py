"""Tests for mapping specifiers onto files."""
from pathlib import Path

from depgrep.core.discovery.path_resolution import ResolutionRules, resolve_specifier

IMPORTER = Path("/proj/app/main.js")
ROOT = Path("/proj")


def test_extensionless_specifier_resolves_to_only_existing_extension(memory_fs):
    fs = memory_fs({"/proj/app/x.ts": ""})
    assert resolve_specifier("./x", IMPORTER, ROOT, fs) == Path("/proj/app/x.ts")


def test_extension_precedence_is_js_ts_jsx_tsx(memory_fs):
    fs = memory_fs({"/proj/app/x.tsx": "", "/proj/app/x.jsx": "", "/proj/app/x.ts": ""})
    assert resolve_specifier("./x", IMPORTER, ROOT, fs) == Path("/proj/app/x.ts")

    fs = memory_fs({"/proj/app/x.tsx": "", "/proj/app/x.js": ""})
    assert resolve_specifier("./x", IMPORTER, ROOT, fs) == Path("/proj/app/x.js")


def test_alias_prefix_resolves_under_root_src(memory_fs):
    fs = memory_fs({"/proj/src/utils/helpers.ts": ""})
    resolved = resolve_specifier("@/utils/helpers", IMPORTER, ROOT, fs)
    assert resolved == Path("/proj/src/utils/helpers.ts")


def test_alias_without_root_is_unresolved(memory_fs):
    fs = memory_fs({"/proj/src/utils/helpers.ts": ""})
    assert resolve_specifier("@/utils/helpers", IMPORTER, None, fs) is None


def test_explicit_extension_must_exist_exactly(memory_fs):
    fs = memory_fs({"/proj/app/c.ts": "", "/proj/app/d.ts.js": ""})
    assert resolve_specifier("./c.ts", IMPORTER, ROOT, fs) == Path("/proj/app/c.ts")
    assert resolve_specifier("./d.ts", IMPORTER, ROOT, fs) is None


def test_directory_candidates_are_skipped(memory_fs):
    fs = memory_fs({"/proj/app/lib.ts": ""}, directories=["/proj/app/lib.js"])
    assert resolve_specifier("./lib", IMPORTER, ROOT, fs) == Path("/proj/app/lib.ts")


def test_parent_relative_specifier(memory_fs):
    fs = memory_fs({"/proj/shared/util.js": ""})
    assert resolve_specifier("../shared/util", IMPORTER, ROOT, fs) == Path("/proj/shared/util.js")


def test_missing_target_returns_none(memory_fs):
    fs = memory_fs({})
    assert resolve_specifier("./missing", IMPORTER, ROOT, fs) is None


def test_custom_rules(memory_fs):
    fs = memory_fs({"/proj/lib/core/store.mjs": "", "/proj/app/util.vue": ""})
    rules = ResolutionRules(extensions=[".vue", ".mjs"], alias_prefix="~/", alias_target="lib")
    assert resolve_specifier("~/core/store", IMPORTER, ROOT, fs, rules) == Path("/proj/lib/core/store.mjs")
    assert resolve_specifier("./util", IMPORTER, ROOT, fs, rules) == Path("/proj/app/util.vue")


def test_resolves_against_real_disk(tmp_path: Path, write_tree):
    from depgrep.core.filesystem import LocalFileSystem

    root = write_tree(tmp_path, {"app/main.js": "", "app/x.jsx": ""})
    (root / "app" / "x.js").mkdir()
    resolved = resolve_specifier("./x", root / "app" / "main.js", root, LocalFileSystem())
    assert resolved == (root / "app" / "x.jsx").resolve()


def test_dotted_specifier_is_an_exact_path(memory_fs):
    fs = memory_fs({"/proj/app/foo.service.ts": "", "/proj/app/foo.module": ""})
    assert resolve_specifier("./foo.service", IMPORTER, ROOT, fs) is None
    assert resolve_specifier("./foo.module", IMPORTER, ROOT, fs) == Path("/proj/app/foo.module")
