"""Tests for TOML configuration loading."""
from pathlib import Path

import pytest

from depgrep.config.loader import config_values_for_profile, load_and_merge_configs
from depgrep.exceptions import ConfigError


def test_no_config_files(tmp_path: Path):
    assert load_and_merge_configs(tmp_path, user_config_file=tmp_path / "missing.toml") == {}


def test_pyproject_tool_table(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "x"\n\n[tool.depgrep]\nalias_target = "app"\nextensions = [".ts"]\n'
    )
    data = load_and_merge_configs(tmp_path, user_config_file=tmp_path / "missing.toml")
    assert data == {"alias_target": "app", "extensions": [".ts"]}


def test_dot_file_wins_over_pyproject(tmp_path: Path):
    (tmp_path / ".depgrep.toml").write_text('alias_prefix = "~/"\n')
    (tmp_path / "pyproject.toml").write_text('[tool.depgrep]\nalias_prefix = "#/"\n')
    data = load_and_merge_configs(tmp_path, user_config_file=tmp_path / "missing.toml")
    assert data["alias_prefix"] == "~/"


def test_project_settings_override_user_settings_and_profiles_merge(tmp_path: Path):
    user_file = tmp_path / "user.toml"
    user_file.write_text('editor = "vim"\nroot = "/home/me"\n[profiles.user_only]\nclipboard = true\n')
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    (project_dir / "depgrep.toml").write_text('root = "."\n[profiles.local]\nexclude_patterns = ["dist/"]\n')

    data = load_and_merge_configs(project_dir, user_config_file=user_file)
    assert data["editor"] == "vim"
    assert data["root"] == str(project_dir.resolve())
    assert set(data["profiles"]) == {"user_only", "local"}


def test_invalid_toml_raises_config_error(tmp_path: Path):
    (tmp_path / ".depgrep.toml").write_text("root = \n")
    with pytest.raises(ConfigError):
        load_and_merge_configs(tmp_path, user_config_file=tmp_path / "missing.toml")


def test_profile_values_override_top_level():
    raw = {
        "root": ".",
        "output_format": "text",
        "unknown_key": 1,
        "profiles": {"ci": {"output_format": "json", "exclude_patterns": ["vendor/"]}},
    }
    assert config_values_for_profile(raw) == {"root_path": ".", "output_format": "text"}
    assert config_values_for_profile(raw, "ci") == {
        "root_path": ".",
        "output_format": "json",
        "exclude_patterns": ["vendor/"],
    }


def test_unknown_profile_raises():
    with pytest.raises(ConfigError, match="not found"):
        config_values_for_profile({"profiles": {}}, "missing")


def test_relative_paths_are_anchored_at_the_config_file(tmp_path: Path):
    user_dir = tmp_path / "home" / ".config" / "depgrep"
    user_dir.mkdir(parents=True)
    user_file = user_dir / "config.toml"
    user_file.write_text('root = "../../work"\n[profiles.out]\noutput_file = "results.txt"\n')
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()

    data = load_and_merge_configs(elsewhere, user_config_file=user_file)
    assert data["root"] == str((tmp_path / "home" / "work").resolve())
    assert data["profiles"]["out"]["output_file"] == str((user_dir / "results.txt").resolve())


def test_absolute_root_is_kept(tmp_path: Path):
    absolute_root = (tmp_path / "abs").resolve()
    (tmp_path / ".depgrep.toml").write_text(f'root = "{absolute_root.as_posix()}"\n')
    data = load_and_merge_configs(tmp_path, user_config_file=tmp_path / "missing.toml")
    assert data["root"] == str(absolute_root)
