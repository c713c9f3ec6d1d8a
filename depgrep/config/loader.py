# depgrep/config/loader.py
"""
Handles loading and merging of configuration from TOML files.
"""
import toml
from pathlib import Path
from typing import Dict, Any, Optional
import structlog

from depgrep.exceptions import ConfigError

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".depgrep.toml", "depgrep.toml", "pyproject.toml"]
USER_CONFIG_DIR = Path.home() / ".config" / "depgrep"
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.toml"

CONFIG_KEY_TO_SEARCHCONFIG_ATTR_MAP: Dict[str, str] = {
    "root": "root_path",
    "extensions": "extensions",
    "alias_prefix": "alias_prefix",
    "alias_target": "alias_target",
    "exclude_patterns": "exclude_patterns",
    "output_format": "output_format",
    "output_file": "output_file",
    "clipboard": "clipboard",
    "editor": "editor",
    "console_show_summary": "console_show_summary",
}

# keys holding paths; relative values are anchored at the directory of the file that sets them.
PATH_CONFIG_KEYS = ("root", "output_file")

def _anchor_relative_paths(settings: Dict[str, Any], base_dir: Path) -> Dict[str, Any]:
    for key in PATH_CONFIG_KEYS:
        value = settings.get(key)
        if isinstance(value, str) and value:
            path = Path(value).expanduser()
            settings[key] = str(path if path.is_absolute() else (base_dir / path).resolve())
    profiles = settings.get("profiles")
    if isinstance(profiles, dict):
        for profile_values in profiles.values():
            if isinstance(profile_values, dict):
                _anchor_relative_paths(profile_values, base_dir)
    return settings

def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file():
        return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ConfigError(f"could not read configuration file {file_path}: {e}")
    if file_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("depgrep", {})
    return _anchor_relative_paths(data, file_path.parent.resolve())

def load_and_merge_configs(search_dir: Optional[Path] = None, user_config_file: Optional[Path] = None) -> Dict[str, Any]:
    # user-global settings first, then the first project-local file found in search_dir.
    search_dir = search_dir or Path.cwd()
    user_config_file = user_config_file or USER_CONFIG_FILE
    merged_toml_data: Dict[str, Any] = {}

    if user_config_file.is_file():
        log.info("loading_user_global_config", path=str(user_config_file))
        merged_toml_data.update(_load_toml_file_data(user_config_file))

    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = search_dir / filename
        if not candidate.is_file():
            continue
        project_settings = _load_toml_file_data(candidate)
        if not project_settings:
            continue
        log.info("loading_project_local_config", path=str(candidate))
        project_profiles = project_settings.pop("profiles", {})
        if isinstance(project_profiles, dict) and project_profiles:
            profiles = merged_toml_data.get("profiles")
            if not isinstance(profiles, dict):
                profiles = {}
            profiles.update(project_profiles)
            merged_toml_data["profiles"] = profiles
        merged_toml_data.update(project_settings)
        break

    if not merged_toml_data:
        log.debug("no_configuration_files_loaded")
    return merged_toml_data

def config_values_for_profile(raw_config: Dict[str, Any], profile_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Flattens raw TOML data into SearchConfig attribute values.

    Top-level keys apply first; a named profile's keys override them. Unknown
    keys are ignored. A profile name that does not exist is a ConfigError.
    """
    values: Dict[str, Any] = {}
    for toml_key, attr in CONFIG_KEY_TO_SEARCHCONFIG_ATTR_MAP.items():
        if toml_key in raw_config:
            values[attr] = raw_config[toml_key]

    if profile_name:
        profiles = raw_config.get("profiles", {})
        profile_values = profiles.get(profile_name) if isinstance(profiles, dict) else None
        if not isinstance(profile_values, dict):
            raise ConfigError(f"configuration profile '{profile_name}' not found")
        log.info("applying_profile_settings", profile=profile_name)
        for toml_key, attr in CONFIG_KEY_TO_SEARCHCONFIG_ATTR_MAP.items():
            if toml_key in profile_values:
                values[attr] = profile_values[toml_key]

    return values
