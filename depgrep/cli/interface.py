# depgrep/cli/interface.py
import sys
from pathlib import Path
from typing import Any, Dict
from dataclasses import fields as dataclass_fields, MISSING

import click
from click.core import ParameterSource
from click_option_group import optgroup
import structlog

from depgrep import __version__ as app_version
from depgrep.config.settings import SearchConfig, OutputFormat, DEFAULT_OUTPUT_FORMAT
from depgrep.config.loader import load_and_merge_configs, config_values_for_profile
from depgrep.logging_setup import configure_logging
from depgrep.core.output import render_matches, write_to_stdout, write_to_file, copy_to_clipboard
from depgrep.core.pipeline import DependencySearch
from depgrep.cli.console_output import print_search_banner, print_cli_summary_output
from depgrep.cli.picker import run_picker
from depgrep.exceptions import DepGrepError

log = structlog.get_logger(__name__)

# cli parameter name -> SearchConfig attribute, for options that may override config files.
CLI_PARAM_TO_SEARCHCONFIG_ATTR_MAP: Dict[str, str] = {
    "root_path": "root_path",
    "search_text": "search_text",
    "exclude_patterns": "exclude_patterns",
    "extensions": "extensions",
    "alias_prefix": "alias_prefix",
    "alias_target": "alias_target",
    "output_format_str": "output_format",
    "output_file": "output_file",
    "clipboard": "clipboard",
    "pick": "pick",
    "editor": "editor",
    "console_show_summary": "console_show_summary",
}

EXPLICIT_PARAMETER_SOURCES = (ParameterSource.COMMANDLINE, ParameterSource.ENVIRONMENT)

def _dataclass_defaults() -> Dict[str, Any]:
    defaults: Dict[str, Any] = {}
    for fd in dataclass_fields(SearchConfig):
        defaults[fd.name] = fd.default_factory() if fd.default_factory is not MISSING else fd.default
    return defaults

def _coerce_config_values(values: Dict[str, Any]) -> Dict[str, Any]:
    # values from toml arrive as plain strings and lists.
    coerced = dict(values)
    for attr in ("root_path", "start_path", "output_file"):
        if isinstance(coerced.get(attr), str):
            coerced[attr] = Path(coerced[attr]).expanduser() if coerced[attr] else None
    if isinstance(coerced.get("output_format"), str):
        coerced["output_format"] = OutputFormat.from_string(coerced["output_format"]) or DEFAULT_OUTPUT_FORMAT
    for attr in ("extensions", "exclude_patterns"):
        if isinstance(coerced.get(attr), (tuple, str)):
            coerced[attr] = [coerced[attr]] if isinstance(coerced[attr], str) else list(coerced[attr])
    return coerced

def build_search_config(ctx: click.Context, start_path: Path, cli_params: Dict[str, Any]) -> SearchConfig:
    """Layers dataclass defaults, config files, the chosen profile and explicit cli options."""
    effective_options = _dataclass_defaults()
    raw_configs_from_toml_files = load_and_merge_configs()
    effective_options.update(
        config_values_for_profile(raw_configs_from_toml_files, cli_params.get("active_config_profile_name"))
    )

    for param_name, attr in CLI_PARAM_TO_SEARCHCONFIG_ATTR_MAP.items():
        if ctx.get_parameter_source(param_name) in EXPLICIT_PARAMETER_SOURCES:
            effective_options[attr] = cli_params[param_name]

    effective_options["start_path"] = start_path
    return SearchConfig(**_coerce_config_values(effective_options))

def _emit_results(config: SearchConfig, rendered: str):
    output_destination_used = False
    if config.output_file:
        write_to_file(config.output_file, rendered)
        click.echo(f"Info: Output written to: {config.output_file}", err=True)
        output_destination_used = True

    clipboard_copy_succeeded = False
    if config.clipboard:
        clipboard_copy_succeeded = copy_to_clipboard(rendered.strip())
        output_destination_used = True
        if clipboard_copy_succeeded:
            click.echo("Info: Results copied to clipboard.", err=True)

    if not output_destination_used or (config.clipboard and not clipboard_copy_succeeded):
        if config.clipboard and not clipboard_copy_succeeded:
            click.echo("Info: Clipboard copy failed. Outputting to stdout instead.", err=True)
        write_to_stdout(rendered)

def _run_search_flow(config: SearchConfig):
    assert config.start_path is not None
    search = DependencySearch(config)
    print_search_banner(config.start_path.resolve())
    search.require_root()

    if config.search_text is None:
        config.search_text = click.prompt("Enter text to search in files", default="", show_default=False, err=True)

    result = search.run()
    rendered = render_matches(result.matches, config.output_format)
    if config.pick:
        # file and clipboard destinations still apply; stdout is left to the picker.
        if config.output_file or config.clipboard:
            _emit_results(config, rendered)
        print_cli_summary_output(config, result)
        run_picker(result.matches, config.editor)
        return

    _emit_results(config, rendered)
    print_cli_summary_output(config, result)


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.argument("start_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@optgroup.group("Search Options", help="Where to resolve imports from and what to look for.")
@optgroup.option("-r", "--root", "root_path", type=click.Path(file_okay=False, path_type=Path), envvar="DEPGREP_ROOT", default=None, help="Project root. Alias-prefixed imports resolve under ROOT/<alias target>. Env: DEPGREP_ROOT.")
@optgroup.option("-s", "--search", "search_text", default=None, help="Text to look for (case-sensitive). Prompted for if omitted.")
@optgroup.option("-e", "--exclude", "exclude_patterns", multiple=True, help="Glob patterns (relative to the root) of matches to drop.")
@optgroup.group("Resolution Options", help="How import specifiers are mapped to files.")
@optgroup.option("--ext", "extensions", multiple=True, help="Extensions tried, in order, for specifiers without one. Default: .js .ts .jsx .tsx.")
@optgroup.option("--alias-prefix", "alias_prefix", default=None, help="Specifier prefix that resolves under the project root. Default: '@/'.")
@optgroup.option("--alias-target", "alias_target", default=None, help="Directory under the root that the alias prefix points to. Default: 'src'.")
@optgroup.group("Output Options", help="How matching files are reported.")
@optgroup.option("-F", "--format", "output_format_str", type=click.Choice([f.value for f in OutputFormat]), default=None, help=f"Output format. Default: {DEFAULT_OUTPUT_FORMAT.value}.")
@optgroup.option("-o", "--output", "output_file", type=click.Path(dir_okay=False, writable=True, path_type=Path), default=None, help="Write the result list to a file.")
@optgroup.option("--clipboard", "clipboard", is_flag=True, default=False, help="Copy the result list to the clipboard.")
@optgroup.option("--pick", "pick", is_flag=True, default=False, help="Choose matches interactively and open them in an editor.")
@optgroup.option("--editor", "editor", default=None, help="Editor command used by --pick. Default: $VISUAL / $EDITOR.")
@optgroup.option("--summary/--no-summary", "console_show_summary", default=None, help="Show a count summary on stderr. Default: on.")
@optgroup.group("Application Behavior", help="Configuration profiles and logging.")
@optgroup.option("--config-profile", "active_config_profile_name", default=None, help="Load a profile from config file(s).")
@optgroup.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@optgroup.option("--force-json-logs", "force_json_logs_cli", is_flag=True, default=False, help="Force JSON logs.")
@click.version_option(version=app_version, package_name="depgrep", prog_name="depgrep", help="Show version and exit.")
@click.pass_context
def main_cli(ctx: click.Context, start_path: Path, **cli_params: Any):
    """depgrep: find the files START_PATH imports, directly or transitively,
    that contain a piece of text."""

    log_level = "warning"
    if cli_params.get("verbosity_level", 0) == 1: log_level = "info"
    elif cli_params.get("verbosity_level", 0) >= 2: log_level = "debug"
    configure_logging(log_level_str=log_level, force_json_logs=cli_params.get("force_json_logs_cli", False))

    log.debug("cli_command_invoked", start_path=str(start_path), params=cli_params)

    try:
        final_config = build_search_config(ctx, start_path, cli_params)
        _run_search_flow(final_config)
    except (click.exceptions.Exit, click.Abort):
        raise
    except DepGrepError as e:
        log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)
    except click.ClickException as e:
        log.error("click_exception_in_cli", error_type=type(e).__name__, message=str(e))
        e.show(); sys.exit(e.exit_code)
    except Exception as e:
        log.critical("unexpected_critical_error_in_cli", message=str(e), exc_info=True)
        click.secho(f"Unexpected critical error: {e}. Please report this.", fg="red", err=True)
        sys.exit(1)
