"""Configuration loading and argument parsing for the channel synchronizer."""

import argparse
import dataclasses
import json
import os
import shlex
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from .errors import ConfigError
from .logger import warn
from .models import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_OUTPUT_DIR,
    FIELD_CHOICES,
    ID_PATTERN_CHOICES,
    RUN_MODE_CHOICES,
    SELECTOR_CHOICES,
    GlobalSettings,
    IdPattern,
    ListingFields,
    RunMode,
    SelectorMode,
    SyncConfig,
    SyncProfile,
)
from .sources import global_tool_options, load_sources

VALID_TOP_LEVEL_KEYS = {"global_settings", "sources"}
VALID_GLOBAL_KEYS = {"output_dir", "tool", "yt-dlp", "sync"}
VALID_PROFILE_KEYS = {
    "fields", "flat_playlist", "selector", "id_pattern", "mode",
    "print_only", "fail_fast", "keep_going", "show_remote",
}
YAML_EXTENSIONS = (".yaml", ".yml")


def _warn_unknown_keys(found, valid, where: str) -> None:
    invalid_keys = set(found) - valid
    if invalid_keys:
        warn(f"Unknown {where} keys ignored: {', '.join(sorted(invalid_keys))}")


def load_config_file(config_path: str) -> Dict[str, Any]:
    """Read a JSON or YAML configuration file into a dictionary.

    YAML is picked by the ``.yaml``/``.yml`` extension, anything else is read
    as JSON. Unlike optional CLI defaults, the sources list cannot be guessed,
    so a missing or unreadable file is an error.
    """
    if not os.path.exists(config_path):
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            if config_path.lower().endswith(YAML_EXTENSIONS):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Failed to parse config file {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse config file {config_path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read config file {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain an object at the top level")

    _warn_unknown_keys(data.keys(), VALID_TOP_LEVEL_KEYS, "config")
    return data


def _parse_enum(enum_cls, value: Any, where: str):
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(item.value for item in enum_cls)
        raise ConfigError(f"{where}: unknown value '{value}' (expected one of: {choices})") from None


def _parse_bool(value: Any, where: str) -> bool:
    if isinstance(value, bool):
        return value
    raise ConfigError(f"{where}: expected true or false")


def parse_tool_command(value: Any) -> Optional[Tuple[str, ...]]:
    """Accept the tool as a command string or an argument list."""
    if value is None:
        return None
    if isinstance(value, str):
        parts = shlex.split(value)
    elif isinstance(value, (list, tuple)) and all(isinstance(part, str) for part in value):
        parts = list(value)
    else:
        raise ConfigError("global_settings.tool: expected a string or a list of strings")
    if not parts:
        raise ConfigError("global_settings.tool: must not be empty")
    return tuple(parts)


def parse_profile(section: Any) -> SyncProfile:
    """Build a SyncProfile from ``global_settings.sync``."""
    if section is None:
        return SyncProfile()
    if not isinstance(section, dict):
        raise ConfigError("global_settings.sync: expected a mapping")

    _warn_unknown_keys(section.keys(), VALID_PROFILE_KEYS, "global_settings.sync")

    values: Dict[str, Any] = {}
    enum_fields = {
        "fields": ListingFields,
        "selector": SelectorMode,
        "id_pattern": IdPattern,
        "mode": RunMode,
    }
    for key, enum_cls in enum_fields.items():
        if section.get(key) is not None:
            values[key] = _parse_enum(enum_cls, section[key], f"global_settings.sync.{key}")

    for key in ("flat_playlist", "print_only", "fail_fast", "keep_going", "show_remote"):
        if section.get(key) is not None:
            values[key] = _parse_bool(section[key], f"global_settings.sync.{key}")

    return SyncProfile(**values)


def build_sync_config(data: Dict[str, Any]) -> SyncConfig:
    """Validate a raw configuration dictionary."""
    settings_section = data.get("global_settings") or {}
    if not isinstance(settings_section, dict):
        raise ConfigError("'global_settings' must be a mapping")
    _warn_unknown_keys(settings_section.keys(), VALID_GLOBAL_KEYS, "global_settings")

    output_dir = settings_section.get("output_dir") or DEFAULT_OUTPUT_DIR
    if not isinstance(output_dir, str):
        raise ConfigError("global_settings.output_dir: expected a string")

    if "sources" not in data:
        raise ConfigError("Config is missing the 'sources' list")

    settings = GlobalSettings(
        output_dir=output_dir,
        options=global_tool_options(settings_section),
        tool=parse_tool_command(settings_section.get("tool")),
    )
    return SyncConfig(
        settings=settings,
        sources=load_sources(data["sources"]),
        profile=parse_profile(settings_section.get("sync")),
    )


def load_sync_config(config_path: str) -> SyncConfig:
    return build_sync_config(load_config_file(config_path))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Compare local downloads against the remote listing of each configured source "
            "and fetch whatever is missing using yt-dlp."
        )
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to a JSON or YAML configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--source",
        action="append",
        default=[],
        metavar="NAME",
        help="Only process the named source. May be passed multiple times.",
    )
    parser.add_argument(
        "--print-only",
        action="store_true",
        default=None,
        help="Report statistics and pending downloads without downloading anything",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        default=None,
        help="Abort the whole run on the first failed download",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        default=None,
        help="Skip a source whose remote listing fails instead of aborting the run",
    )
    parser.add_argument(
        "--per-source",
        dest="mode",
        action="store_const",
        const=RunMode.PER_SOURCE.value,
        help="Download each source right after analysing it instead of analysing all sources first",
    )
    parser.add_argument(
        "--mode",
        dest="mode",
        choices=RUN_MODE_CHOICES,
        default=None,
        help="Run mode (default: two-phase)",
    )
    parser.add_argument(
        "--detailed",
        dest="fields",
        action="store_const",
        const=ListingFields.DETAILED.value,
        help="Also request upload date and duration when listing remote videos",
    )
    parser.add_argument(
        "--fields",
        dest="fields",
        choices=FIELD_CHOICES,
        default=None,
        help="Field set requested from the remote listing (default: basic)",
    )
    parser.add_argument(
        "--no-flat-playlist",
        dest="flat_playlist",
        action="store_false",
        default=None,
        help="Resolve every playlist entry when listing (slower, but fills in upload dates)",
    )
    parser.add_argument(
        "--selector",
        choices=SELECTOR_CHOICES,
        default=None,
        help="How a single video is selected for download (default: positional)",
    )
    parser.add_argument(
        "--id-pattern",
        choices=ID_PATTERN_CHOICES,
        default=None,
        help="Shape of the id part of local filenames (default: any)",
    )
    parser.add_argument(
        "--show-remote",
        action="store_true",
        default=None,
        help="Print the full remote listing for each source",
    )
    parser.add_argument(
        "--tool",
        default=None,
        help="Command used to run yt-dlp (default: yt-dlp from PATH, else python -m yt_dlp)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable coloured console output",
    )
    parser.add_argument(
        "--check-tool",
        action="store_true",
        help="Check that the external tool can be started and exit",
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)


def apply_cli_overrides(config: SyncConfig, args: argparse.Namespace) -> SyncConfig:
    """Return *config* with every explicitly passed CLI flag applied on top."""
    overrides: Dict[str, Any] = {}
    enum_fields = {
        "fields": ListingFields,
        "selector": SelectorMode,
        "id_pattern": IdPattern,
        "mode": RunMode,
    }
    for key, enum_cls in enum_fields.items():
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = enum_cls(value)

    for key in ("flat_playlist", "print_only", "fail_fast", "keep_going", "show_remote"):
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = value

    profile = dataclasses.replace(config.profile, **overrides)

    settings = config.settings
    tool_value = getattr(args, "tool", None)
    if tool_value:
        settings = dataclasses.replace(settings, tool=parse_tool_command(tool_value))

    return dataclasses.replace(config, settings=settings, profile=profile)


def profile_flags(profile: SyncProfile) -> List[str]:
    """Short human-readable description of the active profile."""
    flags = [
        f"fields={profile.fields.value}",
        f"selector={profile.selector.value}",
        f"id-pattern={profile.id_pattern.value}",
        f"mode={profile.mode.value}",
    ]
    if not profile.flat_playlist:
        flags.append("no-flat-playlist")
    for name in ("print_only", "fail_fast", "keep_going"):
        if getattr(profile, name):
            flags.append(name.replace("_", "-"))
    return flags
