"""Tests for configuration loading, validation and CLI overrides."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from channel_sync.config import apply_cli_overrides, load_sync_config, parse_args
from channel_sync.errors import ConfigError
from channel_sync.models import (
    IdPattern,
    ListingFields,
    RunMode,
    SelectorMode,
)
from channel_sync.sources import select_sources

FULL_CONFIG = {
    "global_settings": {
        "output_dir": "/data/videos",
        "yt-dlp": {"options": ["--format", "best", "--retries", 3]},
        "sync": {"fields": "detailed", "selector": "match-filter", "mode": "per-source"},
    },
    "sources": [
        {
            "name": "talks",
            "url": "https://www.youtube.com/@talks",
            "type": "channel",
            "custom_settings": {
                "output_dir": "/mnt/talks",
                "yt-dlp": {"options": ["--cookies-from-browser", "firefox"]},
            },
        },
        {"name": "mix", "url": "https://www.youtube.com/playlist?list=PL123"},
    ],
}


def write_json(path: Path, data) -> str:
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_load_json_config(tmp_path):
    config = load_sync_config(write_json(tmp_path / "config.json", FULL_CONFIG))

    assert config.settings.output_dir == "/data/videos"
    assert config.settings.options == ("--format", "best", "--retries", "3")
    assert config.settings.tool is None
    assert config.source_names() == ["talks", "mix"]

    talks, mix = config.sources
    assert talks.kind == "channel"
    assert talks.options == ("--cookies-from-browser", "firefox")
    assert talks.output_dir == "/mnt/talks"
    assert mix.kind is None
    assert mix.options == ()
    assert mix.output_dir is None

    assert config.profile.fields is ListingFields.DETAILED
    assert config.profile.selector is SelectorMode.MATCH_FILTER
    assert config.profile.mode is RunMode.PER_SOURCE
    assert config.profile.flat_playlist is True


def test_load_yaml_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "\n".join(
            [
                "global_settings:",
                "  output_dir: ./archive",
                "  tool: python3 -m yt_dlp",
                "  sync:",
                "    id_pattern: youtube",
                "    flat_playlist: false",
                "sources:",
                "  - name: clips",
                "    url: https://youtu.be/dQw4w9WgXcQ",
            ]
        ),
        encoding="utf-8",
    )

    config = load_sync_config(str(path))

    assert config.settings.output_dir == "./archive"
    assert config.settings.tool == ("python3", "-m", "yt_dlp")
    assert config.sources[0].kind is None
    assert config.profile.id_pattern is IdPattern.YOUTUBE
    assert config.profile.flat_playlist is False


def test_defaults_when_global_settings_missing(tmp_path):
    config = load_sync_config(
        write_json(tmp_path / "c.json", {"sources": [{"name": "a", "url": "https://example.com/@a"}]})
    )

    assert config.settings.output_dir == "./downloads"
    assert config.settings.options == ()
    assert config.profile.selector is SelectorMode.POSITIONAL
    assert config.profile.mode is RunMode.TWO_PHASE


@pytest.mark.parametrize(
    "data, message",
    [
        ({"global_settings": {}}, "sources"),
        ({"sources": {}}, "must be a list"),
        ({"sources": [{"url": "https://example.com"}]}, "missing 'name'"),
        ({"sources": [{"name": "a"}]}, "missing 'url'"),
        (
            {"sources": [{"name": "a", "url": "https://x"}, {"name": "a", "url": "https://y"}]},
            "Duplicate source name",
        ),
        (
            {"sources": [{"name": "a", "url": "https://x", "type": ["podcast"]}]},
            "type: expected a string",
        ),
        (
            {
                "sources": [
                    {"name": "a", "url": "https://x", "custom_settings": {"yt-dlp": {"options": "--bad"}}}
                ]
            },
            "list of strings",
        ),
        (
            {"global_settings": {"sync": {"selector": "magic"}}, "sources": []},
            "unknown value 'magic'",
        ),
        (
            {"global_settings": {"sync": {"print_only": "yes"}}, "sources": []},
            "expected true or false",
        ),
        ([1, 2, 3], "top level"),
    ],
)
def test_invalid_configs_raise(tmp_path, data, message):
    path = write_json(tmp_path / "bad.json", data)

    with pytest.raises(ConfigError) as excinfo:
        load_sync_config(path)

    assert message in str(excinfo.value)


def test_missing_and_unparseable_files(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_sync_config(str(tmp_path / "nope.json"))

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load_sync_config(str(broken))

    broken_yaml = tmp_path / "broken.yml"
    broken_yaml.write_text("sources: [unclosed", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load_sync_config(str(broken_yaml))


def test_unknown_keys_warn(tmp_path, capsys):
    data = {"extra": 1, "global_settings": {"colour": True}, "sources": []}

    load_sync_config(write_json(tmp_path / "c.json", data))

    err = capsys.readouterr().err
    assert "Warning: Unknown config keys ignored: extra" in err
    assert "Unknown global_settings keys ignored: colour" in err


def test_cli_flags_override_config(tmp_path):
    config = load_sync_config(write_json(tmp_path / "c.json", FULL_CONFIG))
    args = parse_args(
        [
            "--print-only",
            "--mode",
            "two-phase",
            "--selector",
            "positional",
            "--id-pattern",
            "youtube",
            "--no-flat-playlist",
            "--tool",
            "/opt/yt-dlp --ignore-config",
        ]
    )

    updated = apply_cli_overrides(config, args)

    assert updated.profile.print_only is True
    assert updated.profile.mode is RunMode.TWO_PHASE
    assert updated.profile.selector is SelectorMode.POSITIONAL
    assert updated.profile.id_pattern is IdPattern.YOUTUBE
    assert updated.profile.flat_playlist is False
    # Not passed on the command line, so the config value stays.
    assert updated.profile.fields is ListingFields.DETAILED
    assert updated.settings.tool == ("/opt/yt-dlp", "--ignore-config")
    assert updated.settings.output_dir == "/data/videos"


def test_shortcut_flags(tmp_path):
    config = load_sync_config(
        write_json(tmp_path / "c.json", {"sources": [{"name": "a", "url": "https://example.com/@a"}]})
    )

    updated = apply_cli_overrides(config, parse_args(["--detailed", "--per-source", "--fail-fast"]))

    assert updated.profile.fields is ListingFields.DETAILED
    assert updated.profile.mode is RunMode.PER_SOURCE
    assert updated.profile.fail_fast is True
    assert updated.profile.keep_going is False


def test_select_sources_keeps_config_order(tmp_path):
    config = load_sync_config(write_json(tmp_path / "c.json", FULL_CONFIG))

    assert [s.name for s in select_sources(config.sources, ["mix", "talks"])] == ["talks", "mix"]
    assert [s.name for s in select_sources(config.sources, [])] == ["talks", "mix"]
    with pytest.raises(ConfigError, match="Unknown source"):
        select_sources(config.sources, ["ghost"])


def test_source_type_is_an_optional_label(tmp_path):
    data = {
        "sources": [
            {"name": "a", "url": "https://example.com/@a", "type": " Channel "},
            {"name": "b", "url": "https://example.com/watch?v=x"},
        ]
    }

    config = load_sync_config(write_json(tmp_path / "c.json", data))

    assert [s.kind for s in config.sources] == ["channel", None]

    data["sources"][0]["type"] = 3
    with pytest.raises(ConfigError, match=r"sources\[0\] \(a\).type: expected a string"):
        load_sync_config(write_json(tmp_path / "c.json", data))
