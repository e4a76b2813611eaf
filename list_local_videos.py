#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
list_local_videos.py

Print the videos already present in each source directory, as recovered from
their filenames. Nothing is fetched and the external tool is never started.

Usage:
    python list_local_videos.py --config config.json
    python list_local_videos.py --config config.yaml --id-pattern youtube
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

import channel_sync as archiver
from channel_sync.models import DEFAULT_CONFIG_PATH, ID_PATTERN_CHOICES, IdPattern


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="List the locally archived videos of every configured source."
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to a JSON or YAML configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--id-pattern",
        choices=ID_PATTERN_CHOICES,
        default=None,
        help="Shape of the id part of local filenames (default: from config, else any)",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable coloured console output")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = archiver.load_sync_config(args.config)
    except archiver.ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    id_pattern = IdPattern(args.id_pattern) if args.id_pattern else config.profile.id_pattern
    reporter = archiver.Reporter(color=not args.no_color and archiver.color_supported())

    local_videos = archiver.get_local_videos(config.sources, config.settings, id_pattern)
    for source_name, videos in local_videos.items():
        reporter.print_local_inventory(source_name, videos)

    total = sum(len(videos) for videos in local_videos.values())
    print(f"\nTotal local videos: {total} across {len(local_videos)} source(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
