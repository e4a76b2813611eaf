#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
sync_channels.py

Mirror every configured source into its own directory using yt-dlp.
Local files are matched against the remote listing by video id and only the
missing videos are downloaded.

Usage:
    python sync_channels.py --config config.json
    python sync_channels.py --config config.yaml --print-only
    python sync_channels.py --source lectures --detailed --keep-going
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

import channel_sync as archiver
from channel_sync.config import profile_flags
from channel_sync.sources import select_sources
from channel_sync.tool import format_command


def check_tool(args: argparse.Namespace) -> int:
    """Run the tool health check; the config file is optional here."""
    try:
        if os.path.exists(args.config):
            config = archiver.load_sync_config(args.config)
        else:
            config = archiver.SyncConfig(settings=archiver.GlobalSettings(), sources=())
        config = archiver.apply_cli_overrides(config, args)
    except archiver.ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return archiver.run_tool_check(config.settings)


def main(argv: Optional[List[str]] = None) -> int:
    args = archiver.parse_args(argv)

    if args.check_tool:
        return check_tool(args)

    try:
        config = archiver.apply_cli_overrides(archiver.load_sync_config(args.config), args)
        sources = select_sources(config.sources, args.source)
    except archiver.ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if not sources:
        print("Error: No sources configured", file=sys.stderr)
        return 1

    color = not args.no_color and archiver.color_supported()
    reporter = archiver.Reporter(color=color)

    print(f"Loaded {len(sources)} sources from {args.config}")
    print(f"Output directory: {config.settings.output_dir}")
    print(f"Profile: {', '.join(profile_flags(config.profile))}")

    try:
        result = archiver.run_sync(config, reporter, sources)
    except archiver.ToolInvocationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        if exc.command:
            print(f"Command: {format_command(exc.command)}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130

    reporter.print_run_summary(result, config.profile.print_only)
    print("\nAll done.")
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
