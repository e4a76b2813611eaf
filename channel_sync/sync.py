"""Orchestration of a sync run: analyse every source, then download."""

import sys
from typing import Dict, List, Optional, Sequence

from .downloader import run_downloads
from .errors import ToolInvocationError
from .local import get_local_videos
from .logger import ToolOutputLogger, log_with_timestamp
from .models import (
    ListingFields,
    LocalVideoRecord,
    RunMode,
    Source,
    SourcePlan,
    SyncConfig,
    SyncResult,
)
from .reconcile import reconcile
from .remote import fetch_remote_videos
from .report import Reporter


def analyse_source(
    source: Source,
    config: SyncConfig,
    local_videos: List[LocalVideoRecord],
    reporter: Reporter,
) -> SourcePlan:
    """Fetch the remote listing for *source*, diff it and print the result."""
    label = f"{source.name} ({source.kind})" if source.kind else source.name
    reporter.heading(f"Processing source: {label}")

    tool_logger = ToolOutputLogger(label=source.name)
    remote_videos = fetch_remote_videos(source, config.settings, config.profile, tool_logger)

    plan = reconcile(source, local_videos, remote_videos)

    show_details = config.profile.fields is ListingFields.DETAILED
    tool_summary = tool_logger.summary() if tool_logger.messages else None
    reporter.print_statistics(f"Statistics for {source.name}", plan.stats, tool_summary)
    if config.profile.show_remote:
        reporter.print_videos(
            f"Remote Videos for {source.name}",
            plan.remote_videos,
            show_duration=show_details,
            empty_message="No remote videos listed.",
        )
    reporter.print_videos(
        f"Videos to Download for {source.name}",
        plan.to_download,
        show_duration=show_details,
    )
    return plan


def _download_plan(plan: SourcePlan, config: SyncConfig, reporter: Reporter, result: SyncResult) -> None:
    if not plan.to_download:
        return

    def on_success(video) -> None:
        result.downloaded += 1
        reporter.print_download_result(video)

    log_with_timestamp(f"Starting {len(plan.to_download)} download(s) for: {plan.source.name}")
    failures = run_downloads(
        plan,
        config.settings,
        config.profile,
        on_success=on_success,
        on_failure=reporter.print_download_failure,
    )
    result.failures.extend(failures)


def _analyse_or_skip(
    source: Source,
    config: SyncConfig,
    local_by_source: Dict[str, List[LocalVideoRecord]],
    reporter: Reporter,
    result: SyncResult,
) -> Optional[SourcePlan]:
    try:
        plan = analyse_source(source, config, local_by_source.get(source.name, []), reporter)
    except ToolInvocationError as exc:
        if not config.profile.keep_going:
            raise
        print(f"Skipping {source.name}: {exc}", file=sys.stderr)
        result.skipped_sources.append(source.name)
        return None
    result.plans.append(plan)
    return plan


def run_sync(
    config: SyncConfig,
    reporter: Optional[Reporter] = None,
    sources: Optional[Sequence[Source]] = None,
) -> SyncResult:
    """Reconcile *sources* (all configured ones by default) and download the gaps.

    A failed remote listing aborts the run by raising ToolInvocationError
    unless the profile says to keep going. Download failures are collected in
    the result, or raised when the profile says to fail fast.
    """
    reporter = reporter or Reporter()
    selected = list(sources) if sources is not None else list(config.sources)
    profile = config.profile
    result = SyncResult()

    local_by_source = get_local_videos(selected, config.settings, profile.id_pattern)

    if profile.mode is RunMode.PER_SOURCE:
        for source in selected:
            plan = _analyse_or_skip(source, config, local_by_source, reporter, result)
            if plan is None:
                continue
            if profile.print_only:
                continue
            if plan.to_download:
                _download_plan(plan, config, reporter, result)
            else:
                reporter.line("No videos to download for this source.")
    else:
        for source in selected:
            _analyse_or_skip(source, config, local_by_source, reporter, result)

        if not profile.print_only:
            for plan in result.plans:
                _download_plan(plan, config, reporter, result)

    if profile.print_only:
        reporter.line("\n--print-only specified. Skipping downloads.")

    reporter.print_download_errors(result.failures)
    return result
