"""Per-video download invocations."""

import sys
from typing import Callable, List, Optional

from .errors import ToolInvocationError
from .models import (
    OUTPUT_FILENAME_TEMPLATE,
    DownloadFailure,
    GlobalSettings,
    RemoteVideoRecord,
    SelectorMode,
    Source,
    SourcePlan,
    SyncProfile,
)
from .sources import resolve_source_dir
from .tool import format_command, run_attached, tool_command


def output_template(source: Source, settings: GlobalSettings) -> str:
    """Output path handed to the tool, matching what the local scan parses."""
    return str(resolve_source_dir(source, settings) / OUTPUT_FILENAME_TEMPLATE)


def selector_arguments(source: Source, video_id: str, selector: SelectorMode) -> List[str]:
    """Arguments that restrict an invocation to a single video."""
    if selector is SelectorMode.MATCH_FILTER:
        return ["--match-filter", f"id={video_id}"]
    if selector is SelectorMode.ID_FLAG:
        return ["--id", video_id]
    # Ids may start with "-", so they go after the end-of-options marker.
    return ["--", video_id]


def build_download_command(
    source: Source,
    settings: GlobalSettings,
    video_id: str,
    selector: SelectorMode = SelectorMode.POSITIONAL,
) -> List[str]:
    command = tool_command(settings)
    if selector is SelectorMode.MATCH_FILTER:
        # The filter is applied while walking the whole source.
        command.append(source.url)
    command.extend(settings.options)
    command.extend(source.options)
    command.extend(["--output", output_template(source, settings)])
    command.extend(selector_arguments(source, video_id, selector))
    return command


def download_video(command: List[str]) -> None:
    """Run one download with inherited stdio; raise on a non-zero exit."""
    print(f"Running download command: {format_command(command)}")
    sys.stdout.flush()
    returncode = run_attached(command)
    if returncode != 0:
        raise ToolInvocationError(
            f"Download failed with exit code {returncode}",
            exit_code=returncode,
            command=command,
        )


def run_downloads(
    plan: SourcePlan,
    settings: GlobalSettings,
    profile: SyncProfile,
    on_success: Optional[Callable[[RemoteVideoRecord], None]] = None,
    on_failure: Optional[Callable[[DownloadFailure], None]] = None,
) -> List[DownloadFailure]:
    """Download every pending video of *plan* one after another.

    Failures are collected and the loop moves on, unless the profile asks to
    fail fast, in which case the first ToolInvocationError propagates.
    """
    failures: List[DownloadFailure] = []
    total = len(plan.to_download)
    for idx, video in enumerate(plan.to_download, start=1):
        print(f"\n[{idx}/{total}] {plan.source.name}: {video.title or video.video_id}")
        command = build_download_command(plan.source, settings, video.video_id, profile.selector)
        try:
            download_video(command)
        except ToolInvocationError as exc:
            if profile.fail_fast:
                raise
            failure = DownloadFailure(
                source=plan.source.name,
                video_id=video.video_id,
                title=video.title,
                error=str(exc),
            )
            failures.append(failure)
            if on_failure:
                on_failure(failure)
            continue
        if on_success:
            on_success(video)
    return failures
