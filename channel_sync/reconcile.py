"""Set difference between the local and remote inventories."""

from typing import Iterable, List, Sequence

from .models import (
    LocalVideoRecord,
    RemoteVideoRecord,
    Source,
    SourcePlan,
    SourceStats,
)


def videos_to_download(
    local_videos: Iterable[LocalVideoRecord],
    remote_videos: Sequence[RemoteVideoRecord],
) -> List[RemoteVideoRecord]:
    """Remote records whose id is not present locally, in remote order."""
    local_ids = {video.video_id for video in local_videos}
    return [video for video in remote_videos if video.video_id not in local_ids]


def compute_stats(
    local_videos: Iterable[LocalVideoRecord],
    remote_videos: Sequence[RemoteVideoRecord],
) -> SourceStats:
    # Counts work on id sets, so duplicate ids are counted once.
    local_ids = {video.video_id for video in local_videos}
    remote_ids = {video.video_id for video in remote_videos}
    matched = len(local_ids & remote_ids)
    return SourceStats(
        total_local=len(local_ids),
        total_remote=len(remote_ids),
        matched=matched,
        only_local=len(local_ids) - matched,
        to_download=sum(1 for video in remote_videos if video.video_id not in local_ids),
    )


def reconcile(
    source: Source,
    local_videos: List[LocalVideoRecord],
    remote_videos: List[RemoteVideoRecord],
) -> SourcePlan:
    return SourcePlan(
        source=source,
        local_videos=local_videos,
        remote_videos=remote_videos,
        to_download=videos_to_download(local_videos, remote_videos),
        stats=compute_stats(local_videos, remote_videos),
    )
