"""Local inventory: what is already on disk for each source."""

import os
from typing import Dict, List, Sequence

from .filenames import extract_info_from_filename
from .logger import log_with_timestamp
from .models import GlobalSettings, IdPattern, LocalVideoRecord, Source
from .sources import resolve_source_dir


def scan_local_videos(
    source: Source,
    settings: GlobalSettings,
    id_pattern: IdPattern = IdPattern.ANY,
) -> List[LocalVideoRecord]:
    """Parse every filename directly inside the source directory.

    A missing directory counts as an empty inventory. Entries that do not
    match the archive naming scheme are skipped.
    """
    source_dir = resolve_source_dir(source, settings)
    if not source_dir.is_dir():
        log_with_timestamp(f"Directory not found: {source_dir}")
        return []

    records: List[LocalVideoRecord] = []
    for name in os.listdir(source_dir):
        record = extract_info_from_filename(name, id_pattern)
        if record is not None:
            records.append(record)
    return records


def get_local_videos(
    sources: Sequence[Source],
    settings: GlobalSettings,
    id_pattern: IdPattern = IdPattern.ANY,
) -> Dict[str, List[LocalVideoRecord]]:
    return {
        source.name: scan_local_videos(source, settings, id_pattern)
        for source in sources
    }
