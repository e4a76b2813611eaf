"""Recover video information from archived filenames."""

import re
from typing import Dict, Optional

from .models import IdPattern, LocalVideoRecord

# <uploadDate> - <title> - <id>.<ext>
FILENAME_PATTERNS: Dict[IdPattern, re.Pattern] = {
    IdPattern.ANY: re.compile(
        r"^(?P<upload_date>\d{8}) - (?P<title>.+?) - (?P<id>.+?)\..+$"
    ),
    IdPattern.YOUTUBE: re.compile(
        r"^(?P<upload_date>\d{8}) - (?P<title>.+?) - (?P<id>.{11})\.[^.]+$"
    ),
}


def extract_info_from_filename(
    filename: str, id_pattern: IdPattern = IdPattern.ANY
) -> Optional[LocalVideoRecord]:
    """Parse *filename* into a record, or return None when it does not match.

    Thumbnails, partial downloads and sidecar files usually fall through to
    None as well; callers skip them without distinguishing the cause.
    """
    match = FILENAME_PATTERNS[id_pattern].match(filename)
    if not match:
        return None
    return LocalVideoRecord(
        video_id=match.group("id"),
        title=match.group("title"),
        upload_date=match.group("upload_date"),
        filename=filename,
    )
