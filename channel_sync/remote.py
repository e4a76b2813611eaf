"""Remote inventory: list a source through the tool and parse the result."""

from typing import List, Optional

from .errors import ToolInvocationError
from .logger import ToolOutputLogger, log_with_timestamp
from .models import (
    GlobalSettings,
    RemoteVideoRecord,
    Source,
    SyncProfile,
)
from .tool import capture_output, tool_command


def build_listing_command(
    source: Source, settings: GlobalSettings, profile: SyncProfile
) -> List[str]:
    """Argument list that makes the tool print one tab-separated line per video."""
    command = tool_command(settings) + [source.url]
    command.extend(settings.options)
    command.extend(source.options)
    if profile.flat_playlist:
        command.append("--flat-playlist")
    command.extend(["--print", profile.fields.print_template])
    return command


def _field(fields: List[str], index: int) -> Optional[str]:
    if index < len(fields):
        return fields[index]
    return None


def parse_listing_line(line: str) -> Optional[RemoteVideoRecord]:
    """Split one listing line into a record; fields are positional."""
    fields = line.split("\t")
    video_id = fields[0]
    if not video_id:
        return None
    return RemoteVideoRecord(
        video_id=video_id,
        title=_field(fields, 1),
        upload_date=_field(fields, 2),
        duration=_field(fields, 3),
    )


def parse_listing_output(output: str) -> List[RemoteVideoRecord]:
    """Parse the tool's stdout, dropping blank lines and keeping order."""
    records: List[RemoteVideoRecord] = []
    for line in output.split("\n"):
        line = line.rstrip("\r")
        if not line.strip():
            continue
        record = parse_listing_line(line)
        if record is not None:
            records.append(record)
    return records


def fetch_remote_videos(
    source: Source,
    settings: GlobalSettings,
    profile: SyncProfile,
    logger: Optional[ToolOutputLogger] = None,
) -> List[RemoteVideoRecord]:
    """List every video of *source*.

    Raises ToolInvocationError carrying the exit code when the tool fails.
    """
    command = build_listing_command(source, settings, profile)
    log_with_timestamp(f"Fetching remote videos for: {source.name}")

    returncode, stdout = capture_output(command, logger or ToolOutputLogger(label=source.name))
    if returncode != 0:
        raise ToolInvocationError(
            f"Command failed with exit code {returncode}",
            exit_code=returncode,
            command=command,
        )

    records = parse_listing_output(stdout)
    log_with_timestamp(f"Found {len(records)} remote videos for: {source.name}")
    return records
