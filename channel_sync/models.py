"""Data models, enums, and constants for the channel synchronizer."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


# Constants
DEFAULT_CONFIG_PATH = "config.json"
DEFAULT_OUTPUT_DIR = "./downloads"
DEFAULT_TOOL_NAME = "yt-dlp"
TOOL_CONFIG_KEY = "yt-dlp"

# Output template handed to the tool; local filenames are parsed back against it
OUTPUT_FILENAME_TEMPLATE = "%(upload_date)s - %(title)s - %(id)s.%(ext)s"

UNKNOWN_DATE = "Unknown Date"
UNKNOWN_DURATION = "Unknown"


class ListingFields(Enum):
    """Field set requested from the tool when listing a source."""
    BASIC = "basic"
    DETAILED = "detailed"

    @property
    def names(self) -> Tuple[str, ...]:
        if self is ListingFields.DETAILED:
            return ("id", "title", "upload_date", "duration_string")
        return ("id", "title")

    @property
    def print_template(self) -> str:
        return "\t".join(f"%({name})s" for name in self.names)


class SelectorMode(Enum):
    """How a single video is singled out in a download invocation."""
    POSITIONAL = "positional"
    MATCH_FILTER = "match-filter"
    ID_FLAG = "id-flag"


class IdPattern(Enum):
    """Shape of the id segment expected in local filenames."""
    ANY = "any"
    YOUTUBE = "youtube"


class RunMode(Enum):
    """Whether analysis and downloads run as two phases or per source."""
    TWO_PHASE = "two-phase"
    PER_SOURCE = "per-source"


FIELD_CHOICES: Tuple[str, ...] = tuple(item.value for item in ListingFields)
SELECTOR_CHOICES: Tuple[str, ...] = tuple(item.value for item in SelectorMode)
ID_PATTERN_CHOICES: Tuple[str, ...] = tuple(item.value for item in IdPattern)
RUN_MODE_CHOICES: Tuple[str, ...] = tuple(item.value for item in RunMode)


@dataclass(frozen=True)
class Source:
    """A named remote collection mirrored into its own directory."""
    name: str
    url: str
    kind: Optional[str] = None
    options: Tuple[str, ...] = ()
    output_dir: Optional[str] = None


@dataclass(frozen=True)
class GlobalSettings:
    """Process-wide defaults shared by every source."""
    output_dir: str = DEFAULT_OUTPUT_DIR
    options: Tuple[str, ...] = ()
    tool: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class SyncProfile:
    """Knobs that used to differ between the individual sync scripts."""
    fields: ListingFields = ListingFields.BASIC
    flat_playlist: bool = True
    selector: SelectorMode = SelectorMode.POSITIONAL
    id_pattern: IdPattern = IdPattern.ANY
    mode: RunMode = RunMode.TWO_PHASE
    print_only: bool = False
    fail_fast: bool = False
    keep_going: bool = False
    show_remote: bool = False


@dataclass(frozen=True)
class SyncConfig:
    """Everything loaded from the configuration file."""
    settings: GlobalSettings
    sources: Tuple[Source, ...]
    profile: SyncProfile = field(default_factory=SyncProfile)

    def source_names(self) -> List[str]:
        return [source.name for source in self.sources]


@dataclass(frozen=True)
class LocalVideoRecord:
    """A video found on disk, recovered from its filename."""
    video_id: str
    title: str
    upload_date: str
    filename: Optional[str] = None


@dataclass(frozen=True)
class RemoteVideoRecord:
    """One line of the tool's listing output."""
    video_id: str
    title: Optional[str] = None
    upload_date: Optional[str] = None
    duration: Optional[str] = None


@dataclass(frozen=True)
class SourceStats:
    total_local: int
    total_remote: int
    matched: int
    only_local: int
    to_download: int


@dataclass
class SourcePlan:
    """Result of reconciling one source."""
    source: Source
    local_videos: List[LocalVideoRecord]
    remote_videos: List[RemoteVideoRecord]
    to_download: List[RemoteVideoRecord]
    stats: SourceStats


@dataclass(frozen=True)
class DownloadFailure:
    source: str
    video_id: str
    title: Optional[str]
    error: str


@dataclass
class SyncResult:
    """Aggregated outcome of a whole run."""
    plans: List[SourcePlan] = field(default_factory=list)
    downloaded: int = 0
    failures: List[DownloadFailure] = field(default_factory=list)
    skipped_sources: List[str] = field(default_factory=list)

    @property
    def pending(self) -> int:
        return sum(len(plan.to_download) for plan in self.plans)

    @property
    def exit_code(self) -> int:
        if self.failures or self.skipped_sources:
            return 1
        return 0
