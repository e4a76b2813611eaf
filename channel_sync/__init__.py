"""Keep a local video archive in sync with remote sources through yt-dlp."""

# Import main components for easier access
from .config import apply_cli_overrides, load_config_file, load_sync_config, parse_args
from .downloader import build_download_command, download_video, run_downloads
from .errors import ConfigError, ToolInvocationError, ToolNotFoundError
from .filenames import extract_info_from_filename
from .local import get_local_videos, scan_local_videos
from .logger import ToolOutputLogger, log_with_timestamp
from .models import (
    DownloadFailure,
    GlobalSettings,
    IdPattern,
    ListingFields,
    LocalVideoRecord,
    RemoteVideoRecord,
    RunMode,
    SelectorMode,
    Source,
    SourcePlan,
    SourceStats,
    SyncConfig,
    SyncProfile,
    SyncResult,
)
from .reconcile import compute_stats, reconcile, videos_to_download
from .remote import build_listing_command, fetch_remote_videos, parse_listing_output
from .report import Reporter, color_supported
from .sources import resolve_source_dir
from .sync import analyse_source, run_sync
from .tool import resolve_tool_command, run_tool_check

__all__ = [
    # Main entry points
    "parse_args",
    "run_sync",
    "run_tool_check",
    # Configuration
    "load_config_file",
    "load_sync_config",
    "apply_cli_overrides",
    "resolve_source_dir",
    "resolve_tool_command",
    # Inventories
    "extract_info_from_filename",
    "scan_local_videos",
    "get_local_videos",
    "build_listing_command",
    "parse_listing_output",
    "fetch_remote_videos",
    # Reconciliation and downloads
    "reconcile",
    "compute_stats",
    "videos_to_download",
    "analyse_source",
    "build_download_command",
    "download_video",
    "run_downloads",
    # Reporting
    "Reporter",
    "color_supported",
    "ToolOutputLogger",
    "log_with_timestamp",
    # Models and data structures
    "Source",
    "GlobalSettings",
    "SyncConfig",
    "SyncProfile",
    "ListingFields",
    "SelectorMode",
    "IdPattern",
    "RunMode",
    "LocalVideoRecord",
    "RemoteVideoRecord",
    "SourceStats",
    "SourcePlan",
    "DownloadFailure",
    "SyncResult",
    # Errors
    "ConfigError",
    "ToolInvocationError",
    "ToolNotFoundError",
]
