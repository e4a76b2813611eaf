"""Human-readable console reports."""

import os
import sys
from typing import Dict, List, Optional, Sequence

from colorama import Fore, Style, just_fix_windows_console

from .models import (
    UNKNOWN_DATE,
    UNKNOWN_DURATION,
    DownloadFailure,
    LocalVideoRecord,
    RemoteVideoRecord,
    SourceStats,
    SyncResult,
)

RULE = "─" * 47


def color_supported(stream=None, environ: Optional[Dict[str, str]] = None) -> bool:
    """Colour only interactive terminals, and respect NO_COLOR."""
    if environ is None:
        environ = os.environ
    if environ.get("NO_COLOR"):
        return False
    stream = stream if stream is not None else sys.stdout
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class Reporter:
    """Prints statistics, pending downloads and failures."""

    def __init__(self, color: bool = False, stream=None) -> None:
        self.color = color
        self._stream = stream
        if color:
            just_fix_windows_console()

    @property
    def stream(self):
        return self._stream if self._stream is not None else sys.stdout

    def paint(self, text, *codes: str) -> str:
        text = str(text)
        if not self.color or not codes:
            return text
        return "".join(codes) + text + Style.RESET_ALL

    def line(self, text: str = "", error: bool = False) -> None:
        print(text, file=sys.stderr if error else self.stream)

    def heading(self, text: str) -> None:
        self.line(f"\n{self.paint(text, Style.BRIGHT)}")

    def print_statistics(
        self,
        title: str,
        stats: SourceStats,
        tool_summary: Optional[str] = None,
    ) -> None:
        ok = self.paint("✔", Fore.GREEN)
        self.line(f"\n{self.paint(title, Fore.BLUE, Style.BRIGHT)}")
        self.line(self.paint(RULE, Style.DIM))
        self.line(f"{ok} Total local videos: {self.paint(stats.total_local, Fore.YELLOW)}")
        self.line(f"{ok} Total remote videos: {self.paint(stats.total_remote, Fore.YELLOW)}")
        self.line(
            f"{ok} Videos in both local and remote: {self.paint(stats.matched, Fore.YELLOW)}"
        )
        self.line(
            f"{self.paint('✖', Fore.RED)} Videos only in local: "
            f"{self.paint(stats.only_local, Fore.YELLOW)}"
        )
        self.line(
            f"{self.paint('→', Fore.GREEN)} Videos to download: "
            f"{self.paint(stats.to_download, Fore.YELLOW)}"
        )
        if tool_summary:
            self.line(f"  yt-dlp diagnostics: {tool_summary}")

    def print_videos(
        self,
        title: str,
        videos: Sequence[RemoteVideoRecord],
        show_duration: bool = False,
        empty_message: str = "No videos to download.",
    ) -> None:
        self.line(f"\n{self.paint(title, Fore.MAGENTA, Style.BRIGHT)}")
        if not videos:
            self.line(f"  {self.paint('✔', Fore.GREEN)} {empty_message}")
            return
        self.line(self.paint(RULE, Style.DIM))
        for index, video in enumerate(videos, start=1):
            date = video.upload_date or UNKNOWN_DATE
            text = (
                f"  {self.paint(f'#{index}', Fore.YELLOW)} "
                f"ID: {self.paint(video.video_id, Fore.CYAN)} | "
                f"Title: {self.paint(video.title or '', Fore.GREEN)} | "
                f"Date: {self.paint(date, Fore.BLUE)}"
            )
            if show_duration:
                text += f" | Duration: {video.duration or UNKNOWN_DURATION}"
            self.line(text)

    def print_local_inventory(self, source_name: str, videos: Sequence[LocalVideoRecord]) -> None:
        self.line(f"\n{self.paint(f'Source: {source_name}', Style.BRIGHT)}")
        if not videos:
            self.line("  (no videos found)")
            return
        for video in videos:
            self.line(f"- Title: {self.paint(video.title, Fore.GREEN)}")
            self.line(f"  ID: {self.paint(video.video_id, Fore.CYAN)}")
            self.line(f"  Upload Date: {video.upload_date}")

    def print_download_result(self, video: RemoteVideoRecord) -> None:
        self.line(
            f"{self.paint('✔', Fore.GREEN)} Downloaded: {self.paint(video.title or '', Fore.CYAN)} "
            f"(ID: {self.paint(video.video_id, Fore.YELLOW)})"
        )

    def print_download_failure(self, failure: DownloadFailure) -> None:
        self.line(
            f"{self.paint('✖', Fore.RED)} Failed to download: {failure.title or ''} "
            f"(ID: {failure.video_id}): {failure.error}",
            error=True,
        )

    def print_download_errors(self, failures: List[DownloadFailure]) -> None:
        if not failures:
            return
        self.line(f"\n{self.paint('Download Errors:', Fore.RED, Style.BRIGHT)}")
        for failure in failures:
            self.line(
                f"- Source: {failure.source}, Video: {failure.title or ''} "
                f"(ID: {failure.video_id}), Error: {failure.error}"
            )

    def print_run_summary(self, result: SyncResult, print_only: bool) -> None:
        self.line("\n" + "=" * 70)
        self.line("Sync Summary")
        self.line("=" * 70)
        self.line(f"Sources analysed: {len(result.plans)}")
        self.line(f"Videos pending: {result.pending}")
        if print_only:
            self.line("Downloads skipped (--print-only)")
        else:
            self.line(f"Successfully downloaded: {result.downloaded}")
            self.line(f"Failed: {len(result.failures)}")
        if result.skipped_sources:
            self.line(f"Sources skipped after listing errors: {', '.join(result.skipped_sources)}")
        self.line("=" * 70)
