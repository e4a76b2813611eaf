"""Console logging helpers and classification of the tool's diagnostics."""

import sys
from datetime import datetime
from typing import List, Optional


def log_with_timestamp(message: str, file=None) -> None:
    """Print a log message with timestamp."""
    stream = file if file is not None else sys.stdout
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] {message}", file=stream)
    stream.flush()  # Force immediate output


def warn(message: str) -> None:
    print(f"Warning: {message}", file=sys.stderr)


class ToolOutputLogger:
    """Echoes the tool's stderr and keeps count of what it reported."""

    UNAVAILABLE_FRAGMENTS = (
        "video unavailable",
        "video is unavailable",
        "content isn't available",
        "content is not available",
        "members-only",
        "channel members",
        "requires purchase",
        "this video is private",
        "sign in to confirm your age",
        "not available in your country",
    )

    IGNORED_FRAGMENTS = (
        "does not have a shorts tab",
    )

    def __init__(self, label: Optional[str] = None, stream=None) -> None:
        self.label = label
        self.errors = 0
        self.warnings = 0
        self.unavailable = 0
        self.messages: List[str] = []
        self._stream = stream

    def _format_with_context(self, message: str) -> str:
        if self.label:
            return f"[{self.label}] {message}"
        return message

    def _print(self, message: str) -> None:
        stream = self._stream if self._stream is not None else sys.stderr
        print(self._format_with_context(message), file=stream)
        stream.flush()

    @staticmethod
    def _ensure_text(message) -> str:
        if isinstance(message, bytes):
            return message.decode("utf-8", "ignore")
        return str(message)

    def handle_line(self, line) -> None:
        text = self._ensure_text(line).rstrip("\r\n")
        if not text.strip():
            return
        lowered = text.lower()
        if any(fragment in lowered for fragment in self.IGNORED_FRAGMENTS):
            return

        self.messages.append(text)
        self._print(text)

        if lowered.startswith("error:"):
            self.errors += 1
        elif lowered.startswith("warning:"):
            self.warnings += 1

        if any(fragment in lowered for fragment in self.UNAVAILABLE_FRAGMENTS):
            self.unavailable += 1

    def summary(self) -> str:
        parts = []
        if self.errors:
            parts.append(f"{self.errors} errors")
        if self.warnings:
            parts.append(f"{self.warnings} warnings")
        if self.unavailable:
            parts.append(f"{self.unavailable} unavailable")
        return ", ".join(parts) if parts else "no diagnostics"
