"""Invocation of the external downloader (yt-dlp)."""

import shutil
import subprocess
import sys
import threading
import time
from typing import List, Optional, Sequence, Tuple

from yt_dlp.utils import shell_quote

from .errors import ToolInvocationError, ToolNotFoundError
from .logger import ToolOutputLogger
from .models import DEFAULT_TOOL_NAME, GlobalSettings


def resolve_tool_command(configured: Optional[Sequence[str]] = None) -> List[str]:
    """Return the argument prefix used to start the tool.

    An explicitly configured command wins. Otherwise ``yt-dlp`` from PATH is
    used, falling back to the yt-dlp module of the running interpreter.
    """
    if configured:
        return list(configured)
    if shutil.which(DEFAULT_TOOL_NAME):
        return [DEFAULT_TOOL_NAME]
    return [sys.executable, "-m", "yt_dlp"]


def tool_command(settings: GlobalSettings) -> List[str]:
    return resolve_tool_command(settings.tool)


def format_command(command: Sequence[str]) -> str:
    return shell_quote(list(command))


def _pump_lines(stream, logger: ToolOutputLogger) -> None:
    for line in iter(stream.readline, ""):
        logger.handle_line(line)
    stream.close()


def capture_output(
    command: Sequence[str],
    logger: Optional[ToolOutputLogger] = None,
) -> Tuple[int, str]:
    """Run *command*, collecting stdout while stderr is echoed line by line.

    Returns the exit status and everything written to stdout.
    """
    logger = logger or ToolOutputLogger()
    try:
        process = subprocess.Popen(
            list(command),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as exc:
        raise ToolNotFoundError(command[0], command) from exc

    pump = threading.Thread(target=_pump_lines, args=(process.stderr, logger), daemon=True)
    pump.start()
    stdout = process.stdout.read()
    process.stdout.close()
    returncode = process.wait()
    pump.join()
    return returncode, stdout


def run_attached(command: Sequence[str]) -> int:
    """Run *command* with inherited stdio so the tool's progress stays visible."""
    try:
        completed = subprocess.run(list(command))
    except OSError as exc:
        raise ToolNotFoundError(command[0], command) from exc
    return completed.returncode


def run_tool_check(settings: GlobalSettings) -> int:
    """Check that the external tool can be started and report its version."""

    print("=" * 70)
    print("External Tool Check".center(70))
    print("=" * 70)

    command = tool_command(settings) + ["--version"]
    print(f"Command: {format_command(command)}")

    start_time = time.time()
    logger = ToolOutputLogger(label="tool")
    try:
        returncode, stdout = capture_output(command, logger)
    except ToolInvocationError as exc:
        print("✗ Status: UNAVAILABLE")
        print(f"✗ {exc}")
        print()
        print("Install yt-dlp (pip install yt-dlp) or point --tool at the executable.")
        return 1
    elapsed = time.time() - start_time

    version = stdout.strip().splitlines()[0] if stdout.strip() else "unknown"
    if returncode != 0:
        print(f"✗ Status: FAILED (exit code {returncode})")
        print(f"✗ Response time: {elapsed:.2f}s")
        return 1

    print("✓ Status: OK")
    print(f"✓ Version: {version}")
    print(f"✓ Response time: {elapsed:.2f}s")
    return 0
