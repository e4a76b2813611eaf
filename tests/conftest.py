"""Shared fixtures: a scriptable stand-in for yt-dlp and config builders."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

FAKE_TOOL_SOURCE = r'''
import json
import os
import sys

HERE = os.path.dirname(os.path.abspath(__file__))
with open(os.path.join(HERE, "behaviour.json"), "r", encoding="utf-8") as handle:
    behaviour = json.load(handle)

args = sys.argv[1:]
with open(os.path.join(HERE, "calls.jsonl"), "a", encoding="utf-8") as handle:
    handle.write(json.dumps(args) + "\n")

if "--version" in args:
    print(behaviour.get("version", "2024.01.01"))
    sys.exit(0)

if "--print" in args:
    listing = behaviour.get("listings", {}).get(args[0], {})
    sys.stderr.write(listing.get("stderr", ""))
    sys.stderr.flush()
    sys.stdout.write(listing.get("stdout", ""))
    sys.exit(listing.get("exit", 0))

video_id = None
if "--" in args:
    video_id = args[args.index("--") + 1]
elif "--match-filter" in args:
    video_id = args[args.index("--match-filter") + 1].split("=", 1)[1]
elif "--id" in args:
    video_id = args[args.index("--id") + 1]

failures = behaviour.get("fail_ids", {})
if video_id in failures:
    sys.stderr.write("ERROR: [youtube] %s: Video unavailable\n" % video_id)
    sys.exit(failures[video_id])

template = args[args.index("--output") + 1]
target = (
    template.replace("%(upload_date)s", "20240101")
    .replace("%(title)s", "Fetched")
    .replace("%(id)s", video_id)
    .replace("%(ext)s", "mp4")
)
os.makedirs(os.path.dirname(target), exist_ok=True)
with open(target, "w", encoding="utf-8") as handle:
    handle.write("video")
'''


class FakeTool:
    """Writes the fake tool script and its behaviour file into a directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory
        self.script = directory / "fake_ytdlp.py"
        self.script.write_text(FAKE_TOOL_SOURCE, encoding="utf-8")
        self.behaviour: Dict = {"listings": {}, "fail_ids": {}}
        self._save()

    @property
    def command(self) -> List[str]:
        return [sys.executable, str(self.script)]

    def _save(self) -> None:
        (self.directory / "behaviour.json").write_text(
            json.dumps(self.behaviour), encoding="utf-8"
        )

    def set_listing(self, url: str, stdout: str = "", stderr: str = "", exit_code: int = 0) -> None:
        self.behaviour["listings"][url] = {"stdout": stdout, "stderr": stderr, "exit": exit_code}
        self._save()

    def fail_download(self, video_id: str, exit_code: int = 1) -> None:
        self.behaviour["fail_ids"][video_id] = exit_code
        self._save()

    def calls(self) -> List[List[str]]:
        path = self.directory / "calls.jsonl"
        if not path.exists():
            return []
        return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line]

    def download_calls(self) -> List[List[str]]:
        return [call for call in self.calls() if "--print" not in call and "--version" not in call]


@pytest.fixture
def fake_tool(tmp_path: Path) -> FakeTool:
    directory = tmp_path / "tool"
    directory.mkdir()
    return FakeTool(directory)


def make_config_data(
    output_dir: str,
    sources: List[Dict],
    tool: Optional[List[str]] = None,
    options: Optional[List[str]] = None,
    sync: Optional[Dict] = None,
) -> Dict:
    settings: Dict = {"output_dir": output_dir}
    if tool is not None:
        settings["tool"] = tool
    if options is not None:
        settings["yt-dlp"] = {"options": options}
    if sync is not None:
        settings["sync"] = sync
    return {"global_settings": settings, "sources": sources}
