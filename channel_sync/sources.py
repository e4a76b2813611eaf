"""Parsing of configured sources and output directory resolution."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from .errors import ConfigError
from .models import TOOL_CONFIG_KEY, GlobalSettings, Source


def parse_options(value: Any, where: str) -> Tuple[str, ...]:
    """Validate a tool option list read from the configuration."""
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        raise ConfigError(f"{where}: options must be a list of strings")
    options: List[str] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (str, int, float)):
            raise ConfigError(f"{where}: options must be a list of strings")
        options.append(str(item))
    return tuple(options)


def _tool_options(section: Any, where: str) -> Tuple[str, ...]:
    if section is None:
        return ()
    if not isinstance(section, dict):
        raise ConfigError(f"{where}: expected a mapping")
    tool_section = section.get(TOOL_CONFIG_KEY)
    if tool_section is None:
        return ()
    if not isinstance(tool_section, dict):
        raise ConfigError(f"{where}.{TOOL_CONFIG_KEY}: expected a mapping")
    return parse_options(tool_section.get("options"), f"{where}.{TOOL_CONFIG_KEY}.options")


def parse_source_entry(entry: Any, index: int) -> Source:
    """Turn one item of the ``sources`` list into a Source."""
    where = f"sources[{index}]"
    if not isinstance(entry, dict):
        raise ConfigError(f"{where}: expected a mapping")

    name = entry.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ConfigError(f"{where}: missing 'name'")
    name = name.strip()

    url = entry.get("url")
    if not isinstance(url, str) or not url.strip():
        raise ConfigError(f"{where} ({name}): missing 'url'")
    url = url.strip()

    kind = entry.get("type")
    if kind is not None and not isinstance(kind, str):
        raise ConfigError(f"{where} ({name}).type: expected a string")
    kind = kind.strip().lower() if kind else None

    custom = entry.get("custom_settings") or {}
    if not isinstance(custom, dict):
        raise ConfigError(f"{where} ({name}).custom_settings: expected a mapping")

    output_dir = custom.get("output_dir")
    if output_dir is not None and not isinstance(output_dir, str):
        raise ConfigError(f"{where} ({name}).custom_settings.output_dir: expected a string")

    return Source(
        name=name,
        url=url,
        kind=kind or None,
        options=_tool_options(custom, f"{where}.custom_settings"),
        output_dir=output_dir or None,
    )


def load_sources(entries: Any) -> Tuple[Source, ...]:
    """Parse the ``sources`` list, keeping configuration order."""
    if not isinstance(entries, list):
        raise ConfigError("'sources' must be a list")

    sources: List[Source] = []
    seen: Set[str] = set()
    for index, entry in enumerate(entries):
        source = parse_source_entry(entry, index)
        if source.name in seen:
            raise ConfigError(f"Duplicate source name: {source.name}")
        seen.add(source.name)
        sources.append(source)
    return tuple(sources)


def global_tool_options(settings_section: Dict[str, Any]) -> Tuple[str, ...]:
    return _tool_options(settings_section, "global_settings")


def select_sources(sources: Sequence[Source], names: Optional[Sequence[str]]) -> List[Source]:
    """Restrict *sources* to *names*, preserving configuration order."""
    if not names:
        return list(sources)
    wanted = set(names)
    known = {source.name for source in sources}
    missing = sorted(wanted - known)
    if missing:
        raise ConfigError(f"Unknown source(s): {', '.join(missing)}")
    return [source for source in sources if source.name in wanted]


def resolve_source_dir(source: Source, settings: GlobalSettings) -> Path:
    """Directory holding the files of *source*.

    The per-source override replaces the base directory; the source name is
    always appended.
    """
    base = source.output_dir or settings.output_dir
    return Path(base) / source.name
