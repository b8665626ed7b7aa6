"""Settings loading from the daemon key file."""

from __future__ import annotations

from configparser import ConfigParser
from typing import Any

from pydantic import ValidationError

from pkdeopkg.config.schema import BackendSettings

KEY_FILE_SECTION = "Deopkg"

# Key file entry -> BackendSettings field
_KEY_MAP: dict[str, str] = {
    "ScriptPath": "script_path",
    "BridgeModule": "bridge_module",
    "LogLevel": "log_level",
    "LogFile": "log_file",
    "DownloadDir": "download_dir",
}


def key_file_overrides(key_file: ConfigParser | None) -> dict[str, Any]:
    """
    Read backend overrides from the key file without modifying it.

    Option lookups go through the parser's own optionxform; values are read raw so
    a literal ``%`` (e.g. a strftime log name) is not interpolated.
    """
    if key_file is None or not key_file.has_section(KEY_FILE_SECTION):
        return {}
    section = key_file[KEY_FILE_SECTION]
    out: dict[str, Any] = {}
    for key, field in _KEY_MAP.items():
        raw = section.get(key, raw=True)
        if raw is None or not raw.strip():
            continue
        out[field] = raw.strip()
    return out


def load_settings(key_file: ConfigParser | None = None) -> BackendSettings:
    """
    Build settings from environment defaults plus key file overrides.

    Args:
        key_file: The daemon configuration handed to ``initialize``, or None.

    Returns:
        Validated settings.
    """
    overrides = key_file_overrides(key_file)
    try:
        return BackendSettings(**overrides)
    except ValidationError as e:
        source = f"[{KEY_FILE_SECTION}] section" if overrides else "DEOPKG_* environment"
        raise ValueError(f"Invalid deopkg settings from {source}: {e}") from e
