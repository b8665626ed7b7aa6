"""Loguru sinks for the backend."""

from __future__ import annotations

import sys

from loguru import logger

from pkdeopkg.config.schema import BackendSettings

_SINK_IDS: dict[str, int] = {}


def configure_logging(settings: BackendSettings) -> None:
    """Replace loguru's default handler with our stderr sink, plus an optional rotating file sink."""
    if "stderr" not in _SINK_IDS:
        logger.remove()
        _SINK_IDS["stderr"] = logger.add(
            sys.stderr,
            level=settings.log_level,
            format="[deopkg] <level>{level: <8}</level> {message}",
            backtrace=False,
            diagnose=False,
        )
    if settings.log_file is None or "file" in _SINK_IDS:
        return
    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    _SINK_IDS["file"] = logger.add(
        str(settings.log_file),
        level=settings.log_level,
        rotation="10 MB",
        retention="14 days",
        enqueue=True,
        encoding="utf-8",
        backtrace=False,
        diagnose=False,
    )


def reset_logging() -> None:
    """Remove sinks installed by configure_logging."""
    for sink_id in _SINK_IDS.values():
        try:
            logger.remove(sink_id)
        except ValueError:
            pass
    _SINK_IDS.clear()
