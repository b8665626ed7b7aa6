import sys

import pytest
from loguru import logger

from pkdeopkg.config.schema import BackendSettings
from pkdeopkg.logging_utils import configure_logging


def test_existing_handlers_are_replaced_once(settings):
    preexisting = logger.add(sys.stderr)
    configure_logging(settings)
    with pytest.raises(ValueError):
        logger.remove(preexisting)

    later = logger.add(sys.stderr)
    configure_logging(settings)
    logger.remove(later)


def test_file_sink_creates_parent_directory(fake_script, tmp_path):
    log_file = tmp_path / "logs" / "deopkg.log"
    configure_logging(BackendSettings(script_path=fake_script, log_file=log_file))
    logger.info("file sink ready")
    logger.complete()
    assert log_file.parent.is_dir()


def test_unusable_log_directory_raises(fake_script, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(OSError):
        configure_logging(BackendSettings(script_path=fake_script, log_file=blocker / "sub" / "deopkg.log"))
