from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from hud_config import logging_utils


def test_log_level_from_numeric_env():
    env = {logging_utils.LOG_LEVEL_ENV_VAR: "30"}
    assert logging_utils.resolve_log_level_hint(env) == (30, "WARNING", "env")


def test_log_level_accepts_name_only():
    env = {logging_utils.LOG_LEVEL_NAME_ENV_VAR: "debug"}
    assert logging_utils.resolve_log_level_hint(env) == (logging.DEBUG, "DEBUG", "env")


def test_log_level_defaults_when_unset_or_invalid():
    assert logging_utils.resolve_log_level_hint({}) == (None, None, "default")
    env = {logging_utils.LOG_LEVEL_ENV_VAR: "loud", logging_utils.LOG_LEVEL_NAME_ENV_VAR: "LOUDER"}
    assert logging_utils.resolve_log_level_hint(env) == (None, None, "default")


def test_logs_dir_prefers_env_override(tmp_path):
    target = tmp_path / "custom-logs"
    resolved = logging_utils.resolve_logs_dir(env={logging_utils.LOG_DIR_ENV_VAR: str(target)})
    assert resolved == target
    assert target.is_dir()


def test_rotating_handler_keeps_retention_minus_one_backups(tmp_path):
    handler = logging_utils.build_rotating_file_handler(tmp_path, retention=3)
    try:
        assert isinstance(handler, RotatingFileHandler)
        assert handler.backupCount == 2
        assert handler.baseFilename.endswith(logging_utils.LOG_FILENAME)
    finally:
        handler.close()


def test_configure_logging_replaces_its_own_handler(tmp_path):
    logger = logging.getLogger(logging_utils.LOGGER_NAME)
    original_level = logger.level
    try:
        logging_utils.configure_logging(debug=True, log_dir=tmp_path, env={})
        logging_utils.configure_logging(debug=False, log_dir=tmp_path, env={})
        tagged = [h for h in logger.handlers if getattr(h, "_hud_editor_handler", False)]
        assert len(tagged) == 1
        assert logger.level == logging.INFO

        logging.getLogger("HUDEditor.Config").info("hello from child")
        tagged[0].flush()
        assert "hello from child" in (tmp_path / logging_utils.LOG_FILENAME).read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            if getattr(handler, "_hud_editor_handler", False):
                logger.removeHandler(handler)
                handler.close()
        logger.setLevel(original_level)
