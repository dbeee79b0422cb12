"""Log directory resolution and rotating file handler setup for the editor."""

from __future__ import annotations

import logging
import os
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Mapping, Optional, Tuple

LOGGER_NAME = "HUDEditor"
LOG_DIR_ENV_VAR = "HUD_EDITOR_LOG_DIR"
LOG_LEVEL_ENV_VAR = "HUD_EDITOR_LOG_LEVEL"
LOG_LEVEL_NAME_ENV_VAR = "HUD_EDITOR_LOG_LEVEL_NAME"
LOG_FILENAME = "hud-editor.log"


def resolve_logs_dir(log_dir_name: str = "HUDEditor", env: Optional[Mapping[str, str]] = None) -> Path:
    """
    Resolve the directory to store editor logs.

    Strategy:
    - Use HUD_EDITOR_LOG_DIR if set.
    - Fall back to XDG state/cache locations, then `cwd/logs/<log_dir_name>`.
    - Final fallback: tempdir/<log_dir_name>.
    """
    environ = os.environ if env is None else env
    candidates = []

    env_override = environ.get(LOG_DIR_ENV_VAR)
    if env_override:
        candidates.append(Path(env_override).expanduser())
    else:
        state_home = Path(environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
        cache_home = Path(environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))
        candidates.append(state_home / "hud-editor" / "logs")
        candidates.append(cache_home / "hud-editor" / "logs")
        candidates.append(Path.cwd() / "logs")

    for base in candidates:
        try:
            target = base if env_override else base / log_dir_name
            target.mkdir(parents=True, exist_ok=True)
            return target
        except OSError:
            continue

    temp_fallback = Path(tempfile.gettempdir()) / log_dir_name
    temp_fallback.mkdir(parents=True, exist_ok=True)
    return temp_fallback


def build_rotating_file_handler(
    log_dir: Path,
    filename: str = LOG_FILENAME,
    *,
    retention: int = 5,
    max_bytes: int = 512 * 1024,
    formatter: Optional[logging.Formatter] = None,
) -> logging.Handler:
    """Construct a rotating file handler with sane defaults."""
    retention = max(1, retention)
    backup_count = max(0, retention - 1)
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / filename,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    if formatter is not None:
        handler.setFormatter(formatter)
    return handler


def resolve_log_level_hint(env: Optional[Mapping[str, str]] = None) -> Tuple[Optional[int], Optional[str], str]:
    """Return (level, name, source) from the environment, or (None, None, "default")."""

    environ = os.environ if env is None else env
    raw_value = environ.get(LOG_LEVEL_ENV_VAR)
    raw_name = environ.get(LOG_LEVEL_NAME_ENV_VAR)
    if raw_value is not None:
        try:
            value = int(raw_value)
        except ValueError:
            value = None
        if value is not None:
            name = raw_name.strip().upper() if raw_name else logging.getLevelName(value)
            return value, name, "env"
    if raw_name:
        token = raw_name.strip().upper()
        level = logging.getLevelName(token)
        if isinstance(level, int):
            return level, token, "env"
    return None, None, "default"


def configure_logging(
    *,
    debug: bool = False,
    retention: int = 5,
    log_dir: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> logging.Logger:
    """Attach a rotating file handler to the editor's root logger."""

    logger = logging.getLogger(LOGGER_NAME)
    level, _name, _source = resolve_log_level_hint(env)
    if level is None:
        level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)
    target_dir = log_dir or resolve_logs_dir(env=env)
    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    for handler in list(logger.handlers):
        if getattr(handler, "_hud_editor_handler", False):
            logger.removeHandler(handler)
            handler.close()
    handler = build_rotating_file_handler(target_dir, retention=retention, formatter=formatter)
    handler._hud_editor_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
