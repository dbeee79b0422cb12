"""Editor settings loader."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from hud_config.defaults import DEFAULT_VERSION, VERSIONS
from hud_config.history import DEFAULT_HISTORY_LIMIT
from hud_layout.modules import HUD_SECTION

SETTINGS_FILENAME = "editor_settings.json"
SETTINGS_PATH_ENV_VAR = "HUD_EDITOR_SETTINGS_PATH"
HISTORY_LIMIT_MIN = 1
HISTORY_LIMIT_MAX = 200
LOG_RETENTION_MIN = 1
LOG_RETENTION_MAX = 20


@dataclass(frozen=True)
class EditorSettings:
    default_version: str = DEFAULT_VERSION
    active_section: str = HUD_SECTION
    history_limit: int = DEFAULT_HISTORY_LIMIT
    log_retention: int = 5
    debug: bool = False


def _coerce_bounded_int(value: Any, fallback: int, *, minimum: int, maximum: int) -> int:
    if value is None or isinstance(value, bool):
        return fallback
    try:
        numeric = int(value)
    except (TypeError, ValueError):
        return fallback
    return max(minimum, min(maximum, numeric))


def _coerce_bool(value: Any, fallback: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        token = value.strip().lower()
        if token in {"1", "true", "yes", "on"}:
            return True
        if token in {"0", "false", "no", "off"}:
            return False
    return fallback


def resolve_settings_path(explicit: Optional[str] = None, *, base_dir: Optional[Path] = None) -> Path:
    if explicit:
        return Path(explicit).expanduser().resolve()
    env_override = os.getenv(SETTINGS_PATH_ENV_VAR)
    if env_override:
        return Path(env_override).expanduser().resolve()
    root = base_dir or Path.cwd()
    return (root / SETTINGS_FILENAME).resolve()


def load_settings(path: Path) -> EditorSettings:
    """Read settings JSON, falling back to defaults for missing or invalid values."""

    defaults = EditorSettings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, OSError, json.JSONDecodeError):
        return defaults
    if not isinstance(data, dict):
        return defaults

    version = data.get("default_version")
    if not isinstance(version, str) or version not in VERSIONS:
        version = defaults.default_version
    section = data.get("active_section")
    if not isinstance(section, str) or not section.strip():
        section = defaults.active_section

    return EditorSettings(
        default_version=version,
        active_section=section.strip(),
        history_limit=_coerce_bounded_int(
            data.get("history_limit"),
            defaults.history_limit,
            minimum=HISTORY_LIMIT_MIN,
            maximum=HISTORY_LIMIT_MAX,
        ),
        log_retention=_coerce_bounded_int(
            data.get("log_retention"),
            defaults.log_retention,
            minimum=LOG_RETENTION_MIN,
            maximum=LOG_RETENTION_MAX,
        ),
        debug=_coerce_bool(data.get("debug"), defaults.debug),
    )
