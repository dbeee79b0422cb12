"""Editor version string and the developer-mode switch."""
from __future__ import annotations

import os
from typing import Mapping, Optional

__version__ = "0.3.0"
DEV_MODE_ENV_VAR = "HUD_EDITOR_DEV_MODE"

_ENABLED_TOKENS = frozenset({"1", "true", "yes", "on"})


def dev_mode_forced(env: Optional[Mapping[str, str]] = None) -> bool:
    """True when HUD_EDITOR_DEV_MODE asks for debug logging."""

    environ = os.environ if env is None else env
    return environ.get(DEV_MODE_ENV_VAR, "").strip().lower() in _ENABLED_TOKENS
