"""Command-line entry point for the HUD config editor."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from PyQt6.QtWidgets import QApplication

from hud_config.defaults import VERSIONS
from hud_config.document import DocumentImportError
from hud_config.exchange import read_document
from hud_config.logging_utils import LOGGER_NAME, configure_logging, resolve_log_level_hint
from hud_config.settings import load_settings, resolve_settings_path
from hud_config.store import DocumentStore
from hud_editor.main_window import EditorWindow
from hud_editor.version import DEV_MODE_ENV_VAR, __version__, dev_mode_forced

_EDITOR_LOGGER = logging.getLogger(LOGGER_NAME)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="HUD config editor")
    parser.add_argument("--settings", help="Path to editor_settings.json")
    parser.add_argument("--version", choices=VERSIONS, help="Config version to start from")
    parser.add_argument("--import", dest="import_path", help="JSON document to open on startup")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings_path = resolve_settings_path(args.settings)
    settings = load_settings(settings_path)
    debug = settings.debug or dev_mode_forced()
    configure_logging(debug=debug, retention=settings.log_retention)
    level, level_name, level_source = resolve_log_level_hint()
    if level is not None:
        _EDITOR_LOGGER.debug("Log level %s (%s) taken from %s", level_name, level, level_source)
    if debug and not settings.debug:
        _EDITOR_LOGGER.debug("Debug logging forced by %s", DEV_MODE_ENV_VAR)

    version = args.version or settings.default_version
    _EDITOR_LOGGER.info("Starting HUD editor %s (pid=%s)", __version__, os.getpid())
    _EDITOR_LOGGER.debug(
        "Loaded settings from %s: version=%s section=%s history_limit=%d retention=%d",
        settings_path,
        version,
        settings.active_section,
        settings.history_limit,
        settings.log_retention,
    )

    store = DocumentStore(version=version, history_limit=settings.history_limit)
    if args.import_path:
        import_path = Path(args.import_path).expanduser()
        try:
            store.load_document(read_document(import_path))
        except (OSError, DocumentImportError) as exc:
            _EDITOR_LOGGER.warning("Startup import of %s failed: %s", import_path, exc)

    app = QApplication(sys.argv[:1])
    window = EditorWindow(store, active_section=settings.active_section)
    window.resize(1280, 800)
    window.show()

    exit_code = app.exec()
    _EDITOR_LOGGER.info("HUD editor exiting with code %s", exit_code)
    return int(exit_code)


if __name__ == "__main__":
    sys.exit(main())
