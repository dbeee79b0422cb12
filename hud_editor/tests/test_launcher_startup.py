from __future__ import annotations

import json
import logging

import pytest

from hud_config.logging_utils import LOG_DIR_ENV_VAR, LOG_LEVEL_ENV_VAR, LOG_LEVEL_NAME_ENV_VAR, LOGGER_NAME
from hud_editor import launcher
from hud_editor import version as version_module


class _AppStub:
    def __init__(self, argv) -> None:
        self.argv = argv

    def exec(self) -> int:
        return 0


class _WindowStub:
    created: list = []

    def __init__(self, store, *, active_section=None) -> None:
        self.store = store
        self.active_section = active_section
        _WindowStub.created.append(self)

    def resize(self, width: int, height: int) -> None:
        self.size = (width, height)

    def show(self) -> None:
        self.shown = True


@pytest.fixture
def stubbed_launcher(monkeypatch, tmp_path):
    monkeypatch.setenv(LOG_DIR_ENV_VAR, str(tmp_path / "logs"))
    monkeypatch.setattr(launcher, "QApplication", _AppStub)
    monkeypatch.setattr(launcher, "EditorWindow", _WindowStub)
    _WindowStub.created = []
    logger = logging.getLogger(LOGGER_NAME)
    original_level = logger.level
    yield
    for handler in list(logger.handlers):
        if getattr(handler, "_hud_editor_handler", False):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(original_level)


def test_parser_accepts_documented_flags():
    args = launcher.build_parser().parse_args(["--settings", "s.json", "--version", "v5", "--import", "c.json"])
    assert (args.settings, args.version, args.import_path) == ("s.json", "v5", "c.json")


def test_parser_rejects_unknown_version():
    with pytest.raises(SystemExit):
        launcher.build_parser().parse_args(["--version", "v9"])


def test_main_uses_settings_and_imports_startup_file(stubbed_launcher, tmp_path):
    settings = tmp_path / "editor_settings.json"
    settings.write_text(json.dumps({"history_limit": 5, "active_section": "pause_menu@gc.pnl"}), encoding="utf-8")
    startup = tmp_path / "config.json"
    startup.write_text(json.dumps({"namespace": "gc", "pause_menu@gc.pnl": {"$x": 1}}), encoding="utf-8")

    exit_code = launcher.main(["--settings", str(settings), "--version", "v4", "--import", str(startup)])

    assert exit_code == 0
    window = _WindowStub.created[-1]
    assert window.active_section == "pause_menu@gc.pnl"
    assert window.store.version == "v4"
    assert window.store.history.limit == 5
    assert window.store.sections() == ["pause_menu@gc.pnl"]
    assert window.store.can_undo is False
    assert (tmp_path / "logs" / "hud-editor.log").exists()


def test_main_survives_broken_startup_file(stubbed_launcher, tmp_path):
    startup = tmp_path / "broken.json"
    startup.write_text("[", encoding="utf-8")

    exit_code = launcher.main(["--settings", str(tmp_path / "missing.json"), "--import", str(startup)])

    assert exit_code == 0
    assert "mod_menu_config@gc.pnl" in _WindowStub.created[-1].store.sections()


@pytest.mark.parametrize(
    "env_value, expected",
    [("1", True), ("On", True), (" yes ", True), ("off", False), ("0", False), ("", False), (None, False)],
)
def test_dev_mode_switch(env_value, expected):
    env = {} if env_value is None else {version_module.DEV_MODE_ENV_VAR: env_value}
    assert version_module.dev_mode_forced(env) is expected


def test_dev_mode_forces_debug_logging(stubbed_launcher, monkeypatch, tmp_path):
    monkeypatch.setenv(version_module.DEV_MODE_ENV_VAR, "1")
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
    monkeypatch.delenv(LOG_LEVEL_NAME_ENV_VAR, raising=False)

    assert launcher.main(["--settings", str(tmp_path / "missing.json")]) == 0
    assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG
