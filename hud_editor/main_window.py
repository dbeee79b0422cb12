"""Top-level editor window wiring the store to the form, canvas and code views."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QGuiApplication, QKeySequence
from PyQt6.QtWidgets import (
    QComboBox,
    QFileDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSplitter,
    QTabWidget,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from hud_config.classifier import ConfigClassifier
from hud_config.defaults import VERSIONS
from hud_config.document import Document, DocumentImportError
from hud_config.presentation import section_label
from hud_config.store import DocumentStore
from hud_layout.drag import DragController
from hud_layout.modules import HUD_SECTION, HUDModule, derive_hud_modules
from hud_layout.snap import SnapEngine

from hud_editor.canvas import HudCanvasWidget
from hud_editor.form import ConfigFormWidget
from hud_editor.raw_editor import RawEditorWidget
from hud_editor.version import __version__

_UI_LOGGER = logging.getLogger("HUDEditor.UI")

INVALID_IMPORT_MESSAGE = "Invalid JSON file provided."
EXPORT_FILENAME = "config.json"


class EditorWindow(QMainWindow):
    """Main window: section form on the left, visual/code tabs on the right."""

    def __init__(
        self,
        store: DocumentStore,
        *,
        active_section: Optional[str] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._syncing = False
        self.setWindowTitle(f"HUD Config Editor {__version__}")

        sections = store.sections()
        if active_section not in sections:
            active_section = sections[0] if sections else HUD_SECTION

        self.drag = DragController(store, self.hud_modules)
        self.snap = SnapEngine(store, self.hud_modules)
        self.form = ConfigFormWidget(store, active_section, classifier=ConfigClassifier())
        self.canvas = HudCanvasWidget(store, self.drag, self.snap, self.hud_modules)
        self.raw_editor = RawEditorWidget(store)

        self._build_toolbar()
        self._build_central()
        store.add_listener(self._handle_document_changed)
        self._sync_controls()

    # Layout --------------------------------------------------------------
    def _build_toolbar(self) -> None:
        toolbar = QToolBar("Editor", self)
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        self.version_combo = QComboBox(toolbar)
        self.version_combo.addItems(list(VERSIONS))
        self.version_combo.setCurrentText(self._store.version)
        self.version_combo.currentTextChanged.connect(self.load_version)
        toolbar.addWidget(QLabel(" Version ", toolbar))
        toolbar.addWidget(self.version_combo)

        self.section_combo = QComboBox(toolbar)
        self.section_combo.currentIndexChanged.connect(self._handle_section_selected)
        toolbar.addWidget(QLabel(" Section ", toolbar))
        toolbar.addWidget(self.section_combo)
        toolbar.addSeparator()

        self.undo_action = QAction("Undo", self)
        self.undo_action.setShortcut(QKeySequence("Ctrl+Z"))
        self.undo_action.triggered.connect(self._store.undo)
        self.redo_action = QAction("Redo", self)
        self.redo_action.setShortcut(QKeySequence("Ctrl+Y"))
        self.redo_action.triggered.connect(self._store.redo)
        self.reset_action = QAction("Reset", self)
        self.reset_action.triggered.connect(self.reset_active_section)
        self.import_action = QAction("Import", self)
        self.import_action.triggered.connect(self._prompt_import)
        self.export_action = QAction("Export", self)
        self.export_action.triggered.connect(self._prompt_export)
        for action in (
            self.undo_action,
            self.redo_action,
            self.reset_action,
            self.import_action,
            self.export_action,
        ):
            toolbar.addAction(action)

    def _build_central(self) -> None:
        splitter = QSplitter(Qt.Orientation.Horizontal, self)
        splitter.addWidget(self.form)

        self.tabs = QTabWidget(splitter)
        self.tabs.addTab(self.canvas, "Visual")
        code_page = QWidget(self.tabs)
        code_layout = QVBoxLayout(code_page)
        code_layout.addWidget(self.raw_editor, 1)
        self.copy_button = QPushButton("Copy", code_page)
        self.copy_button.clicked.connect(self.copy_to_clipboard)
        code_layout.addWidget(self.copy_button, 0, Qt.AlignmentFlag.AlignRight)
        self.tabs.addTab(code_page, "Code")
        splitter.addWidget(self.tabs)
        splitter.setStretchFactor(0, 2)
        splitter.setStretchFactor(1, 3)
        self.setCentralWidget(splitter)

    # Derived state -------------------------------------------------------
    def hud_modules(self) -> List[HUDModule]:
        return derive_hud_modules(self._store.section(HUD_SECTION))

    @property
    def active_section(self) -> str:
        return self.form.section

    def _handle_document_changed(self, _document: Document) -> None:
        self._sync_controls()

    def _sync_controls(self) -> None:
        self.undo_action.setEnabled(self._store.can_undo)
        self.redo_action.setEnabled(self._store.can_redo)
        sections = self._store.sections()
        current = [self.section_combo.itemData(index) for index in range(self.section_combo.count())]
        if current == sections:
            return
        self._syncing = True
        try:
            self.section_combo.clear()
            for name in sections:
                self.section_combo.addItem(section_label(name), name)
            if self.active_section in sections:
                self.section_combo.setCurrentIndex(sections.index(self.active_section))
            elif sections:
                self.form.set_section(sections[0])
        finally:
            self._syncing = False

    def _handle_section_selected(self, index: int) -> None:
        if self._syncing or index < 0:
            return
        name = self.section_combo.itemData(index)
        if isinstance(name, str):
            self.set_active_section(name)

    # Actions -------------------------------------------------------------
    def set_active_section(self, name: str) -> None:
        self.form.set_section(name)
        sections = self._store.sections()
        if name in sections and self.section_combo.currentIndex() != sections.index(name):
            self._syncing = True
            try:
                self.section_combo.setCurrentIndex(sections.index(name))
            finally:
                self._syncing = False

    def load_version(self, version: str) -> None:
        if version not in VERSIONS:
            return
        self.drag.release()
        self.drag.clear_selection()
        self._store.load_version(version)
        sections = self._store.sections()
        if sections:
            self.set_active_section(sections[0])
        if self.version_combo.currentText() != version:
            self.version_combo.blockSignals(True)
            self.version_combo.setCurrentText(version)
            self.version_combo.blockSignals(False)

    def reset_active_section(self) -> bool:
        return self._store.reset_section(self.active_section)

    def import_file(self, path: Path) -> bool:
        """Import ``path``; on invalid content warn and leave the document untouched."""

        try:
            text = Path(path).read_text(encoding="utf-8")
            self._store.import_text(text)
        except (OSError, UnicodeDecodeError, DocumentImportError) as exc:
            _UI_LOGGER.warning("Import of %s rejected: %s", path, exc)
            QMessageBox.warning(self, "Import", INVALID_IMPORT_MESSAGE)
            return False
        return True

    def export_file(self, path: Path) -> Path:
        return self._store.export_to(Path(path))

    def copy_to_clipboard(self) -> str:
        text = self._store.export_text()
        clipboard = QGuiApplication.clipboard()
        if clipboard is not None:
            clipboard.setText(text)
        self.statusBar().showMessage("Copied JSON to clipboard", 2000)
        return text

    def _prompt_import(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Import Config", "", "JSON (*.json);;All files (*)")
        if path:
            self.import_file(Path(path))

    def _prompt_export(self) -> None:
        path, _ = QFileDialog.getSaveFileName(self, "Export Config", EXPORT_FILENAME, "JSON (*.json)")
        if not path:
            return
        try:
            self.export_file(Path(path))
        except OSError as exc:
            QMessageBox.critical(self, "Export failed", str(exc))
            return
        self.statusBar().showMessage(f"Exported config: {path}", 4000)
