"""Raw JSON view of the live document."""
from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtGui import QFont, QFontDatabase
from PyQt6.QtWidgets import QPlainTextEdit, QWidget

from hud_config.document import Document, DocumentImportError
from hud_config.exchange import parse, serialize
from hud_config.store import DocumentStore

_UI_LOGGER = logging.getLogger("HUDEditor.UI")


class RawEditorWidget(QPlainTextEdit):
    """Pretty-printed JSON that writes valid edits back as silent replacements.

    Typing is folded into one history step that is recorded when the editor
    loses focus or when the next tracked edit lands.
    """

    def __init__(self, store: DocumentStore, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._store = store
        self._applying = False
        font = QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont)
        font.setStyleHint(QFont.StyleHint.Monospace)
        self.setFont(font)
        self.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        self.setPlainText(serialize(store.document))
        self.textChanged.connect(self._handle_text_changed)
        store.add_listener(self._handle_document_changed)

    def _handle_text_changed(self) -> None:
        if self._applying:
            return
        try:
            document = parse(self.toPlainText())
        except DocumentImportError as exc:
            _UI_LOGGER.debug("Raw editor text not applied: %s", exc)
            return
        self._applying = True
        try:
            self._store.replace_silent(document)
        finally:
            self._applying = False

    def _handle_document_changed(self, document: Document) -> None:
        if self._applying:
            return
        text = serialize(document)
        if text == self.toPlainText():
            return
        self._applying = True
        try:
            self.setPlainText(text)
        finally:
            self._applying = False

    def focusOutEvent(self, event) -> None:  # type: ignore[override]
        self._store.checkpoint()
        super().focusOutEvent(event)
