"""Single-writer document store with tracked and silent update paths."""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from hud_config.defaults import DEFAULT_VERSION, default_document
from hud_config.document import Document, find_unsupported, section_names, set_path
from hud_config.exchange import parse, serialize, write_document
from hud_config.history import DEFAULT_HISTORY_LIMIT, HistoryManager

_LOGGER = logging.getLogger("HUDEditor.Config")

Update = Tuple[Sequence[str], object]
Listener = Callable[[Document], None]


class DocumentStore:
    """Owns the live document, its history, and change notification.

    Every mutation goes through this object. Views treat ``document`` as
    read-only and re-derive their state from change notifications.
    """

    def __init__(
        self,
        document: Optional[Mapping[str, Any]] = None,
        *,
        version: str = DEFAULT_VERSION,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> None:
        initial = document if document is not None else default_document(version)
        self._version = version
        self._history = HistoryManager(initial, limit=history_limit)
        self._listeners: List[Listener] = []

    @property
    def document(self) -> Document:
        return self._history.current

    @property
    def history(self) -> HistoryManager:
        return self._history

    @property
    def version(self) -> str:
        return self._version

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo()

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo()

    def sections(self) -> List[str]:
        return section_names(self.document)

    def section(self, name: str) -> Dict[str, Any]:
        value = self.document.get(name)
        return value if isinstance(value, dict) else {}

    # Listeners -----------------------------------------------------------
    def add_listener(self, callback: Listener) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        try:
            self._listeners.remove(callback)
        except ValueError:
            pass

    def _notify(self) -> None:
        document = self.document
        for callback in list(self._listeners):
            try:
                callback(document)
            except Exception:
                _LOGGER.exception("Document listener %r failed", callback)

    # Updates -------------------------------------------------------------
    def _with_updates(self, updates: Sequence[Update]) -> Document:
        draft = copy.deepcopy(self.document)
        for path, value in updates:
            set_path(draft, list(path), value)
        return draft

    def apply_tracked(self, path: Sequence[str], value: object) -> None:
        self.apply_tracked_many([(path, value)])

    def apply_tracked_many(self, updates: Sequence[Update]) -> None:
        """Apply several updates as a single undo step."""

        if not updates:
            return
        draft = self._with_updates(updates)
        self._history.commit(draft)
        _LOGGER.debug("Tracked update: %s", ", ".join("/".join(path) for path, _value in updates))
        self._notify()

    def apply_silent(self, path: Sequence[str], value: object) -> None:
        """Apply an update that is folded into the next history checkpoint."""

        draft = self._with_updates([(path, value)])
        self._history.silent_commit(draft)
        self._notify()

    def checkpoint(self) -> bool:
        recorded = self._history.checkpoint()
        if recorded:
            _LOGGER.debug("Silent updates recorded as one history step")
            self._notify()
        return recorded

    def replace(self, document: Mapping[str, Any]) -> None:
        self._history.commit(document)
        self._notify()

    def replace_silent(self, document: Mapping[str, Any]) -> None:
        self._history.silent_commit(document)
        self._notify()

    def undo(self) -> bool:
        if not self._history.undo():
            return False
        _LOGGER.debug("Undo applied; past=%d future=%d", len(self._history.past), len(self._history.future))
        self._notify()
        return True

    def redo(self) -> bool:
        if not self._history.redo():
            return False
        _LOGGER.debug("Redo applied; past=%d future=%d", len(self._history.past), len(self._history.future))
        self._notify()
        return True

    # Import / export -----------------------------------------------------
    def import_text(self, text: str) -> Document:
        """Replace the document with parsed text as one recorded commit.

        Raises ``DocumentImportError`` and leaves everything untouched when the
        text is not a JSON object.
        """

        document = parse(text)
        flagged = find_unsupported(document)
        if flagged:
            _LOGGER.warning("Imported document has unsupported values at: %s", ", ".join(flagged))
        self.replace(document)
        _LOGGER.info("Imported document with %d section(s)", len(section_names(document)))
        return self.document

    def export_text(self) -> str:
        return serialize(self.document)

    def export_to(self, path: Path) -> Path:
        write_document(path, self.document)
        _LOGGER.info("Exported document to %s", path)
        return path

    # Defaults / versions -------------------------------------------------
    def reset_section(self, name: str, defaults: Optional[Mapping[str, Any]] = None) -> bool:
        source = defaults if defaults is not None else default_document(self._version)
        default_section = source.get(name)
        if not isinstance(default_section, Mapping):
            return False
        self.apply_tracked([name], copy.deepcopy(dict(default_section)))
        _LOGGER.info("Reset section %s to defaults", name)
        return True

    def load_version(self, version: str) -> None:
        document = default_document(version)
        self._version = version
        self._history.reset(document)
        _LOGGER.info("Loaded default document for %s", version)
        self._notify()

    def load_document(self, document: Mapping[str, Any]) -> None:
        """Start over from ``document`` with empty history (used for startup files)."""

        self._history.reset(document)
        _LOGGER.info("Loaded document with %d section(s)", len(section_names(self.document)))
        self._notify()
