"""Grouped form view of one document section."""
from __future__ import annotations

import json
import logging
from typing import Callable, Dict, List, Optional, Set, Tuple

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QCheckBox,
    QDoubleSpinBox,
    QFormLayout,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QScrollArea,
    QSlider,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from hud_config.classifier import Classification, ConfigClassifier, ConfigGroup
from hud_config.document import Document
from hud_config.presentation import (
    control_kind,
    field_label,
    filter_classification,
    group_enabled,
    group_label,
    pair_axis_labels,
)
from hud_config.store import DocumentStore

_UI_LOGGER = logging.getLogger("HUDEditor.UI")

_SPIN_LIMIT = 1_000_000.0
DISABLED_GROUP_MESSAGE = "Enable module to customize"

Updater = Callable[[object], None]


def _coerce_like(original: object, value: float) -> object:
    """Keep integers integral when the edited value has no fractional part."""

    if isinstance(original, int) and not isinstance(original, bool) and float(value).is_integer():
        return int(value)
    return float(value)


def _decimals_for(value: object) -> int:
    return 0 if isinstance(value, int) and not isinstance(value, bool) else 3


class ConfigFormWidget(QWidget):
    """Renders groups and standalone fields with per-kind controls.

    Controls are rebuilt only when the visible structure changes (groups,
    enabled roots, expansion, search term); value changes are pushed into the
    existing widgets so focus survives while the user types.
    """

    def __init__(
        self,
        store: DocumentStore,
        section: str,
        *,
        classifier: Optional[ConfigClassifier] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._section = section
        self._classifier = classifier or ConfigClassifier()
        self._filter = ""
        self._expanded: Set[str] = set()
        self._updaters: Dict[str, Updater] = {}
        self._structure: Optional[Tuple[object, ...]] = None
        self._rebuilding = False

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self._search = QLineEdit(self)
        self._search.setPlaceholderText("Search settings...")
        self._search.setClearButtonEnabled(True)
        self._search.textChanged.connect(self.set_filter)
        layout.addWidget(self._search)
        self._scroll = QScrollArea(self)
        self._scroll.setWidgetResizable(True)
        self._scroll.setFrameShape(QFrame.Shape.NoFrame)
        layout.addWidget(self._scroll, 1)

        store.add_listener(self._handle_document_changed)
        self.refresh()

    # Public API ----------------------------------------------------------
    @property
    def section(self) -> str:
        return self._section

    def set_section(self, name: str) -> None:
        if name == self._section:
            return
        self._section = name
        self._expanded.clear()
        self.refresh()

    def set_filter(self, term: str) -> None:
        self._filter = term or ""
        self.refresh()

    def set_expanded(self, group_id: str, expanded: bool) -> None:
        if expanded:
            self._expanded.add(group_id)
        else:
            self._expanded.discard(group_id)
        self.refresh()

    def is_expanded(self, group_id: str) -> bool:
        return group_id in self._expanded

    def field_keys(self) -> List[str]:
        return list(self._updaters)

    def classification(self) -> Classification:
        result = self._classifier.classify(self._store.section(self._section))
        return filter_classification(result, self._filter)

    def refresh(self) -> None:
        section = self._store.section(self._section)
        result = self.classification()
        structure = (
            self._section,
            self._filter,
            tuple((group.id, group.children, group_enabled(section, group)) for group in result.groups.values()),
            result.standalones,
            tuple(sorted(self._expanded)),
        )
        if structure != self._structure:
            self._rebuild(section, result)
            self._structure = structure
            return
        for key, updater in self._updaters.items():
            if key in section:
                updater(section[key])

    # Building ------------------------------------------------------------
    def _handle_document_changed(self, _document: Document) -> None:
        if not self._rebuilding:
            self.refresh()

    def _rebuild(self, section: Dict[str, object], result: Classification) -> None:
        self._rebuilding = True
        try:
            previous = self._scroll.takeWidget()
            if previous is not None:
                previous.deleteLater()
            self._updaters = {}
            content = QWidget()
            layout = QVBoxLayout(content)
            layout.setAlignment(Qt.AlignmentFlag.AlignTop)
            for group in result.groups.values():
                layout.addWidget(self._build_group(section, group))
            if result.standalones:
                standalone_box = QFrame(content)
                standalone_box.setFrameShape(QFrame.Shape.StyledPanel)
                form = QFormLayout(standalone_box)
                for key in result.standalones:
                    form.addRow(field_label(key), self._build_control(key, section.get(key)))
                layout.addWidget(standalone_box)
            if not result.groups and not result.standalones:
                layout.addWidget(QLabel("No settings match the current search.", content))
            self._scroll.setWidget(content)
        finally:
            self._rebuilding = False
        _UI_LOGGER.debug(
            "Form rebuilt for %s: groups=%d standalones=%d",
            self._section,
            len(result.groups),
            len(result.standalones),
        )

    def _build_group(self, section: Dict[str, object], group: ConfigGroup) -> QWidget:
        frame = QFrame()
        frame.setFrameShape(QFrame.Shape.StyledPanel)
        outer = QVBoxLayout(frame)
        header = QHBoxLayout()
        if group.root:
            toggle = QCheckBox(group_label(group.id), frame)
            toggle.setChecked(section.get(group.root) is True)
            toggle.toggled.connect(lambda checked, key=group.root: self._write(key, bool(checked)))
            self._updaters[group.root] = lambda value, box=toggle: self._set_checked(box, value)
            header.addWidget(toggle)
        else:
            header.addWidget(QLabel(group_label(group.id), frame))
        header.addStretch(1)
        expanded = group.id in self._expanded
        button = QToolButton(frame)
        button.setText(f"{len(group.children)} Parameters")
        button.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextBesideIcon)
        button.setArrowType(Qt.ArrowType.DownArrow if expanded else Qt.ArrowType.RightArrow)
        button.clicked.connect(lambda _checked=False, gid=group.id: self.set_expanded(gid, gid not in self._expanded))
        header.addWidget(button)
        outer.addLayout(header)
        if not expanded:
            return frame
        if not group_enabled(section, group):
            outer.addWidget(QLabel(DISABLED_GROUP_MESSAGE, frame))
            return frame
        form = QFormLayout()
        for key in group.children:
            form.addRow(field_label(key), self._build_control(key, section.get(key)))
        outer.addLayout(form)
        return frame

    def _build_control(self, key: str, value: object) -> QWidget:
        kind = control_kind(key, value)
        if kind == "toggle":
            return self._build_toggle(key, value)
        if kind == "pair":
            return self._build_pair(key, value)
        if kind == "slider":
            return self._build_slider(key, value)
        if kind == "number":
            return self._build_number(key, value)
        if kind == "text":
            return self._build_text(key, value)
        label = QLabel(json.dumps(value, ensure_ascii=False))
        label.setEnabled(False)
        label.setToolTip("Unsupported value; edit it in the code view.")
        return label

    def _build_toggle(self, key: str, value: object) -> QWidget:
        box = QCheckBox()
        box.setChecked(value is True)
        box.toggled.connect(lambda checked: self._write(key, bool(checked)))
        self._updaters[key] = lambda new, target=box: self._set_checked(target, new)
        return box

    def _build_pair(self, key: str, value: object) -> QWidget:
        container = QWidget()
        row = QHBoxLayout(container)
        row.setContentsMargins(0, 0, 0, 0)
        spins: List[QDoubleSpinBox] = []
        pair = list(value) if isinstance(value, list) else [0, 0]
        for axis, component in zip(pair_axis_labels(key), pair):
            spin = QDoubleSpinBox(container)
            spin.setRange(-_SPIN_LIMIT, _SPIN_LIMIT)
            spin.setDecimals(_decimals_for(component))
            spin.setPrefix(f"{axis} ")
            spin.setValue(float(component))
            row.addWidget(spin)
            spins.append(spin)

        def _commit() -> None:
            current = self._store.section(self._section).get(key)
            original = current if isinstance(current, list) and len(current) == 2 else pair
            updated = [_coerce_like(original[index], spin.value()) for index, spin in enumerate(spins)]
            if updated != original:
                self._write(key, updated)

        def _update(new: object) -> None:
            if not isinstance(new, list) or len(new) != 2:
                return
            for spin, component in zip(spins, new):
                if spin.hasFocus():
                    continue
                spin.blockSignals(True)
                spin.setValue(float(component))
                spin.blockSignals(False)

        for spin in spins:
            spin.editingFinished.connect(_commit)
        self._updaters[key] = _update
        return container

    def _build_slider(self, key: str, value: object) -> QWidget:
        container = QWidget()
        row = QHBoxLayout(container)
        row.setContentsMargins(0, 0, 0, 0)
        slider = QSlider(Qt.Orientation.Horizontal, container)
        slider.setRange(0, 100)
        slider.setValue(int(round(float(value) * 100)))
        readout = QLabel(f"{float(value):.2f}", container)
        row.addWidget(slider, 1)
        row.addWidget(readout)

        def _changed(position: int) -> None:
            fraction = position / 100
            readout.setText(f"{fraction:.2f}")
            if slider.isSliderDown():
                self._store.apply_silent([self._section, key], fraction)
            else:
                self._write(key, fraction)

        def _update(new: object) -> None:
            if isinstance(new, bool) or not isinstance(new, (int, float)):
                return
            slider.blockSignals(True)
            slider.setValue(int(round(float(new) * 100)))
            slider.blockSignals(False)
            readout.setText(f"{float(new):.2f}")

        slider.valueChanged.connect(_changed)
        slider.sliderReleased.connect(self._store.checkpoint)
        self._updaters[key] = _update
        return container

    def _build_number(self, key: str, value: object) -> QWidget:
        spin = QDoubleSpinBox()
        spin.setRange(-_SPIN_LIMIT, _SPIN_LIMIT)
        spin.setDecimals(_decimals_for(value))
        spin.setValue(float(value))

        def _commit() -> None:
            current = self._store.section(self._section).get(key, value)
            updated = _coerce_like(current, spin.value())
            if updated != current:
                self._write(key, updated)

        def _update(new: object) -> None:
            if spin.hasFocus() or isinstance(new, bool) or not isinstance(new, (int, float)):
                return
            spin.blockSignals(True)
            spin.setValue(float(new))
            spin.blockSignals(False)

        spin.editingFinished.connect(_commit)
        self._updaters[key] = _update
        return spin

    def _build_text(self, key: str, value: object) -> QWidget:
        edit = QLineEdit(str(value))

        def _commit() -> None:
            if edit.text() != self._store.section(self._section).get(key):
                self._write(key, edit.text())

        def _update(new: object) -> None:
            if edit.hasFocus() or not isinstance(new, str) or new == edit.text():
                return
            edit.blockSignals(True)
            edit.setText(new)
            edit.blockSignals(False)

        edit.editingFinished.connect(_commit)
        self._updaters[key] = _update
        return edit

    # Helpers -------------------------------------------------------------
    @staticmethod
    def _set_checked(box: QCheckBox, value: object) -> None:
        if box.isChecked() == (value is True):
            return
        box.blockSignals(True)
        box.setChecked(value is True)
        box.blockSignals(False)

    def _write(self, key: str, value: object) -> None:
        if self._rebuilding:
            return
        self._store.apply_tracked([self._section, key], value)
