# rep_annote/widgets/sets_panel.py
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtWidgets import (
    QFrame,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QScrollArea,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from ..domain import RepSet
from ..validation import RepIssue


_INVALID_STYLE = "QLineEdit { border: 1px solid #DC143C; }"


class SetsPanel(QGroupBox):
    """
    Scrollable editor for sets of reps. Holds no data of its own: the owner
    applies the emitted edits to its store and calls set_sets() with the result.

    Field edits keep the widgets in place (so the caret isn't lost); adding or
    removing sets/reps rebuilds the rows.

    Emits:
      - rep_field_edited(set_index, rep_index, field, text)
      - add_rep_requested(set_index)
      - delete_rep_requested(set_index, rep_index)   (only when deletion is enabled)
      - delete_set_requested(set_index)              (only when deletion is enabled)
    """
    rep_field_edited = pyqtSignal(int, int, str, str)
    add_rep_requested = pyqtSignal(int)
    delete_rep_requested = pyqtSignal(int, int)
    delete_set_requested = pyqtSignal(int)

    def __init__(self, allow_delete: bool = False, parent: Optional[QWidget] = None):
        super().__init__("Sets", parent)
        self._allow_delete = bool(allow_delete)
        self._shape: Tuple[int, ...] = ()
        # (set_index, rep_index, field) -> line edit
        self._edits: Dict[Tuple[int, int, str], QLineEdit] = {}
        self._build_ui()

    # ---------------- UI ----------------

    def _build_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)

        self.scroll = QScrollArea()
        self.scroll.setWidgetResizable(True)
        self.scroll.setFrameShape(QFrame.NoFrame)
        layout.addWidget(self.scroll, stretch=1)

        self._host = QWidget()
        self._rows = QVBoxLayout(self._host)
        self._rows.setContentsMargins(0, 0, 0, 0)
        self._rows.setSpacing(8)
        self._rows.addStretch()
        self.scroll.setWidget(self._host)

    # ---------------- Public API ----------------

    def set_sets(self, sets: Sequence[RepSet]) -> None:
        shape = tuple(len(s) for s in sets)
        if shape != self._shape:
            self._rebuild(sets)
            return
        for si, s in enumerate(sets):
            for ri, rep in enumerate(s):
                for name in ("start", "end"):
                    edit = self._edits.get((si, ri, name))
                    value = getattr(rep, name)
                    if edit is not None and edit.text() != value:
                        edit.blockSignals(True)
                        edit.setText(value)
                        edit.blockSignals(False)

    def show_issues(self, issues: List[RepIssue]) -> None:
        self.clear_issues()
        for issue in issues:
            edit = self._edits.get((issue.set_index, issue.rep_index, issue.field))
            if edit is None:
                continue
            edit.setStyleSheet(_INVALID_STYLE)
            edit.setToolTip(issue.message)

    def clear_issues(self) -> None:
        for edit in self._edits.values():
            edit.setStyleSheet("")
            edit.setToolTip("")

    # ---------------- Internals ----------------

    def _clear_rows(self) -> None:
        # keep the trailing stretch
        while self._rows.count() > 1:
            item = self._rows.takeAt(0)
            w = item.widget()
            if w is not None:
                w.deleteLater()
        self._edits.clear()

    def _rebuild(self, sets: Sequence[RepSet]) -> None:
        self._clear_rows()
        self._shape = tuple(len(s) for s in sets)
        for si, s in enumerate(sets):
            self._rows.insertWidget(self._rows.count() - 1, self._set_box(si, s))

    def _set_box(self, set_index: int, reps: RepSet) -> QWidget:
        box = QFrame()
        box.setFrameShape(QFrame.StyledPanel)
        lay = QVBoxLayout(box)
        lay.setContentsMargins(6, 6, 6, 6)
        lay.setSpacing(4)

        header = QHBoxLayout()
        header.addWidget(QLabel(f"<b>Set {set_index + 1}</b>"))
        header.addStretch()
        if self._allow_delete:
            btn = QToolButton()
            btn.setText("Delete Set")
            btn.setCursor(Qt.PointingHandCursor)
            btn.clicked.connect(lambda _=False, si=set_index: self.delete_set_requested.emit(si))
            header.addWidget(btn)
        lay.addLayout(header)

        for ri, rep in enumerate(reps):
            lay.addLayout(self._rep_row(set_index, ri, rep.start, rep.end))

        btn_add = QPushButton("Add Rep")
        btn_add.setCursor(Qt.PointingHandCursor)
        btn_add.clicked.connect(lambda _=False, si=set_index: self.add_rep_requested.emit(si))
        lay.addWidget(btn_add, alignment=Qt.AlignLeft)
        return box

    def _rep_row(self, set_index: int, rep_index: int, start: str, end: str) -> QHBoxLayout:
        row = QHBoxLayout()
        row.setSpacing(4)
        for name, value, title in (("start", start, "Start"), ("end", end, "End")):
            row.addWidget(QLabel(f"Rep {rep_index + 1} {title}:"))
            edit = QLineEdit(value)
            edit.setPlaceholderText("minute:second")
            edit.setCursor(Qt.IBeamCursor)
            edit.textEdited.connect(
                lambda text, si=set_index, ri=rep_index, f=name: self._on_text_edited(si, ri, f, text)
            )
            self._edits[(set_index, rep_index, name)] = edit
            row.addWidget(edit, stretch=1)

        if self._allow_delete:
            btn = QToolButton()
            btn.setText("✕")
            btn.setToolTip("Delete rep")
            btn.setCursor(Qt.PointingHandCursor)
            btn.clicked.connect(
                lambda _=False, si=set_index, ri=rep_index: self.delete_rep_requested.emit(si, ri)
            )
            row.addWidget(btn)
        return row

    def _on_text_edited(self, set_index: int, rep_index: int, field: str, text: str) -> None:
        edit = self._edits.get((set_index, rep_index, field))
        if edit is not None:
            edit.setStyleSheet("")
            edit.setToolTip("")
        self.rep_field_edited.emit(set_index, rep_index, field, text)
