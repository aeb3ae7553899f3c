# rep_annote/screens/editor.py
from __future__ import annotations

import logging
from typing import Optional

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QComboBox,
    QFileDialog,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from ..domain import EditorConfig, ExportDocument, InvalidIntervalError, Session
from ..export import encode_session, log_export, save_export
from ..playback import PlaybackScheduler, PlaybackState
from ..store import SessionStore
from ..timeutils import format_timestamp
from ..validation import INVALID_INTERVAL_MESSAGE, rep_issues
from ..widgets.sets_panel import SetsPanel
from ..widgets.youtube_player import YouTubePlayerView

logger = logging.getLogger(__name__)


class ExerciseEditorScreen(QWidget):
    """
    Left: YouTube URL + embedded player. Right: exercise type, sets, actions.

    Both screens share this class; they differ only in whether sets/reps can
    be deleted and whether "Play Clips" is offered. Each screen owns its own
    SessionStore, so edits on one screen never show up on the other.
    """

    title = "Exercise Editor"

    def __init__(
        self,
        allow_delete: bool = False,
        allow_playback: bool = False,
        config: Optional[EditorConfig] = None,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self.config = config or EditorConfig()
        self.store = SessionStore(Session(exercise_type=self.config.default_exercise_type))
        self._allow_delete = bool(allow_delete)
        self._allow_playback = bool(allow_playback)

        self.scheduler: Optional[PlaybackScheduler] = None

        self._build_ui()

        if self._allow_playback:
            self.scheduler = PlaybackScheduler(
                player=self.player,
                poll_interval_ms=self.config.poll_interval_ms,
                parent=self,
            )
            self.scheduler.state_changed.connect(self._on_playback_state)
            self.scheduler.rep_started.connect(self._on_rep_started)
            self.scheduler.failed.connect(self._on_playback_failed)

        self.store.subscribe(self._on_session_changed)
        self._on_session_changed(self.store.session)
        self._update_action_states()

    # ---------------- UI ----------------

    def _build_ui(self):
        outer = QHBoxLayout(self)
        outer.setContentsMargins(6, 6, 6, 6)

        split = QSplitter(Qt.Horizontal)
        outer.addWidget(split)

        # ===== Left: URL + player =====
        left = QWidget()
        left_lay = QVBoxLayout(left)
        left_lay.setContentsMargins(0, 0, 0, 0)
        left_lay.setSpacing(4)

        self.url_input = QLineEdit()
        self.url_input.setPlaceholderText("https://www.youtube.com/watch?v=...")
        self.url_input.textEdited.connect(self._on_url_edited)
        left_lay.addWidget(QLabel("YouTube URL"))
        left_lay.addWidget(self.url_input)

        self.url_error = QLabel("")
        self.url_error.setStyleSheet("color: #DC143C;")
        left_lay.addWidget(self.url_error)

        self.player = YouTubePlayerView()
        self.player.ready_changed.connect(lambda _ready: self._update_action_states())
        left_lay.addWidget(self.player, stretch=1)
        split.addWidget(left)

        # ===== Right: type + sets + actions =====
        right = QWidget()
        right_lay = QVBoxLayout(right)
        right_lay.setContentsMargins(0, 0, 0, 0)
        right_lay.setSpacing(6)

        type_box = QGroupBox("Exercise")
        type_form = QFormLayout(type_box)
        self.type_combo = QComboBox()
        for t in self.config.exercise_types:
            self.type_combo.addItem(t.value, t)
        for i in range(self.type_combo.count()):
            if self.type_combo.itemData(i) == self.config.default_exercise_type:
                self.type_combo.setCurrentIndex(i)
                break
        self.type_combo.currentIndexChanged.connect(self._on_type_changed)
        type_form.addRow("Exercise Type:", self.type_combo)
        right_lay.addWidget(type_box)

        self.sets_panel = SetsPanel(allow_delete=self._allow_delete)
        self.sets_panel.rep_field_edited.connect(self.store.set_rep_field)
        self.sets_panel.add_rep_requested.connect(self.store.add_rep)
        self.sets_panel.delete_rep_requested.connect(self.store.delete_rep)
        self.sets_panel.delete_set_requested.connect(self.store.delete_set)
        right_lay.addWidget(self.sets_panel, stretch=1)

        actions = QHBoxLayout()
        self.btn_add_set = QPushButton("Add Set")
        self.btn_add_set.clicked.connect(lambda: self.store.add_set())
        actions.addWidget(self.btn_add_set)

        self.btn_play = QPushButton("Play Clips")
        self.btn_play.clicked.connect(lambda: self.play_clips())
        self.btn_play.setVisible(self._allow_playback)
        actions.addWidget(self.btn_play)

        actions.addStretch()

        self.btn_download = QPushButton("Download JSON")
        self.btn_download.clicked.connect(lambda: self.download_json())
        actions.addWidget(self.btn_download)

        self.btn_log = QPushButton("Console Log")
        self.btn_log.clicked.connect(lambda: self.submit())
        actions.addWidget(self.btn_log)
        right_lay.addLayout(actions)

        self.status = QLabel("")
        right_lay.addWidget(self.status)

        for b in (self.btn_add_set, self.btn_play, self.btn_download, self.btn_log):
            b.setCursor(Qt.PointingHandCursor)

        split.addWidget(right)
        split.setStretchFactor(0, 1)
        split.setStretchFactor(1, 1)

    # ---------------- Store -> UI ----------------

    def _on_session_changed(self, session: Session) -> None:
        self.sets_panel.set_sets(session.sets)

    def _update_action_states(self) -> None:
        self.btn_play.setEnabled(self._allow_playback and self.player.is_ready())

    # ---------------- Header edits ----------------

    def _on_url_edited(self, text: str) -> None:
        # Stop before the player page is replaced underneath a running sequence.
        if self.scheduler is not None:
            self.scheduler.stop()
        video_id = self.store.set_youtube_url(text)
        self.url_error.setText(self.store.session.url_error)
        self.player.load_video(video_id)
        self._update_action_states()

    def _on_type_changed(self, index: int) -> None:
        t = self.type_combo.itemData(index)
        if t is not None:
            self.store.set_exercise_type(t)

    # ---------------- Actions ----------------

    def submit(self) -> Optional[ExportDocument]:
        """
        Validate + encode the session and mirror it to the log.
        Returns None (after telling the user) if any rep is invalid.
        """
        try:
            doc = encode_session(self.store.session)
        except InvalidIntervalError:
            self.sets_panel.show_issues(rep_issues(self.store.session))
            QMessageBox.warning(self, "Invalid timestamps", INVALID_INTERVAL_MESSAGE)
            return None
        self.sets_panel.clear_issues()
        log_export(doc)
        return doc

    def download_json(self) -> None:
        doc = self.submit()
        if doc is None:
            return
        path, _ = QFileDialog.getSaveFileName(
            self, "Save Exercise Data", self.config.export_filename, "JSON Files (*.json)"
        )
        if not path:
            return
        try:
            save_export(path, doc)
        except (OSError, ValueError) as e:
            logger.warning("Export to %s failed: %s", path, e)
            QMessageBox.warning(self, "Export failed", str(e))
            return
        self.status.setText(f"Saved {path}")

    def play_clips(self) -> None:
        if self.scheduler is None:
            return
        if not self.player.has_video():
            QMessageBox.information(self, "No video", "Enter a valid YouTube URL first.")
            return
        if not self.player.is_ready():
            self.status.setText("Player is still loading")
            return
        self.scheduler.start(self.store.sets)

    def shutdown(self) -> None:
        """Stop any running playback sequence. Called when the screen is torn down."""
        if self.scheduler is not None:
            self.scheduler.stop()

    # ---------------- Playback feedback ----------------

    def _on_playback_state(self, state: str) -> None:
        if state == PlaybackState.DONE.value:
            self.status.setText("Playback finished")
        elif state == PlaybackState.IDLE.value:
            self.status.setText("")

    def _on_rep_started(self, set_index: int, rep_index: int) -> None:
        item = self.scheduler.current_item if self.scheduler is not None else None
        span = ""
        if item is not None:
            span = f" ({format_timestamp(item.start_s)}-{format_timestamp(item.end_s)})"
        self.status.setText(f"Playing set {set_index + 1}, rep {rep_index + 1}{span}")

    def _on_playback_failed(self, message: str) -> None:
        self.status.setText(message)
