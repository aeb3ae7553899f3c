# rep_annote/main_window.py
from __future__ import annotations

from typing import List, Optional

from PyQt5.QtWidgets import QAction, QMainWindow, QTabWidget

from .domain import EditorConfig
from .screens.collector import ExerciseDataCollectorScreen
from .screens.editor import ExerciseEditorScreen
from .screens.labeler import ExerciseLabelerScreen


class MainWindow(QMainWindow):
    def __init__(self, config: Optional[EditorConfig] = None):
        super().__init__()
        self.setWindowTitle("Rep-Annote (Exercise Rep Labeling Tool)")
        self.resize(1400, 850)

        self.config = config or EditorConfig()
        self.screens: List[ExerciseEditorScreen] = []

        self._build_ui()
        self._build_menu()

    # ---------------- UI ----------------

    def _build_ui(self):
        self.tabs = QTabWidget()
        self.setCentralWidget(self.tabs)

        for screen in (
            ExerciseDataCollectorScreen(config=self.config),
            ExerciseLabelerScreen(config=self.config),
        ):
            self.screens.append(screen)
            self.tabs.addTab(screen, screen.title)

        self.tabs.currentChanged.connect(self._on_tab_changed)

    def _build_menu(self):
        file_menu = self.menuBar().addMenu("&File")

        act_download = QAction("&Download JSON...", self)
        act_download.setShortcut("Ctrl+S")
        act_download.triggered.connect(lambda: self.current_screen().download_json())
        file_menu.addAction(act_download)

        act_log = QAction("&Console Log", self)
        act_log.triggered.connect(lambda: self.current_screen().submit())
        file_menu.addAction(act_log)

        file_menu.addSeparator()

        act_quit = QAction("&Quit", self)
        act_quit.setShortcut("Ctrl+Q")
        act_quit.triggered.connect(self.close)
        file_menu.addAction(act_quit)

    def current_screen(self) -> ExerciseEditorScreen:
        return self.screens[max(0, self.tabs.currentIndex())]

    # ---------------- Events ----------------

    def _on_tab_changed(self, index: int) -> None:
        # Only the visible screen may drive its player.
        for i, screen in enumerate(self.screens):
            if i != index:
                screen.shutdown()

    def closeEvent(self, event):
        for screen in self.screens:
            screen.shutdown()
        super().closeEvent(event)
