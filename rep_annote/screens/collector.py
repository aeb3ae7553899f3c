# rep_annote/screens/collector.py
from __future__ import annotations

from typing import Optional

from PyQt5.QtWidgets import QWidget

from ..domain import EditorConfig
from .editor import ExerciseEditorScreen


class ExerciseDataCollectorScreen(ExerciseEditorScreen):
    """Full editor: delete sets/reps and play every rep back in order."""

    title = "Exercise Data Collector"

    def __init__(self, config: Optional[EditorConfig] = None, parent: Optional[QWidget] = None):
        super().__init__(allow_delete=True, allow_playback=True, config=config, parent=parent)
