# rep_annote/screens/labeler.py
from __future__ import annotations

from typing import Optional

from PyQt5.QtWidgets import QWidget

from ..domain import EditorConfig
from .editor import ExerciseEditorScreen


class ExerciseLabelerScreen(ExerciseEditorScreen):
    """Add-only editor: sets and reps can be added and edited, not removed. No playback."""

    title = "Exercise Labeler"

    def __init__(self, config: Optional[EditorConfig] = None, parent: Optional[QWidget] = None):
        super().__init__(allow_delete=False, allow_playback=False, config=config, parent=parent)
