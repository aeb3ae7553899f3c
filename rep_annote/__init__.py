# rep_annote/__init__.py
'''
rep_annote/
    __init__.py
    __main__.py

    app.py                 # QApplication + logging boot
    main_window.py         # QMainWindow: one tab per editor screen + File menu

    domain.py              # dataclasses: Rep, Session, ExportDocument, EditorConfig; ExerciseType; url -> video id
    timeutils.py           # "minute:second" parse/format, seconds conversion
    validation.py          # rep/session validity + per-rep issues
    store.py               # SessionStore: set/rep structural edits
    export.py              # session -> export document, JSON write, log mirror
    playback.py            # PlaybackScheduler: plays reps in order on a VideoPlayer

    widgets/
      youtube_player.py    # QWebEngineView hosting the YouTube IFrame player
      sets_panel.py        # sets/reps editor with optional delete controls

    screens/
      editor.py            # shared editor screen (url, player, type, sets, actions)
      labeler.py           # add-only labeler
      collector.py         # labeler + delete + Play Clips
'''

from __future__ import annotations

__all__ = ["__version__", "run_app"]

__version__ = "0.1.0"

from .app import run_app
