# rep_annote/app.py
from __future__ import annotations

import logging
import sys
from typing import Optional

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import QApplication

from .domain import EditorConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def run_app(config: Optional[EditorConfig] = None) -> int:
    configure_logging()

    # QtWebEngine needs the shared GL context attribute, and its module must be
    # imported before the QApplication is created.
    QApplication.setAttribute(Qt.AA_ShareOpenGLContexts)
    from .main_window import MainWindow

    app = QApplication(sys.argv)

    win = MainWindow(config=config)
    win.show()

    return app.exec_()
