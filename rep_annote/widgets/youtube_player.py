# rep_annote/widgets/youtube_player.py
from __future__ import annotations

import json
import logging
from typing import Callable, Optional

from PyQt5.QtCore import QTimer, QUrl, pyqtSignal
from PyQt5.QtWebEngineWidgets import QWebEngineView
from PyQt5.QtWidgets import QSizePolicy, QWidget

logger = logging.getLogger(__name__)


# The page hosts the IFrame API player in a global `player`; `window.playerReady`
# flips once onReady fires. The view refuses commands until it has seen that flag.
_PLAYER_HTML = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>
  html, body {{ margin: 0; padding: 0; height: 100%; background: black; overflow: hidden; }}
  #player {{ width: 100%; height: 100%; }}
</style>
</head>
<body>
<div id="player"></div>
<script>
  window.playerReady = false;
  var player = null;
  var tag = document.createElement('script');
  tag.src = "https://www.youtube.com/iframe_api";
  document.head.appendChild(tag);
  function onYouTubeIframeAPIReady() {{
    player = new YT.Player('player', {{
      width: '100%',
      height: '100%',
      videoId: {video_id},
      playerVars: {{ autoplay: 0, playsinline: 1 }},
      events: {{ onReady: function () {{ window.playerReady = true; }} }}
    }});
  }}
</script>
</body>
</html>
"""

_BLANK_HTML = "<html><body style='margin:0;background:black;'></body></html>"

# Base URL for setHtml; the IFrame API refuses pages without an http(s) origin.
_PAGE_BASE_URL = QUrl("https://www.youtube.com/")

READY_POLL_MS = 200


class YouTubePlayerView(QWebEngineView):
    """
    Embedded YouTube player. Implements the playback.VideoPlayer contract:
    seek / play / pause are fire-and-forget JavaScript calls, current_time
    delivers the position through the runJavaScript callback.

    The IFrame player only accepts commands after its onReady event. Until the
    page reports it, is_ready() is False and every command raises.

    Emits:
      - ready_changed(bool)
    """
    ready_changed = pyqtSignal(bool)

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self._video_id: str = ""
        self._ready: bool = False

        # Polls window.playerReady after each page load until onReady has fired.
        self._ready_timer = QTimer(self)
        self._ready_timer.setInterval(READY_POLL_MS)
        self._ready_timer.timeout.connect(self._ready_tick)
        self.loadFinished.connect(self._on_load_finished)

        self.setHtml(_BLANK_HTML)

    # ---------------- Public API ----------------

    def video_id(self) -> str:
        return self._video_id

    def has_video(self) -> bool:
        return bool(self._video_id)

    def is_ready(self) -> bool:
        return bool(self._video_id) and self._ready

    def load_video(self, video_id: str) -> None:
        vid = (video_id or "").strip()
        if vid == self._video_id:
            return
        self._video_id = vid
        self._ready_timer.stop()
        self._set_ready(False)
        if vid:
            logger.info("Loading YouTube video %s", vid)
            self.setHtml(_PLAYER_HTML.format(video_id=json.dumps(vid)), _PAGE_BASE_URL)
        else:
            self.setHtml(_BLANK_HTML)

    # ---------------- VideoPlayer contract ----------------

    def seek(self, seconds: float, exact: bool = True) -> None:
        allow_seek_ahead = "true" if exact else "false"
        self._call(f"player.seekTo({float(seconds)!r}, {allow_seek_ahead});")

    def play(self) -> None:
        self._call("player.playVideo();")

    def pause(self) -> None:
        self._call("player.pauseVideo();")

    def current_time(self, callback: Callable[[float], None]) -> None:
        self._require_ready()
        self.page().runJavaScript("player.getCurrentTime();", lambda value: callback(_to_float(value)))

    # ---------------- Readiness ----------------

    def _set_ready(self, ready: bool) -> None:
        if ready != self._ready:
            self._ready = ready
            self.ready_changed.emit(ready)

    def _on_load_finished(self, ok: bool) -> None:
        if not self._video_id:
            return
        if not ok:
            logger.warning("Player page for %s failed to load", self._video_id)
            return
        self._ready_timer.start()

    def _ready_tick(self) -> None:
        vid = self._video_id
        if not vid:
            self._ready_timer.stop()
            return
        self.page().runJavaScript(
            "window.playerReady === true;",
            lambda value, _vid=vid: self._on_ready_probe(_vid, value),
        )

    def _on_ready_probe(self, vid: str, value) -> None:
        # Answer from a page that has since been replaced.
        if vid != self._video_id or not value:
            return
        self._ready_timer.stop()
        logger.info("YouTube player ready for %s", vid)
        self._set_ready(True)

    # ---------------- Internals ----------------

    def _require_ready(self) -> None:
        if not self._video_id:
            raise RuntimeError("No video loaded")
        if not self._ready:
            raise RuntimeError(f"YouTube player for {self._video_id} is not ready")

    def _call(self, statement: str) -> None:
        self._require_ready()
        self.page().runJavaScript(statement)


def _to_float(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
