# rep_annote/playback.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from PyQt5.QtCore import QObject, QTimer, pyqtSignal

from .domain import POLL_INTERVAL_MS, RepSet
from .timeutils import to_seconds
from .validation import is_valid_rep

logger = logging.getLogger(__name__)


class VideoPlayer:
    """
    What the scheduler needs from a player. Any object with these methods works
    (see widgets.youtube_player.YouTubePlayerView).

    current_time is asynchronous: the callback receives the position in seconds.
    is_ready is False while the player cannot act on commands yet; the
    scheduler refuses to start (or halts) rather than poll a dead player.
    """

    def is_ready(self) -> bool:
        raise NotImplementedError

    def seek(self, seconds: float, exact: bool = True) -> None:
        raise NotImplementedError

    def play(self) -> None:
        raise NotImplementedError

    def pause(self) -> None:
        raise NotImplementedError

    def current_time(self, callback: Callable[[float], None]) -> None:
        raise NotImplementedError


class PlaybackState(str, Enum):
    IDLE = "idle"
    SEEKING = "seeking"
    PLAYING = "playing"
    POLLING = "polling"
    ADVANCING = "advancing"
    DONE = "done"


@dataclass(frozen=True)
class PlaybackItem:
    set_index: int
    rep_index: int
    start_s: int
    end_s: int


class CancellationToken:
    """One per playback run. Cancelling is idempotent."""

    __slots__ = ("_cancelled",)

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


def flatten_sets(sets: Sequence[RepSet]) -> Tuple[PlaybackItem, ...]:
    """Set order, then rep order. Reps that don't validate are skipped."""
    out: List[PlaybackItem] = []
    for si, s in enumerate(sets or ()):
        for ri, rep in enumerate(s):
            if not is_valid_rep(rep):
                logger.warning("Skipping rep %d of set %d: invalid interval %r-%r",
                               ri + 1, si + 1, rep.start, rep.end)
                continue
            out.append(PlaybackItem(si, ri, to_seconds(rep.start), to_seconds(rep.end)))
    return tuple(out)


def _qt_schedule(delay_ms: int, fn: Callable[[], None]) -> None:
    QTimer.singleShot(int(delay_ms), fn)


class _Run:
    __slots__ = ("token", "items", "cursor")

    def __init__(self, items: Tuple[PlaybackItem, ...]):
        self.token = CancellationToken()
        self.items = items
        self.cursor = 0

    def current(self) -> Optional[PlaybackItem]:
        if 0 <= self.cursor < len(self.items):
            return self.items[self.cursor]
        return None


class PlaybackScheduler(QObject):
    """
    Plays every rep interval in order against a VideoPlayer.

    For each rep: seek(start, exact) + play, then poll current_time every
    poll_interval_ms until it reaches the rep's end, pause, move on.

    Only one run is active at a time. start() and stop() cancel the previous
    run's token; any poll or time callback belonging to a cancelled run returns
    without touching the player or the state.

    Emits:
      - state_changed(str)        PlaybackState value
      - rep_started(int, int)     (set_index, rep_index)
      - finished()                run reached DONE normally
      - failed(str)               player not ready or a command raised; run halted
    """
    state_changed = pyqtSignal(str)
    rep_started = pyqtSignal(int, int)
    finished = pyqtSignal()
    failed = pyqtSignal(str)

    def __init__(
        self,
        player: Optional[VideoPlayer] = None,
        poll_interval_ms: int = POLL_INTERVAL_MS,
        schedule: Optional[Callable[[int, Callable[[], None]], None]] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._player = player
        self._poll_interval_ms = max(1, int(poll_interval_ms))
        self._schedule = schedule or _qt_schedule
        self._run: Optional[_Run] = None
        self._state = PlaybackState.IDLE

    # ---------------- Public API ----------------

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def current_item(self) -> Optional[PlaybackItem]:
        return self._run.current() if self._run is not None else None

    def is_active(self) -> bool:
        return self._state not in (PlaybackState.IDLE, PlaybackState.DONE)

    def start(self, sets: Sequence[RepSet]) -> None:
        self._cancel_run()
        run = _Run(flatten_sets(sets))
        self._run = run

        if not run.items or self._player is None:
            if self._player is None and run.items:
                logger.warning("Playback requested without a player")
            self._finish(run)
            return

        if not self._player.is_ready():
            logger.warning("Playback requested before the player is ready")
            self._halt(run, "Playback stopped: player not ready")
            return

        logger.info("Playing %d rep(s)", len(run.items))
        self._seek_current(run)

    def stop(self) -> None:
        """Cancel the active run (if any). Issues no player commands."""
        if self._cancel_run():
            self._set_state(PlaybackState.IDLE)

    # ---------------- State machine ----------------

    def _cancel_run(self) -> bool:
        run = self._run
        self._run = None
        if run is None or run.token.cancelled:
            return False
        run.token.cancel()
        return True

    def _set_state(self, state: PlaybackState) -> None:
        if state != self._state:
            self._state = state
            self.state_changed.emit(state.value)

    def _finish(self, run: _Run) -> None:
        run.token.cancel()
        self._set_state(PlaybackState.DONE)
        self.finished.emit()

    def _fail(self, run: _Run, what: str) -> None:
        logger.exception("Player command failed during %s; playback halted", what)
        self._halt(run, f"Playback stopped: {what} failed")

    def _halt(self, run: _Run, message: str) -> None:
        run.token.cancel()
        if self._run is run:
            self._run = None
        self._set_state(PlaybackState.DONE)
        self.failed.emit(message)

    def _seek_current(self, run: _Run) -> None:
        item = run.current()
        if item is None:
            self._finish(run)
            return

        self._set_state(PlaybackState.SEEKING)
        try:
            self._player.seek(item.start_s, True)
            self._player.play()
        except Exception:
            self._fail(run, "seek/play")
            return

        self._set_state(PlaybackState.PLAYING)
        self.rep_started.emit(item.set_index, item.rep_index)
        self._schedule_poll(run)

    def _schedule_poll(self, run: _Run) -> None:
        if run.token.cancelled:
            return
        self._schedule(self._poll_interval_ms, lambda: self._poll(run))

    def _poll(self, run: _Run) -> None:
        if run.token.cancelled:
            return
        if not self._player.is_ready():
            logger.warning("Player stopped being ready; playback halted")
            self._halt(run, "Playback stopped: player not ready")
            return
        self._set_state(PlaybackState.POLLING)
        try:
            self._player.current_time(lambda t: self._on_time(run, t))
        except Exception:
            self._fail(run, "getCurrentTime")

    def _on_time(self, run: _Run, current: Optional[float]) -> None:
        if run.token.cancelled:
            return
        item = run.current()
        if item is None:
            self._finish(run)
            return

        try:
            t = float(current) if current is not None else 0.0
        except (TypeError, ValueError):
            t = 0.0

        if t < item.end_s:
            self._schedule_poll(run)
            return

        self._set_state(PlaybackState.ADVANCING)
        try:
            self._player.pause()
        except Exception:
            self._fail(run, "pause")
            return

        run.cursor += 1
        if run.current() is None:
            self._finish(run)
        else:
            self._seek_current(run)
