"""Shared helpers for the test-suite."""

from typing import Callable, List, Tuple

from rep_annote.domain import Rep


def make_sets(*sets):
    """make_sets([("1:05", "1:10")], [("0:30", "0:45")]) -> tuple of tuples of Rep."""
    return tuple(tuple(Rep(start=s, end=e) for s, e in reps) for reps in sets)


class FakePlayer:
    """Records commands; current_time answers from `position` or holds the callback."""

    def __init__(self, position: float = 0.0, deferred: bool = False, ready: bool = True):
        self.position = position
        self.deferred = deferred
        self.ready = ready
        self.commands: List[Tuple] = []
        self.pending: List[Callable[[float], None]] = []
        self.fail_on = None

    def is_ready(self):
        return self.ready

    def _record(self, *cmd):
        if self.fail_on == cmd[0]:
            raise RuntimeError(f"{cmd[0]} broke")
        self.commands.append(cmd)

    def seek(self, seconds, exact=True):
        self._record("seek", seconds, exact)
        self.position = float(seconds)

    def play(self):
        self._record("play")

    def pause(self):
        self._record("pause")

    def current_time(self, callback):
        if self.fail_on == "current_time":
            raise RuntimeError("current_time broke")
        if self.deferred:
            self.pending.append(callback)
        else:
            callback(self.position)


class ManualSchedule:
    """Stands in for QTimer.singleShot: callbacks run only when the test says so."""

    def __init__(self):
        self.queue: List[Tuple[int, Callable[[], None]]] = []

    def __call__(self, delay_ms, fn):
        self.queue.append((delay_ms, fn))

    def run_next(self):
        _delay, fn = self.queue.pop(0)
        fn()

    def run_all(self, limit: int = 1000):
        n = 0
        while self.queue and n < limit:
            self.run_next()
            n += 1
        return n
