# rep_annote/store.py
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, List, Optional, Tuple

from .domain import (
    REP_FIELDS,
    ExerciseType,
    InvalidVideoUrlError,
    Rep,
    RepSet,
    Session,
    require_video_id,
)

logger = logging.getLogger(__name__)

Listener = Callable[[Session], None]


class SessionStore:
    """
    Owns the Session of one editor screen.

    Structural edits rebuild only the touched branch: the outer tuple and the
    touched set are new objects, every other set and rep keeps its identity.
    Out-of-range indices are ignored (return False) instead of raising.
    """

    def __init__(self, session: Optional[Session] = None):
        self._session: Session = session if session is not None else Session()
        self._listeners: List[Listener] = []

    # ---------------- Read ----------------

    @property
    def session(self) -> Session:
        return self._session

    @property
    def sets(self) -> Tuple[RepSet, ...]:
        return self._session.sets

    # ---------------- Listeners ----------------

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def _commit(self, **changes) -> None:
        self._session = replace(self._session, **changes)
        for cb in list(self._listeners):
            cb(self._session)

    # ---------------- Header fields ----------------

    def set_youtube_url(self, url: str) -> str:
        """Store the URL and return the derived video id ("" when invalid)."""
        self._commit(youtube_url=str(url or ""))
        try:
            return require_video_id(self._session.youtube_url)
        except InvalidVideoUrlError as e:
            logger.debug("%s", e)
            return ""

    def set_exercise_type(self, value) -> ExerciseType:
        t = ExerciseType.from_value(value)
        self._commit(exercise_type=t)
        return t

    # ---------------- Structural edits ----------------

    def _has_set(self, set_index: int) -> bool:
        return 0 <= set_index < len(self._session.sets)

    def _has_rep(self, set_index: int, rep_index: int) -> bool:
        return self._has_set(set_index) and 0 <= rep_index < len(self._session.sets[set_index])

    def _replace_set(self, set_index: int, new_set: RepSet) -> None:
        sets = self._session.sets
        self._commit(sets=sets[:set_index] + (new_set,) + sets[set_index + 1:])

    def add_set(self) -> int:
        """Append a set holding one empty rep. Returns its index."""
        self._commit(sets=self._session.sets + ((Rep(),),))
        return len(self._session.sets) - 1

    def delete_set(self, set_index: int) -> bool:
        if not self._has_set(set_index):
            logger.debug("delete_set ignored: no set %s", set_index)
            return False
        sets = self._session.sets
        self._commit(sets=sets[:set_index] + sets[set_index + 1:])
        return True

    def add_rep(self, set_index: int) -> bool:
        if not self._has_set(set_index):
            logger.debug("add_rep ignored: no set %s", set_index)
            return False
        self._replace_set(set_index, self._session.sets[set_index] + (Rep(),))
        return True

    def delete_rep(self, set_index: int, rep_index: int) -> bool:
        # A set may end up empty; it then validates vacuously.
        if not self._has_rep(set_index, rep_index):
            logger.debug("delete_rep ignored: no rep %s/%s", set_index, rep_index)
            return False
        reps = self._session.sets[set_index]
        self._replace_set(set_index, reps[:rep_index] + reps[rep_index + 1:])
        return True

    def set_rep_field(self, set_index: int, rep_index: int, field_name: str, value: str) -> bool:
        if field_name not in REP_FIELDS:
            raise ValueError(f"field must be one of {REP_FIELDS}, got {field_name!r}")
        if not self._has_rep(set_index, rep_index):
            logger.debug("set_rep_field ignored: no rep %s/%s", set_index, rep_index)
            return False
        reps = self._session.sets[set_index]
        new_rep = replace(reps[rep_index], **{field_name: str(value if value is not None else "")})
        self._replace_set(set_index, reps[:rep_index] + (new_rep,) + reps[rep_index + 1:])
        return True
