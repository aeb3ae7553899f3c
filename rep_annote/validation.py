# rep_annote/validation.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Union

from .domain import Rep, RepSet, Session
from .timeutils import is_timestamp, to_seconds


INVALID_INTERVAL_MESSAGE = (
    "Please ensure all timestamps are in the format minute:second "
    "(e.g., 1:05, 5:40) and that end times are after start times."
)


def is_valid_rep(rep: Rep) -> bool:
    if not (is_timestamp(rep.start) and is_timestamp(rep.end)):
        return False
    return to_seconds(rep.end) > to_seconds(rep.start)


def _sets_of(session_or_sets: Union[Session, Sequence[RepSet]]) -> Sequence[RepSet]:
    if isinstance(session_or_sets, Session):
        return session_or_sets.sets
    return session_or_sets


def is_valid_session(session_or_sets: Union[Session, Sequence[RepSet]]) -> bool:
    """True iff every rep of every set is valid. Empty sets pass."""
    return all(is_valid_rep(rep) for s in _sets_of(session_or_sets) for rep in s)


# -----------------------------
# Per-rep feedback (UI highlighting only; the export gate stays all-or-nothing)
# -----------------------------

@dataclass(frozen=True)
class RepIssue:
    set_index: int
    rep_index: int
    field: str       # "start" | "end"
    message: str


def _rep_issues(set_index: int, rep_index: int, rep: Rep) -> Iterable[RepIssue]:
    bad_format = False
    for name in ("start", "end"):
        if not is_timestamp(getattr(rep, name)):
            bad_format = True
            yield RepIssue(set_index, rep_index, name, "Expected minute:second")
    if not bad_format and to_seconds(rep.end) <= to_seconds(rep.start):
        yield RepIssue(set_index, rep_index, "end", "End must be after start")


def rep_issues(session_or_sets: Union[Session, Sequence[RepSet]]) -> List[RepIssue]:
    out: List[RepIssue] = []
    for si, s in enumerate(_sets_of(session_or_sets)):
        for ri, rep in enumerate(s):
            out.extend(_rep_issues(si, ri, rep))
    return out
