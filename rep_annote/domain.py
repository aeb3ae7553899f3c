# rep_annote/domain.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple


# -----------------------------
# Errors
# -----------------------------

class RepAnnoteError(Exception):
    """Base class for errors raised by the editor core."""


class InvalidVideoUrlError(RepAnnoteError, ValueError):
    """The URL is not a YouTube watch URL."""


class InvalidIntervalError(RepAnnoteError, ValueError):
    """At least one rep has a malformed timestamp or a non-positive length."""


# -----------------------------
# Exercise types
# -----------------------------

class ExerciseType(str, Enum):
    BENCH_PRESS = "Bench Press"
    SQUAT = "Squat"
    DEADLIFT = "Deadlift"

    @staticmethod
    def from_value(value) -> "ExerciseType":
        if isinstance(value, ExerciseType):
            return value
        text = str(value or "").strip()
        for t in ExerciseType:
            if text in (t.value, t.name):
                return t
        raise ValueError(f"Unknown exercise type: {value!r}")


DEFAULT_EXERCISE_TYPE = ExerciseType.BENCH_PRESS


# -----------------------------
# YouTube URL -> video id
# -----------------------------

YOUTUBE_WATCH_PATTERN = re.compile(
    r"(?:https?://)?(?:www\.)?youtube\.com/watch\?v=([a-zA-Z0-9_-]+)"
)
INVALID_URL_MESSAGE = "Invalid YouTube URL"


def extract_video_id(url: str) -> str:
    """Return the `v` parameter of a watch URL, or "" when the URL doesn't match."""
    m = YOUTUBE_WATCH_PATTERN.search(url or "")
    return m.group(1) if m else ""


def require_video_id(url: str) -> str:
    vid = extract_video_id(url)
    if not vid:
        raise InvalidVideoUrlError(f"{INVALID_URL_MESSAGE}: {url!r}")
    return vid


# -----------------------------
# Core Dataclasses
# -----------------------------

REP_FIELDS = ("start", "end")

# Defaults shared by the editor config, export and playback modules.
EXPORT_FILENAME = "exercise_data.json"
POLL_INTERVAL_MS = 100


@dataclass(frozen=True)
class Rep:
    """One labeled interval. Both fields hold raw "minute:second" text as typed."""
    start: str = ""
    end: str = ""


# A set is an ordered, immutable group of reps.
RepSet = Tuple[Rep, ...]


def default_sets() -> Tuple[RepSet, ...]:
    return ((Rep(),),)


@dataclass
class Session:
    """
    The editable document of one editor screen.

    `sets` is replaced wholesale on every structural edit (see store.SessionStore);
    untouched sets keep their identity.
    """
    youtube_url: str = ""
    exercise_type: ExerciseType = DEFAULT_EXERCISE_TYPE
    sets: Tuple[RepSet, ...] = field(default_factory=default_sets)

    @property
    def video_id(self) -> str:
        return extract_video_id(self.youtube_url)

    @property
    def url_error(self) -> str:
        if extract_video_id(self.youtube_url):
            return ""
        return INVALID_URL_MESSAGE


@dataclass(frozen=True)
class TimestampParts:
    minute: int
    second: int

    def to_dict(self) -> Dict:
        return {"minute": int(self.minute), "second": int(self.second)}


@dataclass(frozen=True)
class RepInterval:
    start: TimestampParts
    end: TimestampParts

    def to_dict(self) -> Dict:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}


@dataclass(frozen=True)
class ExportDocument:
    """Canonical output of a validated session. Key order matches the file schema."""
    youtube_url: str
    exercise_type: str
    exercise_data: Tuple[Tuple[RepInterval, ...], ...]

    def to_dict(self) -> Dict:
        return {
            "youtube_url": self.youtube_url,
            "exercise_type": self.exercise_type,
            "exercise_data": [[r.to_dict() for r in s] for s in self.exercise_data],
        }


# -----------------------------
# Editor config
# -----------------------------

@dataclass
class EditorConfig:
    """
    Knobs shared by both editor screens. Not persisted; defaults live here.
    Adding an exercise type means extending ExerciseType and this list.
    """
    exercise_types: List[ExerciseType] = field(default_factory=lambda: list(ExerciseType))
    default_exercise_type: ExerciseType = DEFAULT_EXERCISE_TYPE
    poll_interval_ms: int = POLL_INTERVAL_MS
    export_filename: str = EXPORT_FILENAME

    def __post_init__(self):
        self.exercise_types = [ExerciseType.from_value(t) for t in (self.exercise_types or [])]
        if not self.exercise_types:
            raise ValueError("exercise_types must not be empty")
        self.default_exercise_type = ExerciseType.from_value(self.default_exercise_type)
        if self.default_exercise_type not in self.exercise_types:
            raise ValueError(
                f"default_exercise_type {self.default_exercise_type.value!r} is not one of the offered exercise types"
            )
        self.poll_interval_ms = max(1, int(self.poll_interval_ms))
