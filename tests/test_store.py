import logging

import pytest

from rep_annote.domain import INVALID_URL_MESSAGE, ExerciseType, Rep, Session
from rep_annote.store import SessionStore

from .utils import make_sets


@pytest.fixture
def store():
    return SessionStore(Session(sets=make_sets(
        [("0:01", "0:02"), ("0:03", "0:04")],
        [("1:00", "1:05")],
    )))


def test_new_store_has_one_set_with_one_empty_rep():
    store = SessionStore()
    assert store.sets == ((Rep(start="", end=""),),)
    assert store.session.exercise_type is ExerciseType.BENCH_PRESS


def test_add_set_appends_single_empty_rep(store):
    before = store.sets
    idx = store.add_set()
    assert idx == 2
    assert store.sets[2] == (Rep(),)
    assert store.sets[0] is before[0]
    assert store.sets[1] is before[1]


def test_add_set_then_delete_last_restores_sets(store):
    before = store.sets
    store.add_set()
    assert store.delete_set(len(store.sets) - 1)
    assert store.sets == before


def test_delete_set(store):
    second = store.sets[1]
    assert store.delete_set(0)
    assert store.sets == (second,)
    assert store.sets[0] is second


def test_add_rep_touches_only_that_set(store):
    before = store.sets
    assert store.add_rep(1)
    assert store.sets[1] == before[1] + (Rep(),)
    assert store.sets[0] is before[0]
    assert store.sets[1][0] is before[1][0]


def test_delete_rep_can_empty_a_set(store):
    assert store.delete_rep(1, 0)
    assert store.sets[1] == ()
    assert len(store.sets) == 2


def test_delete_rep_keeps_other_reps(store):
    keep = store.sets[0][1]
    assert store.delete_rep(0, 0)
    assert store.sets[0] == (keep,)


def test_set_rep_field_preserves_other_field(store):
    before = store.sets
    assert store.set_rep_field(0, 1, "end", "0:09")
    assert store.sets[0][1] == Rep(start="0:03", end="0:09")
    assert store.sets[0][0] is before[0][0]
    assert store.sets[1] is before[1]
    # the old snapshot is untouched
    assert before[0][1] == Rep(start="0:03", end="0:04")


def test_set_rep_field_rejects_unknown_field(store):
    with pytest.raises(ValueError):
        store.set_rep_field(0, 0, "middle", "0:01")


@pytest.mark.parametrize(
    "op,args",
    [
        ("delete_set", (5,)),
        ("delete_set", (-1,)),
        ("add_rep", (2,)),
        ("delete_rep", (0, 7)),
        ("delete_rep", (9, 0)),
        ("set_rep_field", (1, 3, "start", "0:01")),
    ],
)
def test_out_of_range_edits_are_noops(store, op, args):
    before = store.sets
    assert getattr(store, op)(*args) is False
    assert store.sets is before


def test_listeners_see_each_applied_change(store):
    seen = []
    store.subscribe(seen.append)
    store.add_set()
    store.delete_set(42)
    store.set_rep_field(2, 0, "start", "0:10")
    assert len(seen) == 2
    assert seen[-1].sets[2][0].start == "0:10"
    store.unsubscribe(seen.append)
    store.add_set()
    assert len(seen) == 2


def test_youtube_url_sets_video_id_and_error():
    store = SessionStore()
    assert store.set_youtube_url("https://www.youtube.com/watch?v=abc123XYZ_-") == "abc123XYZ_-"
    assert store.session.url_error == ""
    assert store.set_youtube_url("https://vimeo.com/12345") == ""
    assert store.session.url_error == INVALID_URL_MESSAGE
    assert store.session.youtube_url == "https://vimeo.com/12345"


def test_set_exercise_type_accepts_values_and_names():
    store = SessionStore()
    assert store.set_exercise_type("Squat") is ExerciseType.SQUAT
    assert store.set_exercise_type("DEADLIFT") is ExerciseType.DEADLIFT
    with pytest.raises(ValueError):
        store.set_exercise_type("Curl")
    assert store.session.exercise_type is ExerciseType.DEADLIFT



def test_rejected_url_is_logged_at_debug(caplog):
    store = SessionStore()
    with caplog.at_level(logging.DEBUG, logger="rep_annote.store"):
        assert store.set_youtube_url("https://youtu.be/dQw4w9WgXcQ") == ""
    assert "youtu.be" in caplog.text
