import pytest

from rep_annote.domain import ExerciseType, Session

from .utils import FakePlayer, ManualSchedule, make_sets


@pytest.fixture
def squat_session():
    return Session(
        youtube_url="https://www.youtube.com/watch?v=abc123XYZ_-",
        exercise_type=ExerciseType.SQUAT,
        sets=make_sets(
            [("1:05", "1:10")],
            [("0:30", "0:45"), ("2:00", "2:10")],
        ),
    )


@pytest.fixture
def player():
    return FakePlayer()


@pytest.fixture
def schedule():
    return ManualSchedule()
