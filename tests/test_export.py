import json
import logging
import os

import pytest

from rep_annote.domain import EXPORT_FILENAME, ExerciseType, InvalidIntervalError, Session
from rep_annote.export import encode_session, export_to_json, log_export, save_export
from rep_annote.validation import INVALID_INTERVAL_MESSAGE

from .utils import make_sets


EXPECTED_SQUAT_DATA = [
    [{"start": {"minute": 1, "second": 5}, "end": {"minute": 1, "second": 10}}],
    [
        {"start": {"minute": 0, "second": 30}, "end": {"minute": 0, "second": 45}},
        {"start": {"minute": 2, "second": 0}, "end": {"minute": 2, "second": 10}},
    ],
]


def test_encode_squat_session(squat_session):
    doc = encode_session(squat_session)
    assert doc.exercise_type == "Squat"
    assert doc.youtube_url == "https://www.youtube.com/watch?v=abc123XYZ_-"
    assert doc.to_dict()["exercise_data"] == EXPECTED_SQUAT_DATA


def test_encode_refuses_invalid_session():
    session = Session(
        exercise_type=ExerciseType.SQUAT,
        sets=make_sets([("1:05", "1:10")], [("0:45", "0:30")]),
    )
    with pytest.raises(InvalidIntervalError) as exc:
        encode_session(session)
    assert str(exc.value) == INVALID_INTERVAL_MESSAGE
    # InvalidIntervalError is still a ValueError for generic callers
    assert isinstance(exc.value, ValueError)


def test_encode_default_session_is_refused():
    with pytest.raises(InvalidIntervalError):
        encode_session(Session())


def test_encode_does_not_require_valid_url():
    session = Session(youtube_url="https://vimeo.com/12345", sets=make_sets([("0:01", "0:02")]))
    doc = encode_session(session)
    assert doc.youtube_url == "https://vimeo.com/12345"
    assert doc.exercise_type == "Bench Press"


def test_json_layout(squat_session):
    text = export_to_json(encode_session(squat_session))
    assert list(json.loads(text).keys()) == ["youtube_url", "exercise_type", "exercise_data"]
    assert text.startswith('{\n  "youtube_url": ')
    assert '\n    [\n      {\n        "start": {\n          "minute": 1,' in text


def test_save_export_writes_file(tmp_path, squat_session):
    path = tmp_path / EXPORT_FILENAME
    out = save_export(str(path), encode_session(squat_session))
    assert out == str(path)
    raw = path.read_text(encoding="utf-8")
    assert raw.endswith("}\n")
    assert json.loads(raw)["exercise_data"] == EXPECTED_SQUAT_DATA
    # no temp files left behind
    assert os.listdir(tmp_path) == [EXPORT_FILENAME]


def test_save_export_creates_parent_dir(tmp_path, squat_session):
    path = tmp_path / "nested" / "out.json"
    save_export(str(path), encode_session(squat_session))
    assert path.exists()


def test_save_export_requires_path(squat_session):
    with pytest.raises(ValueError):
        save_export("", encode_session(squat_session))


def test_log_export_mirrors_document(caplog, squat_session):
    doc = encode_session(squat_session)
    with caplog.at_level(logging.INFO, logger="rep_annote.export"):
        payload = log_export(doc)
    assert payload == doc.to_dict()
    assert "Data submitted" in caplog.text
    assert '"exercise_type": "Squat"' in caplog.text
