import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from dsa_tracker.db.storage import FileStorage, InMemoryStorage
from dsa_tracker.db.tracker_repo import QUESTIONS_KEY, SOLVED_KEY, THEME_KEY, TrackerRepo
from dsa_tracker.schemas.question import Difficulty, Question, Theme


def _question(**overrides) -> Question:
    payload = {
        "id": "q_1",
        "title": "Two Sum",
        "link": "https://leetcode.com/problems/two-sum",
        "difficulty": "Easy",
        "dateAdded": "2024-05-01T12:30:00.000Z",
    }
    payload.update(overrides)
    return Question.model_validate(payload)


def test_absent_records_load_as_none():
    repo = TrackerRepo(InMemoryStorage())
    assert repo.load_questions() is None
    assert repo.load_solved() is None
    assert repo.load_theme() is None


def test_file_storage_round_trip(tmp_path):
    repo = TrackerRepo(FileStorage(tmp_path / "store"))
    questions = {"Array": [_question()], "Trees": []}
    repo.save_questions(questions)
    repo.save_solved({"q_1": True})
    repo.save_theme(Theme.dark)

    assert (tmp_path / "store" / QUESTIONS_KEY).exists()
    assert repo.load_questions() == questions
    assert repo.load_solved() == {"q_1": True}
    assert repo.load_theme() == Theme.dark


def test_saved_questions_record_shape():
    storage = InMemoryStorage()
    TrackerRepo(storage).save_questions({"Array": [_question()]})

    record = json.loads(storage.items[QUESTIONS_KEY])
    assert list(record) == ["Array"]
    assert set(record["Array"][0]) == {"id", "title", "link", "difficulty", "dateAdded"}
    assert record["Array"][0]["difficulty"] == "Easy"


def test_millisecond_ids_and_unknown_difficulty_are_accepted():
    raw = json.dumps(
        {
            "Array": [
                {
                    "id": "1700000000000",
                    "title": "Two Sum",
                    "link": "",
                    "difficulty": "Legendary",
                    "dateAdded": "2023-11-14T22:13:20.000Z",
                }
            ]
        }
    )
    repo = TrackerRepo(InMemoryStorage({QUESTIONS_KEY: raw}))
    loaded = repo.load_questions()
    question = loaded["Array"][0]
    assert question.difficulty == Difficulty.easy
    assert question.date_added == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)


def test_malformed_records_load_as_none():
    storage = InMemoryStorage(
        {
            QUESTIONS_KEY: json.dumps({"Array": [{"title": "missing id"}]}),
            SOLVED_KEY: "oops",
            THEME_KEY: "blue",
        }
    )
    repo = TrackerRepo(storage)
    assert repo.load_questions() is None
    assert repo.load_solved() is None
    assert repo.load_theme() is None


def test_unreadable_file_loads_as_none(tmp_path):
    (tmp_path / SOLVED_KEY).write_bytes(b"\xff\xfe\x00bad")
    repo = TrackerRepo(FileStorage(tmp_path))
    assert repo.load_solved() is None


def test_file_storage_names_files_by_key(tmp_path):
    repo = TrackerRepo(FileStorage(tmp_path))
    repo.save_theme(Theme.dark)
    repo.save_solved({"q_1": True})

    assert sorted(path.name for path in tmp_path.iterdir()) == [SOLVED_KEY, THEME_KEY]
    assert (tmp_path / THEME_KEY).read_text(encoding="utf-8") == "dark"


def test_file_storage_failed_replace_leaves_old_value(tmp_path, monkeypatch):
    storage = FileStorage(tmp_path)
    storage.set_item(SOLVED_KEY, '{"q_1": true}')

    def broken_replace(self, target):
        raise OSError("disk full")

    monkeypatch.setattr(Path, "replace", broken_replace)
    with pytest.raises(OSError):
        storage.set_item(SOLVED_KEY, '{"q_1": false, "q_2": true}')
    monkeypatch.undo()

    assert storage.get_item(SOLVED_KEY) == '{"q_1": true}'
    assert [path.name for path in tmp_path.iterdir()] == [SOLVED_KEY]
