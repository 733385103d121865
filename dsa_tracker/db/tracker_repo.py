import json
import logging
from functools import lru_cache
from typing import Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from dsa_tracker.core.config import get_settings
from dsa_tracker.db.storage import FileStorage, KeyValueStorage
from dsa_tracker.schemas.question import Question, Theme

logger = logging.getLogger(__name__)

QUESTIONS_KEY = "qc_questions_v4"
SOLVED_KEY = "qc_solved_v4"
THEME_KEY = "qc_theme_v4"

QuestionsByTopic = Dict[str, List[Question]]
SolvedState = Dict[str, bool]

_questions_adapter = TypeAdapter(QuestionsByTopic)
_solved_adapter = TypeAdapter(SolvedState)


class TrackerRepo:
    """
    Reads and writes the three tracker records through a key-value storage.

    Load methods return None when a record is absent or cannot be decoded so the
    caller can fall back to its defaults; they never raise for bad content.
    """

    def __init__(self, storage: KeyValueStorage) -> None:
        self.storage = storage

    def _read_raw(self, key: str) -> Optional[str]:
        try:
            return self.storage.get_item(key)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read record %s: %s", key, exc)
            return None

    def _read_json(self, key: str) -> Optional[object]:
        raw = self._read_raw(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            logger.warning("Ignoring malformed record %s: %s", key, exc)
            return None

    def load_questions(self) -> Optional[QuestionsByTopic]:
        data = self._read_json(QUESTIONS_KEY)
        if data is None:
            return None
        try:
            return _questions_adapter.validate_python(data)
        except ValidationError as exc:
            logger.warning("Ignoring invalid questions record (%s validation errors)", exc.error_count())
            return None

    def save_questions(self, questions: QuestionsByTopic) -> None:
        self.storage.set_item(QUESTIONS_KEY, _questions_adapter.dump_json(questions, by_alias=True).decode("utf-8"))

    def load_solved(self) -> Optional[SolvedState]:
        data = self._read_json(SOLVED_KEY)
        if data is None:
            return None
        try:
            return _solved_adapter.validate_python(data)
        except ValidationError as exc:
            logger.warning("Ignoring invalid solved record (%s validation errors)", exc.error_count())
            return None

    def save_solved(self, solved: SolvedState) -> None:
        self.storage.set_item(SOLVED_KEY, json.dumps(solved))

    def load_theme(self) -> Optional[Theme]:
        raw = self._read_raw(THEME_KEY)
        if raw is None:
            return None
        try:
            return Theme(raw.strip())
        except ValueError:
            logger.warning("Ignoring unknown theme value %r", raw)
            return None

    def save_theme(self, theme: Theme) -> None:
        self.storage.set_item(THEME_KEY, theme.value)


@lru_cache()
def get_tracker_repo() -> TrackerRepo:
    """Return the file-backed repo rooted at the configured storage directory."""

    settings = get_settings()
    return TrackerRepo(FileStorage(settings.storage_dir))
