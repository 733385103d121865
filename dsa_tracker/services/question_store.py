import logging
import threading
import uuid
from datetime import datetime, timezone
from functools import lru_cache
from typing import Callable, List, Optional

from dsa_tracker.core.config import get_settings
from dsa_tracker.db.tracker_repo import QuestionsByTopic, SolvedState, TrackerRepo, get_tracker_repo
from dsa_tracker.schemas.question import Difficulty, Question, Theme

logger = logging.getLogger(__name__)

LINK_SCHEMES = ("http://", "https://")


def normalize_link(link: Optional[str]) -> str:
    """Trim a link and prefix https:// when it has no http(s) scheme."""

    if not link:
        return ""
    formatted = link.strip()
    if not formatted:
        return ""
    if not formatted.startswith(LINK_SCHEMES):
        formatted = "https://" + formatted
    return formatted


def _new_question_id() -> str:
    return f"q_{uuid.uuid4()}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class QuestionStore:
    """
    Questions grouped by topic plus per-question solved flags and the theme.

    Every command mutates the in-memory state first and then overwrites the
    affected record through the repo. Failed writes are logged and tolerated;
    the in-memory state stays authoritative for the running process.
    A single lock serializes commands and queries, so each action runs to
    completion before the next one starts.
    """

    def __init__(
        self,
        repo: TrackerRepo,
        default_topics: Optional[List[str]] = None,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_question_id,
    ) -> None:
        self.repo = repo
        self.default_topics = list(default_topics if default_topics is not None else get_settings().default_topics)
        self.clock = clock
        self.id_factory = id_factory
        self._lock = threading.Lock()
        self.questions: QuestionsByTopic = self._seed_topics()
        self.solved: SolvedState = {}
        self.theme: Theme = Theme.light
        self.selected_topic: str = self.default_topics[0] if self.default_topics else ""

    def _seed_topics(self) -> QuestionsByTopic:
        return {topic: [] for topic in self.default_topics}

    # Loading
    def load(self) -> None:
        with self._lock:
            questions = self.repo.load_questions()
            if questions is None:
                logger.info("No stored questions; seeding %s default topics", len(self.default_topics))
                questions = self._seed_topics()
            self.questions = questions
            self.solved = self.repo.load_solved() or {}
            self.theme = self.repo.load_theme() or Theme.light
            logger.info(
                "Loaded %s questions across %s topics",
                sum(len(items) for items in self.questions.values()),
                len(self.questions),
            )

    # Persistence
    def _persist(self, write: Callable[[], None], record: str) -> None:
        try:
            write()
        except OSError as exc:
            logger.warning("Failed to persist %s; keeping in-memory state: %s", record, exc)

    def _persist_questions(self) -> None:
        self._persist(lambda: self.repo.save_questions(self.questions), "questions")

    def _persist_solved(self) -> None:
        self._persist(lambda: self.repo.save_solved(self.solved), "solved state")

    def _persist_theme(self) -> None:
        self._persist(lambda: self.repo.save_theme(self.theme), "theme")

    # Commands
    def add_question(
        self,
        topic: str,
        title: str,
        raw_link: Optional[str] = "",
        difficulty: Optional[str] = None,
    ) -> Optional[Question]:
        """Prepend a new question to ``topic``; blank titles are ignored and return None."""

        clean_title = (title or "").strip()
        if not clean_title:
            return None

        question = Question(
            id=self.id_factory(),
            title=clean_title,
            link=normalize_link(raw_link),
            difficulty=Difficulty.coerce(difficulty),
            date_added=self.clock(),
        )
        with self._lock:
            self.questions[topic] = [question, *self.questions.get(topic, [])]
            self._persist_questions()
        return question

    def remove_question(self, topic: str, question_id: str) -> None:
        with self._lock:
            items = self.questions.get(topic)
            if items is not None:
                self.questions[topic] = [q for q in items if q.id != question_id]
            self.solved.pop(question_id, None)
            self._persist_questions()
            self._persist_solved()

    def toggle_solved(self, question_id: str) -> bool:
        # Unknown ids are not validated and end up as dangling entries.
        with self._lock:
            solved = not self.solved.get(question_id, False)
            self.solved[question_id] = solved
            self._persist_solved()
        return solved

    def select_topic(self, topic: str) -> None:
        with self._lock:
            self.selected_topic = topic

    def _apply_theme(self, theme: Theme) -> Theme:
        self.theme = theme
        self._persist_theme()
        return theme

    def set_theme(self, theme: Optional[str]) -> Theme:
        with self._lock:
            return self._apply_theme(Theme.coerce(theme))

    def toggle_theme(self) -> Theme:
        with self._lock:
            return self._apply_theme(self.theme.toggled())

    # Queries
    def list_topics(self) -> List[str]:
        with self._lock:
            return list(self.questions.keys())

    def current_theme(self) -> Theme:
        with self._lock:
            return self.theme

    def questions_for(self, topic: str) -> List[Question]:
        with self._lock:
            return list(self.questions.get(topic, []))

    def is_solved(self, question_id: str) -> bool:
        with self._lock:
            return bool(self.solved.get(question_id, False))


@lru_cache()
def get_store() -> QuestionStore:
    """Return the process-wide store backed by the configured storage directory."""

    return QuestionStore(get_tracker_repo())


def init_store() -> None:
    """Load persisted state into the process-wide store."""

    get_store().load()
