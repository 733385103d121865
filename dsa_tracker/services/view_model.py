import math
from typing import List, Optional

from dsa_tracker.schemas.question import QuestionView, TopicCount, TopicProgress, TrackerDisplay
from dsa_tracker.services.question_store import QuestionStore


def _percent(solved_count: int, total_count: int) -> int:
    """Whole percentage of solved questions, rounded half up."""

    if total_count <= 0:
        return 0
    return int(math.floor(solved_count * 100 / total_count + 0.5))


def topic_counts(store: QuestionStore) -> List[TopicCount]:
    return [TopicCount(topic=topic, count=len(store.questions_for(topic))) for topic in store.list_topics()]


def display_for_topic(store: QuestionStore, topic: str) -> List[QuestionView]:
    return [
        QuestionView(
            id=question.id,
            title=question.title,
            link=question.link,
            difficulty=question.difficulty,
            date_added=question.date_added,
            solved=store.is_solved(question.id),
        )
        for question in store.questions_for(topic)
    ]


def progress(store: QuestionStore, topic: str) -> TopicProgress:
    questions = store.questions_for(topic)
    solved_count = sum(1 for question in questions if store.is_solved(question.id))
    total_count = len(questions)
    return TopicProgress(
        solved_count=solved_count,
        total_count=total_count,
        percent=_percent(solved_count, total_count),
    )


def tracker_display(store: QuestionStore, topic: Optional[str] = None) -> TrackerDisplay:
    """Bundle the sidebar, question list and progress bar for one topic."""

    topic = topic or store.selected_topic
    return TrackerDisplay(
        topic=topic,
        theme=store.current_theme(),
        topics=topic_counts(store),
        questions=display_for_topic(store, topic),
        progress=progress(store, topic),
    )
