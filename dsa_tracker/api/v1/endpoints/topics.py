from typing import List, Optional

from fastapi import APIRouter, Depends

from dsa_tracker.schemas.question import TopicCount, TopicSelection, TrackerDisplay
from dsa_tracker.services.question_store import QuestionStore, get_store
from dsa_tracker.services.view_model import topic_counts, tracker_display

router = APIRouter()


@router.get("/topics", response_model=List[TopicCount])
def list_topics_endpoint(store: QuestionStore = Depends(get_store)) -> List[TopicCount]:
    return topic_counts(store)


@router.put("/topics/selected", response_model=TrackerDisplay)
def select_topic_endpoint(payload: TopicSelection, store: QuestionStore = Depends(get_store)) -> TrackerDisplay:
    store.select_topic(payload.topic)
    return tracker_display(store)


@router.get("/tracker", response_model=TrackerDisplay)
def tracker_endpoint(topic: Optional[str] = None, store: QuestionStore = Depends(get_store)) -> TrackerDisplay:
    """Sidebar counts, question list and progress for ``topic`` (defaults to the selected one)."""

    return tracker_display(store, topic)
