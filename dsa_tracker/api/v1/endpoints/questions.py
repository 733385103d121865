from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from dsa_tracker.schemas.question import Question, QuestionCreate, QuestionView, SolvedToggle, TopicProgress
from dsa_tracker.services.question_store import QuestionStore, get_store
from dsa_tracker.services.view_model import display_for_topic, progress

router = APIRouter()


@router.get("/topics/{topic}/questions", response_model=List[QuestionView])
def list_questions_endpoint(topic: str, store: QuestionStore = Depends(get_store)) -> List[QuestionView]:
    return display_for_topic(store, topic)


@router.get("/topics/{topic}/progress", response_model=TopicProgress)
def progress_endpoint(topic: str, store: QuestionStore = Depends(get_store)) -> TopicProgress:
    return progress(store, topic)


@router.post("/topics/{topic}/questions", response_model=Question, status_code=201)
def add_question_endpoint(topic: str, payload: QuestionCreate, store: QuestionStore = Depends(get_store)) -> Question:
    created = store.add_question(topic, payload.title, payload.link, payload.difficulty)
    if created is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="title must not be empty")
    return created


@router.delete("/topics/{topic}/questions/{question_id}", status_code=204)
def remove_question_endpoint(topic: str, question_id: str, store: QuestionStore = Depends(get_store)) -> Response:
    store.remove_question(topic, question_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/questions/{question_id}/toggle-solved", response_model=SolvedToggle)
def toggle_solved_endpoint(question_id: str, store: QuestionStore = Depends(get_store)) -> SolvedToggle:
    return SolvedToggle(id=question_id, solved=store.toggle_solved(question_id))
