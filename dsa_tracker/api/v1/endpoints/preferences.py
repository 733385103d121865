from fastapi import APIRouter, Depends

from dsa_tracker.schemas.question import ThemePreference
from dsa_tracker.services.question_store import QuestionStore, get_store

router = APIRouter(prefix="/preferences")


@router.get("/theme", response_model=ThemePreference)
def get_theme_endpoint(store: QuestionStore = Depends(get_store)) -> ThemePreference:
    return ThemePreference(theme=store.current_theme())


@router.put("/theme", response_model=ThemePreference)
def set_theme_endpoint(payload: ThemePreference, store: QuestionStore = Depends(get_store)) -> ThemePreference:
    return ThemePreference(theme=store.set_theme(payload.theme))


@router.post("/theme/toggle", response_model=ThemePreference)
def toggle_theme_endpoint(store: QuestionStore = Depends(get_store)) -> ThemePreference:
    return ThemePreference(theme=store.toggle_theme())
