from fastapi import APIRouter

from dsa_tracker.api.v1.endpoints import preferences, questions, topics

api_router = APIRouter()
api_router.include_router(topics.router, tags=["topics"])
api_router.include_router(questions.router, tags=["questions"])
api_router.include_router(preferences.router, tags=["preferences"])
