from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dsa_tracker.api.v1.api import api_router
from dsa_tracker.core.config import get_settings
from dsa_tracker.services.question_store import init_store

settings = get_settings()
app = FastAPI(title=settings.project_name)

# CORS for the tracker frontend; configure origins via DSA_TRACKER_CORS_ORIGINS / CORS_ORIGINS env (comma-separated)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup() -> None:
    init_store()


app.include_router(api_router, prefix=settings.api_prefix)
