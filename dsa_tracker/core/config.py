import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_TOPICS = [
    "Array",
    "Strings",
    "Linked List",
    "Hashing",
    "Sorting",
    "Binary Search",
    "Trees",
    "Graphs",
    "Backtracking",
    "DP",
    "Recursion",
]


class Settings(BaseSettings):
    """Application settings sourced from environment variables."""

    project_name: str = "DSA Tracker"
    api_prefix: str = "/api/v1"
    storage_dir: Path = Field(
        default=Path(".dsa_tracker"),
        validation_alias=AliasChoices("DSA_TRACKER_STORAGE_DIR", "STORAGE_DIR"),
    )
    default_topics: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_TOPICS),
        description="Comma-separated topic names seeded on first run",
        validation_alias=AliasChoices("DSA_TRACKER_TOPICS", "DEFAULT_TOPICS"),
    )
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default=["*"],
        description="Comma-separated origins allowed for CORS (use '*' for all)",
        validation_alias=AliasChoices("DSA_TRACKER_CORS_ORIGINS", "CORS_ORIGINS"),
    )

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="allow")

    @field_validator("default_topics", "cors_origins", mode="before")
    @classmethod
    def split_list(cls, value):
        """Allow comma-separated or JSON array strings for list settings."""

        if isinstance(value, str):
            if value.strip() == "":
                return []
            if value.strip().startswith("["):
                return json.loads(value)
            return [item.strip() for item in value.split(",") if item.strip()]
        return value


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
