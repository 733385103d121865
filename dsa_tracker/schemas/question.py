from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Difficulty(str, Enum):
    easy = "Easy"
    medium = "Medium"
    hard = "Hard"

    @classmethod
    def coerce(cls, value: Optional[str]) -> "Difficulty":
        """Return the matching difficulty, falling back to Easy for unknown input."""

        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.easy


class Theme(str, Enum):
    light = "light"
    dark = "dark"

    @classmethod
    def coerce(cls, value: Optional[str]) -> "Theme":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.light

    def toggled(self) -> "Theme":
        return Theme.dark if self is Theme.light else Theme.light


class Question(BaseModel):
    """A tracked practice question as persisted in the questions record."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    link: str = ""
    difficulty: Difficulty = Difficulty.easy
    date_added: datetime = Field(..., alias="dateAdded")

    @field_validator("difficulty", mode="before")
    @classmethod
    def default_difficulty(cls, value):
        return Difficulty.coerce(value)


class QuestionCreate(BaseModel):
    """Payload to add a question to a topic."""

    title: str
    link: Optional[str] = ""
    difficulty: Optional[str] = None


class QuestionView(BaseModel):
    """Question annotated with its solved flag for display."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    link: str
    difficulty: Difficulty
    date_added: datetime = Field(..., alias="dateAdded")
    solved: bool = False


class SolvedToggle(BaseModel):
    id: str
    solved: bool


class TopicCount(BaseModel):
    topic: str
    count: int = Field(..., ge=0)


class TopicProgress(BaseModel):
    solved_count: int = Field(..., ge=0)
    total_count: int = Field(..., ge=0)
    percent: int = Field(..., ge=0, le=100)


class TopicSelection(BaseModel):
    topic: str = Field(..., min_length=1)


class ThemePreference(BaseModel):
    theme: Theme


class TrackerDisplay(BaseModel):
    """Everything the presentation layer needs to render one topic."""

    topic: str
    theme: Theme
    topics: List[TopicCount]
    questions: List[QuestionView]
    progress: TopicProgress
