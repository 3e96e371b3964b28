"""
Pydantic data models for API IO.
"""
from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Literal


class Mood(str, Enum):
    HAPPY = "happy"
    SAD = "sad"
    NEUTRAL = "neutral"
    EXCITED = "excited"
    TIRED = "tired"


Category = Literal["music", "movies", "activities"]
CATEGORIES: tuple[str, ...] = ("music", "movies", "activities")


# session / identity


class Identity(BaseModel):
    uid: str
    email: str


class RegistrationProfile(BaseModel):
    """Profile fields written once to the user-record store at sign-up."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(min_length=1)
    gender: Literal["Male", "Female"]
    contact_number: str = Field(alias="contactNumber", min_length=1)
    email: str = Field(min_length=3)

    def record(self) -> dict:
        """Payload for the user-record store, keyed the way the store expects."""
        return self.model_dump(by_alias=True)


class SessionState(BaseModel):
    identity: Optional[Identity] = None
    is_loading: bool = False
    last_error: Optional[str] = None


# capture


class FaceRegion(BaseModel):
    x: int
    y: int
    w: int
    h: int
    confidence: float = 1.0


class CaptureSnapshot(BaseModel):
    state: Literal["idle", "capturing", "recommending"]
    analyzing: bool
    mood: Optional[Mood] = None
    error: Optional[str] = None
    detector_status: Literal["loading", "ready", "failed"]
    detector_ready: bool
    can_capture: bool
    show_recommendations: bool
    faces: int = 0


# recommendations


class MusicCard(BaseModel):
    title: str
    description: str
    link: str
    platform: str


class MovieCard(BaseModel):
    title: str
    genre: str
    description: str
    link: str


class ActivityCard(BaseModel):
    title: str
    description: str
    tasks: List[str] = Field(default_factory=list)


# quiz


class QuizQuestion(BaseModel):
    question: str
    options: List[str]


class QuizSnapshot(BaseModel):
    mood: Mood
    question_index: int
    total: int
    score: int
    completed: bool
    question: Optional[QuizQuestion] = None


class QuizResult(BaseModel):
    score: int
    max_score: int
    percentage: float
    band: Literal["positive", "neutral", "activities"]
    message: str
