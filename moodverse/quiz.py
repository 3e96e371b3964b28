"""
Mood quiz: a fixed run of multiple-choice questions per mood.

Option position is the point value, reversed: the first option scores 3,
the last scores 0. The result band is picked from the score percentage with
inclusive lower bounds (>=75 positive, >=50 neutral, otherwise activities).
"""
from __future__ import annotations
import logging
from fractions import Fraction
from typing import Dict, List

from moodverse.models import Mood, QuizQuestion, QuizResult, QuizSnapshot

logger = logging.getLogger(__name__)

MAX_POINTS = 3

POSITIVE_THRESHOLD = 75
NEUTRAL_THRESHOLD = 50

MESSAGES = {
    "positive": "You're making great choices for your current mood!",
    "neutral": "You're on the right track with managing your mood.",
    "activities": "Consider trying some of our recommended activities to boost your mood.",
}


def _q(question: str, *options: str) -> QuizQuestion:
    return QuizQuestion(question=question, options=list(options))


QUESTIONS: Dict[Mood, List[QuizQuestion]] = {
    Mood.HAPPY: [
        _q("How likely are you to share your happiness with others?",
           "Very likely", "Somewhat likely", "Not sure", "Not likely"),
        _q("What activity would you most enjoy right now?",
           "Dancing", "Calling friends", "Creating art", "Relaxing alone"),
        _q("How energetic do you feel?",
           "Very energetic", "Moderately energetic", "Slightly energetic", "Not very energetic"),
    ],
    Mood.SAD: [
        _q("What would help you feel better right now?",
           "Talking to someone", "Being alone", "Physical activity", "Creative expression"),
        _q("How do you prefer to process your emotions?",
           "Writing", "Meditation", "Exercise", "Music"),
        _q("What type of support would be most helpful?",
           "Friend's company", "Professional guidance", "Self-reflection time", "Physical activity"),
    ],
    Mood.NEUTRAL: [
        _q("What would you like to accomplish today?",
           "Learn something new", "Complete tasks", "Relax and recharge", "Connect with others"),
        _q("How would you like to spend your energy?",
           "Productive tasks", "Creative projects", "Social activities", "Personal development"),
        _q("What would make your day better?",
           "Achievement", "Connection", "Relaxation", "Adventure"),
    ],
    Mood.EXCITED: [
        _q("How would you like to channel your excitement?",
           "Physical activity", "Creative projects", "Social interaction", "Goal pursuit"),
        _q("What type of activity appeals to you most?",
           "High-energy exercise", "Creative expression", "Social gathering", "Learning something new"),
        _q("How would you like to share your energy?",
           "Group activities", "Individual pursuits", "Helping others", "Creative projects"),
    ],
    Mood.TIRED: [
        _q("What type of rest do you need most?",
           "Physical rest", "Mental rest", "Emotional rest", "Social rest"),
        _q("What would help you recharge?",
           "Quiet time alone", "Gentle movement", "Nature sounds", "Light socializing"),
        _q("What activity feels most manageable?",
           "Meditation", "Gentle stretching", "Reading", "Listening to music"),
    ],
}


class QuizError(Exception):
    """Answer after completion, bad option index, or early result request."""


def band_for(score, max_score) -> str:
    """Band for score/max_score, compared exactly (no float rounding at 75%)."""
    if max_score <= 0:
        return "activities"
    ratio = Fraction(score) / Fraction(max_score) * 100
    if ratio >= POSITIVE_THRESHOLD:
        return "positive"
    if ratio >= NEUTRAL_THRESHOLD:
        return "neutral"
    return "activities"


class MoodQuiz:
    def __init__(self, mood: Mood, questions: List[QuizQuestion] | None = None):
        self.mood = Mood(mood)
        self.questions = list(QUESTIONS[self.mood] if questions is None else questions)
        if not self.questions:
            raise QuizError(f"No questions defined for mood {self.mood.value}")
        self.question_index = 0
        self.score = 0
        self.completed = False

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def max_score(self) -> int:
        return self.total * MAX_POINTS

    def current_question(self) -> QuizQuestion | None:
        return None if self.completed else self.questions[self.question_index]

    def answer(self, option_index: int) -> QuizSnapshot:
        if self.completed:
            raise QuizError("Quiz already completed")
        options = self.questions[self.question_index].options
        if not 0 <= option_index < len(options) or option_index > MAX_POINTS:
            raise QuizError(f"Option index out of range: {option_index}")

        self.score += MAX_POINTS - option_index
        if self.question_index + 1 < self.total:
            self.question_index += 1
        else:
            self.completed = True
            logger.debug(f"[quiz] completed mood={self.mood.value} score={self.score}/{self.max_score}")
        return self.snapshot()

    def snapshot(self) -> QuizSnapshot:
        return QuizSnapshot(
            mood=self.mood,
            question_index=self.question_index,
            total=self.total,
            score=self.score,
            completed=self.completed,
            question=self.current_question(),
        )

    def result(self) -> QuizResult:
        if not self.completed:
            raise QuizError("Quiz not completed yet")
        band = band_for(self.score, self.max_score)
        return QuizResult(
            score=self.score,
            max_score=self.max_score,
            percentage=round(self.score / self.max_score * 100, 2),
            band=band,
            message=MESSAGES[band],
        )
