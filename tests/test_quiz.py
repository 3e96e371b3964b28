import pytest

from moodverse.models import Mood
from moodverse.quiz import MoodQuiz, QuizError, band_for, MESSAGES, QUESTIONS

def test_every_mood_has_three_questions_with_four_options():
    assert set(QUESTIONS) == set(Mood)
    for qs in QUESTIONS.values():
        assert len(qs) == 3
        assert all(len(q.options) == 4 for q in qs)

def test_first_option_every_time_scores_max():
    quiz = MoodQuiz(Mood.HAPPY)
    for _ in range(quiz.total):
        quiz.answer(0)
    assert quiz.completed
    assert quiz.score == 3 * quiz.total
    res = quiz.result()
    assert res.percentage == 100.0
    assert res.band == "positive"
    assert res.message == MESSAGES["positive"]

def test_last_option_every_time_scores_zero():
    quiz = MoodQuiz(Mood.TIRED)
    for _ in range(quiz.total):
        quiz.answer(3)
    assert quiz.score == 0
    assert quiz.result().band == "activities"

def test_index_advances_by_one_until_completed():
    quiz = MoodQuiz("sad")
    snap = quiz.answer(1)
    assert snap.question_index == 1 and not snap.completed and snap.score == 2
    snap = quiz.answer(2)
    assert snap.question_index == 2 and snap.score == 3
    snap = quiz.answer(0)
    assert snap.completed and snap.question is None and snap.score == 6
    # 6/9 -> neutral band
    assert quiz.result().band == "neutral"

def test_answer_after_completion_rejected():
    quiz = MoodQuiz(Mood.EXCITED)
    for _ in range(3):
        quiz.answer(0)
    with pytest.raises(QuizError):
        quiz.answer(0)
    assert quiz.score == 9

def test_bad_option_and_early_result():
    quiz = MoodQuiz(Mood.NEUTRAL)
    with pytest.raises(QuizError):
        quiz.answer(4)
    with pytest.raises(QuizError):
        quiz.answer(-1)
    with pytest.raises(QuizError):
        quiz.result()
    assert quiz.question_index == 0 and quiz.score == 0

def test_band_boundaries():
    assert band_for(3, 4) == "positive"          # exactly 75%
    assert band_for(0.749999, 1) == "neutral"
    assert band_for(1, 2) == "neutral"           # exactly 50%
    assert band_for(0.4999, 1) == "activities"
    assert band_for(0, 0) == "activities"
