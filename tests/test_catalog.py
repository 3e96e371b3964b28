import pytest

from moodverse.catalog import recommend, categories, as_mood, TABLES
from moodverse.models import Mood, MusicCard, MovieCard, ActivityCard

def test_every_mood_has_content_in_every_category():
    for table in TABLES.values():
        assert set(table) == set(Mood)
    for mood in Mood:
        for category in categories():
            assert len(recommend(mood, category)) > 0, (mood, category)

def test_card_types_and_order():
    music = recommend(Mood.HAPPY, "music")
    assert all(isinstance(c, MusicCard) for c in music)
    assert [c.title for c in music] == ["Bollywood Party Hits", "Punjabi Beats"]
    assert all(isinstance(c, MovieCard) for c in recommend(Mood.SAD, "movies"))
    acts = recommend("tired", "activities")
    assert all(isinstance(c, ActivityCard) and len(c.tasks) == 4 for c in acts)

def test_unknown_mood_yields_empty():
    assert recommend("angry", "music") == []
    assert recommend(None, "movies") == []
    assert as_mood(" Excited ") is Mood.EXCITED

def test_unknown_category_raises():
    with pytest.raises(KeyError):
        recommend(Mood.HAPPY, "books")

def test_recommend_returns_a_copy():
    cards = recommend(Mood.NEUTRAL, "music")
    cards.clear()
    assert len(recommend(Mood.NEUTRAL, "music")) == 2
