"""
Static recommendation content, keyed by mood and category.

Every table is total over `Mood`; `recommend` returns [] for anything
outside the enumeration.
"""
from __future__ import annotations
from typing import Dict, List, Union

from moodverse.models import ActivityCard, CATEGORIES, Category, Mood, MovieCard, MusicCard

Card = Union[MusicCard, MovieCard, ActivityCard]

MUSIC: Dict[Mood, List[MusicCard]] = {
    Mood.HAPPY: [
        MusicCard(title="Bollywood Party Hits",
                  description="Upbeat Bollywood songs to keep you dancing",
                  link="https://open.spotify.com/playlist/37i9dQZF1DX0XUfTFmNBRM",
                  platform="Spotify"),
        MusicCard(title="Punjabi Beats",
                  description="High-energy Punjabi music",
                  link="https://www.youtube.com/playlist?list=PLvlw_ICcAI4c7xX_Y_8RtGYr1wHgY6ZO3",
                  platform="YouTube"),
    ],
    Mood.SAD: [
        MusicCard(title="Soulful Hindi Melodies",
                  description="Emotional and touching Bollywood songs",
                  link="https://open.spotify.com/playlist/37i9dQZF1DX6cg4h2PoN9y",
                  platform="Spotify"),
        MusicCard(title="Classical Indian Music",
                  description="Calming ragas and classical pieces",
                  link="https://www.youtube.com/playlist?list=PLvlw_ICcAI4d_f-E-YuRRvY1KpJ1EW1w1",
                  platform="YouTube"),
    ],
    Mood.NEUTRAL: [
        MusicCard(title="Indie India",
                  description="Contemporary Indian indie artists",
                  link="https://open.spotify.com/playlist/37i9dQZF1DX5q67ZpWyRrZ",
                  platform="Spotify"),
        MusicCard(title="Sufi & Folk",
                  description="Soulful Sufi and folk music",
                  link="https://www.youtube.com/playlist?list=PLvlw_ICcAI4f_oQPv7Y-lUJBXWXz4qgBd",
                  platform="YouTube"),
    ],
    Mood.EXCITED: [
        MusicCard(title="Desi EDM Mix",
                  description="Indian fusion with electronic beats",
                  link="https://open.spotify.com/playlist/37i9dQZF1DX7ZUug1ANKRP",
                  platform="Spotify"),
        MusicCard(title="Bollywood Workout",
                  description="High-energy Bollywood hits for exercise",
                  link="https://www.youtube.com/playlist?list=PLvlw_ICcAI4e_sG8Y-4s-tXH-xXz4qgBl",
                  platform="YouTube"),
    ],
    Mood.TIRED: [
        MusicCard(title="Peaceful Sanskrit Chants",
                  description="Calming mantras and spiritual music",
                  link="https://open.spotify.com/playlist/37i9dQZF1DWZd79rJ6a7lp",
                  platform="Spotify"),
        MusicCard(title="Indian Instrumental",
                  description="Soothing instrumental versions of Indian classics",
                  link="https://www.youtube.com/playlist?list=PLvlw_ICcAI4c_f-E-YuRRvY1KpJ1EW1w1",
                  platform="YouTube"),
    ],
}

MOVIES: Dict[Mood, List[MovieCard]] = {
    Mood.HAPPY: [
        MovieCard(title="3 Idiots", genre="Comedy, Drama",
                  description="A heartwarming tale of friendship and following your dreams",
                  link="https://www.netflix.com/title/70121522"),
        MovieCard(title="Zindagi Na Milegi Dobara", genre="Adventure, Comedy, Drama",
                  description="A joyful celebration of life and friendship",
                  link="https://www.amazon.com/Zindagi-Na-Milegi-Dobara-Akhtar/dp/B07CQKX1YH"),
    ],
    Mood.SAD: [
        MovieCard(title="Taare Zameen Par", genre="Drama, Family",
                  description="An emotional journey of a child and his teacher",
                  link="https://www.netflix.com/title/70087087"),
        MovieCard(title="Kal Ho Naa Ho", genre="Romance, Drama",
                  description="A touching story about living life to the fullest",
                  link="https://www.amazon.com/Kal-Ho-Naa-Shah-Khan/dp/B07C24MXPQ"),
    ],
    Mood.NEUTRAL: [
        MovieCard(title="Lunchbox", genre="Drama, Romance",
                  description="A heartwarming story of unexpected connection",
                  link="https://www.amazon.com/Lunchbox-Irrfan-Khan/dp/B00JFKX5YW"),
        MovieCard(title="Piku", genre="Comedy, Drama",
                  description="A slice-of-life story about family relationships",
                  link="https://www.netflix.com/title/80037004"),
    ],
    Mood.EXCITED: [
        MovieCard(title="Dhoom 3", genre="Action, Thriller",
                  description="High-octane action and thrilling sequences",
                  link="https://www.amazon.com/Dhoom-3-Aamir-Khan/dp/B00JZKX3CW"),
        MovieCard(title="RRR", genre="Action, Drama",
                  description="Epic action drama with stunning visuals",
                  link="https://www.netflix.com/title/81476453"),
    ],
    Mood.TIRED: [
        MovieCard(title="Barfi!", genre="Comedy, Drama, Romance",
                  description="A heartwarming and peaceful love story",
                  link="https://www.netflix.com/title/70242034"),
        MovieCard(title="English Vinglish", genre="Drama, Family",
                  description="A gentle and inspiring story of self-discovery",
                  link="https://www.amazon.com/English-Vinglish-Sridevi/dp/B00GXKF8BQ"),
    ],
}

ACTIVITIES: Dict[Mood, List[ActivityCard]] = {
    Mood.HAPPY: [
        ActivityCard(title="Creative Expression", description="Channel your positive energy",
                     tasks=["Learn a Bollywood dance routine", "Try your hand at rangoli art",
                            "Practice mehendi designs", "Cook your favorite Indian dish"]),
        ActivityCard(title="Social Connection", description="Share your joy with others",
                     tasks=["Plan a chai time with friends", "Organize a festive gathering",
                            "Join a garba/dandiya class", "Share family recipes"]),
    ],
    Mood.SAD: [
        ActivityCard(title="Mindful Activities", description="Find peace and balance",
                     tasks=["Practice yoga asanas", "Try pranayama breathing",
                            "Listen to bhajans", "Visit a nearby temple"]),
        ActivityCard(title="Self-Care Routine", description="Nurture yourself",
                     tasks=["Make a cup of masala chai", "Oil massage (abhyanga)",
                            "Practice meditation", "Write in your journal"]),
    ],
    Mood.NEUTRAL: [
        ActivityCard(title="Productivity Boost", description="Make the most of your time",
                     tasks=["Learn Sanskrit shlokas", "Practice classical music",
                            "Study Vedic mathematics", "Read Indian literature"]),
        ActivityCard(title="Skill Development", description="Learn something new",
                     tasks=["Try a new Indian recipe", "Learn classical dance basics",
                            "Practice calligraphy", "Study Ayurveda basics"]),
    ],
    Mood.EXCITED: [
        ActivityCard(title="Energy Channel", description="Make use of your high spirits",
                     tasks=["Join a Bhangra class", "Learn Bollywood choreography",
                            "Practice tabla or drums", "Plan a cultural event"]),
        ActivityCard(title="Creative Pursuits", description="Express your energy",
                     tasks=["Create fusion music", "Design Indian fashion",
                            "Paint madhubani art", "Make DIY festival decorations"]),
    ],
    Mood.TIRED: [
        ActivityCard(title="Gentle Movement", description="Restore your energy",
                     tasks=["Practice gentle yoga", "Do simple stretches",
                            "Walk in a garden", "Feed birds (a traditional activity)"]),
        ActivityCard(title="Restorative Practice", description="Find peace and rest",
                     tasks=["Listen to Sanskrit chants", "Practice meditation",
                            "Try aromatherapy with Indian essences", "Read spiritual texts"]),
    ],
}

TABLES: Dict[str, Dict[Mood, List[Card]]] = {
    "music": MUSIC,
    "movies": MOVIES,
    "activities": ACTIVITIES,
}


def categories() -> tuple[str, ...]:
    return CATEGORIES


def as_mood(value) -> Mood | None:
    """Coerce a label to Mood; None when it is outside the enumeration."""
    if isinstance(value, Mood):
        return value
    try:
        return Mood(str(value).strip().lower())
    except ValueError:
        return None


def recommend(mood, category: Category) -> List[Card]:
    """
    Ordered content cards for (mood, category).

    Raises:
        KeyError: unknown category.
    """
    table = TABLES[category]
    m = as_mood(mood)
    if m is None:
        return []
    return list(table.get(m, []))
