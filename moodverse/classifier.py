"""
Mood classifiers.

`RandomMoodClassifier` is the placeholder policy: one label drawn uniformly
from the closed Mood set, no affect inference. `DeepFaceMoodClassifier` runs
DeepFace emotion analysis and folds its 7 emotions onto the 5 moods.
"""
from __future__ import annotations
import logging
import random
from typing import Dict, List, Optional

import numpy as np

from moodverse.config import Settings
from moodverse.models import FaceRegion, Mood

logger = logging.getLogger(__name__)

MOODS: List[Mood] = list(Mood)

EMOTION_TO_MOOD: Dict[str, Mood] = {
    "happy": Mood.HAPPY,
    "surprise": Mood.EXCITED,
    "angry": Mood.EXCITED,
    "sad": Mood.SAD,
    "fear": Mood.SAD,
    "disgust": Mood.TIRED,
    "neutral": Mood.NEUTRAL,
}


class MoodClassifier:
    name = "base"

    def classify(self, frame: np.ndarray, faces: List[FaceRegion]) -> Mood:
        raise NotImplementedError


class RandomMoodClassifier(MoodClassifier):
    name = "random"

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def classify(self, frame: np.ndarray, faces: List[FaceRegion]) -> Mood:
        return self._rng.choice(MOODS)


def map_emotion(label: Optional[str]) -> Mood:
    return EMOTION_TO_MOOD.get((label or "").strip().lower(), Mood.NEUTRAL)


def _best_label(blob: Dict) -> str:
    # Prefer dominant_emotion; fall back to max-prob from dict
    if not isinstance(blob, dict):
        return ""
    dom = blob.get("dominant_emotion")
    if isinstance(dom, str) and dom:
        return dom
    em = blob.get("emotion")
    if isinstance(em, dict) and em:
        return max(em, key=em.get)
    return ""


class DeepFaceMoodClassifier(MoodClassifier):
    """Emotion analysis on the largest detected face crop."""
    name = "deepface"

    def classify(self, frame: np.ndarray, faces: List[FaceRegion]) -> Mood:
        from deepface import DeepFace

        chip = frame
        if faces:
            f = max(faces, key=lambda r: r.w * r.h)
            crop = frame[f.y:f.y + f.h, f.x:f.x + f.w]
            if crop.size:
                chip = crop

        res = DeepFace.analyze(
            chip,
            actions=["emotion"],
            enforce_detection=False,
            detector_backend="skip",
        )
        res = res if isinstance(res, list) else [res]
        label = _best_label(res[0] if res else {})
        mood = map_emotion(label)
        logger.debug(f"[classifier] emotion={label!r} -> mood={mood.value}")
        return mood


def make_classifier(settings: Settings) -> MoodClassifier:
    if settings.MOOD_CLASSIFIER == "deepface":
        return DeepFaceMoodClassifier()
    return RandomMoodClassifier(seed=settings.MOOD_SEED)
