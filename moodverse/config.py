"""
Configuration for the mood service.
"""
from pydantic import BaseModel
import os


def _env_bool(name: str, default: str) -> bool:
    return (os.getenv(name, default) or default).strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: str) -> float:
    return float(os.getenv(name, default) or default)


class Settings(BaseModel):
    """
    Runtime settings with environment-variable overrides.
    """
    CAMERA_INDEX: int = int(os.getenv("CAMERA_INDEX", "0"))
    CAMERA_WIDTH: int = int(os.getenv("CAMERA_WIDTH", "640"))
    CAMERA_HEIGHT: int = int(os.getenv("CAMERA_HEIGHT", "480"))
    CAMERA_MIRRORED: bool = _env_bool("CAMERA_MIRRORED", "true")

    DETECTOR_BACKEND: str = os.getenv("DETECTOR_BACKEND", "opencv")
    MIN_FACE_CONFIDENCE: float = _env_float("MIN_FACE_CONFIDENCE", "0.5")
    MIN_FACE_SIZE: int = int(os.getenv("MIN_FACE_SIZE", "40"))

    MOOD_CLASSIFIER: str = os.getenv("MOOD_CLASSIFIER", "random")
    MOOD_SEED: int | None = (
        int(os.getenv("MOOD_SEED")) if os.getenv("MOOD_SEED") else None
    )

    # Seconds; 0 waits forever
    AUTH_TIMEOUT: float = _env_float("AUTH_TIMEOUT", "15")
    DETECT_TIMEOUT: float = _env_float("DETECT_TIMEOUT", "20")
    INIT_TIMEOUT: float = _env_float("INIT_TIMEOUT", "120")

    USER_DB_PATH: str = os.getenv("USER_DB_PATH", "moodverse.db")
    PROFILE_BACKEND: str = os.getenv("PROFILE_BACKEND", "sqlite")
    FIREBASE_CREDENTIALS: str | None = os.getenv("FIREBASE_CREDENTIALS") or None
    PROFILE_COLLECTION: str = os.getenv("PROFILE_COLLECTION", "users")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def __init__(self, **data):
        super().__init__(**data)
        # Normalize enumerated knobs: strip, lower-case, fall back to defaults
        clf = (self.MOOD_CLASSIFIER or "").strip().lower()
        if clf not in ("random", "deepface"):
            clf = "random"
        object.__setattr__(self, "MOOD_CLASSIFIER", clf)

        backend = (self.PROFILE_BACKEND or "sqlite").strip().lower()
        if backend not in ("sqlite", "firestore"):
            backend = "sqlite"
        object.__setattr__(self, "PROFILE_BACKEND", backend)

        object.__setattr__(self, "DETECTOR_BACKEND", (self.DETECTOR_BACKEND or "opencv").strip().lower())
        object.__setattr__(self, "LOG_LEVEL", (self.LOG_LEVEL or "INFO").strip().upper())
