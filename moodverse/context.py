"""
Application context: owns the session store and, while someone is signed in,
the mood analyzer with its camera and detector.

Lifecycle: `start()` subscribes to the identity stream, `close()` unsubscribes
and releases devices. The analyzer is created when an identity appears and
torn down when it goes away.
"""
from __future__ import annotations
import logging
from typing import Callable, Optional

from moodverse.camera import Camera
from moodverse.capture import MoodAnalyzer
from moodverse.classifier import MoodClassifier, make_classifier
from moodverse.config import Settings
from moodverse.detector import FaceDetector
from moodverse.identity import IdentityProvider, LocalIdentityProvider
from moodverse.models import Identity
from moodverse.profiles import ProfileStore, make_profile_store
from moodverse.session import SessionStore

logger = logging.getLogger(__name__)


class MoodVerseContext:
    def __init__(self,
                 settings: Settings,
                 provider: Optional[IdentityProvider] = None,
                 profiles: Optional[ProfileStore] = None,
                 detector_factory: Optional[Callable[[Settings], FaceDetector]] = None,
                 classifier_factory: Optional[Callable[[Settings], MoodClassifier]] = None,
                 camera_factory: Optional[Callable[[Settings], Camera]] = None):
        self.settings = settings
        self.provider = provider if provider is not None else LocalIdentityProvider(settings.USER_DB_PATH)
        self.profiles = profiles if profiles is not None else make_profile_store(settings)
        self.session = SessionStore(self.provider, self.profiles, timeout=settings.AUTH_TIMEOUT)
        self._detector_factory = detector_factory or FaceDetector
        self._classifier_factory = classifier_factory or make_classifier
        self._camera_factory = camera_factory or Camera
        self.analyzer: Optional[MoodAnalyzer] = None
        self._uid: Optional[str] = None
        self.session.on_change(self._on_identity)

    def start(self) -> None:
        self.session.start()

    def close(self) -> None:
        self.session.close()
        self._teardown()

    def _on_identity(self, identity: Optional[Identity]) -> None:
        if identity is None:
            self._teardown()
            return
        if self.analyzer is not None and identity.uid != self._uid:
            # a different user gets a fresh capture session
            self._teardown()
        if self.analyzer is None:
            self.analyzer = MoodAnalyzer(
                detector=self._detector_factory(self.settings),
                classifier=self._classifier_factory(self.settings),
                settings=self.settings,
                camera=self._camera_factory(self.settings),
            )
            self.analyzer.start()
            self._uid = identity.uid
            logger.info(f"[context] analyzer started for uid={identity.uid}")

    def _teardown(self) -> None:
        if self.analyzer is not None:
            self.analyzer.close()
            self.analyzer = None
            logger.info(f"[context] analyzer released uid={self._uid}")
        self._uid = None
