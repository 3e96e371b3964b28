"""
Capture/analysis state machine.

    idle --capture()--> capturing --faces--> recommending(mood)
                                  --no faces / failure--> idle (error set)
    recommending --reset()--> idle

Capture is only accepted while idle, the detector is ready and no other
capture is in flight; otherwise it is a silent no-op. The still frame is
grabbed synchronously on entry, then detection runs off the event loop.
"""
from __future__ import annotations
import asyncio
import logging
from typing import List, Optional

from moodverse.camera import Camera
from moodverse.catalog import Card, recommend
from moodverse.classifier import MoodClassifier
from moodverse.config import Settings
from moodverse.detector import FAILED, FaceDetector
from moodverse.models import CaptureSnapshot, FaceRegion, Mood
from moodverse.quiz import MoodQuiz, QuizError

logger = logging.getLogger(__name__)

IDLE, CAPTURING, RECOMMENDING = "idle", "capturing", "recommending"

NO_FACE_MESSAGE = "No face detected. Please ensure your face is visible in the camera."
ANALYSIS_FAILED_MESSAGE = "Failed to analyze mood. Please try again."
MODEL_FAILED_MESSAGE = "Failed to load face detection model. Please refresh the page."


class MoodAnalyzer:
    def __init__(self,
                 detector: FaceDetector,
                 classifier: MoodClassifier,
                 settings: Settings,
                 camera: Optional[Camera] = None):
        self.detector = detector
        self.classifier = classifier
        self.camera = camera if camera is not None else Camera(settings)
        self.detect_timeout = float(settings.DETECT_TIMEOUT)
        self.state = IDLE
        self.analyzing = False
        self.mood: Optional[Mood] = None
        self.error: Optional[str] = None
        self.faces: List[FaceRegion] = []
        self.quiz: Optional[MoodQuiz] = None

    # ---- lifecycle ----
    def start(self) -> None:
        """Begin detector initialization; capture stays disabled until it is ready."""
        self.detector.start()

    def close(self) -> None:
        """Best-effort release of camera and detector."""
        for name, release in (("camera", self.camera.release), ("detector", self.detector.close)):
            try:
                release()
            except Exception:
                logger.exception(f"[capture] failed to release {name}")

    # ---- state ----
    @property
    def detector_ready(self) -> bool:
        return self.detector.ready

    @property
    def can_capture(self) -> bool:
        return self.state == IDLE and self.detector_ready and not self.analyzing

    @property
    def show_recommendations(self) -> bool:
        return self.state == RECOMMENDING and self.mood is not None

    def snapshot(self) -> CaptureSnapshot:
        error = self.error
        if error is None and self.detector.status == FAILED:
            error = MODEL_FAILED_MESSAGE
        return CaptureSnapshot(
            state=self.state,
            analyzing=self.analyzing,
            mood=self.mood,
            error=error,
            detector_status=self.detector.status,
            detector_ready=self.detector_ready,
            can_capture=self.can_capture,
            show_recommendations=self.show_recommendations,
            faces=len(self.faces),
        )

    # ---- transitions ----
    async def _off_loop(self, fn, *args):
        coro = asyncio.to_thread(fn, *args)
        if self.detect_timeout > 0:
            return await asyncio.wait_for(coro, timeout=self.detect_timeout)
        return await coro

    async def capture(self, source=None) -> CaptureSnapshot:
        """Grab one frame from `source` (default: live camera), detect, assign mood."""
        if not self.can_capture:
            logger.debug(f"[capture] ignored state={self.state} analyzing={self.analyzing} "
                         f"detector={self.detector.status}")
            return self.snapshot()

        self.analyzing = True
        self.state = CAPTURING
        self.error = None
        try:
            # first grab may open the device
            frame = await self._off_loop((source if source is not None else self.camera).grab)
            faces = await self._off_loop(self.detector.detect, frame)
            self.faces = list(faces)
            if self.faces:
                mood = await self._off_loop(self.classifier.classify, frame, self.faces)
                self.mood = Mood(mood)
                self.state = RECOMMENDING
                logger.info(f"[capture] faces={len(self.faces)} mood={self.mood.value} "
                            f"classifier={self.classifier.name}")
            else:
                self.mood = None
                self.error = NO_FACE_MESSAGE
                self.state = IDLE
                logger.info("[capture] no face detected")
        except Exception:
            logger.exception("[capture] analysis failed")
            self.mood = None
            self.faces = []
            self.error = ANALYSIS_FAILED_MESSAGE
            self.state = IDLE
        finally:
            self.analyzing = False
        return self.snapshot()

    def reset(self) -> CaptureSnapshot:
        """Back to the initial idle state; mood, error and quiz are cleared."""
        if self.analyzing:
            return self.snapshot()
        self.state = IDLE
        self.mood = None
        self.error = None
        self.faces = []
        self.quiz = None
        logger.debug("[capture] reset")
        return self.snapshot()

    # ---- recommendations / quiz ----
    def recommendations(self, category: str) -> List[Card]:
        if not self.show_recommendations:
            return []
        return recommend(self.mood, category)

    def start_quiz(self) -> MoodQuiz:
        if not self.show_recommendations:
            raise QuizError("No mood to build a quiz for; capture first")
        self.quiz = MoodQuiz(self.mood)
        return self.quiz
