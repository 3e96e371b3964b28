import asyncio
import threading

import numpy as np
import pytest

from conftest import FakeDetector, FakeCamera
from moodverse.camera import StillFrame
from moodverse.capture import (MoodAnalyzer, NO_FACE_MESSAGE, ANALYSIS_FAILED_MESSAGE,
                               MODEL_FAILED_MESSAGE)
from moodverse.classifier import RandomMoodClassifier, MoodClassifier
from moodverse.detector import DetectorError
from moodverse.models import Mood
from moodverse.quiz import QuizError


def _analyzer(settings, detector=None, camera=None, classifier=None):
    return MoodAnalyzer(
        detector=detector or FakeDetector(),
        classifier=classifier or RandomMoodClassifier(seed=3),
        settings=settings,
        camera=camera or FakeCamera(),
    )


def test_initial_state(settings):
    a = _analyzer(settings, detector=FakeDetector(status="loading"))
    a.start()
    assert a.detector.started
    snap = a.snapshot()
    assert snap.state == "idle" and snap.mood is None and snap.error is None
    assert snap.detector_ready is False and snap.can_capture is False

def test_faces_found_moves_to_recommending(settings):
    a = _analyzer(settings)
    snap = asyncio.run(a.capture())
    assert snap.state == "recommending"
    assert snap.mood in set(Mood)
    assert snap.show_recommendations is True
    assert snap.error is None and snap.analyzing is False
    assert snap.faces == 1

def test_no_face_stays_idle_with_message(settings):
    a = _analyzer(settings, detector=FakeDetector(faces=[]))
    snap = asyncio.run(a.capture())
    assert snap.state == "idle"
    assert snap.error == NO_FACE_MESSAGE
    assert snap.error.startswith("No face detected")
    assert snap.mood is None
    assert snap.can_capture is True

def test_detection_failure_reports_generic_message(settings):
    a = _analyzer(settings, detector=FakeDetector(exc=DetectorError("boom: cuda oom")))
    snap = asyncio.run(a.capture())
    assert snap.state == "idle"
    assert snap.error == ANALYSIS_FAILED_MESSAGE
    assert "cuda" not in snap.error
    assert snap.mood is None

def test_classifier_failure_reports_generic_message(settings):
    class Broken(MoodClassifier):
        def classify(self, frame, faces):
            raise RuntimeError("model missing")
    a = _analyzer(settings, classifier=Broken())
    snap = asyncio.run(a.capture())
    assert snap.error == ANALYSIS_FAILED_MESSAGE and snap.mood is None

def test_frame_grabbed_once_before_detection(settings):
    log = []
    a = _analyzer(settings, detector=FakeDetector(log=log), camera=FakeCamera(log=log))
    asyncio.run(a.capture())
    assert log == ["grab", "detect"]

def test_frame_grab_runs_off_the_event_loop(settings):
    class ThreadRecordingCamera(FakeCamera):
        def grab(self):
            self.thread = threading.get_ident()
            return super().grab()

    cam = ThreadRecordingCamera()
    a = _analyzer(settings, camera=cam)

    async def scenario():
        loop_thread = threading.get_ident()
        snap = await a.capture()
        return loop_thread, snap

    loop_thread, snap = asyncio.run(scenario())
    assert cam.thread != loop_thread
    assert snap.state == "recommending"

def test_uploaded_still_is_used_instead_of_camera(settings, fake_camera):
    a = _analyzer(settings, camera=fake_camera)
    snap = asyncio.run(a.capture(StillFrame(np.zeros((20, 20, 3), dtype=np.uint8))))
    assert snap.state == "recommending"
    assert fake_camera.grabs == 0

def test_capture_while_analyzing_is_ignored(settings, gate):
    det = FakeDetector(gate=gate)
    a = _analyzer(settings, detector=det)

    async def scenario():
        first = asyncio.create_task(a.capture())
        await asyncio.sleep(0.01)
        assert a.analyzing is True
        second = await a.capture()
        gate.set()
        return second, await first

    second, first = asyncio.run(scenario())
    assert det.calls == 1
    assert a.camera.grabs == 1
    assert second.analyzing is True and second.state == "capturing"
    assert first.state == "recommending"

def test_detector_not_ready_capture_is_noop(settings):
    det = FakeDetector(status="loading")
    a = _analyzer(settings, detector=det)
    snap = asyncio.run(a.capture())
    assert snap.state == "idle" and snap.error is None
    assert det.calls == 0 and a.camera.grabs == 0

def test_failed_detector_disables_capture_for_good(settings):
    det = FakeDetector(status="failed")
    a = _analyzer(settings, detector=det)
    snap = asyncio.run(a.capture())
    assert snap.error == MODEL_FAILED_MESSAGE
    assert snap.can_capture is False
    assert a.reset().error == MODEL_FAILED_MESSAGE
    assert det.calls == 0

def test_detect_timeout(settings, gate):
    settings.DETECT_TIMEOUT = 0.05
    a = _analyzer(settings, detector=FakeDetector(gate=gate))

    async def scenario():
        snap = await a.capture()
        # unblock the worker thread so the loop can shut down
        gate.set()
        return snap

    snap = asyncio.run(scenario())
    assert snap.error == ANALYSIS_FAILED_MESSAGE
    assert snap.analyzing is False and snap.state == "idle"

def test_reset_returns_to_initial_idle(settings):
    a = _analyzer(settings)
    initial = a.snapshot()
    asyncio.run(a.capture())
    a.start_quiz()
    snap = a.reset()
    assert snap == initial
    assert a.quiz is None

def test_recommendations_and_quiz_follow_mood(settings):
    a = _analyzer(settings)
    assert a.recommendations("music") == []
    with pytest.raises(QuizError):
        a.start_quiz()
    asyncio.run(a.capture())
    assert len(a.recommendations("movies")) == 2
    quiz = a.start_quiz()
    assert quiz.mood == a.mood

def test_close_releases_camera_and_detector(settings):
    a = _analyzer(settings)
    a.close()
    assert a.camera.released and a.detector.closed
