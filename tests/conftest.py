import sqlite3
import threading

import numpy as np
import pytest

from moodverse.config import Settings
from moodverse.models import FaceRegion


class FakeDetector:
    """Stands in for FaceDetector: no model, preset faces, call counting."""

    def __init__(self, faces=None, status="ready", exc=None, gate=None, log=None):
        self.faces = [FaceRegion(x=10, y=10, w=60, h=60)] if faces is None else faces
        self.status = status
        self.exc = exc
        self.gate = gate
        self.log = log if log is not None else []
        self.calls = 0
        self.started = False
        self.closed = False

    @property
    def ready(self):
        return self.status == "ready"

    def start(self):
        self.started = True

    def close(self):
        self.closed = True

    def detect(self, frame):
        self.calls += 1
        self.log.append("detect")
        if self.gate is not None:
            self.gate.wait(5)
        if self.exc is not None:
            raise self.exc
        return list(self.faces)


class FakeCamera:
    def __init__(self, log=None):
        self.grabs = 0
        self.released = False
        self.log = log if log is not None else []

    def grab(self):
        self.grabs += 1
        self.log.append("grab")
        return np.zeros((48, 64, 3), dtype=np.uint8)

    def release(self):
        self.released = True


def profile_row(db_path, uid):
    with sqlite3.connect(db_path) as conn:
        return conn.execute(
            "SELECT name, gender, contact_number, email FROM profiles WHERE uid=?", (uid,)
        ).fetchone()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        USER_DB_PATH=str(tmp_path / "users.db"),
        DETECT_TIMEOUT=5,
        AUTH_TIMEOUT=5,
        INIT_TIMEOUT=0,
        MOOD_SEED=7,
    )


@pytest.fixture
def fake_detector():
    return FakeDetector()


@pytest.fixture
def fake_camera():
    return FakeCamera()


@pytest.fixture
def gate():
    ev = threading.Event()
    yield ev
    ev.set()
