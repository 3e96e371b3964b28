"""
Face detector adapter (DeepFace detector backends, or a bare OpenCV Haar cascade).

Initialization runs once, in the background; `detect` must not be called
before `status == "ready"`. A failed initialization is final for the
lifetime of this adapter.
"""
from __future__ import annotations
import logging
import threading
from typing import List, Optional

import cv2
import numpy as np

from moodverse.config import Settings
from moodverse.models import FaceRegion

logger = logging.getLogger(__name__)

LOADING, READY, FAILED = "loading", "ready", "failed"


class DetectorError(RuntimeError):
    """Detector initialization or inference failure."""


class FaceDetector:
    def __init__(self, settings: Settings):
        self.backend = settings.DETECTOR_BACKEND
        self.min_confidence = float(settings.MIN_FACE_CONFIDENCE)
        self.min_size = int(settings.MIN_FACE_SIZE)
        self.init_timeout = float(settings.INIT_TIMEOUT)
        self.status = LOADING
        self.error: Optional[str] = None
        self._engine = None
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._timer: Optional[threading.Timer] = None
        self._done = threading.Event()
        self._initializing = False

    @property
    def ready(self) -> bool:
        return self.status == READY

    # ---- lifecycle ----
    def start(self) -> None:
        """Kick off background initialization (no-op if already started)."""
        with self._lock:
            if self._thread is not None or self._done.is_set():
                return
            self._thread = threading.Thread(target=self.initialize, daemon=True)
            self._thread.start()
            if self.init_timeout > 0:
                self._timer = threading.Timer(self.init_timeout, self._expire)
                self._timer.daemon = True
                self._timer.start()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until initialization has settled; True when ready."""
        self._done.wait(timeout)
        return self.ready

    def initialize(self) -> None:
        """Load the backend once; concurrent and later calls block on the same outcome."""
        with self._lock:
            owner = not self._initializing and not self._done.is_set()
            self._initializing = True
        if not owner:
            self._done.wait()
            return
        logger.info(f"[detector] loading backend={self.backend}")
        try:
            engine = self._load()
        except Exception as e:
            logger.exception("[detector] initialization failed")
            self._settle(FAILED, error=str(e))
            return
        self._settle(READY, engine=engine)

    def _load(self):
        if self.backend == "haar":
            cascade = cv2.CascadeClassifier(cv2.data.haarcascades + "haarcascade_frontalface_default.xml")
            if cascade.empty():
                raise DetectorError("Failed to load Haar cascade for face detection")
            return cascade

        # Lazy import so tests can monkeypatch sys.modules['deepface']
        from deepface import DeepFace

        # Warm-up builds the detector weights before the first real frame
        DeepFace.extract_faces(
            img_path=np.zeros((64, 64, 3), dtype=np.uint8),
            detector_backend=self.backend,
            enforce_detection=False,
        )
        return DeepFace

    def _settle(self, status: str, engine=None, error: Optional[str] = None) -> None:
        with self._lock:
            if self._done.is_set():
                # Timed out earlier; a late load does not revive the adapter
                return
            self.status = status
            self.error = error
            self._engine = engine
            self._done.set()
            if self._timer is not None:
                self._timer.cancel()
        logger.info(f"[detector] status={status}")

    def _expire(self) -> None:
        logger.error(f"[detector] initialization exceeded {self.init_timeout}s")
        self._settle(FAILED, error="initialization timed out")

    def close(self) -> None:
        with self._lock:
            self._engine = None
            if self._timer is not None:
                self._timer.cancel()
            if self.status != FAILED:
                self.error = "closed"
            self.status = FAILED
            self._done.set()
        logger.debug("[detector] closed")

    # ---- inference ----
    def detect(self, frame: np.ndarray) -> List[FaceRegion]:
        """Detect faces in one frame. Zero faces is a valid result, not an error."""
        engine = self._engine
        if self.status != READY or engine is None:
            raise DetectorError("Face detector is not ready")
        if frame is None or getattr(frame, "size", 0) == 0:
            raise DetectorError("Empty frame")

        try:
            if self.backend == "haar":
                faces = self._detect_haar(engine, frame)
            else:
                faces = self._detect_deepface(engine, frame)
        except DetectorError:
            raise
        except Exception as e:
            raise DetectorError(f"Face detection failed: {e}") from e
        logger.debug(f"[detector] faces_detected={len(faces)}")
        return faces

    def _valid(self, face: FaceRegion, frame_w: int, frame_h: int) -> bool:
        if face.w < self.min_size or face.h < self.min_size:
            return False
        if face.confidence < self.min_confidence:
            return False
        # DeepFace returns the whole frame when nothing is found
        if face.x == 0 and face.y == 0 and face.w >= frame_w and face.h >= frame_h:
            return False
        return True

    def _detect_deepface(self, engine, frame: np.ndarray) -> List[FaceRegion]:
        H, W = frame.shape[:2]
        dets = engine.extract_faces(
            img_path=frame,
            detector_backend=self.backend,
            enforce_detection=False,
            align=True,
        )
        faces: List[FaceRegion] = []
        for d in dets or []:
            fa = (d or {}).get("facial_area") or {}
            conf = d.get("confidence", 1.0)
            try:
                conf = float(conf)
            except (TypeError, ValueError):
                conf = 1.0
            face = FaceRegion(
                x=int(fa.get("x", 0)), y=int(fa.get("y", 0)),
                w=int(fa.get("w", 0)), h=int(fa.get("h", 0)),
                confidence=conf,
            )
            if self._valid(face, W, H):
                faces.append(face)
        return faces

    def _detect_haar(self, cascade, frame: np.ndarray) -> List[FaceRegion]:
        gray = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY) if frame.ndim == 3 else frame
        H, W = gray.shape[:2]
        boxes = cascade.detectMultiScale(gray, scaleFactor=1.1, minNeighbors=5,
                                         minSize=(self.min_size, self.min_size))
        faces = [FaceRegion(x=int(x), y=int(y), w=int(w), h=int(h)) for (x, y, w, h) in boxes]
        return [f for f in faces if self._valid(f, W, H)]
