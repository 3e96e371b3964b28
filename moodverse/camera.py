"""
Camera device and still-frame sources.

A frame source exposes `grab()`, returning exactly one BGR frame.
"""
from __future__ import annotations
import logging
from typing import Optional

import cv2
import numpy as np

from moodverse.config import Settings

logger = logging.getLogger(__name__)


class CameraError(RuntimeError):
    """Camera could not be opened, or a frame could not be grabbed/decoded."""


def decode_image(data: bytes) -> np.ndarray:
    """Decode an encoded still (JPEG/PNG/...) into a BGR frame."""
    if not data:
        raise CameraError("Empty image payload")
    buf = np.frombuffer(data, dtype=np.uint8)
    frame = cv2.imdecode(buf, cv2.IMREAD_COLOR)
    if frame is None or frame.size == 0:
        raise CameraError("Could not decode image")
    return frame


class StillFrame:
    """Frame source backed by an already-captured snapshot (e.g. a browser upload)."""

    def __init__(self, data: bytes | np.ndarray):
        self._data = data

    def grab(self) -> np.ndarray:
        if isinstance(self._data, np.ndarray):
            return self._data.copy()
        return decode_image(self._data)


class Camera:
    """Live camera opened lazily on first grab; front-facing preview is mirrored."""

    def __init__(self, settings: Settings):
        self.index = settings.CAMERA_INDEX
        self.width = settings.CAMERA_WIDTH
        self.height = settings.CAMERA_HEIGHT
        self.mirrored = settings.CAMERA_MIRRORED
        self._cap: Optional[cv2.VideoCapture] = None

    @property
    def is_open(self) -> bool:
        return self._cap is not None

    def open(self) -> None:
        if self._cap is not None:
            return
        cap = cv2.VideoCapture(self.index)
        if not cap.isOpened():
            raise CameraError(f"Could not open camera index {self.index}")
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        logger.debug(f"[camera] opened index={self.index} requested={self.width}x{self.height}")
        self._cap = cap

    def grab(self) -> np.ndarray:
        self.open()
        ok, frame = self._cap.read()
        if not ok or frame is None:
            raise CameraError("Failed to capture image from webcam")
        if self.mirrored:
            frame = cv2.flip(frame, 1)
        return frame

    def release(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None
            logger.debug(f"[camera] released index={self.index}")
