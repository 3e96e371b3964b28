"""Snapshot annotation helpers.

- draw_overlays: draw face rectangles plus the assigned mood, or a NO_FACE banner
- annotate_snapshot: write an annotated copy of a captured frame to disk
"""
from __future__ import annotations
import cv2
import numpy as np
from typing import List, Optional, Tuple

from moodverse.models import FaceRegion


def draw_overlays(frame: np.ndarray,
                  faces: List[FaceRegion] | None = None,
                  mood: Optional[str] = None,
                  color: Tuple[int, int, int] = (180, 60, 150)) -> np.ndarray:
    """Draw bounding boxes and the mood label on a copy of the frame.

    Args:
        frame: BGR image
        faces: detected face regions
        mood: mood label drawn above the largest face
        color: BGR color for rectangles

    Returns:
        Annotated copy of the frame
    """
    out = frame.copy()
    h, w = out.shape[:2]
    faces = faces or []

    if not faces:
        cv2.putText(out, "NO_FACE", (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 1.0, (0, 0, 255), 2, cv2.LINE_AA)
        return out

    primary = max(faces, key=lambda f: f.w * f.h)
    for face in faces:
        # clamp to image bounds
        x = max(0, min(face.x, w - 1)); y = max(0, min(face.y, h - 1))
        fw = max(0, min(face.w, w - x)); fh = max(0, min(face.h, h - y))
        cv2.rectangle(out, (x, y), (x + fw, y + fh), color, 2)
        if mood and face is primary:
            cv2.putText(out, mood, (x, max(0, y - 10)), cv2.FONT_HERSHEY_SIMPLEX, 0.6, color, 2, cv2.LINE_AA)

    return out


def annotate_snapshot(frame: np.ndarray,
                      output_path: str,
                      faces: List[FaceRegion] | None = None,
                      mood: Optional[str] = None) -> str:
    """Write the annotated frame to `output_path` and return the path."""
    annotated = draw_overlays(frame, faces, mood)
    if not cv2.imwrite(output_path, annotated):
        raise RuntimeError(f"Could not write image: {output_path}")
    return output_path
