"""
CLI: capture one frame (camera or image file), assign a mood, print JSON.
"""
from __future__ import annotations
import argparse, asyncio, json

import cv2

from moodverse.camera import Camera, StillFrame
from moodverse.capture import MoodAnalyzer
from moodverse.catalog import categories
from moodverse.classifier import make_classifier
from moodverse.config import Settings
from moodverse.detector import FaceDetector
from moodverse.visual import annotate_snapshot


class _Recorder:
    """Frame source that remembers what it handed out, for annotation."""

    def __init__(self, source):
        self.source = source
        self.frame = None

    def grab(self):
        self.frame = self.source.grab()
        return self.frame


def run(args, settings: Settings) -> dict:
    detector = FaceDetector(settings)
    analyzer = MoodAnalyzer(detector, make_classifier(settings), settings, camera=Camera(settings))
    try:
        analyzer.start()
        detector.wait(settings.INIT_TIMEOUT or None)

        if args.image:
            frame = cv2.imread(args.image)
            if frame is None:
                raise SystemExit(f"Could not read image: {args.image}")
            source = _Recorder(StillFrame(frame))
        else:
            source = _Recorder(analyzer.camera)

        snap = asyncio.run(analyzer.capture(source))
        result = {
            "capture": snap.model_dump(mode="json"),
            "category": args.category,
            "recommendations": [c.model_dump() for c in analyzer.recommendations(args.category)],
        }
        if args.annotate and source.frame is not None:
            mood = analyzer.mood.value if analyzer.mood else None
            result["annotated"] = annotate_snapshot(source.frame, args.annotate, analyzer.faces, mood)
        return result
    finally:
        analyzer.close()


def main():
    p = argparse.ArgumentParser()
    p.add_argument("--image", help="Analyze this image instead of the camera")
    p.add_argument("--category", default="music", choices=categories(), help="Recommendation category")
    p.add_argument("--annotate", help="Write an annotated copy of the frame to this path")
    args = p.parse_args()

    result = run(args, Settings())
    print(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
