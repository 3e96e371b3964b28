import types

import cv2
import numpy as np

import scripts.cli as cli
from conftest import FakeDetector
from moodverse.config import Settings


def test_cli_run_with_image(monkeypatch, tmp_path):
    img = tmp_path / "face.png"
    cv2.imwrite(str(img), np.zeros((48, 64, 3), dtype=np.uint8))
    out = tmp_path / "annotated.png"

    det = FakeDetector()
    det.wait = lambda timeout=None: True
    monkeypatch.setattr(cli, "FaceDetector", lambda s: det)

    args = types.SimpleNamespace(image=str(img), category="activities", annotate=str(out))
    result = cli.run(args, Settings(MOOD_SEED=1, INIT_TIMEOUT=0))

    assert result["capture"]["state"] == "recommending"
    assert len(result["recommendations"]) == 2
    assert result["annotated"] == str(out) and out.exists()
    assert det.closed


def test_cli_reports_no_face(monkeypatch, tmp_path):
    img = tmp_path / "empty.png"
    cv2.imwrite(str(img), np.zeros((48, 64, 3), dtype=np.uint8))

    det = FakeDetector(faces=[])
    det.wait = lambda timeout=None: True
    monkeypatch.setattr(cli, "FaceDetector", lambda s: det)

    args = types.SimpleNamespace(image=str(img), category="music", annotate=None)
    result = cli.run(args, Settings(INIT_TIMEOUT=0))
    assert result["capture"]["error"].startswith("No face detected")
    assert result["recommendations"] == []
