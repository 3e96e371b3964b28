from moodverse.config import Settings

def test_Settings():
    s = Settings()
    assert s.CAMERA_WIDTH > 0 and s.CAMERA_HEIGHT > 0
    # override via env-like behavior (construct new instance)
    s2 = Settings(CAMERA_WIDTH=1280, DETECT_TIMEOUT=3.5)
    assert s2.CAMERA_WIDTH == 1280
    assert s2.DETECT_TIMEOUT == 3.5

def test_Settings_normalizes_choices():
    s = Settings(MOOD_CLASSIFIER="  DeepFace ", PROFILE_BACKEND="mongo", DETECTOR_BACKEND=" Haar", LOG_LEVEL="debug")
    assert s.MOOD_CLASSIFIER == "deepface"
    assert s.PROFILE_BACKEND == "sqlite"
    assert s.DETECTOR_BACKEND == "haar"
    assert s.LOG_LEVEL == "DEBUG"
    assert Settings(MOOD_CLASSIFIER="   ").MOOD_CLASSIFIER == "random"
