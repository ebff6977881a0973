import numpy as np
import pytest

from capture.motion_detector import MotionDetector
from conftest import block_frame


def static_frame():
    return np.full((240, 320, 3), 60, dtype=np.uint8)


def warm_up(detector, frames=5):
    return [detector.detect(static_frame()) for _ in range(frames)]


def test_first_frame_only_seeds_the_model():
    detector = MotionDetector()
    # A brand new MOG2 model marks every pixel of its first frame as foreground
    assert detector.detect(block_frame(100, 80)) is False
    assert detector.frames_seen == 1


def test_static_scene_is_not_significant():
    detector = MotionDetector()
    assert warm_up(detector, 10) == [False] * 10


def test_moving_block_is_significant_after_warm_up():
    detector = MotionDetector()
    warm_up(detector)

    verdicts = [detector.detect(block_frame(20 + step * 40, 80)) for step in range(5)]

    assert verdicts == [True] * 5


def test_small_blob_below_area_threshold_is_ignored():
    detector = MotionDetector()
    warm_up(detector)

    # 30x30 blob has a contour area well under 1200
    assert detector.detect(block_frame(100, 80, size=30)) is False


def test_model_is_updated_even_when_verdict_is_false():
    detector = MotionDetector()
    warm_up(detector, 3)
    detector.detect(block_frame(100, 80, size=30))
    assert detector.frames_seen == 4


def test_reset_restarts_warm_up():
    detector = MotionDetector()
    warm_up(detector)
    detector.reset()

    assert detector.frames_seen == 0
    assert detector.detect(block_frame(100, 80)) is False


def test_none_frame_is_not_motion():
    assert MotionDetector().detect(None) is False


@pytest.mark.parametrize("blur_size", [1, 4])
def test_invalid_blur_size_is_rejected(blur_size):
    with pytest.raises(ValueError):
        MotionDetector(blur_size=blur_size)
