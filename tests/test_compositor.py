import cv2
import numpy as np
import pytest

from conftest import make_frame
from media.compositor import Compositor
from utils.errors import EmptyBuffer, EncodeError


def test_encode_produces_decodable_jpeg():
    jpeg = Compositor().encode(make_frame(32, 16, 128))

    image = cv2.imdecode(np.frombuffer(jpeg, dtype=np.uint8), cv2.IMREAD_COLOR)
    assert jpeg[:2] == b'\xff\xd8'
    assert image.shape == (16, 32, 3)


def test_lower_quality_gives_smaller_payload():
    noise = np.random.default_rng(0).integers(0, 256, (64, 64, 3), dtype=np.uint8)
    compositor = Compositor()
    assert len(compositor.encode(noise, quality=20)) < len(compositor.encode(noise, quality=95))


@pytest.mark.parametrize("frame", [
    None,
    np.zeros((0, 10, 3), dtype=np.uint8),
    np.zeros((10, 0, 3), dtype=np.uint8),
])
def test_degenerate_frames_raise_encode_error(frame):
    with pytest.raises(EncodeError):
        Compositor().encode(frame)


@pytest.mark.parametrize("quality", [-1, 101])
def test_quality_out_of_range(quality):
    with pytest.raises(ValueError):
        Compositor(quality)
    with pytest.raises(ValueError):
        Compositor().encode(make_frame(), quality=quality)


def test_compose_concatenates_horizontally():
    frames = [make_frame(10, 8), make_frame(20, 8), make_frame(30, 8)]
    jpeg = Compositor().compose(frames)
    image = cv2.imdecode(np.frombuffer(jpeg, dtype=np.uint8), cv2.IMREAD_COLOR)
    assert image.shape == (8, 60, 3)


def test_compose_empty_raises():
    with pytest.raises(EmptyBuffer):
        Compositor().compose([])
