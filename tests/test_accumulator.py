import numpy as np
import pytest

from conftest import make_frame
from sampling.accumulator import FrameAccumulator
from utils.errors import EmptyBuffer, FrameSizeMismatch


def test_count_never_exceeds_capacity():
    accumulator = FrameAccumulator()
    for i in range(25):
        accumulator.retain(make_frame(value=i))
        assert accumulator.count() <= 10
    assert accumulator.count() == 10


def test_oldest_frame_is_evicted_first():
    accumulator = FrameAccumulator()
    for i in range(11):
        accumulator.retain(make_frame(value=i))

    frames = accumulator.frames()
    assert frames[0][0, 0, 0] == 1
    assert frames[-1][0, 0, 0] == 10


def test_retained_frames_are_independent_copies():
    accumulator = FrameAccumulator()
    frame = make_frame(value=7)
    accumulator.retain(frame)
    frame[:] = 255

    assert accumulator.frames()[0][0, 0, 0] == 7


def test_flatten_sums_widths_and_keeps_height():
    accumulator = FrameAccumulator()
    for width in (10, 20, 35):
        accumulator.retain(make_frame(width=width, height=12))

    flat = accumulator.flatten_horizontally()

    assert flat.shape == (12, 65, 3)


def test_flatten_preserves_temporal_order():
    accumulator = FrameAccumulator()
    for value in (10, 20, 30):
        accumulator.retain(make_frame(width=4, height=2, value=value))

    flat = accumulator.flatten_horizontally()

    assert list(flat[0, ::4, 0]) == [10, 20, 30]


def test_flatten_single_frame_returns_a_copy():
    accumulator = FrameAccumulator()
    accumulator.retain(make_frame(value=3))
    flat = accumulator.flatten_horizontally()
    flat[:] = 0
    assert accumulator.frames()[0][0, 0, 0] == 3


def test_flatten_empty_buffer_raises():
    with pytest.raises(EmptyBuffer):
        FrameAccumulator().flatten_horizontally()


def test_clear_is_idempotent():
    accumulator = FrameAccumulator()
    accumulator.retain(make_frame())
    accumulator.clear()
    accumulator.clear()
    assert accumulator.count() == 0
    assert len(accumulator) == 0


def test_mismatched_height_is_rejected_without_mutation():
    accumulator = FrameAccumulator()
    accumulator.retain(make_frame(height=48))

    with pytest.raises(FrameSizeMismatch) as excinfo:
        accumulator.retain(make_frame(height=40))

    assert excinfo.value.expected == (48, 64, 3)
    assert accumulator.count() == 1


def test_mismatched_channels_are_rejected():
    accumulator = FrameAccumulator()
    accumulator.retain(make_frame())
    with pytest.raises(FrameSizeMismatch):
        accumulator.retain(np.zeros((48, 64), dtype=np.uint8))


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        FrameAccumulator(capacity=0)


def test_frames_snapshot_cannot_modify_retained_frames():
    accumulator = FrameAccumulator()
    accumulator.retain(make_frame(value=7))

    accumulator.frames()[0][:] = 0

    assert accumulator.flatten_horizontally()[0, 0, 0] == 7
