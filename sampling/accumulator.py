# ============================================================
# FILE: sampling/accumulator.py
# ============================================================

import logging
from typing import List

import numpy as np

from media.compositor import Compositor
from utils.errors import FrameSizeMismatch

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 10


class FrameAccumulator:
    """Bounded, ordered buffer of retained frames.

    Frames are copied on entry so the caller may reuse or drop its own
    buffer. When full, the oldest frame is evicted before appending.
    All retained frames share one height and channel layout; widths may
    differ.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("Capacity must be at least 1")
        self._capacity = capacity
        self._frames: List[np.ndarray] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    def _check_compatible(self, frame: np.ndarray) -> None:
        if not self._frames:
            return
        reference = self._frames[0]
        if frame.shape[0] != reference.shape[0] or frame.shape[2:] != reference.shape[2:]:
            raise FrameSizeMismatch(
                f"Frame {frame.shape} cannot be stacked with retained frames {reference.shape}",
                expected=reference.shape,
                actual=frame.shape
            )

    def retain(self, frame: np.ndarray) -> None:
        self._check_compatible(frame)

        if len(self._frames) >= self._capacity:
            self._frames.pop(0)
            logger.debug(f"Removed oldest frame to maintain max size of {self._capacity}.")

        self._frames.append(frame.copy())
        logger.debug(f"Added new frame. Total frames: {len(self._frames)}")

    def flatten_horizontally(self) -> np.ndarray:
        return Compositor.concatenate(self._frames)

    def frames(self) -> List[np.ndarray]:
        return [frame.copy() for frame in self._frames]

    def clear(self) -> None:
        self._frames.clear()

    def count(self) -> int:
        return len(self._frames)

    def __len__(self) -> int:
        return len(self._frames)
