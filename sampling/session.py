# ============================================================
# FILE: sampling/session.py
# ============================================================

import logging
import threading
import time
from typing import Callable, Optional

import numpy as np

from capture.frames import RawFrame
from capture.motion_detector import MotionDetector
from capture.normalizer import to_pixel_buffer
from media.brightness import is_mostly_dark
from media.compositor import Compositor
from sampling.accumulator import FrameAccumulator
from sampling.activity import ActivityPolicy, ActivityState, Decision, classify
from sampling.results import ActivityType, ClassificationResult

logger = logging.getLogger(__name__)


class SamplingSession:
    """Motion-gated frame sampler for one camera session.

    Owns the background model, the retained frames and the activity state.
    Calls are serialized with a lock; feed each session from one stream.
    """

    def __init__(self, detector: Optional[MotionDetector] = None,
                 accumulator: Optional[FrameAccumulator] = None,
                 compositor: Optional[Compositor] = None,
                 policy: Optional[ActivityPolicy] = None,
                 dark_threshold: Optional[float] = None,
                 clock: Callable[[], float] = time.time):
        self.detector = detector if detector is not None else MotionDetector()
        self.accumulator = accumulator if accumulator is not None else FrameAccumulator()
        self.compositor = compositor if compositor is not None else Compositor()
        self.policy = policy if policy is not None else ActivityPolicy()
        if dark_threshold is not None and not 0.0 <= dark_threshold <= 1.0:
            raise ValueError(f"Dark threshold must be between 0 and 1, got {dark_threshold}")
        self.dark_threshold = dark_threshold
        self.clock = clock
        self._lock = threading.Lock()
        self._state = ActivityState(frame_counter=0, last_activity=clock())

    @property
    def state(self) -> ActivityState:
        return self._state

    @property
    def frame_counter(self) -> int:
        return self._state.frame_counter

    @property
    def last_activity(self) -> float:
        return self._state.last_activity

    @property
    def retained_count(self) -> int:
        return self.accumulator.count()

    def reset_all(self, reset_background: bool = False):
        with self._lock:
            self.accumulator.clear()
            self._state = ActivityState(frame_counter=0, last_activity=self.clock())
            if reset_background:
                self.detector.reset()
        logger.info("Sampling session reset")

    def process(self, raw: RawFrame) -> Optional[ClassificationResult]:
        return self.process_frame(to_pixel_buffer(raw))

    def process_frame(self, frame: np.ndarray) -> Optional[ClassificationResult]:
        with self._lock:
            significant = self.detector.detect(frame)
            now = self.clock()
            next_state, decision = classify(
                self._state, significant, now, self.accumulator.count(), self.policy
            )
            result = self._execute(decision, frame)
            self._state = next_state
            return result

    def _execute(self, decision: Decision, frame: np.ndarray) -> Optional[ClassificationResult]:
        if decision == Decision.PREVIEW:
            self.accumulator.retain(frame)
            jpeg_bytes = self.compositor.encode(self.accumulator.flatten_horizontally())
            logger.debug(f"Updated preview with {self.accumulator.count()} frames")
            return ClassificationResult(ActivityType.PREVIEW_UPDATE, jpeg_bytes)

        if decision == Decision.FLUSH:
            count = self.accumulator.count()
            logger.info(f"Preparing concatenated image for analysis with {count} frames")
            jpeg_bytes = self.compositor.encode(self.accumulator.flatten_horizontally())
            self.accumulator.clear()
            if self.dark_threshold is not None and is_mostly_dark(jpeg_bytes, self.dark_threshold):
                logger.info("Composite too dark, clearing instead of flushing")
                return ClassificationResult(ActivityType.CLEAR_UI, self.compositor.encode(frame))
            return ClassificationResult(ActivityType.CAPTURE_FLUSH, jpeg_bytes)

        if decision == Decision.CLEAR:
            jpeg_bytes = self.compositor.encode(frame)
            self.accumulator.clear()
            return ClassificationResult(ActivityType.CLEAR_UI, jpeg_bytes)

        return None
