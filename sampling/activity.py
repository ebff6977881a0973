# ============================================================
# FILE: sampling/activity.py
# ============================================================

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple


class Decision(Enum):
    NONE = "none"
    PREVIEW = "preview"
    FLUSH = "flush"
    CLEAR = "clear"


@dataclass(frozen=True)
class ActivityPolicy:
    capture_interval: int = 5
    inactivity_timeout: float = 2.0
    min_flush_frames: int = 4

    def __post_init__(self):
        if self.capture_interval < 1:
            raise ValueError("Capture interval must be at least 1")
        if self.inactivity_timeout < 0:
            raise ValueError("Inactivity timeout must be non-negative")
        if self.min_flush_frames < 1:
            raise ValueError("Minimum flush frames must be at least 1")


@dataclass(frozen=True)
class ActivityState:
    frame_counter: int = 0
    last_activity: float = 0.0


def classify(state: ActivityState, significant: bool, now: float, retained_count: int,
             policy: ActivityPolicy = ActivityPolicy()) -> Tuple[ActivityState, Decision]:
    """Decide what to emit for one processed frame.

    Args:
        state: Counter and last activity time before this frame
        significant: Motion verdict for this frame
        now: Current time in seconds, same clock as ``state.last_activity``
        retained_count: Frames currently held by the accumulator
        policy: Cadence, timeout and flush thresholds

    Returns:
        The next state and the action the caller must carry out.

    The frame counter only advances when nothing is emitted, so the capture
    cadence counts idle frames rather than all frames.
    """
    if significant and state.frame_counter % policy.capture_interval == 0:
        return replace(state, last_activity=now), Decision.PREVIEW

    if not significant and now - state.last_activity > policy.inactivity_timeout:
        if retained_count >= policy.min_flush_frames:
            return replace(state, last_activity=now), Decision.FLUSH
        return replace(state, last_activity=now), Decision.CLEAR

    return replace(state, frame_counter=state.frame_counter + 1), Decision.NONE
