"""Shared fixtures for the motion sampler test suite."""

import sys
from pathlib import Path

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class ScriptedDetector:
    """Detector stand-in that replays a fixed sequence of verdicts."""

    def __init__(self, verdicts=()):
        self.verdicts = list(verdicts)
        self.calls = 0
        self.resets = 0

    def detect(self, frame):
        self.calls += 1
        if self.verdicts:
            return self.verdicts.pop(0)
        return False

    def reset(self):
        self.resets += 1


def make_frame(width: int = 64, height: int = 48, value: int = 0) -> np.ndarray:
    return np.full((height, width, 3), value, dtype=np.uint8)


def block_frame(x: int, y: int, size: int = 60, width: int = 320, height: int = 240,
                background: int = 60, foreground: int = 230) -> np.ndarray:
    frame = np.full((height, width, 3), background, dtype=np.uint8)
    frame[y:y + size, x:x + size] = foreground
    return frame


@pytest.fixture
def clock():
    return FakeClock()
