# ============================================================
# FILE: sampling/results.py
# ============================================================

from dataclasses import dataclass
from enum import Enum


class ActivityType(Enum):
    # Codes understood by the host UI
    CLEAR_UI = 0
    PREVIEW_UPDATE = 1
    CAPTURE_FLUSH = 2


@dataclass(frozen=True)
class ClassificationResult:
    activity: ActivityType
    jpeg_bytes: bytes

    def __repr__(self):
        return f"ClassificationResult(activity={self.activity.name}, bytes={len(self.jpeg_bytes)})"
