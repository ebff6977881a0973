# ============================================================
# FILE: capture/frames.py
# ============================================================

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

import numpy as np

Buffer = Union[bytes, bytearray, memoryview, np.ndarray]


class PixelFormat(Enum):
    # Values match the Android ImageFormat constants reported by the sensor
    JPEG = 0x100
    YUV_420_888 = 0x23


@dataclass(frozen=True)
class Plane:
    buffer: Buffer
    row_stride: int
    pixel_stride: int = 1

    def as_array(self) -> np.ndarray:
        if isinstance(self.buffer, np.ndarray):
            return np.ascontiguousarray(self.buffer, dtype=np.uint8).reshape(-1)
        return np.frombuffer(self.buffer, dtype=np.uint8)


@dataclass(frozen=True)
class RawFrame:
    """A single sensor frame as delivered by the capture pipeline.

    JPEG frames carry the compressed payload in ``planes[0]``. Planar
    YUV_420_888 frames carry Y, U and V planes in that order, each with its
    own row and pixel stride.
    """
    width: int
    height: int
    format: Union[PixelFormat, int]
    planes: Tuple[Plane, ...]

    @classmethod
    def from_jpeg(cls, payload: bytes, width: int = 0, height: int = 0) -> 'RawFrame':
        return cls(width, height, PixelFormat.JPEG, (Plane(payload, row_stride=0, pixel_stride=0),))

    @classmethod
    def from_i420(cls, data: np.ndarray, width: int, height: int) -> 'RawFrame':
        """Split a tightly packed I420 buffer (as produced by cv2) into planes."""
        flat = np.ascontiguousarray(data).reshape(-1)
        y_size = width * height
        c_size = (width // 2) * (height // 2)
        y = flat[:y_size].tobytes()
        u = flat[y_size:y_size + c_size].tobytes()
        v = flat[y_size + c_size:y_size + 2 * c_size].tobytes()
        return cls(width, height, PixelFormat.YUV_420_888, (
            Plane(y, row_stride=width, pixel_stride=1),
            Plane(u, row_stride=width // 2, pixel_stride=1),
            Plane(v, row_stride=width // 2, pixel_stride=1),
        ))
