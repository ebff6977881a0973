# ============================================================
# FILE: capture/normalizer.py
# ============================================================

import logging

import cv2
import numpy as np

from capture.frames import PixelFormat, Plane, RawFrame
from media.compositor import Compositor
from utils.errors import InvalidInput, UnsupportedFormat

logger = logging.getLogger(__name__)

DEFAULT_JPEG_QUALITY = 95


def resolve_format(frame: RawFrame) -> PixelFormat:
    fmt = frame.format
    if isinstance(fmt, PixelFormat):
        return fmt
    try:
        return PixelFormat(fmt)
    except ValueError:
        raise UnsupportedFormat(f"Unsupported image format: {fmt}", pixel_format=fmt)


def _sample_plane(plane: Plane, width: int, height: int, name: str) -> np.ndarray:
    """Gather a width x height grid from a strided plane buffer."""
    data = plane.as_array()
    rows = np.arange(height, dtype=np.int64) * plane.row_stride
    cols = np.arange(width, dtype=np.int64) * plane.pixel_stride
    index = rows[:, None] + cols[None, :]
    if index.size and index[-1, -1] >= data.size:
        raise InvalidInput(
            f"{name} plane too short: {data.size} bytes for {width}x{height} "
            f"(row_stride={plane.row_stride}, pixel_stride={plane.pixel_stride})"
        )
    return data[index]


def _jpeg_payload(frame: RawFrame) -> bytes:
    if not frame.planes:
        raise InvalidInput("JPEG frame has no payload plane")
    return frame.planes[0].as_array().tobytes()


def _nv21_array(frame: RawFrame) -> np.ndarray:
    width, height = frame.width, frame.height
    if width <= 0 or height <= 0 or width % 2 or height % 2:
        raise InvalidInput(f"Planar frame needs positive even dimensions, got {width}x{height}")
    if len(frame.planes) != 3:
        raise InvalidInput(f"Planar frame needs 3 planes, got {len(frame.planes)}")

    y_plane, u_plane, v_plane = frame.planes
    luma = _sample_plane(y_plane, width, height, "Y")

    # U and V share strides on YUV_420_888; NV21 interleaves them as V,U
    uv_width, uv_height = width // 2, height // 2
    v = _sample_plane(v_plane, uv_width, uv_height, "V")
    u = _sample_plane(u_plane, uv_width, uv_height, "U")
    chroma = np.empty((uv_height, uv_width * 2), dtype=np.uint8)
    chroma[:, 0::2] = v
    chroma[:, 1::2] = u

    return np.concatenate((luma.reshape(-1), chroma.reshape(-1)))


def to_packed_bytes(frame: RawFrame) -> bytes:
    """Return the frame as one contiguous byte stream.

    JPEG payloads pass through unchanged; planar frames are packed as NV21
    (full size Y followed by quarter size interleaved V/U).
    """
    fmt = resolve_format(frame)
    if fmt == PixelFormat.JPEG:
        return _jpeg_payload(frame)
    return _nv21_array(frame).tobytes()


def to_pixel_buffer(frame: RawFrame) -> np.ndarray:
    """Convert a raw frame into an interleaved BGR pixel buffer."""
    fmt = resolve_format(frame)
    if fmt == PixelFormat.JPEG:
        payload = np.frombuffer(_jpeg_payload(frame), dtype=np.uint8)
        image = cv2.imdecode(payload, cv2.IMREAD_COLOR) if payload.size else None
        if image is None:
            logger.warning(f"Failed to decode JPEG payload ({payload.size} bytes)")
            raise InvalidInput("Invalid JPEG image")
        return image

    nv21 = _nv21_array(frame).reshape(frame.height * 3 // 2, frame.width)
    return cv2.cvtColor(nv21, cv2.COLOR_YUV2BGR_NV21)


def to_jpeg_bytes(frame: RawFrame, quality: int = DEFAULT_JPEG_QUALITY) -> bytes:
    fmt = resolve_format(frame)
    if fmt == PixelFormat.JPEG:
        return to_packed_bytes(frame)

    return Compositor(quality).encode(to_pixel_buffer(frame))
