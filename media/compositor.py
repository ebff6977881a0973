# ============================================================
# FILE: media/compositor.py
# ============================================================

import cv2
import numpy as np
from typing import Optional, Sequence
import logging

from utils.errors import EmptyBuffer, EncodeError

logger = logging.getLogger(__name__)

class Compositor:
    def __init__(self, quality: int = 95):
        self.quality = self._check_quality(quality)
    
    @staticmethod
    def _check_quality(quality: int) -> int:
        if not 0 <= quality <= 100:
            raise ValueError(f"JPEG quality must be between 0 and 100, got {quality}")
        return int(quality)
    
    def encode(self, frame: Optional[np.ndarray], quality: Optional[int] = None) -> bytes:
        if frame is None or frame.ndim < 2 or frame.shape[0] == 0 or frame.shape[1] == 0:
            shape = None if frame is None else frame.shape
            raise EncodeError(f"Cannot encode degenerate frame: {shape}", shape=shape)
        
        quality = self.quality if quality is None else self._check_quality(quality)
        ok, buf = cv2.imencode('.jpg', frame, [cv2.IMWRITE_JPEG_QUALITY, quality])
        if not ok:
            raise EncodeError(f"JPEG encoder rejected frame {frame.shape}", shape=frame.shape)
        
        logger.debug(f"Encoded {frame.shape[1]}x{frame.shape[0]} frame to {buf.size} bytes")
        return buf.tobytes()
    
    @staticmethod
    def concatenate(frames: Sequence[np.ndarray]) -> np.ndarray:
        if len(frames) == 0:
            raise EmptyBuffer("No frames to concatenate.")
        if len(frames) == 1:
            return frames[0].copy()
        return cv2.hconcat(list(frames))
    
    def compose(self, frames: Sequence[np.ndarray], quality: Optional[int] = None) -> bytes:
        return self.encode(self.concatenate(frames), quality)
