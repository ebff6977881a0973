# ============================================================
# FILE: capture/camera.py
# ============================================================

import cv2
import numpy as np
from typing import Optional, Tuple
import logging

from capture.frames import PixelFormat, RawFrame

logger = logging.getLogger(__name__)

class Camera:
    def __init__(self, device_id: int = 0, resolution: Tuple[int, int] = (640, 480),
                 frame_format: PixelFormat = PixelFormat.YUV_420_888):
        self.device_id = device_id
        self.resolution = resolution
        self.frame_format = frame_format
        self.cap = None
        self._initialize()

    def _initialize(self):
        self.cap = cv2.VideoCapture(self.device_id)
        if not self.cap.isOpened():
            raise RuntimeError(f"Failed to open camera {self.device_id}")

        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.resolution[0])
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.resolution[1])
        logger.info(f"Camera initialized: {self.resolution[0]}x{self.resolution[1]} ({self.frame_format.name})")

    def read(self) -> Optional[np.ndarray]:
        if not self.cap or not self.cap.isOpened():
            logger.error("Camera not available")
            return None

        ret, frame = self.cap.read()
        if not ret:
            logger.error("Failed to read frame")
            return None

        return frame

    def read_raw(self) -> Optional[RawFrame]:
        frame = self.read()
        if frame is None:
            return None

        height, width = frame.shape[:2]
        if self.frame_format == PixelFormat.JPEG:
            ok, buf = cv2.imencode('.jpg', frame)
            if not ok:
                logger.error("Failed to encode frame")
                return None
            return RawFrame.from_jpeg(buf.tobytes(), width, height)

        # I420 needs even dimensions
        frame = np.ascontiguousarray(frame[:height - height % 2, :width - width % 2])
        height, width = frame.shape[:2]
        i420 = cv2.cvtColor(frame, cv2.COLOR_BGR2YUV_I420)
        return RawFrame.from_i420(i420, width, height)

    def is_connected(self) -> bool:
        return self.cap is not None and self.cap.isOpened()

    def restart(self):
        logger.info("Restarting camera...")
        self.release()
        self._initialize()

    def release(self):
        if self.cap:
            self.cap.release()
            self.cap = None

    def __del__(self):
        self.release()
