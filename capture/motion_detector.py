# ============================================================
# FILE: capture/motion_detector.py
# ============================================================

import cv2
import numpy as np
from typing import Optional
import logging

logger = logging.getLogger(__name__)

class MotionDetector:
    def __init__(self, history: int = 500, var_threshold: float = 35.0,
                 detect_shadows: bool = False, kernel_size: int = 5,
                 blur_size: int = 7, min_contour_area: float = 1200,
                 warmup_frames: int = 1):
        if blur_size < 3 or blur_size % 2 == 0:
            raise ValueError(f"Median blur size must be odd and >= 3, got {blur_size}")
        if warmup_frames < 1:
            raise ValueError("At least one warm-up frame is required")

        self.history = history
        self.var_threshold = var_threshold
        self.detect_shadows = detect_shadows
        self.blur_size = blur_size
        self.min_contour_area = min_contour_area
        self.warmup_frames = warmup_frames
        self.kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (kernel_size, kernel_size))
        self.frames_seen = 0
        self.background_subtractor = None
        self.reset()
        logger.info(
            f"Motion detector initialized: history={history}, "
            f"var_threshold={var_threshold}, min_area={min_contour_area}"
        )

    def reset(self):
        self.background_subtractor = cv2.createBackgroundSubtractorMOG2(
            history=self.history,
            varThreshold=self.var_threshold,
            detectShadows=self.detect_shadows
        )
        self.frames_seen = 0

    def foreground_mask(self, frame: np.ndarray) -> np.ndarray:
        # Apply background subtraction; this also updates the model
        fg_mask = self.background_subtractor.apply(frame)
        self.frames_seen += 1

        # Remove isolated noise pixels, then smooth the mask edges
        fg_mask = cv2.morphologyEx(fg_mask, cv2.MORPH_OPEN, self.kernel)
        return cv2.medianBlur(fg_mask, self.blur_size)

    def detect(self, frame: Optional[np.ndarray]) -> bool:
        if frame is None:
            return False

        fg_mask = self.foreground_mask(frame)

        # The first frames only seed the model; MOG2 marks everything foreground
        if self.frames_seen <= self.warmup_frames:
            return False

        contours, _ = cv2.findContours(
            fg_mask,
            cv2.RETR_EXTERNAL,
            cv2.CHAIN_APPROX_SIMPLE
        )

        for contour in contours:
            area = cv2.contourArea(contour)
            if area > self.min_contour_area:
                logger.debug(f"Motion detected: contour area={area}")
                return True

        return False
