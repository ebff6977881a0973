# ============================================================
# FILE: main.py
# ============================================================

import argparse
import logging
import signal
import sys
import threading
import time
from typing import Callable, List, Optional

from capture.camera import Camera
from capture.frames import PixelFormat
from capture.motion_detector import MotionDetector
from media.compositor import Compositor
from sampling.accumulator import FrameAccumulator
from sampling.activity import ActivityPolicy
from sampling.results import ActivityType, ClassificationResult
from sampling.session import SamplingSession
from utils.config_loader import Config
from utils.errors import SamplerError

logger = logging.getLogger(__name__)

ResultHandler = Callable[[ClassificationResult], None]


def setup_logging(config: Config):
    handlers = [logging.StreamHandler()]
    log_file = config.get('logging.file')
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, str(config.get('logging.level', 'INFO')).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def build_session(config: Config, clock: Callable[[], float] = time.time) -> SamplingSession:
    detector = MotionDetector(
        history=config.get('motion.history', 500),
        var_threshold=config.get('motion.var_threshold', 35.0),
        detect_shadows=config.get('motion.detect_shadows', False),
        kernel_size=config.get('motion.kernel_size', 5),
        blur_size=config.get('motion.blur_size', 7),
        min_contour_area=config.get('motion.min_contour_area', 1200),
        warmup_frames=config.get('motion.warmup_frames', 1)
    )
    policy = ActivityPolicy(
        capture_interval=config.get('sampling.capture_interval', 5),
        inactivity_timeout=config.get('sampling.inactivity_timeout_seconds', 2.0),
        min_flush_frames=config.get('sampling.min_flush_frames', 4)
    )
    return SamplingSession(
        detector=detector,
        accumulator=FrameAccumulator(config.get('sampling.max_frame_count', 10)),
        compositor=Compositor(config.get('output.jpeg_quality', 95)),
        policy=policy,
        dark_threshold=config.get('output.dark_threshold'),
        clock=clock
    )


class MotionSamplerApp:
    def __init__(self, config: Config):
        logger.info("Initializing motion sampler...")
        self.config = config
        self.running = False
        self.result_handlers: List[ResultHandler] = [self.log_result]
        self._thread: Optional[threading.Thread] = None

        self.frame_rate = config.get('system.frame_rate', 10)
        if not self.frame_rate or self.frame_rate <= 0:
            raise ValueError(f"Frame rate must be positive, got {self.frame_rate}")

        self.session = build_session(config)

        device_id = config.get('system.camera_device_id', 0)
        resolution = (
            config.get('system.resolution.width', 640),
            config.get('system.resolution.height', 480)
        )
        frame_format = PixelFormat[str(config.get('system.frame_format', 'yuv_420_888')).upper()]
        self.camera = Camera(device_id, resolution, frame_format)

        logger.info("Motion sampler initialization complete")

    def add_result_handler(self, handler: ResultHandler):
        self.result_handlers.append(handler)

    def log_result(self, result: ClassificationResult):
        if result.activity == ActivityType.PREVIEW_UPDATE:
            logger.info(f"Preview updated ({len(result.jpeg_bytes)} bytes, "
                        f"{self.session.retained_count} frames)")
        elif result.activity == ActivityType.CAPTURE_FLUSH:
            logger.info(f"Capture flushed for analysis ({len(result.jpeg_bytes)} bytes)")
        else:
            logger.info("UI cleared")

    def dispatch(self, result: ClassificationResult):
        for handler in self.result_handlers:
            try:
                handler(result)
            except Exception as e:
                logger.error(f"Result handler failed: {e}", exc_info=True)

    def process_next(self) -> Optional[ClassificationResult]:
        raw = self.camera.read_raw()
        if raw is None:
            return None

        result = self.session.process(raw)
        if result is not None:
            self.dispatch(result)
        return result

    def frame_loop(self):
        logger.info("Starting frame loop...")
        frame_delay = 1.0 / self.frame_rate

        while self.running:
            try:
                if not self.camera.is_connected():
                    logger.warning("Camera disconnected, attempting restart...")
                    self.camera.restart()
                    self.session.reset_all(reset_background=True)

                self.process_next()
                time.sleep(frame_delay)

            except SamplerError as e:
                logger.warning(f"Dropped frame: {e}")
            except Exception as e:
                logger.error(f"Error in frame loop: {e}", exc_info=True)
                time.sleep(1)

    def start(self):
        logger.info("Starting motion sampler...")
        self.running = True
        self._thread = threading.Thread(target=self.frame_loop, daemon=True)
        self._thread.start()

    def stop(self):
        logger.info("Stopping motion sampler...")
        self.running = False
        if self._thread is not None:
            self._thread.join(timeout=5)
            self._thread = None
        self.camera.release()
        logger.info("Motion sampler stopped")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Motion-gated camera frame sampler")
    parser.add_argument('--config', default='config.yaml', help="Path to the YAML configuration")
    args = parser.parse_args(argv)

    config = Config(args.config)
    setup_logging(config)
    app = MotionSamplerApp(config)

    def _signal_handler(sig, frame):
        logger.info("Shutdown signal received")
        app.running = False

    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)

    app.start()
    while app.running:
        time.sleep(1)
    app.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
