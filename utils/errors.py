# ============================================================
# FILE: utils/errors.py
# ============================================================

from typing import Optional, Tuple


class SamplerError(Exception):
    """Base exception for all frame sampling errors."""
    def __init__(self, message: str, *args: object) -> None:
        super().__init__(message, *args)
        self.message = message


class UnsupportedFormat(SamplerError):
    """Raised when a raw frame carries a pixel format we cannot normalize."""
    def __init__(self, message: str, pixel_format: object = None, *args: object) -> None:
        super().__init__(message, *args)
        self.pixel_format = pixel_format


class InvalidInput(SamplerError):
    """Raised when frame bytes or plane metadata are malformed."""


class EmptyBuffer(SamplerError):
    """Raised when a composite is requested with no retained frames."""


class EncodeError(SamplerError):
    """Raised when a pixel buffer cannot be encoded to JPEG."""
    def __init__(self, message: str, shape: Optional[Tuple[int, ...]] = None, *args: object) -> None:
        super().__init__(message, *args)
        self.shape = shape


class FrameSizeMismatch(SamplerError):
    """Raised when a frame cannot be stacked next to the retained frames."""
    def __init__(self, message: str, expected: Optional[Tuple[int, ...]] = None,
                 actual: Optional[Tuple[int, ...]] = None, *args: object) -> None:
        super().__init__(message, *args)
        self.expected = expected
        self.actual = actual
