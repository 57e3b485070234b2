import cv2 as cv
import numpy as np
import logging
from typing import Callable, Optional

from .source_config import SourceConfig

logger = logging.getLogger(__name__)


class SourceUnavailableError(RuntimeError):
    """Sumber video (file / kamera) tidak bisa dibuka."""

    def __init__(self, config: SourceConfig):
        super().__init__(f"Could not open video source: {config.describe()}")
        self.config = config


class FrameSource:
    """
    Class untuk mengelola capture OpenCV dari file video atau webcam.
    Hanya menyediakan satu operasi utama: ambil frame berikutnya.
    """

    def __init__(self, config: SourceConfig,
                 capture_factory: Callable = cv.VideoCapture):
        """
        Args:
            config: Konfigurasi sumber hasil Input Selector / argumen CLI
            capture_factory: Pembuat objek capture (default cv.VideoCapture),
                bisa diganti fake saat testing
        """
        self.config = config
        self._capture_factory = capture_factory
        self._capture = None
        self.frames_read = 0

    @property
    def is_live(self) -> bool:
        return self.config.is_live

    @property
    def is_open(self) -> bool:
        return self._capture is not None

    def open(self):
        """
        Membuka capture. Gagal dibuka dianggap fatal.

        Raises:
            SourceUnavailableError: jika path salah atau kamera tidak ada
        """
        if self._capture is not None:
            return self

        capture = self._capture_factory(self.config.target)
        if not capture.isOpened():
            capture.release()
            logger.error(f"Cannot open {self.config.describe()}")
            raise SourceUnavailableError(self.config)

        self._capture = capture
        width = int(capture.get(cv.CAP_PROP_FRAME_WIDTH))
        height = int(capture.get(cv.CAP_PROP_FRAME_HEIGHT))
        fps = capture.get(cv.CAP_PROP_FPS)
        logger.info(f"Opened {self.config.describe()} ({width}x{height} @ {fps:.1f} fps)")
        return self

    def read(self) -> Optional[np.ndarray]:
        """Frame berikutnya, atau None jika stream habis / gagal dibaca."""
        if self._capture is None:
            raise RuntimeError("FrameSource.read() called before open()")

        ret, frame = self._capture.read()
        if not ret or frame is None or frame.size == 0:
            return None
        self.frames_read += 1
        return frame

    def release(self):
        if self._capture is not None:
            self._capture.release()
            self._capture = None
            logger.debug(f"Released {self.config.describe()} after {self.frames_read} frames")

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False
