"""
views/display_window.py
Dua jendela HighGUI yang persisten: frame beranotasi & background
hasil estimasi MOG2. Polling keyboard juga lewat sini (cv.waitKey).
"""
import cv2 as cv
import logging

logger = logging.getLogger(__name__)

DETECTED_WINDOW = "Detected Objects"
BACKGROUND_WINDOW = "Background as determined by the subtraction algorithm"
DEFAULT_WAIT_MS = 30


class WindowPresenter:
    def __init__(self, detected_title=DETECTED_WINDOW, background_title=BACKGROUND_WINDOW,
                 wait_ms=DEFAULT_WAIT_MS):
        if wait_ms < 1:
            raise ValueError(f"wait_ms must be at least 1, got {wait_ms}")
        self.detected_title = detected_title
        self.background_title = background_title
        self.wait_ms = wait_ms
        self._opened = False

    def open(self):
        if not self._opened:
            cv.namedWindow(self.detected_title)
            cv.namedWindow(self.background_title)
            self._opened = True
            logger.debug("Display windows created")
        return self

    def show(self, annotated, background):
        """Render kedua jendela; dipanggil sekali per iterasi."""
        cv.imshow(self.detected_title, annotated)
        cv.imshow(self.background_title, background)

    def key_pressed(self, wait_ms=None) -> bool:
        """Tunggu maksimal wait_ms; True jika ada tombol apa pun ditekan."""
        key = cv.waitKey(self.wait_ms if wait_ms is None else max(1, wait_ms))
        if key >= 0:
            logger.debug(f"Key pressed: {key & 0xFF}")
            return True
        return False

    def close(self):
        if self._opened:
            cv.destroyWindow(self.detected_title)
            cv.destroyWindow(self.background_title)
            self._opened = False

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
