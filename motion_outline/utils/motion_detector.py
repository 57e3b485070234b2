import cv2 as cv
import numpy as np
import logging
from typing import List, Protocol

logger = logging.getLogger(__name__)

CONTOUR_COLOR = (0, 0, 255)   # BGR merah
CONTOUR_THICKNESS = 2
DRAW_ALL_CONTOURS = -1


class BackgroundModel(Protocol):
    """Kemampuan minimal model background yang dipakai pipeline."""

    def configure(self, nmixtures: int, detect_shadows: bool) -> None: ...

    def apply(self, frame: np.ndarray) -> np.ndarray: ...

    def current_background(self) -> np.ndarray: ...


class ForegroundExtraction:
    """
    Background subtraction using OpenCV's MOG2 (adaptive Gaussian mixture
    per pixel). The algorithm itself lives in OpenCV; this class only
    configures it and normalises its output to a strict binary mask.
    """

    def __init__(self,
                 history=500,
                 var_threshold=16,
                 detect_shadows=False,
                 nmixtures=3,           # Number of Gaussian components per background pixel
                 background_ratio=0.9,
                 learning_rate=-1):     # -1 lets OpenCV pick the rate from history
        """
        Initialize the background subtractor.

        Args:
            history: Number of frames that influence the background model
            var_threshold: Squared Mahalanobis distance threshold for foreground
            detect_shadows: Whether shadow pixels are marked separately (value 127)
            nmixtures: Number of Gaussian components per pixel (3-5 typical)
            background_ratio: Weight share that makes a component "background" (0-1)
            learning_rate: How fast the model adapts (0-1, or -1 for automatic)
        """
        self.history = history
        self.var_threshold = var_threshold
        self.background_ratio = background_ratio
        self.learning_rate = learning_rate
        self.nmixtures = nmixtures
        self.detect_shadows = detect_shadows
        self.frames_seen = 0

        self.bg_subtractor = self._create_subtractor()
        self.configure(nmixtures, detect_shadows)

    def _create_subtractor(self):
        subtractor = cv.createBackgroundSubtractorMOG2(
            history=self.history,
            varThreshold=self.var_threshold,
            detectShadows=self.detect_shadows
        )
        subtractor.setBackgroundRatio(self.background_ratio)
        return subtractor

    def configure(self, nmixtures, detect_shadows):
        """
        Set mixture count and shadow detection. Call before the first apply().

        Raises:
            ValueError: if nmixtures is not a positive integer
        """
        if isinstance(nmixtures, bool) or not isinstance(nmixtures, (int, np.integer)) or nmixtures < 1:
            raise ValueError(f"nmixtures must be a positive integer, got {nmixtures!r}")
        self.nmixtures = int(nmixtures)
        self.detect_shadows = bool(detect_shadows)
        self.bg_subtractor.setNMixtures(self.nmixtures)
        self.bg_subtractor.setDetectShadows(self.detect_shadows)
        logger.debug(f"MOG2 configured: nmixtures={self.nmixtures}, detect_shadows={self.detect_shadows}")

    def apply(self, frame):
        """
        Update the model with a new frame and return its foreground mask.

        Returns:
            Single-channel uint8 mask, 255 for foreground and 0 otherwise.
            Shadow pixels (127) count as background.
        """
        fg_mask = self.bg_subtractor.apply(frame, learningRate=self.learning_rate)
        self.frames_seen += 1
        return cv.threshold(fg_mask, 127, 255, cv.THRESH_BINARY)[1]

    def current_background(self):
        """Current estimate of the static scene, shaped like the input frames."""
        return self.bg_subtractor.getBackgroundImage()

    def reset_background(self):
        """Reset the background model, keeping every parameter."""
        self.bg_subtractor = self._create_subtractor()
        self.configure(self.nmixtures, self.detect_shadows)
        self.frames_seen = 0
        logger.info("Background model reset")


class MaskCleaner:
    """
    Removes speckle noise from a foreground mask: erosion first (isolated
    pixels disappear), then dilation (surviving blobs regrow).
    """

    def __init__(self, kernel_size=3, erode_iterations=1, dilate_iterations=1):
        self.kernel_size = kernel_size
        self.erode_iterations = erode_iterations
        self.dilate_iterations = dilate_iterations
        self.kernel = np.ones((kernel_size, kernel_size), np.uint8)

    def clean(self, mask):
        eroded = cv.erode(mask, self.kernel, iterations=self.erode_iterations)
        return cv.dilate(eroded, self.kernel, iterations=self.dilate_iterations)


class ContourExtractor:
    """
    Outer boundaries of every connected foreground region, at full
    resolution. Inner (hole) boundaries are not returned and the order of
    the result is not stable between calls.
    """

    def __init__(self, min_contour_area=0):
        self.min_contour_area = min_contour_area

    def extract(self, mask) -> List[np.ndarray]:
        """
        Args:
            mask: Binary mask (0 background, 255 foreground)

        Returns:
            List of contours, each an (N, 1, 2) int32 array. Empty when the
            mask holds no foreground.
        """
        if len(mask.shape) > 2:
            mask = cv.cvtColor(mask, cv.COLOR_BGR2GRAY)

        contours, _ = cv.findContours(mask, cv.RETR_EXTERNAL, cv.CHAIN_APPROX_NONE)

        if self.min_contour_area > 0:
            return [cnt for cnt in contours if cv.contourArea(cnt) >= self.min_contour_area]
        return list(contours)


class ContourAnnotator:
    def __init__(self, color=CONTOUR_COLOR, thickness=CONTOUR_THICKNESS):
        self.color = color
        self.thickness = thickness

    def draw(self, frame, contours):
        """Draw all contours on a copy of the frame and return the copy."""
        annotated = frame.copy()
        if contours:
            cv.drawContours(annotated, contours, DRAW_ALL_CONTOURS, self.color, self.thickness)
        return annotated
