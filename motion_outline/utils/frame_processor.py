import cv2 as cv
import numpy as np
import logging
from collections import namedtuple

from .motion_detector import (
    ForegroundExtraction, MaskCleaner, ContourExtractor, ContourAnnotator,
)

logger = logging.getLogger(__name__)

PipelineResult = namedtuple(
    'PipelineResult',
    ['frame', 'annotated', 'mask', 'background', 'contours', 'metrics']
)


class PipelineInvariantError(RuntimeError):
    """Mask / background tidak sejajar dengan frame (kesalahan program)."""


class FrameProcessor:
    """
    Pipeline per frame: background model -> pembersih mask -> kontur ->
    anotasi. Satu-satunya state antar frame ada di background model.
    """

    def __init__(self, background_model=None, cleaner=None, extractor=None, annotator=None):
        self.background_model = background_model or ForegroundExtraction()
        self.cleaner = cleaner or MaskCleaner()
        self.extractor = extractor or ContourExtractor()
        self.annotator = annotator or ContourAnnotator()

    @classmethod
    def from_params(cls, bg_params: dict, cleaner_params: dict, contour_params: dict):
        return cls(
            background_model=ForegroundExtraction(**bg_params),
            cleaner=MaskCleaner(**cleaner_params),
            extractor=ContourExtractor(**contour_params),
        )

    def process(self, frame: np.ndarray) -> PipelineResult:
        mask = self.background_model.apply(frame)
        background = self.background_model.current_background()
        self._check_shape("foreground mask", mask, frame)
        self._check_shape("background estimate", background, frame)

        mask = self.cleaner.clean(mask)
        contours = self.extractor.extract(mask)
        annotated = self.annotator.draw(frame, contours)

        metrics = self._calculate_metrics(mask, contours)
        logger.debug(f"Frame processed: {metrics['contour_count']} contour(s), "
                     f"{metrics['foreground_percent']:.2f}% foreground")
        return PipelineResult(frame=frame, annotated=annotated, mask=mask,
                              background=background, contours=contours, metrics=metrics)

    @staticmethod
    def _check_shape(name, image, frame):
        if image is None or image.shape[:2] != frame.shape[:2]:
            got = None if image is None else image.shape[:2]
            raise PipelineInvariantError(
                f"{name} size {got} does not match frame size {frame.shape[:2]}"
            )

    @staticmethod
    def _calculate_metrics(mask, contours):
        total_pixels = mask.shape[0] * mask.shape[1]
        foreground_pixels = cv.countNonZero(mask)
        return {
            'contour_count': len(contours),
            'foreground_pixels': foreground_pixels,
            'foreground_percent': (foreground_pixels / total_pixels) * 100 if total_pixels else 0.0,
        }
