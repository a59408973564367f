"""
Detection System - Frame boundaries and animation labels from raw sheets
"""

from .mask import as_rgba, estimate_background_color, compute_foreground_mask
from .integral import IntegralImage, Rect
from .segments import Segment, to_segments, merge_small_gaps, most_common_length
from .classifier import (
    # Enums
    MotionType, Direction,
    # Results / config
    AnimationLabel, ClassifierOptions,
    # Functions
    frame_centroid, classify_animation,
)
from .options import DetectionOptions
from .grid import GridResult, detect_grid
from .strips import AnimationStrip, AnimationsResult, detect_animations

__all__ = [
    'as_rgba', 'estimate_background_color', 'compute_foreground_mask',
    'IntegralImage', 'Rect',
    'Segment', 'to_segments', 'merge_small_gaps', 'most_common_length',
    # Classifier
    'MotionType', 'Direction',
    'AnimationLabel', 'ClassifierOptions',
    'frame_centroid', 'classify_animation',
    # Detectors
    'DetectionOptions',
    'GridResult', 'detect_grid',
    'AnimationStrip', 'AnimationsResult', 'detect_animations',
]
