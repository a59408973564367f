"""
Animation Classifier - Names a strip from the motion of its frame centroids

The decision is a fixed cascade over the per-frame centroid trajectory:
idle -> attack -> jump -> hurt -> walk, followed by a direction taken from
the dominant motion axis or the mean offset of the centroids from the
frame centres.
"""

import logging
import math
import numpy as np
from enum import Enum
from typing import List, Optional, Sequence, Tuple
from dataclasses import dataclass

from .integral import IntegralImage, Rect

logger = logging.getLogger(__name__)


class MotionType(Enum):
    """Kinds of motion the classifier can recognise"""
    IDLE = "idle"
    ATTACK = "attack"
    JUMP = "jump"
    HURT = "hurt"
    WALK = "walk"


class Direction(Enum):
    """Facing / travel direction of an animation"""
    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"


@dataclass(frozen=True)
class AnimationLabel:
    """Classifier verdict: motion type plus optional direction"""
    motion: MotionType
    direction: Optional[Direction] = None

    @property
    def name(self) -> str:
        """Display name such as ``walk_right`` or ``idle``"""
        if self.direction is None:
            return self.motion.value
        return f"{self.motion.value}_{self.direction.value}"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ClassifierOptions:
    """Thresholds for the motion heuristics"""
    motion_epsilon: float = 2.0      # px range below which an axis is still
    bias_epsilon: float = 0.5        # px offset considered a real bias
    area_spike_ratio: float = 1.35   # peak/mean filled area for 'attack'
    jump_ratio: float = 1.6          # vertical dominance factor for 'jump'
    jerkiness_ratio: float = 2.2     # path length / range for 'hurt'
    preferred_direction: Optional[Direction] = None


def frame_centroid(mask: np.ndarray, rect: Rect) -> Tuple[float, float]:
    """
    Mean foreground position inside a rect, relative to its origin.

    Falls back to the rect centre when the rect holds no foreground.
    """
    window = mask[rect.y:rect.y + rect.h, rect.x:rect.x + rect.w]
    ys, xs = np.nonzero(window)
    if len(xs) == 0:
        return (rect.w / 2, rect.h / 2)
    return (float(xs.mean()), float(ys.mean()))


def _has_turning_point(values: Sequence[float]) -> bool:
    """True if consecutive deltas flip sign at least once (zero deltas ignored)"""
    for i in range(1, len(values) - 1):
        d1 = values[i] - values[i - 1]
        d2 = values[i + 1] - values[i]
        if d1 == 0 or d2 == 0:
            continue
        if (d1 > 0) != (d2 > 0):
            return True
    return False


def _path_length(centers: List[Tuple[float, float]]) -> float:
    total = 0.0
    for (x0, y0), (x1, y1) in zip(centers, centers[1:]):
        total += math.hypot(x1 - x0, y1 - y0)
    return total


def _motion_type(
    centers: List[Tuple[float, float]],
    areas: List[int],
    range_x: float,
    range_y: float,
    opts: ClassifierOptions
) -> MotionType:
    if (range_x < opts.motion_epsilon and range_y < opts.motion_epsilon) or len(centers) <= 2:
        return MotionType.IDLE

    mean_area = sum(areas) / len(areas)
    area_ratio = max(areas) / max(1, mean_area) if mean_area > 0 else 1
    if area_ratio >= opts.area_spike_ratio:
        return MotionType.ATTACK

    if range_y > range_x * opts.jump_ratio:
        # Vertical motion without a turning point is treated as plain travel
        if _has_turning_point([cy for _, cy in centers]):
            return MotionType.JUMP
        return MotionType.WALK

    denom = range_x + range_y if (range_x + range_y) > 0 else 1
    if _path_length(centers) / denom > opts.jerkiness_ratio:
        return MotionType.HURT

    return MotionType.WALK


def _direction(
    range_x: float,
    range_y: float,
    bias_x: float,
    bias_y: float,
    eps: float
) -> Optional[Direction]:
    horizontal = Direction.RIGHT if bias_x >= 0 else Direction.LEFT
    vertical = Direction.DOWN if bias_y >= 0 else Direction.UP

    if range_x > range_y + eps:
        return horizontal
    if range_y > range_x + eps:
        return vertical
    if abs(bias_x) > abs(bias_y) + eps:
        return horizontal
    if abs(bias_y) > eps:
        return vertical
    return None


def classify_animation(
    rects: Sequence[Rect],
    mask: np.ndarray,
    integral: IntegralImage,
    options: Optional[ClassifierOptions] = None
) -> AnimationLabel:
    """
    Classify a strip of frames by motion type and direction.

    Args:
        rects: Frames of one strip, left to right
        mask: Foreground mask of the whole sheet
        integral: Integral image built from ``mask``
        options: Heuristic thresholds (defaults if None)

    Returns:
        AnimationLabel; use ``.name`` for the display string
    """
    if not rects:
        raise ValueError("Cannot classify an empty strip")

    opts = options or ClassifierOptions()

    centers = [frame_centroid(mask, r) for r in rects]
    xs = [cx for cx, _ in centers]
    ys = [cy for _, cy in centers]
    range_x = max(xs) - min(xs)
    range_y = max(ys) - min(ys)

    bias_x = sum(cx - r.w / 2 for (cx, _), r in zip(centers, rects)) / len(rects)
    bias_y = sum(cy - r.h / 2 for (_, cy), r in zip(centers, rects)) / len(rects)

    areas = [integral.count(r) for r in rects]

    motion = _motion_type(centers, areas, range_x, range_y, opts)

    if opts.preferred_direction is not None:
        direction = Direction(opts.preferred_direction)
    else:
        direction = _direction(range_x, range_y, bias_x, bias_y, opts.bias_epsilon)

    logger.debug(
        "Strip of %d frames: range=(%.2f, %.2f) bias=(%.2f, %.2f) -> %s",
        len(rects), range_x, range_y, bias_x, bias_y, motion.value
    )
    return AnimationLabel(motion, direction)
