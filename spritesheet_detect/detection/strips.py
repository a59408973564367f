"""
Animation Strip Detector - One animation per non-empty row band
"""

import logging
from typing import Any, Dict, Optional, Tuple
from dataclasses import dataclass

from .classifier import classify_animation
from .grid import build_index
from .integral import Rect
from .mask import as_rgba
from .options import DetectionOptions
from .segments import to_segments, merge_small_gaps, most_common_length

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnimationStrip:
    """Frames of one motion sequence, left to right"""
    name: str
    rects: Tuple[Rect, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'rects': [r.to_dict() for r in self.rects]}


@dataclass(frozen=True)
class AnimationsResult:
    """All strips found on a sheet"""
    frame_width: int
    frame_height: int
    cols: int
    animations: Tuple[AnimationStrip, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'frameWidth': self.frame_width,
            'frameHeight': self.frame_height,
            'cols': self.cols,
            'animations': [a.to_dict() for a in self.animations],
        }

    def get(self, name: str) -> Optional[AnimationStrip]:
        """First strip called ``name``"""
        for strip in self.animations:
            if strip.name == name:
                return strip
        return None


def detect_animations(pixels, options: Optional[DetectionOptions] = None) -> Optional[AnimationsResult]:
    """
    Split a sheet into animation strips and name each one.

    Every row band with foreground is a strip; its frames come from a column
    projection restricted to that band. Frames filled below
    ``options.min_fill_ratio`` are discarded, as are strips left empty.

    Args:
        pixels: RGBA pixel array or SheetImage
        options: Detection options (defaults if None)

    Returns:
        AnimationsResult, or None if the image is empty or has no foreground
    """
    options = options or DetectionOptions()
    rgba = as_rgba(pixels)
    h, w = rgba.shape[:2]
    if w == 0 or h == 0:
        return None

    mask, integral = build_index(rgba, options)

    # Row bands are used as-is; only the column projections are seam-merged
    row_segments = to_segments(integral.row_occupancy())
    if not row_segments:
        logger.debug("No foreground rows in %dx%d sheet", w, h)
        return None

    global_cols = merge_small_gaps(to_segments(integral.column_occupancy()), options.max_gap)
    frame_height = most_common_length([s.length for s in row_segments])
    if global_cols:
        frame_width = most_common_length([s.length for s in global_cols])
    else:
        frame_width = frame_height

    animations = []
    for row_index, rs in enumerate(row_segments):
        band_cols = merge_small_gaps(
            to_segments(integral.column_occupancy(rs.start, rs.length)),
            options.max_gap
        )

        rects = []
        for cs in band_cols:
            rect = Rect(cs.start, rs.start, cs.length, rs.length)
            if rect.area <= 0:
                continue
            if integral.count(rect) / rect.area >= options.min_fill_ratio:
                rects.append(rect)

        if not rects:
            logger.debug("Dropping row band %d at y=%d: no frames above fill ratio", row_index, rs.start)
            continue

        label = classify_animation(rects, mask, integral, options.classifier_options(row_index))
        animations.append(AnimationStrip(name=label.name, rects=tuple(rects)))

    cols = most_common_length([len(a.rects) for a in animations]) if animations else 0

    logger.debug(
        "%d strips, frame %dx%d, %d cols: %s",
        len(animations), frame_width, frame_height, cols,
        ", ".join(a.name for a in animations)
    )
    return AnimationsResult(
        frame_width=frame_width,
        frame_height=frame_height,
        cols=cols,
        animations=tuple(animations),
    )
