"""
Grid Detector - Finds a uniform frame grid from transparent gutters
"""

import logging
from typing import Any, Dict, Optional, Tuple
from dataclasses import dataclass

from .integral import IntegralImage, Rect
from .mask import as_rgba, compute_foreground_mask
from .options import DetectionOptions
from .segments import to_segments, merge_small_gaps, most_common_length

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridResult:
    """Detected grid layout"""
    cols: int
    rows: int
    frame_width: int
    frame_height: int
    rects: Tuple[Rect, ...]  # row-major

    def to_dict(self) -> Dict[str, Any]:
        return {
            'cols': self.cols,
            'rows': self.rows,
            'frameWidth': self.frame_width,
            'frameHeight': self.frame_height,
            'rects': [r.to_dict() for r in self.rects],
        }


def build_index(pixels, options: DetectionOptions):
    """Foreground mask and its integral image for a sheet"""
    mask = compute_foreground_mask(
        pixels,
        alpha_threshold=options.alpha_threshold,
        bg_tolerance=options.bg_tolerance,
        bg_color=options.bg_color,
    )
    return mask, IntegralImage(mask)


def detect_grid(pixels, options: Optional[DetectionOptions] = None) -> Optional[GridResult]:
    """
    Detect a frame grid by projecting the foreground onto both axes.

    Rows and columns that hold any foreground form segments; one-pixel seams
    are merged away. Every non-empty row x column cell becomes a frame.

    Args:
        pixels: RGBA pixel array or SheetImage
        options: Detection options (defaults if None)

    Returns:
        GridResult, or None if the image is empty or has no foreground
    """
    options = options or DetectionOptions()
    rgba = as_rgba(pixels)
    h, w = rgba.shape[:2]
    if w == 0 or h == 0:
        return None

    _, integral = build_index(rgba, options)

    row_segments = merge_small_gaps(to_segments(integral.row_occupancy()), options.max_gap)
    col_segments = merge_small_gaps(to_segments(integral.column_occupancy()), options.max_gap)

    if not row_segments or not col_segments:
        logger.debug("No foreground found in %dx%d sheet", w, h)
        return None

    rects = []
    for rs in row_segments:
        for cs in col_segments:
            rect = Rect(cs.start, rs.start, cs.length, rs.length)
            if integral.count(rect) > 0:
                rects.append(rect)

    result = GridResult(
        cols=len(col_segments),
        rows=len(row_segments),
        frame_width=most_common_length([s.length for s in col_segments]),
        frame_height=most_common_length([s.length for s in row_segments]),
        rects=tuple(rects),
    )
    logger.debug(
        "Grid %dx%d, frame %dx%d, %d non-empty cells",
        result.cols, result.rows, result.frame_width, result.frame_height, len(rects)
    )
    return result
