"""
Foreground Mask - Separates sprite content from the sheet background
"""

import logging
from collections import Counter
import numpy as np
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

DEFAULT_ALPHA_THRESHOLD = 1
DEFAULT_BG_TOLERANCE = 16


def as_rgba(pixels) -> np.ndarray:
    """
    Coerce a pixel source into an HxWx4 uint8 array.

    Accepts a numpy array (HxWx3 or HxWx4) or anything exposing a
    ``pixels`` array, such as a parsed SheetImage.
    """
    if hasattr(pixels, 'pixels'):
        pixels = pixels.pixels

    arr = np.asarray(pixels)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise ValueError("Pixels must be HxWx3 or HxWx4 array")

    if arr.shape[2] == 3:
        alpha = np.full((*arr.shape[:2], 1), 255, dtype=np.uint8)
        arr = np.concatenate([arr.astype(np.uint8), alpha], axis=2)

    return arr.astype(np.uint8, copy=False)


def border_pixels(rgba: np.ndarray) -> np.ndarray:
    """
    Border RGB samples in scan order.

    For every x the top then bottom pixel, followed by the left then right
    pixel of every y. Corners are sampled twice.
    """
    rgb = rgba[:, :, :3]
    horizontal = np.stack([rgb[0, :], rgb[-1, :]], axis=1).reshape(-1, 3)
    vertical = np.stack([rgb[:, 0], rgb[:, -1]], axis=1).reshape(-1, 3)
    return np.concatenate([horizontal, vertical], axis=0)


def estimate_background_color(pixels) -> RGB:
    """
    Estimate the background colour from the image border.

    Border samples are binned to 16 levels per channel, the most populated
    bin wins (first bin seen wins a tie) and its midpoint is returned.
    """
    rgba = as_rgba(pixels)
    h, w = rgba.shape[:2]
    if h == 0 or w == 0:
        raise ValueError("Cannot estimate background of an empty image")

    buckets = border_pixels(rgba) >> 4

    # most_common keeps insertion order among equal counts
    best, _ = Counter(map(tuple, buckets.tolist())).most_common(1)[0]

    color = tuple(int(c) * 16 + 8 for c in best)
    logger.debug("Estimated background %s from %d border samples", color, len(buckets))
    return color


def compute_foreground_mask(
    pixels,
    alpha_threshold: int = DEFAULT_ALPHA_THRESHOLD,
    bg_tolerance: int = DEFAULT_BG_TOLERANCE,
    bg_color: Optional[RGB] = None
) -> np.ndarray:
    """
    Classify every pixel as content or background.

    A pixel is foreground when its alpha reaches ``alpha_threshold`` and its
    L1 colour distance to the background exceeds ``bg_tolerance``.

    Args:
        pixels: RGBA (or RGB) pixel array
        alpha_threshold: Minimum alpha for content (0-255)
        bg_tolerance: L1 distance at or below which a pixel is background (0-765)
        bg_color: Explicit background colour (estimated from the border if None)

    Returns:
        HxW boolean mask
    """
    rgba = as_rgba(pixels)
    h, w = rgba.shape[:2]
    if h == 0 or w == 0:
        return np.zeros((h, w), dtype=bool)

    if bg_color is None:
        bg_color = estimate_background_color(rgba)

    rgb = rgba[:, :, :3].astype(np.int32)
    bg = np.asarray(bg_color[:3], dtype=np.int32)
    distance = np.abs(rgb - bg).sum(axis=2)

    mask = (rgba[:, :, 3] >= alpha_threshold) & (distance > bg_tolerance)
    return mask
