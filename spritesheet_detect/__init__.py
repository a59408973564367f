"""
Spritesheet Detect - Frame and animation detection for metadata-less spritesheets
"""

from pathlib import Path
from typing import Optional

from .core import SheetParser, SheetImage, SheetExporter
from .detection import (
    DetectionOptions,
    GridResult, AnimationsResult, AnimationStrip, Rect,
    detect_grid, detect_animations,
)

__version__ = "0.1.0"
__all__ = [
    'SheetParser',
    'SheetImage',
    'SheetExporter',
    'DetectionOptions',
    'GridResult',
    'AnimationsResult',
    'AnimationStrip',
    'Rect',
    'detect_grid',
    'detect_animations',
    'analyze',
]


def analyze(image_path: str | Path, options: Optional[DetectionOptions] = None) -> Optional[dict]:
    """
    Detect animations in a sheet file, falling back to a plain grid.

    Args:
        image_path: Path to the spritesheet image
        options: Detection options (defaults if None)

    Returns:
        Dictionary with the detection mode and result, or None when nothing
        could be detected and the caller should configure the grid manually
    """
    sheet = SheetParser.parse(image_path)

    animations = detect_animations(sheet, options)
    if animations and animations.animations:
        return {'mode': 'animations', 'result': animations.to_dict()}

    grid = detect_grid(sheet, options)
    if grid and grid.rects:
        return {'mode': 'grid', 'result': grid.to_dict()}

    return None
