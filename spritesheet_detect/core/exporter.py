"""
Sheet Exporter - Writes detection results and frame crops to disk
"""

from PIL import Image
import json
import numpy as np
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from .parser import SheetImage
from ..detection.grid import GridResult
from ..detection.integral import Rect
from ..detection.strips import AnimationsResult

Result = Union[GridResult, AnimationsResult]


class SheetExporter:
    """Exports detected frames and metadata to various formats"""

    @classmethod
    def to_json(cls, result: Result, indent: int = 2) -> str:
        """Serialize a detection result to JSON"""
        return json.dumps(result.to_dict(), indent=indent)

    @classmethod
    def save_json(cls, result: Result, path: str | Path) -> Path:
        """Write a detection result as a JSON file"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(cls.to_json(result))
        return path

    @classmethod
    def to_metadata_text(cls, metadata: Dict[str, Any]) -> str:
        """One-line human readable summary of an animation's metadata"""
        metadata = metadata or {}
        name = metadata.get('name', '')
        frame_count = metadata.get('frameCount', 0)
        duration = metadata.get('duration', 0)
        return f"Name: {name}, Frame Count: {frame_count}, Duration: {duration}"

    @classmethod
    def crop(cls, sheet: SheetImage, rect: Rect) -> np.ndarray:
        """Pixels of one frame"""
        if rect.x < 0 or rect.y < 0 or rect.x + rect.w > sheet.width or rect.y + rect.h > sheet.height:
            raise ValueError(f"Rect {rect} outside {sheet.width}x{sheet.height} sheet")
        return sheet.pixels[rect.y:rect.y + rect.h, rect.x:rect.x + rect.w].copy()

    @classmethod
    def to_frames(
        cls,
        sheet: SheetImage,
        rects: Sequence[Rect],
        directory: str | Path,
        prefix: str = "frame"
    ) -> List[Path]:
        """Export each frame as an individual PNG"""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)

        paths = []
        for i, rect in enumerate(rects):
            frame_path = directory / f"{prefix}_{i:04d}.png"
            Image.fromarray(cls.crop(sheet, rect)).save(frame_path, 'PNG')
            paths.append(frame_path)

        return paths

    @staticmethod
    def _to_palette(img: Image.Image) -> Image.Image:
        """255-colour palette image; index 255 marks pixels below half alpha"""
        transparent = Image.eval(img.getchannel('A'), lambda a: 255 if a < 128 else 0)
        paletted = img.convert('RGB').convert('P', palette=Image.Palette.ADAPTIVE, colors=255)
        paletted.paste(255, transparent)
        return paletted

    @classmethod
    def to_gif(
        cls,
        sheet: SheetImage,
        rects: Sequence[Rect],
        path: str | Path,
        duration: int = 100,
        loop: int = 0
    ) -> Path:
        """Export a strip as an animated GIF, padding frames to a common size"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        if not rects:
            raise ValueError("No frames to export")

        width = max(r.w for r in rects)
        height = max(r.h for r in rects)

        images = []
        for rect in rects:
            canvas = np.zeros((height, width, 4), dtype=np.uint8)
            canvas[:rect.h, :rect.w] = cls.crop(sheet, rect)
            images.append(cls._to_palette(Image.fromarray(canvas)))

        images[0].save(
            path,
            save_all=True,
            append_images=images[1:],
            duration=duration,
            loop=loop,
            transparency=255,
            disposal=2
        )

        return path
