"""
Sheet Parser - Reads spritesheet images into RGBA pixel buffers
Supports: PNG, GIF, JPEG, BMP, WebP, raw RGBA bytes and numpy arrays
"""

from PIL import Image
import numpy as np
from pathlib import Path
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class SheetImage:
    """A decoded spritesheet ready for detection"""
    width: int
    height: int
    pixels: np.ndarray  # HxWx4 RGBA uint8
    name: str = "sheet"
    source_path: Optional[Path] = None

    @property
    def has_transparency(self) -> bool:
        """Check if the sheet has any non-opaque pixels"""
        return bool(np.any(self.pixels[:, :, 3] < 255))

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def to_pil(self) -> Image.Image:
        """Convert back to a PIL image"""
        return Image.fromarray(self.pixels.copy())


class SheetParser:
    """Parses various sources into SheetImage objects"""

    SUPPORTED_FORMATS = {'.png', '.gif', '.jpg', '.jpeg', '.bmp', '.webp'}

    @classmethod
    def parse(cls, path: str | Path) -> SheetImage:
        """Parse an image file into a SheetImage

        Args:
            path: Path to the image file

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the suffix is not a supported image format
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        suffix = path.suffix.lower()
        if suffix not in cls.SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported format: {suffix}")

        with Image.open(path) as img:
            sheet = cls.from_pil(img, name=path.stem)

        return SheetImage(
            width=sheet.width,
            height=sheet.height,
            pixels=sheet.pixels,
            name=sheet.name,
            source_path=path
        )

    @classmethod
    def from_pil(cls, img: Image.Image, name: str = "sheet") -> SheetImage:
        """Create a SheetImage from a PIL image (first frame for animated formats)"""
        if img.mode != 'RGBA':
            img = img.convert('RGBA')

        pixels = np.array(img, dtype=np.uint8)
        pixels.flags.writeable = False

        return SheetImage(
            width=img.width,
            height=img.height,
            pixels=pixels,
            name=name
        )

    @classmethod
    def from_array(cls, pixels: np.ndarray, name: str = "sheet") -> SheetImage:
        """Create a SheetImage from a numpy array"""
        if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise ValueError("Pixels must be HxWx3 or HxWx4 array")

        # Ensure RGBA
        if pixels.shape[2] == 3:
            alpha = np.full((*pixels.shape[:2], 1), 255, dtype=np.uint8)
            pixels = np.concatenate([pixels.astype(np.uint8), alpha], axis=2)

        pixels = np.array(pixels, dtype=np.uint8)
        pixels.flags.writeable = False

        return SheetImage(
            width=pixels.shape[1],
            height=pixels.shape[0],
            pixels=pixels,
            name=name
        )

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes, name: str = "sheet") -> SheetImage:
        """Create a SheetImage from row-major RGBA bytes (4 bytes per pixel)"""
        expected = width * height * 4
        if len(data) != expected:
            raise ValueError(f"Expected {expected} bytes for {width}x{height} RGBA, got {len(data)}")

        pixels = np.frombuffer(bytes(data), dtype=np.uint8).reshape(height, width, 4)
        return cls.from_array(pixels, name=name)
