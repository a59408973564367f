"""
Format Parsers - Map sheet metadata records onto plain Frame lists

Each parser returns an empty list when its input does not carry enough
information, instead of raising.
"""

import json
import logging
from typing import Any, Dict, List, Union

from .animation import Frame, DEFAULT_FRAME_DURATION
from ..detection.strips import AnimationStrip

logger = logging.getLogger(__name__)

JsonLike = Union[str, bytes, Dict[str, Any], None]


def _load_json(data: JsonLike) -> Dict[str, Any]:
    if data is None:
        return {}
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except ValueError as e:
            logger.warning("Could not parse sheet metadata: %s", e)
            return {}
    return data if isinstance(data, dict) else {}


def _frame_from_record(record: Any) -> Frame:
    record = record if isinstance(record, dict) else {}
    image = record.get('filename') or record.get('name') or ''
    duration = record.get('duration', DEFAULT_FRAME_DURATION)
    return Frame(image=image, duration=float(duration))


def _count(value: Any) -> int:
    """Positive whole number from a metadata field, 0 when missing or not integral"""
    try:
        number = float(value or 0)
    except (TypeError, ValueError, OverflowError):
        return 0
    if not number.is_integer() or number <= 0:
        return 0
    return int(number)


class GridParser:
    """Frames for a regular grid described by size and counts"""

    def parse(self, data: Dict[str, Any]) -> List[Frame]:
        data = data or {}
        frame_width = _count(data.get('frameWidth'))
        frame_height = _count(data.get('frameHeight'))
        rows = _count(data.get('rows'))
        cols = _count(data.get('cols'))
        duration = data.get('frameDuration', DEFAULT_FRAME_DURATION)

        if not (frame_width and frame_height and rows and cols):
            return []

        return [
            Frame(image=f"r{row}c{col}", duration=duration)
            for row in range(rows)
            for col in range(cols)
        ]


class TexturePackerParser:
    """Frames from a TexturePacker JSON export (array or hash flavour)"""

    def parse(self, data: JsonLike) -> List[Frame]:
        doc = _load_json(data)
        records = doc.get('frames')

        if isinstance(records, list):
            pass
        elif isinstance(records, dict):
            # Hash flavour keys frames by filename
            records = [
                {'filename': key, **value} if isinstance(value, dict) else value
                for key, value in records.items()
            ]
        else:
            records = []

        return [_frame_from_record(r) for r in records]


class AsepriteParser:
    """Frames from an Aseprite JSON export, falling back to its frame tags"""

    def parse(self, data: JsonLike) -> List[Frame]:
        doc = _load_json(data)

        records = doc.get('frames')
        if not isinstance(records, list):
            meta = doc.get('meta')
            tags = meta.get('frameTags') if isinstance(meta, dict) else None
            records = tags if isinstance(tags, list) else []

        return [_frame_from_record(r) for r in records]


def frames_from_strip(strip: AnimationStrip, duration: float = DEFAULT_FRAME_DURATION) -> List[Frame]:
    """Frames whose image is the source rect of each detected frame"""
    return [Frame(image=rect, duration=duration) for rect in strip.rects]
