"""
Spritesheet Detect - Core Utilities
"""

from .parser import SheetParser, SheetImage
from .exporter import SheetExporter
from .animation import Frame, Animation, DEFAULT_FRAME_DURATION
from .formats import (
    GridParser, TexturePackerParser, AsepriteParser,
    frames_from_strip,
)
from .presets import (
    # Data structures
    DetectionPreset,
    # Manager
    PresetManager,
    # Convenience
    get_preset_manager, get_preset, list_presets,
    # Built-in presets dict
    BUILTIN_PRESETS,
)

__all__ = [
    'SheetParser', 'SheetImage', 'SheetExporter',
    # Playback
    'Frame', 'Animation', 'DEFAULT_FRAME_DURATION',
    # Format parsers
    'GridParser', 'TexturePackerParser', 'AsepriteParser',
    'frames_from_strip',
    # Presets
    'DetectionPreset',
    'PresetManager',
    'get_preset_manager', 'get_preset', 'list_presets',
    'BUILTIN_PRESETS',
]
