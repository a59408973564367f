"""
Detection Presets Library - Named option bundles for common sheet styles
Built-in presets plus user presets stored as YAML files
"""

import yaml
import logging
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field

from ..detection.options import DetectionOptions

logger = logging.getLogger(__name__)


@dataclass
class DetectionPreset:
    """Named set of DetectionOptions overrides"""

    name: str
    description: str = ""
    options: Dict[str, Any] = field(default_factory=dict)  # DetectionOptions field -> value
    tags: List[str] = field(default_factory=list)

    def detection_options(self) -> DetectionOptions:
        """Defaults with this preset's overrides applied"""
        return DetectionOptions.from_dict(self.options)

    def to_dict(self) -> Dict[str, Any]:
        """YAML-ready mapping, empty fields left out"""
        data = {
            'name': self.name,
            'description': self.description,
            'options': dict(self.options),
            'tags': list(self.tags),
        }
        return {k: v for k, v in data.items() if v}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DetectionPreset':
        """
        Build a preset from a mapping.

        Option fields may sit under ``options`` or directly next to ``name``.
        Unknown keys are ignored.

        Raises:
            ValueError: If a field has the wrong shape or an option value is out of range
        """
        data = dict(data)

        if 'options' not in data:
            option_keys = [k for k in data if k in DetectionOptions.__dataclass_fields__]
            data['options'] = {k: data.pop(k) for k in option_keys}

        # Keys left empty in YAML load as None
        data['options'] = data['options'] or {}
        data['tags'] = data.get('tags') or []
        data['description'] = data.get('description') or ""

        if not isinstance(data['options'], dict):
            raise ValueError(f"Preset options must be a mapping, got {type(data['options']).__name__}")
        if not isinstance(data['tags'], list):
            raise ValueError(f"Preset tags must be a list, got {type(data['tags']).__name__}")

        preset = cls(**{k: data[k] for k in cls.__dataclass_fields__ if k in data})
        preset.detection_options()  # validates
        return preset


BUILTIN_PRESETS: Dict[str, Dict[str, Any]] = {
    "default": {
        "name": "default",
        "description": "Transparent or flat background, one-pixel seams tolerated",
        "options": {},
        "tags": ["general"],
    },

    "rpg_4dir": {
        "name": "rpg_4dir",
        "description": "Classic 4-row character sheet: up, right, down, left",
        "options": {
            "row_directions": ["up", "right", "down", "left"],
        },
        "tags": ["character", "rpg", "directions"],
    },

    "lpc_4dir": {
        "name": "lpc_4dir",
        "description": "LPC-style 4-row walk cycle: up, left, down, right",
        "options": {
            "row_directions": ["up", "left", "down", "right"],
        },
        "tags": ["character", "rpg", "directions"],
    },

    "magenta_key": {
        "name": "magenta_key",
        "description": "Opaque sheets keyed on a magenta background",
        "options": {
            "bg_color": [255, 0, 255],
            "bg_tolerance": 24,
        },
        "tags": ["background", "retro"],
    },

    "soft_edges": {
        "name": "soft_edges",
        "description": "Anti-aliased art: ignore faint alpha and stray specks",
        "options": {
            "alpha_threshold": 32,
            "bg_tolerance": 24,
            "min_fill_ratio": 0.05,
        },
        "tags": ["antialiased", "hd"],
    },

    "subtle_motion": {
        "name": "subtle_motion",
        "description": "Small sprites where a pixel or two of motion matters",
        "options": {
            "motion_epsilon": 1.0,
            "bias_epsilon": 0.25,
        },
        "tags": ["pixel-art", "small"],
    },
}



class PresetManager:
    """
    Looks up detection presets, built-ins first, shadowed by user YAML files.

    A user file holds either one preset, named after the file, or several
    under a top-level ``presets`` mapping.
    """

    def __init__(self, user_presets_dir: Optional[Path] = None):
        self.user_presets_dir = Path(user_presets_dir or Path.home() / '.spritesheet-detect' / 'presets')

        self._builtin: Dict[str, DetectionPreset] = {
            name: DetectionPreset.from_dict(data) for name, data in BUILTIN_PRESETS.items()
        }
        self._user: Dict[str, DetectionPreset] = {}
        self._sources: Dict[str, Path] = {}  # user preset -> file it came from

        self.reload()

    def reload(self) -> None:
        """Re-read every ``*.yaml`` file in the user directory"""
        self._user.clear()
        self._sources.clear()
        if not self.user_presets_dir.is_dir():
            return

        for path in sorted(self.user_presets_dir.glob('*.yaml')):
            try:
                presets = self._read_file(path)
            except (OSError, yaml.YAMLError, TypeError, ValueError) as e:
                logger.warning("Could not load preset file %s: %s", path, e)
                continue

            for preset in presets:
                self._user[preset.name] = preset
                self._sources[preset.name] = path
            logger.debug("Loaded %d preset(s) from %s", len(presets), path)

    @staticmethod
    def _read_file(path: Path) -> List[DetectionPreset]:
        data = yaml.safe_load(path.read_text())
        if not isinstance(data, dict):
            raise ValueError("top level must be a mapping")

        if 'presets' not in data:
            return [DetectionPreset.from_dict({**data, 'name': path.stem})]

        entries = data['presets']
        if not isinstance(entries, dict):
            raise ValueError("'presets' must map names to presets")
        return [DetectionPreset.from_dict({**body, 'name': name}) for name, body in entries.items()]

    def get(self, name: str) -> Optional[DetectionPreset]:
        """Preset called ``name``; a user preset shadows a built-in one"""
        if name in self._user:
            return self._user[name]
        return self._builtin.get(name)

    def exists(self, name: str) -> bool:
        return self.get(name) is not None

    def list_all(self) -> List[str]:
        return sorted({**self._builtin, **self._user})

    def list_by_tag(self, tag: str) -> List[str]:
        """Names of presets carrying ``tag`` (case-insensitive)"""
        wanted = tag.lower()
        presets = {**self._builtin, **self._user}
        return sorted(
            name for name, preset in presets.items()
            if wanted in (t.lower() for t in preset.tags)
        )

    def save_preset(self, preset: DetectionPreset, filename: Optional[str] = None) -> Path:
        """
        Write ``preset`` to its own YAML file in the user directory.

        Args:
            preset: Preset to store
            filename: File name, with or without ``.yaml`` (default: the preset name)

        Returns:
            Path of the written file
        """
        stem = Path(filename).stem if filename else preset.name
        self.user_presets_dir.mkdir(parents=True, exist_ok=True)

        path = self.user_presets_dir / f"{stem}.yaml"
        path.write_text(yaml.safe_dump(preset.to_dict(), default_flow_style=False, sort_keys=False))

        self._user[preset.name] = preset
        self._sources[preset.name] = path
        return path

    def delete_preset(self, name: str) -> bool:
        """
        Remove a user preset and its file.

        A file that also holds other presets is rewritten without this one.
        Built-in presets cannot be deleted.

        Returns:
            True if a user preset was removed
        """
        if name not in self._user:
            return False

        del self._user[name]
        path = self._sources.pop(name, None)
        if path is None or not path.exists():
            return True

        remaining = [n for n, p in self._sources.items() if p == path]
        if remaining:
            doc = {'presets': {}}
            for other in remaining:
                body = self._user[other].to_dict()
                body.pop('name', None)
                doc['presets'][other] = body
            path.write_text(yaml.safe_dump(doc, default_flow_style=False, sort_keys=False))
        else:
            path.unlink()

        return True

    def get_preset_info(self, name: str) -> Optional[Dict[str, Any]]:
        """Resolved options and provenance of a preset, for display"""
        preset = self.get(name)
        if preset is None:
            return None

        return {
            'name': preset.name,
            'description': preset.description,
            'options': preset.detection_options().to_dict(),
            'tags': list(preset.tags),
            'source': str(self._sources[name]) if name in self._user else 'builtin',
            'is_builtin': name in self._builtin,
            'is_user': name in self._user,
        }


_manager: Optional[PresetManager] = None


def get_preset_manager() -> PresetManager:
    """Shared manager over the default user directory, created on first use"""
    global _manager
    if _manager is None:
        _manager = PresetManager()
    return _manager


def get_preset(name: str) -> Optional[DetectionPreset]:
    return get_preset_manager().get(name)


def list_presets(tag: Optional[str] = None) -> List[str]:
    """Preset names, optionally only those tagged ``tag``"""
    manager = get_preset_manager()
    return manager.list_by_tag(tag) if tag else manager.list_all()
