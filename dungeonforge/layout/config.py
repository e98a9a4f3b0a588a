"""Layout configuration.

``LayoutConfig`` holds every generation knob. Configs arrive from JSON
payloads (``from_mapping``), ``LAYOUT_*`` environment variables
(``from_env``) or code, and ``validate`` rejects any combination that cannot
produce a dungeon before generation starts.
"""
from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Mapping, Tuple

from .geometry import Rect


class ConfigError(ValueError):
    """Raised when a layout configuration cannot produce a valid dungeon."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


@dataclass
class LayoutConfig:
    start_point: Tuple[int, int] = (0, 0)
    dungeon_size: Tuple[int, int] = (100, 60)
    divisions: int = 1
    endless_divisions: bool = False
    size_constrain: int = 10
    acceptable_ratio: float = 1.5
    wall_width: int = 1
    wall_height: int = 5
    door_width: int = 3
    door_offset: int = 1
    subtracted_percent: int = 10
    fail_streak_factor: int = 2

    def validate(self) -> "LayoutConfig":
        errors: List[str] = []
        width, height = self.dungeon_size
        if width <= 0 or height <= 0:
            errors.append("dungeon_size must be positive")
        if self.divisions < 0:
            errors.append("divisions must be >= 0")
        if self.size_constrain < 1:
            errors.append("size_constrain must be >= 1")
        if self.wall_width < 1:
            errors.append("wall_width must be >= 1")
        elif self.size_constrain <= self.wall_width * 2:
            errors.append("size_constrain must exceed twice the wall_width")
        if width > 0 and height > 0 and self.size_constrain > min(width, height):
            errors.append("size_constrain is too large for dungeon_size")
        if self.acceptable_ratio < 1:
            errors.append("acceptable_ratio must be >= 1")
        if self.wall_height < 0:
            errors.append("wall_height must be >= 0")
        if self.door_width < 1:
            errors.append("door_width must be >= 1")
        elif self.door_width + self.wall_width * 2 >= max(width, height):
            errors.append("door_width is too large for wall_width and dungeon_size")
        if self.door_offset < 0:
            errors.append("door_offset must be >= 0")
        if not 0 <= self.subtracted_percent <= 100:
            errors.append("subtracted_percent must be within 0..100")
        if self.fail_streak_factor < 1:
            errors.append("fail_streak_factor must be >= 1")
        if errors:
            raise ConfigError(errors)
        return self

    @property
    def bounds(self):
        return Rect(self.start_point[0], self.start_point[1], self.dungeon_size[0], self.dungeon_size[1])

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["start_point"] = list(self.start_point)
        data["dungeon_size"] = list(self.dungeon_size)
        return data

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None, base: "LayoutConfig | None" = None) -> "LayoutConfig":
        """Build a config from a JSON-style mapping layered over base (or defaults)."""
        if data is not None and not isinstance(data, Mapping):
            raise ConfigError(["config must be an object"])
        values = asdict(base) if base is not None else {}
        known = {f.name: f for f in fields(cls)}
        unknown = [k for k in (data or {}) if k not in known]
        if unknown:
            raise ConfigError([f"unknown config key: {k}" for k in sorted(unknown)])
        errors: List[str] = []
        for key, raw in (data or {}).items():
            try:
                values[key] = _coerce(key, raw, known[key].default)
            except (TypeError, ValueError):
                errors.append(f"invalid value for {key}: {raw!r}")
        if errors:
            raise ConfigError(errors)
        return cls(**values)

    @classmethod
    def from_env(cls, prefix: str = "LAYOUT_", environ: Mapping[str, str] | None = None) -> "LayoutConfig":
        """Overlay ``<prefix><FIELD>`` environment variables on the defaults.

        Pairs are written as ``"20,20"`` (e.g. ``LAYOUT_DUNGEON_SIZE=80,50``).
        """
        env = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        for f in fields(cls):
            key = prefix + f.name.upper()
            if key in env:
                data[f.name] = env[key]
        return cls.from_mapping(data)


def _coerce(key: str, raw: Any, default: Any) -> Any:
    if isinstance(default, bool):
        if isinstance(raw, str):
            return raw.strip().lower() not in {"0", "false", "no", "off", ""}
        return bool(raw)
    if isinstance(default, tuple):
        if isinstance(raw, str):
            raw = [p for p in raw.replace(" ", "").split(",") if p]
        pair = tuple(_to_int(key, v) for v in raw)
        if len(pair) != 2:
            raise ValueError(key)
        return pair
    if isinstance(default, float):
        return float(raw)
    return _to_int(key, raw)


def _to_int(key: str, raw: Any) -> int:
    if isinstance(raw, bool):
        raise TypeError(key)
    if isinstance(raw, float) and not raw.is_integer():
        raise ValueError(key)
    return int(raw)


__all__ = ["LayoutConfig", "ConfigError"]
