"""
Grid Map Editor - Free Entity Data Model

FreeformMark: circular stamp left by the free-draw instrument.
PlacedObject: rectangular, rotatable, usually image-backed object.

Both are global (not layer-scoped) and keyed by a generated id owned by
the Scene. Asset fields hold source identifiers only.
"""

import math
from dataclasses import dataclass, replace
from typing import Dict, Optional

from models.color import Color
from utils.geometry import Bounds
from constants import DEFAULT_MARK_FILL_COLOR, DEFAULT_MARK_STROKE_COLOR


def _optional_source(value) -> Optional[str]:
    if value is None or value == '':
        return None
    if not isinstance(value, str):
        raise ValueError(f"asset must be a source string, got {type(value).__name__}")
    return value


@dataclass
class FreeformMark:
    """Circular mark centered at (x, y) in world units."""
    x: float
    y: float
    radius: Optional[float]
    fill_color: Color
    stroke_color: Color
    asset: Optional[str] = None

    def effective_radius(self, fallback: float) -> float:
        """Radius used by erase; undefined/zero radius uses fallback."""
        return self.radius if self.radius else fallback

    def bounds(self, fallback_radius: float = 0.0) -> Bounds:
        r = self.effective_radius(fallback_radius)
        return Bounds(self.x - r, self.y - r, self.x + r, self.y + r)

    def copy(self) -> 'FreeformMark':
        return replace(self)

    def to_dict(self) -> Dict:
        return {
            'x': self.x,
            'y': self.y,
            'radius': self.radius,
            'fillColor': self.fill_color.to_hex(),
            'strokeColor': self.stroke_color.to_hex(),
            'asset': self.asset,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'FreeformMark':
        if not isinstance(data, dict):
            raise ValueError(f"mark record must be an object, got {type(data).__name__}")
        try:
            x = float(data['x'])
            y = float(data['y'])
        except (KeyError, TypeError) as e:
            raise ValueError(f"mark record needs numeric x/y: {data!r}") from e
        radius = data.get('radius')
        return cls(
            x=x,
            y=y,
            radius=float(radius) if radius is not None else None,
            fill_color=Color.from_hex(data.get('fillColor') or DEFAULT_MARK_FILL_COLOR),
            stroke_color=Color.from_hex(data.get('strokeColor') or DEFAULT_MARK_STROKE_COLOR),
            asset=_optional_source(data.get('asset')),
        )


@dataclass
class PlacedObject:
    """Rectangle of width x height centered at (x, y), rotated by rotation radians."""
    x: float
    y: float
    width: float
    height: float
    rotation: float = 0.0
    asset: Optional[str] = None

    def bounds(self) -> Bounds:
        """Axis-aligned box ignoring rotation (used for hit tests and erase)."""
        hw = self.width / 2
        hh = self.height / 2
        return Bounds(self.x - hw, self.y - hh, self.x + hw, self.y + hh)

    def rotated_bounds(self) -> Bounds:
        """Conservative box enclosing the object at any rotation (half diagonal)."""
        half_diag = math.hypot(self.width, self.height) / 2
        return Bounds(self.x - half_diag, self.y - half_diag,
                      self.x + half_diag, self.y + half_diag)

    def copy(self) -> 'PlacedObject':
        return replace(self)

    def to_dict(self) -> Dict:
        return {
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height,
            'rotation': self.rotation,
            'asset': self.asset,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'PlacedObject':
        if not isinstance(data, dict):
            raise ValueError(f"object record must be an object, got {type(data).__name__}")
        try:
            return cls(
                x=float(data['x']),
                y=float(data['y']),
                width=float(data['width']),
                height=float(data['height']),
                rotation=float(data.get('rotation', 0.0)),
                asset=_optional_source(data.get('asset')),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"object record needs x/y/width/height: {data!r}") from e
