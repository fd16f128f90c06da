"""
Grid Map Editor - Layer Data Model

Grid cells, their fills, per-layer shadow configuration and the Layer
container. Pure data, no Qt and no rendering logic.

Cells are keyed by a CellKey string "x_y" that is unique within a layer.
A cell fill is a tagged union: ColorFill(color) or TexturedFill(source).

Usage:
    layer = Layer("Layer 1")
    layer.set_cell(GridCell(2, 3, ColorFill(Color(0, 0, 0)), Color(170, 170, 170)))
    cell = layer.get_cell(2, 3)

    data = layer.to_dict()
    same = Layer.from_dict(data)
"""

import math
from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, Optional, Set, Tuple, Union

from models.color import Color
from constants import (
    DEFAULT_SHADOW_ENABLED, DEFAULT_SHADOW_ANGLE, DEFAULT_SHADOW_OFFSET,
    DEFAULT_SHADOW_COLOR, DEFAULT_SHADOW_ALPHA,
    DEFAULT_DRAW_FILL_COLOR, DEFAULT_DRAW_BORDER_COLOR,
)

CellCoord = Tuple[int, int]

FILL_MODE_COLOR = 'color'
FILL_MODE_TEXTURED = 'textured'


def cell_key(x: int, y: int) -> str:
    """Encode integer cell coordinates as a CellKey."""
    return f"{int(x)}_{int(y)}"


def parse_cell_key(key: str) -> CellCoord:
    """Decode a CellKey back into coordinates

    Raises:
        ValueError: If key is not of the form "x_y"
    """
    # Split from the right so negative x ("-1_-2") parses correctly
    x_part, sep, y_part = key.rpartition('_')
    if not sep:
        raise ValueError(f"Invalid cell key: {key!r}")
    return int(x_part), int(y_part)


# ========================================
# Cell fills
# ========================================

@dataclass(frozen=True)
class ColorFill:
    """Solid color fill."""
    color: Color

    mode = FILL_MODE_COLOR


@dataclass(frozen=True)
class TexturedFill:
    """Image fill referenced by asset source identifier."""
    source: str

    mode = FILL_MODE_TEXTURED


CellFill = Union[ColorFill, TexturedFill]


@dataclass(frozen=True)
class GridCell:
    """One filled lattice square.

    Frozen so that field-by-field equality decides whether a grid write
    is a no-op.
    """
    x: int
    y: int
    fill: CellFill
    border_color: Color

    @property
    def key(self) -> str:
        return cell_key(self.x, self.y)

    @property
    def coord(self) -> CellCoord:
        return (self.x, self.y)

    @property
    def asset_source(self) -> Optional[str]:
        if isinstance(self.fill, TexturedFill):
            return self.fill.source
        return None

    def center(self, cell_size: float) -> Tuple[float, float]:
        """World-space center of the cell for a given cell size."""
        return ((self.x + 0.5) * cell_size, (self.y + 0.5) * cell_size)

    def moved(self, dx: int, dy: int) -> 'GridCell':
        return replace(self, x=self.x + dx, y=self.y + dy)

    def to_dict(self) -> Dict:
        """Convert to a snapshot cellData record (asset as source string)."""
        if isinstance(self.fill, TexturedFill):
            return {
                'x': self.x,
                'y': self.y,
                'fillMode': FILL_MODE_TEXTURED,
                'fillColor': None,
                'borderColor': self.border_color.to_hex(),
                'asset': self.fill.source,
            }
        return {
            'x': self.x,
            'y': self.y,
            'fillMode': FILL_MODE_COLOR,
            'fillColor': self.fill.color.to_hex(),
            'borderColor': self.border_color.to_hex(),
            'asset': None,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'GridCell':
        """Build a cell from a cellData record

        Raises:
            ValueError: On a missing coordinate, bad color or unknown fill mode
        """
        if not isinstance(data, dict):
            raise ValueError(f"cell record must be an object, got {type(data).__name__}")
        try:
            x = int(data['x'])
            y = int(data['y'])
        except (KeyError, TypeError) as e:
            raise ValueError(f"cell record needs integer x/y: {data!r}") from e

        mode = data.get('fillMode', FILL_MODE_COLOR)
        border = Color.from_hex(data.get('borderColor') or DEFAULT_DRAW_BORDER_COLOR)
        if mode == FILL_MODE_TEXTURED:
            source = data.get('asset')
            if not isinstance(source, str) or not source:
                raise ValueError(f"textured cell {x}_{y} has no asset source")
            return cls(x, y, TexturedFill(source), border)
        if mode == FILL_MODE_COLOR:
            fill = ColorFill(Color.from_hex(data.get('fillColor') or DEFAULT_DRAW_FILL_COLOR))
            return cls(x, y, fill, border)
        raise ValueError(f"Unknown fill mode: {mode!r}")


# ========================================
# Shadow configuration
# ========================================

def _default_shadow_color() -> Color:
    return Color.from_hex(DEFAULT_SHADOW_COLOR)


@dataclass
class ShadowConfig:
    """Directional shadow settings for one layer.

    angle is in degrees (0 = +x, 90 = +y/down); offset is in cells.
    The color's alpha is applied once to the composited shadow buffer.
    """
    enabled: bool = DEFAULT_SHADOW_ENABLED
    angle: float = DEFAULT_SHADOW_ANGLE
    offset: float = DEFAULT_SHADOW_OFFSET
    color: Color = field(default_factory=_default_shadow_color)

    def offset_vector(self, cell_size: float) -> Tuple[float, float]:
        """World-space shadow offset vo for a given cell size."""
        radians = math.radians(self.angle)
        length = self.offset * cell_size
        return (math.cos(radians) * length, math.sin(radians) * length)

    def copy(self) -> 'ShadowConfig':
        return replace(self)

    def to_dict(self) -> Dict:
        return {
            'enabled': self.enabled,
            'angle': self.angle,
            'offset': self.offset,
            'color': self.color.to_hex(),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> 'ShadowConfig':
        """Missing fields fall back to defaults; a 6-digit color gets the default shadow alpha."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"shadowConfig must be an object, got {type(data).__name__}")
        return cls(
            enabled=bool(data.get('enabled', DEFAULT_SHADOW_ENABLED)),
            angle=float(data.get('angle', DEFAULT_SHADOW_ANGLE)),
            offset=float(data.get('offset', DEFAULT_SHADOW_OFFSET)),
            color=Color.from_hex(data.get('color') or DEFAULT_SHADOW_COLOR,
                                 default_alpha=DEFAULT_SHADOW_ALPHA),
        )


# ========================================
# Layer
# ========================================

class Layer:
    """Named, toggleable collection of grid cells with its own shadow config."""

    def __init__(self, name: str, visible: bool = True, shadow: Optional[ShadowConfig] = None):
        self.name = name
        self.visible = visible
        self.shadow = shadow if shadow is not None else ShadowConfig()
        self._cells: Dict[str, GridCell] = {}

    # ========================================
    # Cell access
    # ========================================

    def get_cell(self, x: int, y: int) -> Optional[GridCell]:
        return self._cells.get(cell_key(x, y))

    def get_cell_by_key(self, key: str) -> Optional[GridCell]:
        return self._cells.get(key)

    def has_cell(self, x: int, y: int) -> bool:
        return cell_key(x, y) in self._cells

    def set_cell(self, cell: GridCell) -> bool:
        """Insert or overwrite a cell

        Returns:
            False if an identical cell was already stored (no-op), True otherwise
        """
        key = cell.key
        if self._cells.get(key) == cell:
            return False
        self._cells[key] = cell
        return True

    def remove_cell(self, key: str) -> bool:
        return self._cells.pop(key, None) is not None

    def cells(self) -> Iterator[GridCell]:
        return iter(list(self._cells.values()))

    def keys(self) -> Set[str]:
        return set(self._cells)

    def filled_coords(self) -> Set[CellCoord]:
        return {cell.coord for cell in self._cells.values()}

    @property
    def cell_count(self) -> int:
        return len(self._cells)

    def clear(self) -> None:
        self._cells.clear()

    # ========================================
    # Serialization
    # ========================================

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'visible': self.visible,
            'shadowConfig': self.shadow.to_dict(),
            'cells': [[key, cell.to_dict()] for key, cell in self._cells.items()],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'Layer':
        """Build a layer from its record

        Raises:
            ValueError: If the record or any of its cells is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"layer record must be an object, got {type(data).__name__}")
        layer = cls(
            name=str(data.get('name', '')),
            visible=bool(data.get('visible', True)),
            shadow=ShadowConfig.from_dict(data.get('shadowConfig')),
        )
        cells = data.get('cells', [])
        if not isinstance(cells, list):
            raise ValueError("layer 'cells' must be a list of [key, cellData] pairs")
        for entry in cells:
            if not isinstance(entry, (list, tuple)) or len(entry) != 2:
                raise ValueError(f"cell entry must be a [key, cellData] pair: {entry!r}")
            # The coordinates inside cellData are authoritative for the key
            cell = GridCell.from_dict(entry[1])
            layer._cells[cell.key] = cell
        return layer

    def __repr__(self):
        return f"Layer(name={self.name!r}, cells={len(self._cells)}, visible={self.visible})"
