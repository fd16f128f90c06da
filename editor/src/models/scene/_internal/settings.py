"""
Grid Map Editor - Scene Settings

Editor-wide settings that travel with every snapshot: cell size, the
empty-cell look, border strips, the grid texture palette and the
defaults used by the drawing instruments. Image-valued settings hold
asset source identifiers.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from models.color import Color
from .layer import ColorFill, TexturedFill, CellFill, GridCell, FILL_MODE_COLOR, FILL_MODE_TEXTURED
from .entities import _optional_source
from constants import (
    BASE_CELL_SIZE, MIN_CELL_SIZE, MAX_CELL_SIZE,
    DEFAULT_EMPTY_FILL_COLOR, DEFAULT_EMPTY_BORDER_COLOR,
    DEFAULT_DRAW_FILL_COLOR, DEFAULT_DRAW_BORDER_COLOR,
    DEFAULT_MARK_FILL_COLOR, DEFAULT_MARK_STROKE_COLOR,
    DEFAULT_MARK_SIZE, DEFAULT_MARK_PERIOD,
)


def _section(data: Optional[Dict], name: str) -> Dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"settings '{name}' must be an object, got {type(data).__name__}")
    return data


@dataclass
class EmptyCellStyle:
    fill_color: Color = field(default_factory=lambda: Color.from_hex(DEFAULT_EMPTY_FILL_COLOR))
    border_color: Color = field(default_factory=lambda: Color.from_hex(DEFAULT_EMPTY_BORDER_COLOR))
    pattern: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            'fillColor': self.fill_color.to_hex(),
            'borderColor': self.border_color.to_hex(),
            'pattern': self.pattern,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> 'EmptyCellStyle':
        data = _section(data, 'emptyCellStyle')
        return cls(
            fill_color=Color.from_hex(data.get('fillColor') or DEFAULT_EMPTY_FILL_COLOR),
            border_color=Color.from_hex(data.get('borderColor') or DEFAULT_EMPTY_BORDER_COLOR),
            pattern=_optional_source(data.get('pattern')),
        )


@dataclass
class BorderStyle:
    enabled: bool = False
    image: Optional[str] = None

    def to_dict(self) -> Dict:
        return {'enabled': self.enabled, 'image': self.image}

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> 'BorderStyle':
        data = _section(data, 'borderStyle')
        return cls(enabled=bool(data.get('enabled', False)),
                   image=_optional_source(data.get('image')))


@dataclass
class DrawDefaults:
    """Style applied by the grid-draw instrument."""
    fill_mode: str = FILL_MODE_COLOR
    fill_color: Color = field(default_factory=lambda: Color.from_hex(DEFAULT_DRAW_FILL_COLOR))
    border_color: Color = field(default_factory=lambda: Color.from_hex(DEFAULT_DRAW_BORDER_COLOR))
    asset: Optional[str] = None

    def make_fill(self) -> CellFill:
        """Textured mode without an asset falls back to a color fill."""
        if self.fill_mode == FILL_MODE_TEXTURED and self.asset:
            return TexturedFill(self.asset)
        return ColorFill(self.fill_color)

    def make_cell(self, x: int, y: int) -> GridCell:
        return GridCell(int(x), int(y), self.make_fill(), self.border_color)

    def to_dict(self) -> Dict:
        return {
            'fillMode': self.fill_mode,
            'fillColor': self.fill_color.to_hex(),
            'borderColor': self.border_color.to_hex(),
            'asset': self.asset,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> 'DrawDefaults':
        data = _section(data, 'drawDefaults')
        mode = data.get('fillMode', FILL_MODE_COLOR)
        if mode not in (FILL_MODE_COLOR, FILL_MODE_TEXTURED):
            raise ValueError(f"Unknown fill mode: {mode!r}")
        return cls(
            fill_mode=mode,
            fill_color=Color.from_hex(data.get('fillColor') or DEFAULT_DRAW_FILL_COLOR),
            border_color=Color.from_hex(data.get('borderColor') or DEFAULT_DRAW_BORDER_COLOR),
            asset=_optional_source(data.get('asset')),
        )


@dataclass
class MarkDefaults:
    """Style applied by the free-draw instrument.

    size is the mark diameter in cells; period is the minimum stroke
    spacing in cells (0 emits on every sample).
    """
    period: float = DEFAULT_MARK_PERIOD
    size: float = DEFAULT_MARK_SIZE
    fill_color: Color = field(default_factory=lambda: Color.from_hex(DEFAULT_MARK_FILL_COLOR))
    stroke_color: Color = field(default_factory=lambda: Color.from_hex(DEFAULT_MARK_STROKE_COLOR))
    asset: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            'period': self.period,
            'size': self.size,
            'fillColor': self.fill_color.to_hex(),
            'strokeColor': self.stroke_color.to_hex(),
            'asset': self.asset,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> 'MarkDefaults':
        data = _section(data, 'markDefaults')
        return cls(
            period=float(data.get('period', DEFAULT_MARK_PERIOD)),
            size=float(data.get('size', DEFAULT_MARK_SIZE)),
            fill_color=Color.from_hex(data.get('fillColor') or DEFAULT_MARK_FILL_COLOR),
            stroke_color=Color.from_hex(data.get('strokeColor') or DEFAULT_MARK_STROKE_COLOR),
            asset=_optional_source(data.get('asset')),
        )


@dataclass
class SceneSettings:
    cell_size: float = BASE_CELL_SIZE
    empty_cell_style: EmptyCellStyle = field(default_factory=EmptyCellStyle)
    border_style: BorderStyle = field(default_factory=BorderStyle)
    grid_asset_list: List[str] = field(default_factory=list)
    draw_defaults: DrawDefaults = field(default_factory=DrawDefaults)
    mark_defaults: MarkDefaults = field(default_factory=MarkDefaults)
    object_asset_ref: Optional[str] = None

    def asset_sources(self) -> Set[str]:
        """Every asset source identifier referenced by the settings."""
        sources = set(self.grid_asset_list)
        for source in (self.empty_cell_style.pattern, self.border_style.image,
                       self.draw_defaults.asset, self.mark_defaults.asset,
                       self.object_asset_ref):
            if source:
                sources.add(source)
        return sources

    def copy(self) -> 'SceneSettings':
        return SceneSettings.from_dict(self.to_dict())

    def to_dict(self) -> Dict:
        return {
            'cellSize': self.cell_size,
            'emptyCellStyle': self.empty_cell_style.to_dict(),
            'borderStyle': self.border_style.to_dict(),
            'gridAssetList': list(self.grid_asset_list),
            'drawDefaults': self.draw_defaults.to_dict(),
            'markDefaults': self.mark_defaults.to_dict(),
            'objectAssetRef': self.object_asset_ref,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'SceneSettings':
        data = _section(data, 'settings')
        cell_size = float(data.get('cellSize', BASE_CELL_SIZE))
        if not MIN_CELL_SIZE <= cell_size <= MAX_CELL_SIZE:
            raise ValueError(f"cellSize {cell_size} outside [{MIN_CELL_SIZE}, {MAX_CELL_SIZE}]")
        grid_assets = data.get('gridAssetList', [])
        if not isinstance(grid_assets, list) or not all(isinstance(s, str) for s in grid_assets):
            raise ValueError("gridAssetList must be a list of source strings")
        return cls(
            cell_size=cell_size,
            empty_cell_style=EmptyCellStyle.from_dict(data.get('emptyCellStyle')),
            border_style=BorderStyle.from_dict(data.get('borderStyle')),
            grid_asset_list=list(grid_assets),
            draw_defaults=DrawDefaults.from_dict(data.get('drawDefaults')),
            mark_defaults=MarkDefaults.from_dict(data.get('markDefaults')),
            object_asset_ref=_optional_source(data.get('objectAssetRef')),
        )
