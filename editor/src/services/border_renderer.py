"""
Grid Map Editor - Border Renderer

Stamps a fixed-thickness strip inside every empty axial neighbor of a
filled cell, along the shared edge. No offset or angle geometry; the
strip is textured with the border image, or painted with the attention
color while that image is pending or failed.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from PyQt5.QtCore import QRectF
from PyQt5.QtGui import QColor, QPainter

from models.scene import Layer
from services.asset_pool import AssetHandle
from services.shadow_caster import cell_range_for_bounds
from utils.geometry import Bounds
from constants import BORDER_THICKNESS_RATIO, ATTENTION_COLOR

CellCoord = Tuple[int, int]
Rect = Tuple[float, float, float, float]


def border_strips(filled: Iterable[CellCoord], cell_size: float,
                  thickness_ratio: float = BORDER_THICKNESS_RATIO,
                  cell_range: Optional[Bounds] = None) -> List[Rect]:
    """Strip rectangles (x, y, w, h) for one layer

    Args:
        filled: Coordinates of filled cells
        cell_size: Size of one cell in output units
        thickness_ratio: Strip thickness as a fraction of the cell
        cell_range: Optional inclusive cell index range for culling

    Returns:
        One rectangle per (filled cell, empty axial neighbor) pair
    """
    filled_set = set(filled)
    t = cell_size * thickness_ratio
    strips = []
    for cx, cy in sorted(filled_set, key=lambda c: (c[1], c[0])):
        if cell_range is not None and not cell_range.contains(cx, cy):
            continue
        x, y = cx * cell_size, cy * cell_size
        if (cx, cy - 1) not in filled_set:
            strips.append((x, y - t, cell_size, t))
        if (cx + 1, cy) not in filled_set:
            strips.append((x + cell_size, y, t, cell_size))
        if (cx, cy + 1) not in filled_set:
            strips.append((x, y + cell_size, cell_size, t))
        if (cx - 1, cy) not in filled_set:
            strips.append((x - t, y, t, cell_size))
    return strips


class BorderRenderer:
    """Paints border strips for a layer."""

    def __init__(self):
        self._logger = logging.getLogger('BorderRenderer')
        self._placeholder = QColor(ATTENTION_COLOR)

    def render(self, painter: QPainter, layer: Layer, cell_size: float,
               handle: Optional[AssetHandle], visible_bounds: Optional[Bounds] = None) -> int:
        """Paint strips in the painter's current units

        Args:
            painter: Target painter
            layer: Layer whose filled cells get borders
            cell_size: Size of one cell in the painter's units
            handle: Border image handle (None = nothing to draw)
            visible_bounds: Optional visible rectangle in painter units

        Returns:
            Number of strips painted
        """
        if handle is None:
            return 0
        cell_range = cell_range_for_bounds(visible_bounds, cell_size) if visible_bounds else None
        strips = border_strips(layer.filled_coords(), cell_size, cell_range=cell_range)
        ready = handle.is_ready()
        for x, y, w, h in strips:
            target = QRectF(x, y, w, h)
            if ready:
                painter.drawImage(target, handle.image)
            else:
                painter.fillRect(target, self._placeholder)
        return len(strips)
