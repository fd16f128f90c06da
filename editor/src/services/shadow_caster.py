"""
Grid Map Editor - Shadow Caster

Synthesizes directional pseudo-depth shading along the boundary between
filled and empty cells of one layer.

For every filled cell C and each of its 8 neighbors N that is empty,
a fragment is cast only when the shadow offset vo points toward N
(dot((dx, dy), vo) > epsilon):

    axial N:     quad on the shared edge [A, B, B + vo, A + vo]
    diagonal N:  quad on the shared corner P
                 [P, (P.x + vo.x, P.y), P + vo, (P.x, P.y + vo.y)]

Each fragment is clipped to N's cell square with QPolygonF.intersected.
Fragments of one layer are painted opaque into one buffer and the
configured alpha is applied once when the buffer is composited, so
overlapping fragments never double-darken.
"""

import math
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Tuple

from PyQt5.QtCore import Qt, QPointF, QRectF
from PyQt5.QtGui import QImage, QPainter, QPolygonF

from models.scene import Layer, ShadowConfig
from utils.geometry import Bounds
from constants import SHADOW_EPSILON

CellCoord = Tuple[int, int]

NEIGHBOR_OFFSETS = [(dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)]


@dataclass(frozen=True)
class ShadowFragment:
    """One clipped shadow quad cast from source into neighbor."""
    source: CellCoord
    neighbor: CellCoord
    polygon: QPolygonF


def _corner_points(cx: int, cy: int, size: float):
    left, top = cx * size, cy * size
    right, bottom = left + size, top + size
    return {
        'tl': (left, top),
        'tr': (right, top),
        'br': (right, bottom),
        'bl': (left, bottom),
    }


# Shared edge (as corner names) for each axial neighbor
_AXIAL_EDGES = {
    (0, -1): ('tl', 'tr'),
    (1, 0): ('tr', 'br'),
    (0, 1): ('br', 'bl'),
    (-1, 0): ('bl', 'tl'),
}

# Shared corner for each diagonal neighbor
_DIAGONAL_CORNERS = {
    (1, -1): 'tr',
    (1, 1): 'br',
    (-1, 1): 'bl',
    (-1, -1): 'tl',
}


def cell_range_for_bounds(bounds: Bounds, cell_size: float) -> Bounds:
    """Cell index range covering a world rectangle, widened by one cell."""
    return Bounds(math.floor(bounds.min_x / cell_size) - 1,
                  math.floor(bounds.min_y / cell_size) - 1,
                  math.ceil(bounds.max_x / cell_size) + 1,
                  math.ceil(bounds.max_y / cell_size) + 1)


def cast_shadow_fragments(filled: Iterable[CellCoord], shadow: ShadowConfig, cell_size: float,
                          cell_range: Optional[Bounds] = None) -> List[ShadowFragment]:
    """Compute the clipped shadow fragments for one layer

    Args:
        filled: Coordinates of the layer's filled cells
        shadow: Layer shadow configuration
        cell_size: Size of one cell in the output units
        cell_range: Optional inclusive cell index range; source cells
            outside it are skipped

    Returns:
        Fragments in deterministic order (sources sorted by y then x)
    """
    if not shadow.enabled:
        return []
    vox, voy = shadow.offset_vector(cell_size)
    if math.hypot(vox, voy) < SHADOW_EPSILON:
        return []

    filled_set: Set[CellCoord] = set(filled)
    fragments = []
    for cx, cy in sorted(filled_set, key=lambda c: (c[1], c[0])):
        if cell_range is not None and not cell_range.contains(cx, cy):
            continue
        corners = _corner_points(cx, cy, cell_size)

        for dx, dy in NEIGHBOR_OFFSETS:
            neighbor = (cx + dx, cy + dy)
            if neighbor in filled_set:
                continue
            if dx * vox + dy * voy <= SHADOW_EPSILON:
                continue

            if (dx, dy) in _AXIAL_EDGES:
                a_name, b_name = _AXIAL_EDGES[(dx, dy)]
                ax, ay = corners[a_name]
                bx, by = corners[b_name]
                quad = [(ax, ay), (bx, by), (bx + vox, by + voy), (ax + vox, ay + voy)]
            else:
                px, py = corners[_DIAGONAL_CORNERS[(dx, dy)]]
                quad = [(px, py), (px + vox, py), (px + vox, py + voy), (px, py + voy)]

            nx, ny = neighbor
            neighbor_square = QPolygonF(QRectF(nx * cell_size, ny * cell_size, cell_size, cell_size))
            clipped = QPolygonF([QPointF(x, y) for x, y in quad]).intersected(neighbor_square)
            # Degenerate slivers (e.g. a corner quad when vo is axis-aligned) are dropped
            extent = clipped.boundingRect()
            if extent.width() <= SHADOW_EPSILON or extent.height() <= SHADOW_EPSILON:
                continue
            fragments.append(ShadowFragment((cx, cy), neighbor, clipped))

    return fragments


class ShadowCaster:
    """Paints layer shadows with accumulate-then-single-alpha compositing."""

    def __init__(self):
        self._logger = logging.getLogger('ShadowCaster')

    def render_viewport(self, painter: QPainter, layer: Layer, cell_size: float,
                        view_bounds: Bounds) -> int:
        """Interactive variant: world units, culled to the visible cells

        Args:
            painter: Painter whose transform maps world units to device pixels
            layer: Layer to shade
            cell_size: World size of one cell
            view_bounds: Visible world rectangle

        Returns:
            Number of fragments painted
        """
        fragments = cast_shadow_fragments(layer.filled_coords(), layer.shadow, cell_size,
                                          cell_range_for_bounds(view_bounds, cell_size))
        self._composite(painter, fragments, layer.shadow)
        return len(fragments)

    def render_export(self, painter: QPainter, layer: Layer, bbox: Bounds) -> int:
        """Full-extent variant in logical units (cell size 1) over bbox."""
        fragments = cast_shadow_fragments(layer.filled_coords(), layer.shadow, 1.0,
                                          cell_range_for_bounds(bbox, 1.0))
        self._composite(painter, fragments, layer.shadow)
        return len(fragments)

    def _composite(self, painter: QPainter, fragments: List[ShadowFragment],
                   shadow: ShadowConfig) -> None:
        if not fragments:
            return

        device = painter.device()
        ratio = device.devicePixelRatioF()
        width = max(1, math.ceil(device.width() * ratio))
        height = max(1, math.ceil(device.height() * ratio))

        buffer = QImage(width, height, QImage.Format_ARGB32_Premultiplied)
        buffer.setDevicePixelRatio(ratio)
        buffer.fill(Qt.transparent)

        # Opaque fragments, same world->device mapping as the target painter
        buffer_painter = QPainter(buffer)
        try:
            buffer_painter.setRenderHint(QPainter.Antialiasing, True)
            buffer_painter.setTransform(painter.transform())
            buffer_painter.setPen(Qt.NoPen)
            buffer_painter.setBrush(shadow.color.opaque().to_qcolor())
            for fragment in fragments:
                buffer_painter.drawPolygon(fragment.polygon)
        finally:
            buffer_painter.end()

        # Alpha applied exactly once for the whole layer
        painter.save()
        try:
            painter.resetTransform()
            painter.setOpacity(painter.opacity() * shadow.color.alpha_f)
            painter.drawImage(0, 0, buffer)
        finally:
            painter.restore()

        self._logger.debug(f"Composited {len(fragments)} shadow fragments")
