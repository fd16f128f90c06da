"""
Tests for directional shadow synthesis.

Verifies:
- Fragments are cast only toward empty neighbors the offset points at
- Axial fragments cover the strip next to the shared edge
- Diagonal slivers from an axis-aligned offset are dropped
- Disabled shadows and zero offsets cast nothing
- Culling by cell range
- Overlapping fragments composite with the layer alpha applied once
"""
import pytest

from PyQt5.QtCore import QRectF
from PyQt5.QtGui import QPainter

from models.color import Color
from models.scene import Layer, GridCell, ColorFill, ShadowConfig
from services.shadow_caster import ShadowCaster, cast_shadow_fragments, cell_range_for_bounds
from utils.geometry import Bounds

BLACK = Color(0, 0, 0)


def _layer(coords, **shadow):
    layer = Layer("Test", shadow=ShadowConfig(enabled=True, **shadow))
    for x, y in coords:
        layer.set_cell(GridCell(x, y, ColorFill(BLACK), BLACK))
    return layer


def _extent(fragment):
    rect = fragment.polygon.boundingRect()
    return (rect.x(), rect.y(), rect.width(), rect.height())


# ══════════════════════════════════════════════════════════════════════════
# Fragment geometry
# ══════════════════════════════════════════════════════════════════════════

class TestShadowFragments:

    def test_axis_aligned_offset_single_fragment(self):
        shadow = ShadowConfig(enabled=True, angle=0.0, offset=0.5)
        fragments = cast_shadow_fragments([(0, 0)], shadow, 32.0)
        assert len(fragments) == 1
        fragment = fragments[0]
        assert fragment.neighbor == (1, 0)
        assert _extent(fragment) == pytest.approx((32, 0, 16, 32))

    def test_diagonal_offset_reaches_three_neighbors(self):
        shadow = ShadowConfig(enabled=True, angle=45.0, offset=0.5)
        fragments = cast_shadow_fragments([(0, 0)], shadow, 32.0)
        assert {f.neighbor for f in fragments} == {(1, 0), (0, 1), (1, 1)}
        corner = next(f for f in fragments if f.neighbor == (1, 1))
        side = 16 * 0.7071067811865476
        assert _extent(corner) == pytest.approx((32, 32, side, side))

    def test_fragments_stay_inside_neighbor_square(self):
        shadow = ShadowConfig(enabled=True, angle=30.0, offset=3.0)
        fragments = cast_shadow_fragments([(0, 0)], shadow, 10.0)
        assert fragments
        for fragment in fragments:
            nx, ny = fragment.neighbor
            square = QRectF(nx * 10 - 1e-6, ny * 10 - 1e-6, 10 + 2e-6, 10 + 2e-6)
            assert square.contains(fragment.polygon.boundingRect())

    def test_filled_neighbors_receive_nothing(self):
        shadow = ShadowConfig(enabled=True, angle=0.0, offset=0.5)
        block = [(x, y) for x in range(3) for y in range(3)]
        fragments = cast_shadow_fragments(block, shadow, 32.0)
        # The (3, -1) and (3, 3) corner quads are zero-area for an axis-aligned offset
        assert sorted(f.neighbor for f in fragments) == [(3, 0), (3, 1), (3, 2)]

    def test_disabled_or_zero_offset(self):
        assert cast_shadow_fragments([(0, 0)], ShadowConfig(enabled=False), 32.0) == []
        assert cast_shadow_fragments([(0, 0)], ShadowConfig(enabled=True, offset=0.0), 32.0) == []

    def test_cell_range_culls_sources(self):
        shadow = ShadowConfig(enabled=True, angle=0.0, offset=0.5)
        fragments = cast_shadow_fragments([(0, 0), (50, 0)], shadow, 32.0,
                                          cell_range=Bounds(-1, -1, 5, 5))
        assert [f.source for f in fragments] == [(0, 0)]

    def test_cell_range_for_bounds_widens_by_one(self):
        assert cell_range_for_bounds(Bounds(0, 0, 64, 64), 32) == Bounds(-1, -1, 3, 3)


# ══════════════════════════════════════════════════════════════════════════
# Compositing
# ══════════════════════════════════════════════════════════════════════════

class TestShadowCompositing:

    def _render(self, image, layer, cell_size=32.0):
        painter = QPainter(image)
        try:
            return ShadowCaster().render_viewport(painter, layer, cell_size,
                                                  Bounds(0, 0, image.width(), image.height()))
        finally:
            painter.end()

    def test_overlap_is_not_double_darkened(self, canvas_image):
        # (0, 0) casts an edge fragment and (0, -1) a corner fragment into (1, 0)
        image = canvas_image(128, 128)
        count = self._render(image, _layer([(0, 0), (0, -1)], angle=45.0, offset=0.5))
        assert count >= 2
        alpha = image.pixelColor(35, 9).alpha()
        assert 125 <= alpha <= 131

    def test_shadow_color_rgb(self, canvas_image):
        image = canvas_image(64, 64)
        self._render(image, _layer([(0, 0)], angle=0.0, offset=0.5, color=Color(255, 0, 0, 255)))
        pixel = image.pixelColor(40, 16)
        assert (pixel.red(), pixel.green(), pixel.blue(), pixel.alpha()) == (255, 0, 0, 255)

    def test_outside_shadow_untouched(self, canvas_image):
        image = canvas_image(64, 64)
        self._render(image, _layer([(0, 0)], angle=0.0, offset=0.5))
        assert image.pixelColor(56, 16).alpha() == 0

    def test_no_fragments_paints_nothing(self, canvas_image):
        image = canvas_image(32, 32)
        layer = _layer([(0, 0)])
        layer.shadow.enabled = False
        assert self._render(image, layer) == 0
        assert image.pixelColor(16, 16).alpha() == 0
