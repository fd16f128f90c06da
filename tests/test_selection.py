"""
Tests for hit-testing and selection building.

Verifies:
- Topmost priority: objects over marks over active-layer cells
- Later entities win within a kind
- Rectangle selection uses half-open center containment for cells and marks
- Objects are selected when their box overlaps the rectangle
- Click vs drag classification in finalize_selection
- Logical bounding box over all layers with one cell of padding
"""
import pytest

from models.color import Color
from models.transform import Vec2
from models.scene import FreeformMark, PlacedObject, HIT_OBJECT, HIT_MARK, HIT_CELL
from utils.geometry import Bounds

BLACK = Color(0, 0, 0)


def _mark(x, y, radius=8.0):
    return FreeformMark(x, y, radius, BLACK, BLACK)


# ══════════════════════════════════════════════════════════════════════════
# Hit testing
# ══════════════════════════════════════════════════════════════════════════

class TestTopmostAt:

    def test_object_beats_mark_and_cell(self, scene):
        scene.grid_draw((0, 0))
        scene.add_mark(_mark(10, 10), "m")
        scene.add_object(PlacedObject(10, 10, 8, 8), "o")
        assert scene.topmost_at(10, 10) == (HIT_OBJECT, "o")

    def test_mark_beats_cell(self, scene):
        scene.grid_draw((0, 0))
        scene.add_mark(_mark(10, 10), "m")
        assert scene.topmost_at(12, 12) == (HIT_MARK, "m")

    def test_cell_hit_returns_key(self, scene):
        scene.grid_draw((1, 0))
        assert scene.topmost_at(40, 5) == (HIT_CELL, "1_0")

    def test_latest_object_wins(self, scene):
        scene.add_object(PlacedObject(0, 0, 10, 10), "below")
        scene.add_object(PlacedObject(2, 2, 10, 10), "above")
        assert scene.topmost_at(1, 1).id == "above"

    def test_mark_without_radius_never_hits(self, scene):
        scene.add_mark(FreeformMark(0, 0, None, BLACK, BLACK), "m")
        assert scene.topmost_at(0, 0) is None

    def test_inactive_layer_cells_do_not_hit(self, scene):
        scene.grid_draw((0, 0))
        scene.add_layer()
        assert scene.topmost_at(5, 5) is None

    def test_empty_point(self, scene):
        assert scene.topmost_at(500, 500) is None


# ══════════════════════════════════════════════════════════════════════════
# Selection building
# ══════════════════════════════════════════════════════════════════════════

class TestSelectInRect:

    def test_cell_center_half_open(self, scene):
        scene.grid_draw((0, 0))   # center (16, 16)
        scene.grid_draw((1, 0))   # center (48, 16)
        selection = scene.select_in_rect(0, 0, 48, 32)
        assert selection.cell_keys == {"0_0"}

    def test_corner_order_does_not_matter(self, scene):
        scene.grid_draw((0, 0))
        assert scene.select_in_rect(32, 32, 0, 0).cell_keys == {"0_0"}

    def test_mark_center_on_max_edge_excluded(self, scene):
        scene.add_mark(_mark(10, 10), "inside")
        scene.add_mark(_mark(20, 10), "edge")
        assert scene.select_in_rect(0, 0, 20, 20).mark_ids == {"inside"}

    def test_object_overlap(self, scene):
        scene.add_object(PlacedObject(30, 5, 12, 4), "partly")
        scene.add_object(PlacedObject(80, 5, 4, 4), "outside")
        assert scene.select_in_rect(0, 0, 25, 10).object_ids == {"partly"}

    def test_rect_replaces_previous_selection(self, scene):
        scene.add_mark(_mark(100, 100), "far")
        scene.select_at(100, 100)
        scene.select_in_rect(0, 0, 10, 10)
        assert scene.selection.is_empty()


class TestFinalizeSelection:

    def test_identical_points_click(self, scene):
        scene.add_mark(_mark(10, 10), "m")
        selection = scene.finalize_selection(Vec2(10, 10), Vec2(10, 10))
        assert selection.mark_ids == {"m"}

    def test_click_on_empty_clears(self, scene):
        scene.add_mark(_mark(10, 10), "m")
        scene.select_at(10, 10)
        scene.finalize_selection(Vec2(200, 200), Vec2(200, 200))
        assert scene.selection.is_empty()

    def test_distinct_points_drag(self, scene):
        scene.add_mark(_mark(10, 10), "a")
        scene.add_mark(_mark(15, 15), "b")
        selection = scene.finalize_selection(Vec2(0, 0), Vec2(30, 30))
        assert selection.mark_ids == {"a", "b"}

    def test_is_hit_selected(self, scene):
        scene.grid_draw((0, 0))
        hit = scene.select_at(5, 5)
        assert scene.is_hit_selected(hit)
        assert not scene.is_hit_selected(None)

    def test_clear_selection_reports_change(self, scene):
        assert not scene.clear_selection()
        scene.grid_draw((0, 0))
        scene.select_at(5, 5)
        assert scene.clear_selection()

    def test_prune_drops_missing_entities(self, scene):
        scene.add_mark(_mark(0, 0), "m")
        scene.selection.mark_ids.add("gone")
        scene.selection.mark_ids.add("m")
        scene.prune_selection()
        assert scene.selection.mark_ids == {"m"}


# ══════════════════════════════════════════════════════════════════════════
# Centroid and bounds
# ══════════════════════════════════════════════════════════════════════════

class TestBounds:

    def test_centroid_includes_cells(self, scene):
        scene.grid_draw((0, 0))                 # center (16, 16)
        scene.add_object(PlacedObject(48, 16, 4, 4), "o")
        scene.select_in_rect(0, 0, 64, 32)
        assert scene.selection_centroid() == Vec2(32.0, 16.0)

    def test_centroid_of_empty_selection(self, scene):
        assert scene.selection_centroid() is None

    def test_empty_scene_default_extent(self, scene):
        assert scene.logical_bounding_box() == Bounds(0, 0, 10, 10)

    def test_cells_from_all_layers_with_padding(self, scene):
        scene.grid_draw((2, 3))
        scene.add_layer()
        scene.grid_draw((-1, 0))
        scene.set_layer_visible(0, False)
        assert scene.logical_bounding_box() == Bounds(-2, -1, 4, 5)

    def test_mark_radius_in_cell_units(self, scene):
        scene.add_mark(_mark(64, 64, radius=16), "m")
        box = scene.logical_bounding_box()
        assert box == Bounds(0.5, 0.5, 3.5, 3.5)

    def test_object_half_diagonal(self, scene):
        scene.add_object(PlacedObject(0, 0, 96, 128), "o")
        box = scene.logical_bounding_box()
        # half diagonal = 80 world units = 2.5 cells
        assert box.min_x == pytest.approx(-3.5)
        assert box.max_y == pytest.approx(3.5)
