"""
Tests for the Scene data model: layers, drawing and erase.

Verifies:
- At least one layer always exists; active index stays valid
- Grid draw upserts on the active layer and reports no-ops
- Free-draw period gating measured from the last emitted mark
- Object placement scales with cell_size / 32, not zoom
- Erase removes the cell, overlapping marks and containing objects
- Cell keys parse negative coordinates
"""
import pytest

from models.color import Color
from models.scene import (
    Scene, GridCell, ColorFill, TexturedFill, ShadowConfig, FreeformMark, PlacedObject,
    cell_key, parse_cell_key, FILL_MODE_TEXTURED,
)


# ══════════════════════════════════════════════════════════════════════════
# Layers
# ══════════════════════════════════════════════════════════════════════════

class TestLayers:

    def test_new_scene_has_one_active_layer(self, scene):
        assert scene.layer_count == 1
        assert scene.active_layer_index == 0
        assert scene.active_layer.name == "Layer 1"

    def test_add_layer_becomes_active(self, scene):
        index = scene.add_layer()
        assert index == 1
        assert scene.active_layer_index == 1
        assert scene.active_layer.name == "Layer 2"

    def test_cannot_remove_last_layer(self, scene):
        assert not scene.remove_active_layer()
        assert scene.layer_count == 1

    def test_remove_activates_previous_layer(self, scene):
        scene.add_layer("B")
        scene.add_layer("C")
        scene.set_active_layer(1)
        assert scene.remove_active_layer()
        assert [layer.name for layer in scene.layers] == ["Layer 1", "C"]
        assert scene.active_layer_index == 0

    def test_remove_first_layer_keeps_index_zero(self, scene):
        scene.add_layer("B")
        scene.set_active_layer(0)
        scene.remove_active_layer()
        assert scene.active_layer.name == "B"
        assert scene.active_layer_index == 0

    def test_set_active_layer_rejects_invalid_index(self, scene):
        assert not scene.set_active_layer(5)
        assert not scene.set_active_layer(0)

    def test_set_active_layer_clears_selection(self, scene):
        scene.grid_draw((0, 0))
        scene.select_at(5, 5)
        scene.add_layer()
        scene.grid_draw((0, 0))
        scene.select_at(5, 5)
        scene.set_active_layer(0)
        assert scene.selection.is_empty()

    def test_layer_property_setters_report_change(self, scene):
        assert scene.set_layer_visible(0, False)
        assert not scene.set_layer_visible(0, False)
        assert scene.rename_layer(0, "Ground")
        assert not scene.rename_layer(0, "Ground")

    def test_set_layer_shadow_stores_copy(self, scene):
        shadow = ShadowConfig(enabled=True, angle=90.0)
        assert scene.set_layer_shadow(0, shadow)
        shadow.angle = 10.0
        assert scene.active_layer.shadow.angle == 90.0

    def test_get_layer_out_of_range(self, scene):
        with pytest.raises(ValueError):
            scene.get_layer(3)

    def test_reset_restores_defaults(self, scene):
        scene.add_layer()
        scene.update_cell_size(64)
        scene.freeform_stroke(1, 1)
        scene.view.pan(10, 10)
        scene.reset()
        assert scene.layer_count == 1
        assert scene.cell_size == 32
        assert scene.mark_count == 0
        assert scene.view.offset_x == 0.0


# ══════════════════════════════════════════════════════════════════════════
# Grid drawing
# ══════════════════════════════════════════════════════════════════════════

class TestGridDraw:

    def test_cell_coord_uses_floor(self, scene):
        assert scene.cell_coord_at(-1, 33) == (-1, 1)
        assert scene.cell_coord_at(31.9, 0) == (0, 0)

    def test_draw_writes_default_style(self, scene):
        assert scene.grid_draw((2, 3))
        cell = scene.active_layer.get_cell(2, 3)
        assert cell.fill == ColorFill(Color(0, 0, 0))
        assert cell.border_color == Color(170, 170, 170)

    def test_identical_draw_is_noop(self, scene):
        scene.grid_draw((2, 3))
        assert not scene.grid_draw((2, 3))

    def test_draw_with_new_style_overwrites(self, scene):
        scene.grid_draw((2, 3))
        scene.settings.draw_defaults.fill_color = Color(255, 0, 0)
        assert scene.grid_draw((2, 3))
        assert scene.active_layer.cell_count == 1

    def test_textured_mode_uses_asset(self, scene):
        scene.settings.draw_defaults.fill_mode = FILL_MODE_TEXTURED
        scene.settings.draw_defaults.asset = "stone.png"
        scene.grid_draw_at(40, 40)
        assert scene.active_layer.get_cell(1, 1).fill == TexturedFill("stone.png")

    def test_textured_mode_without_asset_falls_back_to_color(self, scene):
        scene.settings.draw_defaults.fill_mode = FILL_MODE_TEXTURED
        scene.grid_draw((0, 0))
        assert isinstance(scene.active_layer.get_cell(0, 0).fill, ColorFill)

    def test_draw_targets_active_layer_only(self, scene):
        scene.add_layer()
        scene.grid_draw((0, 0))
        assert scene.get_layer(0).cell_count == 0
        assert scene.get_layer(1).cell_count == 1

    def test_cell_size_limits(self, scene):
        assert not scene.update_cell_size(2)
        assert not scene.update_cell_size(32)
        assert scene.update_cell_size(48)
        assert scene.cell_size == 48


# ══════════════════════════════════════════════════════════════════════════
# Free drawing and objects
# ══════════════════════════════════════════════════════════════════════════

class TestFreeformAndObjects:

    def test_zero_period_emits_every_sample(self, scene):
        ids = [scene.freeform_stroke(0, 0), scene.freeform_stroke(0.1, 0)]
        assert all(ids)
        assert scene.mark_count == 2

    def test_mark_radius_from_size(self, scene):
        scene.settings.mark_defaults.size = 2.0
        mark = scene.get_mark(scene.freeform_stroke(10, 10))
        assert mark.radius == pytest.approx(32.0)

    def test_period_gates_from_last_emitted_point(self, scene):
        scene.settings.mark_defaults.period = 1.0
        assert scene.freeform_stroke(0, 0) is not None
        assert scene.freeform_stroke(20, 0) is None
        # Still measured from (0, 0), not from the gated sample
        assert scene.freeform_stroke(32, 0) is None
        assert scene.freeform_stroke(33, 0) is not None
        assert scene.mark_count == 2

    def test_period_is_measured_in_cells(self, scene):
        scene.update_cell_size(64)
        scene.settings.mark_defaults.period = 0.5
        assert scene.freeform_stroke(0, 0) is not None
        assert scene.freeform_stroke(32, 0) is None
        assert scene.freeform_stroke(33, 0) is not None

    def test_end_stroke_resets_gating(self, scene):
        scene.settings.mark_defaults.period = 1.0
        scene.freeform_stroke(0, 0)
        scene.end_stroke()
        assert scene.freeform_stroke(1, 0) is not None

    def test_marks_keep_insertion_order(self, scene):
        first = scene.freeform_stroke(0, 0)
        second = scene.freeform_stroke(5, 5)
        assert [mark_id for mark_id, _ in scene.marks()] == [first, second]

    def test_place_object_scales_with_cell_size(self, scene):
        scene.update_cell_size(64)
        scene.view.zoom_at_point(0, 0, 4.0)
        obj = scene.get_object(scene.place_object(100, 50, 64, 32, "tree.png"))
        assert (obj.width, obj.height) == (128.0, 64.0)
        assert (obj.x, obj.y, obj.rotation) == (100, 50, 0.0)

    def test_place_object_defaults_to_object_asset(self, scene):
        scene.settings.object_asset_ref = "rock.png"
        obj = scene.get_object(scene.place_object(0, 0, 16, 16))
        assert obj.asset == "rock.png"

    def test_duplicate_ids_rejected(self, scene):
        mark = FreeformMark(0, 0, 4, Color(0, 0, 0), Color(0, 0, 0))
        scene.add_mark(mark, "m1")
        with pytest.raises(ValueError):
            scene.add_mark(mark.copy(), "m1")


# ══════════════════════════════════════════════════════════════════════════
# Erase
# ══════════════════════════════════════════════════════════════════════════

class TestErase:

    def test_erase_removes_everything_under_point(self, scene):
        scene.grid_draw((0, 0))
        scene.add_mark(FreeformMark(10, 10, 8, Color(0, 0, 0), Color(0, 0, 0)), "m")
        scene.add_object(PlacedObject(12, 12, 20, 20), "o")
        assert scene.erase(12, 12)
        assert scene.active_layer.cell_count == 0
        assert scene.mark_count == 0
        assert scene.object_count == 0

    def test_erase_uses_strict_radius(self, scene):
        scene.add_mark(FreeformMark(0, 0, 4, Color(0, 0, 0), Color(0, 0, 0)), "m")
        assert not scene.erase(4, 0)
        assert scene.has_mark("m")

    def test_erase_falls_back_to_half_cell_radius(self, scene):
        scene.add_mark(FreeformMark(0, 0, None, Color(0, 0, 0), Color(0, 0, 0)), "m")
        assert scene.erase(15, 0)
        assert not scene.has_mark("m")

    def test_erase_ignores_object_rotation(self, scene):
        scene.add_object(PlacedObject(0, 0, 40, 10, rotation=1.2), "o")
        assert scene.erase(19, 0)

    def test_erase_only_touches_active_layer(self, scene):
        scene.grid_draw((0, 0))
        scene.add_layer()
        assert not scene.erase(5, 5)
        assert scene.get_layer(0).cell_count == 1

    def test_erase_drops_removed_items_from_selection(self, scene):
        mark_id = scene.freeform_stroke(0, 0)
        scene.select_at(0, 0)
        scene.erase(0, 0)
        assert mark_id not in scene.selection.mark_ids

    def test_clear_content_keeps_layers(self, scene):
        scene.add_layer("B")
        scene.grid_draw((1, 1))
        scene.freeform_stroke(0, 0)
        scene.clear_content()
        assert scene.layer_count == 2
        assert scene.active_layer.cell_count == 0
        assert scene.mark_count == 0


# ══════════════════════════════════════════════════════════════════════════
# Cell keys
# ══════════════════════════════════════════════════════════════════════════

class TestCellKeys:

    @pytest.mark.parametrize("coord", [(0, 0), (-1, -2), (12, -7)])
    def test_parse_inverts_encode(self, coord):
        assert parse_cell_key(cell_key(*coord)) == coord

    def test_invalid_key(self):
        with pytest.raises(ValueError):
            parse_cell_key("12")

    def test_cell_record_keeps_fill_mode(self):
        cell = GridCell(1, 2, TexturedFill("grass.png"), Color(0, 0, 0))
        record = cell.to_dict()
        assert record['fillMode'] == 'textured'
        assert record['fillColor'] is None
        assert GridCell.from_dict(record) == cell
