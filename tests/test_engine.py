"""
Tests for the editor engine: gestures, commands, history and events.

Verifies:
- Each instrument's gesture mutates the scene and records once on release
- Gestures that change nothing record nothing
- Select: click, drag rectangle and drag-to-move
- Middle-button pan and cursor-anchored wheel zoom
- Redraw requests coalesce until a frame is rendered
- Undo / redo restore snapshots without recording
- N undos then N redos return to the latest state; recording after undos drops the redo branch
- Layer commands, notices and reset
"""
import pytest

from models.color import Color
from models.scene import ShadowConfig, FreeformMark, InvalidSnapshotError
from engine import (
    EditorEngine, Instrument, MouseButton,
    SELECTION_CHANGED, LAYERS_CHANGED, HISTORY_CHANGED, REDRAW_REQUESTED, SCENE_LOADED, NOTICE,
)

BLACK = Color(0, 0, 0)


def _drag(engine, points, button=MouseButton.LEFT):
    (x, y), rest = points[0], points[1:]
    engine.pointer_down(x, y, button)
    for px, py in rest:
        engine.pointer_move(px, py)
    engine.pointer_up(*points[-1], button)


def _descriptions(engine):
    return [entry['description'] for entry in engine.history_manager.entries]


def _names(event_log):
    return [name for name, _ in event_log]


# ══════════════════════════════════════════════════════════════════════════
# Drawing gestures
# ══════════════════════════════════════════════════════════════════════════

class TestDrawingGestures:

    def test_initial_state(self, engine):
        assert _descriptions(engine) == ["Initial state"]
        assert not engine.can_undo()

    def test_grid_draw_stroke_records_once(self, engine):
        _drag(engine, [(5, 5), (40, 5), (70, 5)])
        assert engine.scene.active_layer.filled_coords() == {(0, 0), (1, 0), (2, 0)}
        assert _descriptions(engine) == ["Initial state", "Draw cells"]

    def test_redrawing_same_cells_records_nothing(self, engine):
        _drag(engine, [(5, 5)])
        _drag(engine, [(6, 6), (10, 10)])
        assert _descriptions(engine) == ["Initial state", "Draw cells"]

    def test_free_draw(self, engine):
        engine.set_instrument(Instrument.FREE_DRAW)
        _drag(engine, [(0, 0), (10, 0), (20, 0)])
        assert engine.scene.mark_count == 3
        assert _descriptions(engine)[-1] == "Free draw"

    def test_free_draw_period_resets_between_strokes(self, engine):
        engine.set_mark_defaults(period=1.0)
        engine.set_instrument(Instrument.FREE_DRAW)
        _drag(engine, [(0, 0), (5, 0)])
        _drag(engine, [(6, 0)])
        assert engine.scene.mark_count == 2

    def test_erase(self, engine):
        _drag(engine, [(5, 5), (40, 5)])
        engine.set_instrument(Instrument.ERASE)
        _drag(engine, [(5, 5)])
        assert engine.scene.active_layer.filled_coords() == {(1, 0)}
        assert _descriptions(engine)[-1] == "Erase"

    def test_erase_on_nothing_records_nothing(self, engine):
        engine.set_instrument(Instrument.ERASE)
        _drag(engine, [(500, 500)])
        assert len(engine.history_manager) == 1

    def test_erase_emits_selection_changed_for_selected_items(self, engine, event_log):
        _drag(engine, [(5, 5)])
        engine.set_instrument(Instrument.SELECT)
        _drag(engine, [(5, 5)])
        event_log.clear()
        engine.set_instrument(Instrument.ERASE)
        _drag(engine, [(5, 5)])
        assert SELECTION_CHANGED in _names(event_log)

    def test_add_object_places_one_per_press(self, engine, assets):
        engine.set_object_asset("tree.png")
        assets.process_pending()
        engine.set_instrument(Instrument.ADD_OBJECT)
        _drag(engine, [(100, 100), (150, 150), (200, 200)])
        objects = engine.scene.objects()
        assert len(objects) == 1
        obj = objects[0][1]
        assert (obj.x, obj.y, obj.width, obj.height) == (100, 100, 64, 32)
        assert _descriptions(engine)[-1] == "Add object"

    def test_add_object_needs_ready_asset(self, engine):
        engine.set_instrument(Instrument.ADD_OBJECT)
        _drag(engine, [(10, 10)])
        engine.set_object_asset("tree.png")
        _drag(engine, [(10, 10)])
        assert engine.scene.object_count == 0
        assert len(engine.history_manager) == 1

    def test_right_button_does_nothing(self, engine):
        _drag(engine, [(5, 5)], button=MouseButton.RIGHT)
        assert engine.scene.active_layer.cell_count == 0
        assert not engine.gesture_active

    def test_draw_uses_view_transform(self, engine):
        engine.scene.view.set_state(100.0, 0.0, 2.0)
        _drag(engine, [(100 + 2 * 40, 10)])
        assert engine.scene.active_layer.filled_coords() == {(1, 0)}

    def test_switching_instrument_cancels_gesture(self, engine):
        engine.pointer_down(5, 5)
        engine.set_instrument(Instrument.SELECT)
        assert not engine.gesture_active
        engine.pointer_up(5, 5)
        assert len(engine.history_manager) == 1


# ══════════════════════════════════════════════════════════════════════════
# Selection gestures
# ══════════════════════════════════════════════════════════════════════════

class TestSelectGestures:

    @pytest.fixture
    def populated(self, engine):
        engine.scene.add_mark(FreeformMark(10, 10, 8, BLACK, BLACK), "a")
        engine.scene.add_mark(FreeformMark(60, 10, 8, BLACK, BLACK), "b")
        engine.set_instrument(Instrument.SELECT)
        return engine

    def test_click_selects_topmost(self, populated, event_log):
        _drag(populated, [(10, 10)])
        assert populated.scene.selection.mark_ids == {"a"}
        assert SELECTION_CHANGED in _names(event_log)

    def test_drag_rectangle(self, populated):
        populated.pointer_down(0, 0)
        populated.pointer_move(80, 30)
        assert populated.drag_rect is not None
        populated.pointer_up(80, 30)
        assert populated.scene.selection.mark_ids == {"a", "b"}
        assert populated.drag_rect is None

    def test_selection_never_records(self, populated):
        _drag(populated, [(0, 0), (80, 30)])
        assert len(populated.history_manager) == 1

    def test_drag_selected_item_moves_it(self, populated):
        _drag(populated, [(10, 10)])
        _drag(populated, [(10, 10), (20, 15), (30, 20)])
        mark = populated.scene.get_mark("a")
        assert (mark.x, mark.y) == (30, 20)
        assert populated.scene.get_mark("b").x == 60
        assert _descriptions(populated)[-1] == "Move selection"

    def test_move_without_motion_records_nothing(self, populated):
        _drag(populated, [(10, 10)])
        _drag(populated, [(10, 10)])
        assert len(populated.history_manager) == 1

    def test_pressing_elsewhere_clears_selection(self, populated):
        _drag(populated, [(10, 10)])
        populated.pointer_down(300, 300)
        assert populated.scene.selection.is_empty()


# ══════════════════════════════════════════════════════════════════════════
# View
# ══════════════════════════════════════════════════════════════════════════

class TestPanAndZoom:

    def test_middle_button_pans_in_any_instrument(self, engine):
        _drag(engine, [(10, 10), (30, 25), (50, 40)], button=MouseButton.MIDDLE)
        assert (engine.scene.view.offset_x, engine.scene.view.offset_y) == (40, 30)
        assert engine.scene.active_layer.cell_count == 0
        assert len(engine.history_manager) == 1

    def test_wheel_zoom_keeps_cursor_point(self, engine):
        view = engine.scene.view
        before = view.screen_to_world(200, 100)
        assert engine.wheel(200, 100, -500)
        assert view.scale == pytest.approx(1.5)
        after = view.screen_to_world(200, 100)
        assert (after.x, after.y) == pytest.approx((before.x, before.y))

    def test_wheel_out_of_range_rejected(self, engine):
        engine.scene.view.set_state(0, 0, 9.5)
        assert not engine.wheel(0, 0, -500)
        assert engine.scene.view.scale == 9.5

    def test_cursor_world_tracks_pointer(self, engine):
        engine.scene.view.set_state(10, 0, 2.0)
        engine.pointer_move(30, 8)
        assert engine.cursor_world.x == 10 and engine.cursor_world.y == 4


# ══════════════════════════════════════════════════════════════════════════
# Events and frames
# ══════════════════════════════════════════════════════════════════════════

class TestEventsAndFrames:

    def test_redraws_coalesce(self, engine, event_log):
        engine.set_instrument(Instrument.FREE_DRAW)
        _drag(engine, [(0, 0), (5, 0), (10, 0), (15, 0)])
        assert _names(event_log).count(REDRAW_REQUESTED) == 1
        engine.frames.frame_rendered()
        engine.wheel(0, 0, -100)
        assert _names(event_log).count(REDRAW_REQUESTED) == 2

    def test_history_changed_carries_flags(self, engine, event_log):
        _drag(engine, [(5, 5)])
        engine.undo()
        history_args = [args for name, args in event_log if name == HISTORY_CHANGED]
        assert history_args == [(True, False), (False, True)]

    def test_asset_settling_requests_redraw(self, engine, assets, event_log):
        engine.set_object_asset("tree.png")
        assets.process_pending()
        assert REDRAW_REQUESTED in _names(event_log)

    def test_unknown_event(self, engine):
        with pytest.raises(ValueError):
            engine.add_listener("no_such_event", lambda: None)


# ══════════════════════════════════════════════════════════════════════════
# History
# ══════════════════════════════════════════════════════════════════════════

class TestUndoRedo:

    def test_undo_redo_round(self, engine):
        _drag(engine, [(5, 5)])
        _drag(engine, [(40, 5)])
        assert engine.undo()
        assert engine.scene.active_layer.filled_coords() == {(0, 0)}
        assert engine.undo()
        assert engine.scene.active_layer.cell_count == 0
        assert not engine.undo()
        assert engine.redo()
        assert engine.scene.active_layer.filled_coords() == {(0, 0)}

    def test_undo_all_then_redo_all(self, engine):
        for x in range(4):
            _drag(engine, [(x * 32 + 5, 5)])
        final = engine.get_map_data()
        for _ in range(4):
            assert engine.undo()
        assert engine.scene.active_layer.cell_count == 0
        for _ in range(4):
            assert engine.redo()
        assert engine.scene.active_layer.filled_coords() == {(0, 0), (1, 0), (2, 0), (3, 0)}
        assert engine.get_map_data()['layers'] == final['layers']
        assert not engine.can_redo()

    def test_record_after_undos_truncates(self, engine):
        for x in range(4):
            _drag(engine, [(x * 32 + 5, 5)])
        history = engine.history_manager
        pointer_before = history.pointer
        assert pointer_before == 4
        engine.undo()
        engine.undo()
        _drag(engine, [(5, 100)])
        assert len(history) == pointer_before - 2 + 2
        assert history.pointer == len(history) - 1
        assert not engine.can_redo()

    def test_undo_does_not_record(self, engine):
        _drag(engine, [(5, 5)])
        engine.undo()
        assert len(engine.history_manager) == 2
        assert engine.can_redo()

    def test_new_action_after_undo_drops_redo(self, engine):
        _drag(engine, [(5, 5)])
        engine.undo()
        _drag(engine, [(40, 40)])
        assert not engine.can_redo()
        assert _descriptions(engine) == ["Initial state", "Draw cells"]

    def test_undo_restores_view(self, engine):
        _drag(engine, [(5, 5)])
        engine.wheel(0, 0, -500)
        _drag(engine, [(100, 100)])
        engine.undo()
        assert engine.scene.view.scale == 1.0

    def test_history_is_bounded(self, assets):
        engine = EditorEngine(assets=assets, max_history=3)
        for x in range(5):
            _drag(engine, [(x * 32 + 5, 5)])
        assert len(engine.history_manager) == 3

    def test_load_resets_history(self, engine, event_log):
        _drag(engine, [(5, 5)])
        record = engine.get_map_data()
        engine.reset()
        engine.load_map_data(record)
        assert _descriptions(engine) == ["Load map"]
        assert engine.scene.active_layer.filled_coords() == {(0, 0)}
        assert SCENE_LOADED in _names(event_log)

    def test_load_invalid_keeps_everything(self, engine):
        _drag(engine, [(5, 5)])
        with pytest.raises(InvalidSnapshotError):
            engine.load_map_data({'layers': 'nope', 'settings': {}})
        assert engine.scene.active_layer.cell_count == 1
        assert len(engine.history_manager) == 2


# ══════════════════════════════════════════════════════════════════════════
# Commands
# ══════════════════════════════════════════════════════════════════════════

class TestCommands:

    def test_remove_last_layer_emits_notice(self, engine, event_log):
        assert not engine.remove_active_layer()
        assert (NOTICE, ("Cannot remove the last layer.",)) in event_log
        assert len(engine.history_manager) == 1

    def test_layer_commands_record(self, engine, event_log):
        engine.add_layer()
        engine.rename_layer(1, "Walls")
        engine.set_layer_visible(0, False)
        engine.set_layer_shadow(1, ShadowConfig(enabled=True))
        engine.remove_active_layer()
        assert _descriptions(engine)[1:] == [
            "Add layer 2", "Rename layer to 'Walls'", "Hide layer", "Change layer shadow", "Remove layer",
        ]
        assert _names(event_log).count(LAYERS_CHANGED) == 5

    def test_set_active_layer_not_recorded(self, engine):
        engine.add_layer()
        assert engine.set_active_layer(0)
        assert _descriptions(engine)[-1] == "Add layer 2"

    def test_rotate_records_with_label(self, engine):
        _drag(engine, [(5, 5)])
        engine.scene.select_at(5, 5)
        assert engine.rotate_selection()
        assert _descriptions(engine)[-1] == "Rotate selection 90°"

    def test_rejected_commands_do_not_record(self, engine):
        assert not engine.rotate_selection()
        assert not engine.resize_selection(2.0)
        assert not engine.delete_selection()
        assert not engine.paste_selection((0, 0))
        engine.scene.freeform_stroke(0, 0)
        engine.scene.select_at(0, 0)
        assert not engine.resize_selection(0)
        assert len(engine.history_manager) == 1

    def test_copy_paste_at_cursor(self, engine):
        engine.scene.add_mark(FreeformMark(10, 10, 8, BLACK, BLACK), "a")
        engine.scene.select_at(10, 10)
        assert engine.copy_selection()
        engine.pointer_move(200, 100)
        assert engine.paste_selection()
        pasted = engine.scene.get_mark(next(iter(engine.scene.selection.mark_ids)))
        assert (pasted.x, pasted.y) == (200, 100)
        assert _descriptions(engine)[-1] == "Paste"

    def test_clear_canvas_is_undoable(self, engine):
        _drag(engine, [(5, 5)])
        engine.clear_canvas()
        assert engine.scene.active_layer.cell_count == 0
        engine.undo()
        assert engine.scene.active_layer.cell_count == 1

    def test_reset(self, engine):
        engine.add_layer()
        _drag(engine, [(5, 5)])
        engine.reset()
        assert engine.scene.layer_count == 1
        assert _descriptions(engine) == ["New map"]
        assert not engine.can_undo()

    def test_cell_size_not_recorded(self, engine):
        assert engine.update_cell_size(64)
        assert not engine.update_cell_size(1000)
        assert len(engine.history_manager) == 1

    def test_settings_validation(self, engine):
        with pytest.raises(ValueError):
            engine.set_draw_fill(fill_mode="gradient")
        with pytest.raises(ValueError):
            engine.set_mark_defaults(size=0)
        with pytest.raises(ValueError):
            engine.set_mark_defaults(period=-1)

    def test_draw_fill_applies_to_new_cells(self, engine):
        engine.set_draw_fill(fill_color=Color(255, 0, 0))
        _drag(engine, [(5, 5)])
        assert engine.scene.active_layer.get_cell(0, 0).fill.color == Color(255, 0, 0)

    def test_border_and_empty_style_record(self, engine):
        engine.set_border_style(True, "border.png")
        engine.set_empty_cell_style(fill_color=Color(10, 10, 10))
        assert _descriptions(engine)[1:] == ["Change border style", "Change empty cell style"]
        assert engine.assets.get("border.png") is not None
