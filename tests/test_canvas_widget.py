"""
Tests for the canvas widget.

Verifies:
- Mouse input reaches the engine and records through it
- Redraw requests become widget updates; painting clears the pending frame
- Keyboard shortcuts for delete and rotate
- Export image size follows the logical bounding box and pixels per cell
"""
import pytest

from PyQt5.QtCore import Qt, QPoint

from components.canvas_widget import CanvasWidget
from engine import Instrument


@pytest.fixture
def canvas(qtbot, engine):
    widget = CanvasWidget(engine)
    widget.resize(320, 240)
    qtbot.addWidget(widget)
    widget.show()
    qtbot.waitExposed(widget)
    return widget


# ══════════════════════════════════════════════════════════════════════════
# Input
# ══════════════════════════════════════════════════════════════════════════

class TestCanvasInput:

    def test_click_draws_cell(self, canvas, engine, qtbot):
        qtbot.mouseClick(canvas, Qt.LeftButton, pos=QPoint(40, 8))
        assert engine.scene.active_layer.filled_coords() == {(1, 0)}
        assert engine.history_manager.get_current_description() == "Draw cells"

    def test_delete_key_removes_selection(self, canvas, engine, qtbot):
        qtbot.mouseClick(canvas, Qt.LeftButton, pos=QPoint(8, 8))
        engine.set_instrument(Instrument.SELECT)
        qtbot.mouseClick(canvas, Qt.LeftButton, pos=QPoint(8, 8))
        qtbot.keyClick(canvas, Qt.Key_Delete)
        assert engine.scene.active_layer.cell_count == 0
        assert engine.history_manager.get_current_description() == "Delete selection"

    def test_rotate_key(self, canvas, engine, qtbot):
        engine.scene.freeform_stroke(50, 50)
        engine.scene.select_in_rect(0, 0, 100, 100)
        qtbot.keyClick(canvas, Qt.Key_R, Qt.ShiftModifier)
        assert engine.history_manager.get_current_description() == "Rotate selection -90°"

    def test_escape_clears_selection(self, canvas, engine, qtbot):
        engine.scene.freeform_stroke(50, 50)
        engine.scene.select_in_rect(0, 0, 100, 100)
        qtbot.keyClick(canvas, Qt.Key_Escape)
        assert engine.scene.selection.is_empty()


# ══════════════════════════════════════════════════════════════════════════
# Painting
# ══════════════════════════════════════════════════════════════════════════

class TestCanvasPainting:

    def test_paint_clears_pending_frame(self, canvas, engine):
        engine.frames.request()
        assert engine.frames.pending
        canvas.repaint()
        assert not engine.frames.pending

    def test_redraw_request_repaints(self, canvas, engine, qtbot):
        engine.frames.frame_rendered()
        engine.frames.request()
        assert engine.frames.pending
        qtbot.waitUntil(lambda: not engine.frames.pending)

    def test_grab_shows_drawn_cell(self, canvas, engine, qtbot):
        qtbot.mouseClick(canvas, Qt.LeftButton, pos=QPoint(8, 8))
        image = canvas.grab().toImage()
        color = image.pixelColor(16, 16)
        assert (color.red(), color.green(), color.blue()) == (0, 0, 0)
        assert canvas.renderer.last_stats.cells == 1


# ══════════════════════════════════════════════════════════════════════════
# Export
# ══════════════════════════════════════════════════════════════════════════

class TestCanvasExport:

    def test_empty_map_exports_default_area(self, canvas):
        image = canvas.export_image(8)
        assert (image.width(), image.height()) == (80, 80)

    def test_export_size_tracks_content(self, canvas, engine):
        engine.scene.grid_draw((0, 0))
        engine.scene.grid_draw((3, 1))
        image = canvas.export_image(16)
        # cells 0..4 x 0..2, padded by one cell on each side
        assert (image.width(), image.height()) == (6 * 16, 4 * 16)
        cell = image.pixelColor(16 + 8, 16 + 8)
        assert (cell.red(), cell.green(), cell.blue()) == (0, 0, 0)

    def test_export_ignores_zoom(self, canvas, engine):
        engine.scene.grid_draw((0, 0))
        engine.scene.view.set_state(50, 50, 4.0)
        assert canvas.export_image(10).width() == 30

    def test_invalid_pixels_per_cell(self, canvas):
        with pytest.raises(ValueError):
            canvas.export_image(0)

    def test_export_to_png(self, canvas, tmp_path):
        path = tmp_path / "map.png"
        assert canvas.export_to_png(str(path), 4)
        assert path.stat().st_size > 0
