"""
Smoke tests for the main window.

Verifies:
- The window builds with its panels wired to one engine
- History changes drive the undo label, title and saved state
- Saving and opening map files, and the recent files list
- Opening a broken file leaves the map untouched
- The unsaved-changes prompt guards closing
"""
import json
import pytest

from PyQt5.QtWidgets import QMessageBox


@pytest.fixture
def window(qtbot, tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    from main import GridMapEditor
    win = GridMapEditor()
    win.autosave_timer.stop()
    # qtbot closes the window before fixture teardown; a modal prompt would block
    monkeypatch.setattr(win, "_prompt_save_if_needed", lambda: True)
    qtbot.addWidget(win)
    return win


# ══════════════════════════════════════════════════════════════════════════
# Construction and history state
# ══════════════════════════════════════════════════════════════════════════

class TestWindowState:

    def test_panels_share_engine(self, window):
        assert window.canvas_widget.engine is window.engine
        assert window.layer_panel.engine is window.engine
        assert window.tool_panel.engine is window.engine
        assert window.windowTitle() == "Untitled - GridMapEditor"

    def test_edit_marks_unsaved(self, window):
        window.engine.add_layer()
        assert not window.is_saved
        assert window.windowTitle().startswith("Untitled*")
        assert window.undo_action.isEnabled()
        assert window.undo_action.text() == "&Undo Add layer 2"

    def test_layer_panel_follows_layers(self, window):
        window.engine.add_layer("Walls")
        assert window.layer_panel.layer_list.count() == 2
        window.engine.undo()
        assert window.layer_panel.layer_list.count() == 1

    def test_notice_shows_message(self, window, monkeypatch):
        shown = []
        monkeypatch.setattr(QMessageBox, "information", lambda *args: shown.append(args[2]))
        window.engine.remove_active_layer()
        assert shown == ["Cannot remove the last layer."]


# ══════════════════════════════════════════════════════════════════════════
# Unsaved changes
# ══════════════════════════════════════════════════════════════════════════

class TestUnsavedChanges:

    def test_close_dirty_window(self, window):
        window.engine.add_layer()
        assert not window.is_saved
        assert window.close()

    def test_prompt_cancel_blocks(self, window, monkeypatch):
        from main import GridMapEditor
        monkeypatch.setattr(QMessageBox, "question", lambda *args: QMessageBox.Cancel)
        window.engine.add_layer()
        assert not GridMapEditor._prompt_save_if_needed(window)

    def test_prompt_discard_proceeds(self, window, monkeypatch):
        from main import GridMapEditor
        monkeypatch.setattr(QMessageBox, "question", lambda *args: QMessageBox.Discard)
        window.engine.add_layer()
        assert GridMapEditor._prompt_save_if_needed(window)

    def test_clean_window_never_asks(self, window, monkeypatch):
        from main import GridMapEditor
        asked = []
        monkeypatch.setattr(QMessageBox, "question", lambda *args: asked.append(args))
        assert GridMapEditor._prompt_save_if_needed(window)
        assert asked == []


# ══════════════════════════════════════════════════════════════════════════
# Files
# ══════════════════════════════════════════════════════════════════════════

class TestWindowFiles:

    def test_save_then_open(self, window, tmp_path):
        window.engine.scene.grid_draw((2, 2))
        window.engine.record("Draw cells")
        path = str(tmp_path / "level.json")
        window.file_actions._save_to_file(path)
        assert window.is_saved
        assert window.recent_files == [path]
        assert json.loads((tmp_path / ".gridmap" / "config.json").read_text())['recent_files'] == [path]

        window.engine.reset()
        assert window.file_actions.open_file(path)
        assert window.engine.scene.active_layer.has_cell(2, 2)
        assert window.engine.history_manager.get_current_description() == "Load map"
        assert window.windowTitle() == "level.json - GridMapEditor"

    def test_open_broken_file(self, window, tmp_path, monkeypatch):
        monkeypatch.setattr(QMessageBox, "critical", lambda *args: None)
        window.engine.scene.grid_draw((0, 0))
        path = tmp_path / "broken.json"
        path.write_text('{"layers": []}', encoding="utf-8")
        assert not window.file_actions.open_file(str(path))
        assert window.engine.scene.active_layer.cell_count == 1
        assert window.current_file_path is None

    def test_export_image(self, window):
        assert window.export_image(4).width() == 40
