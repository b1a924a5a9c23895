"""Tests for undo_history.debug_overlay."""

from undo_history.debug_overlay import HistoryDebugOverlay
from undo_history.undo_stack import UndoStack

from conftest import make_image_snapshot


class TestHistoryDebugOverlay:
    def test_initial_text(self) -> None:
        overlay = HistoryDebugOverlay(UndoStack())
        assert overlay.text() == "▸ 0 n/a"

    def test_refreshes_on_change(self) -> None:
        stack = UndoStack()
        overlay = HistoryDebugOverlay(stack)
        stack.add_image_data(True, make_image_snapshot(scene_id=2, board_index=1))
        stack.add_scene_data(False, {"sceneId": 2, "boardData": {"boards": [{"url": "board-1"}]}})
        assert overlay.text().splitlines() == [
            "  0 image scene: 2 board: 1 layers: [ index: 0 pixels:64 ]",
            "▸ 1 scene 1",
        ]
        stack.undo()
        assert overlay.text().splitlines()[0].startswith("▸ 0 image")
