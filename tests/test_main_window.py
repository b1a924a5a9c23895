"""Tests for undo_history.main_window."""

import pytest
from PIL import Image

from undo_history.main_window import BOARD_SIZE, MainWindow
from undo_history.undo_stack import UndoStack


@pytest.fixture
def window() -> MainWindow:
    return MainWindow(UndoStack())


def paint_layer(window: MainWindow, color) -> None:
    image = Image.new("RGBA", BOARD_SIZE, (0, 0, 0, 0))
    image.paste(color, (0, 0, BOARD_SIZE[0] // 2, BOARD_SIZE[1]))
    window.layers()[0] = image


class TestImageEdits:
    def test_flip_then_undo_restores_pixels(self, window: MainWindow) -> None:
        paint_layer(window, (255, 0, 0, 255))
        original = window.layers()[0].copy()
        window.flip_layer(0)
        assert window.layers()[0].getpixel((0, 0)) == (0, 0, 0, 0)

        window._undo_stack.undo()
        assert window.layers()[0].tobytes() == original.tobytes()

        window._undo_stack.redo()
        assert window.layers()[0].getpixel((0, 0)) == (0, 0, 0, 0)

    def test_repeated_edits_share_before_snapshot(self, window: MainWindow) -> None:
        window.flip_layer(0)
        window.flip_layer(0)
        # first edit: before + after, second edit: before is dropped, after lands
        assert len(window._undo_stack.history.past) == 2

    def test_undo_actions_follow_history(self, window: MainWindow) -> None:
        assert not window._act_undo.isEnabled()
        window.clear_layer(1)
        assert window._act_undo.isEnabled()
        assert not window._act_redo.isEnabled()
        window._undo_stack.undo()
        assert window._act_redo.isEnabled()

    def test_load_layer_image(self, window: MainWindow, tmp_path) -> None:
        path = tmp_path / "frame.png"
        Image.new("RGBA", (10, 10), (0, 255, 0, 255)).save(path)
        window.load_layer_image(str(path))
        assert window.layers()[0].size == BOARD_SIZE
        assert window.layers()[0].getpixel((5, 5)) == (0, 255, 0, 255)
        window._undo_stack.undo()
        assert window.layers()[0].getpixel((5, 5)) == (0, 0, 0, 0)


class TestSceneEdits:
    def test_add_board_undo(self, window: MainWindow) -> None:
        window.add_board()
        assert [b["url"] for b in window.boards] == ["board-1", "board-2"]
        assert window.board_index == 1

        window._undo_stack.undo()
        assert [b["url"] for b in window.boards] == ["board-1"]
        assert window.board_index == 0

        window._undo_stack.redo()
        assert [b["url"] for b in window.boards] == ["board-1", "board-2"]

    def test_delete_board_undo_keeps_layers(self, window: MainWindow) -> None:
        window.add_board()
        paint_layer(window, (0, 0, 255, 255))
        window.delete_board()
        assert len(window.boards) == 1

        window._undo_stack.undo()
        assert len(window.boards) == 2
        window.select_board(1)
        assert window.layers()[0].getpixel((0, 0)) == (0, 0, 255, 255)

    def test_delete_last_board_is_ignored(self, window: MainWindow) -> None:
        window.delete_board()
        assert len(window.boards) == 1
        assert not window._undo_stack.can_undo()

    def test_scene_undo_does_not_alias_history(self, window: MainWindow) -> None:
        window.add_board()
        window._undo_stack.undo()
        window.boards[0]["duration"] = 1
        present = window._undo_stack.history.present
        assert present.scene_data["boards"][0]["duration"] == 1000
