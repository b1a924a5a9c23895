from __future__ import annotations
import os
from typing import Callable
from PyQt6.QtWidgets import (
    QMainWindow, QLabel, QFileDialog, QMessageBox, QDockWidget
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence
from PIL import Image
from .board_view import BoardView
from .debug_overlay import HistoryDebugOverlay
from .snapshots import ImageSnapshot, LayerData, SceneSnapshot, Snapshot
from .undo_stack import UndoStack

BOARD_SIZE = (256, 256)
LAYER_COUNT = 2
DEFAULT_DURATION = 1000  # ms


def _blank_layer() -> Image.Image:
    return Image.new("RGBA", BOARD_SIZE, (0, 0, 0, 0))


class MainWindow(QMainWindow):
    """Minimal board editor that records every edit in the injected undo stack.

    Layer images are never modified in place: every edit replaces the layer
    with a new image, so snapshots may keep references to the old ones.
    """

    def __init__(self, undo_stack: UndoStack, scene_id: int = 1):
        super().__init__()
        self.setWindowTitle("Board Undo History")
        self.resize(900, 600)

        self._undo_stack = undo_stack
        self._undo_stack.subscribe("undo", self._apply_history_state)
        self._undo_stack.subscribe("redo", self._apply_history_state)
        self._undo_stack.history_changed.connect(self._update_actions)

        self.scene_id = scene_id
        self.boards: list[dict] = [{"url": "board-1", "duration": DEFAULT_DURATION}]
        self.board_index = 0
        self._next_board_number = 2
        self._layers: dict[str, list[Image.Image]] = {}  # board url -> layers

        self._view = BoardView()
        self.setCentralWidget(self._view)

        self._build_menu()
        self._build_debug_dock()
        self._build_status_bar()
        self._refresh()

    # ------------------------------------------------------------------
    # Menu
    # ------------------------------------------------------------------
    def _build_menu(self):
        mb = self.menuBar()

        # File
        file_menu = mb.addMenu("ファイル(&F)")
        self._act_open = QAction("レイヤーに画像を開く...", self, shortcut=QKeySequence.StandardKey.Open)
        self._act_open.triggered.connect(self._open_file)
        file_menu.addAction(self._act_open)

        # Edit
        edit_menu = mb.addMenu("編集(&E)")
        self._act_undo = QAction("元に戻す", self, shortcut=QKeySequence.StandardKey.Undo)
        self._act_undo.triggered.connect(self._undo_stack.undo)
        self._act_redo = QAction("やり直し", self, shortcut=QKeySequence.StandardKey.Redo)
        self._act_redo.triggered.connect(self._undo_stack.redo)
        self._act_flip = QAction("レイヤー左右反転", self, shortcut=QKeySequence("Ctrl+H"))
        self._act_flip.triggered.connect(lambda: self.flip_layer(0))
        self._act_clear = QAction("レイヤー消去", self, shortcut=QKeySequence("Ctrl+Backspace"))
        self._act_clear.triggered.connect(lambda: self.clear_layer(0))
        edit_menu.addAction(self._act_undo)
        edit_menu.addAction(self._act_redo)
        edit_menu.addSeparator()
        edit_menu.addAction(self._act_flip)
        edit_menu.addAction(self._act_clear)

        # Board
        board_menu = mb.addMenu("ボード(&B)")
        self._act_add_board = QAction("ボード追加", self, shortcut=QKeySequence("Ctrl+N"))
        self._act_add_board.triggered.connect(self.add_board)
        self._act_delete_board = QAction("ボード削除", self)
        self._act_delete_board.triggered.connect(self.delete_board)
        self._act_prev_board = QAction("前のボード", self, shortcut=QKeySequence("Left"))
        self._act_prev_board.triggered.connect(lambda: self.select_board(self.board_index - 1))
        self._act_next_board = QAction("次のボード", self, shortcut=QKeySequence("Right"))
        self._act_next_board.triggered.connect(lambda: self.select_board(self.board_index + 1))
        board_menu.addAction(self._act_add_board)
        board_menu.addAction(self._act_delete_board)
        board_menu.addSeparator()
        board_menu.addAction(self._act_prev_board)
        board_menu.addAction(self._act_next_board)

        # View
        self._view_menu = mb.addMenu("表示(&V)")

    def _build_debug_dock(self):
        self._debug_dock = QDockWidget("履歴 (デバッグ)", self)
        self._debug_dock.setAllowedAreas(Qt.DockWidgetArea.RightDockWidgetArea)
        self._debug_dock.setWidget(HistoryDebugOverlay(self._undo_stack))
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, self._debug_dock)
        self._debug_dock.setVisible(self._undo_stack.history.config.debug_mode)
        self._view_menu.addAction(self._debug_dock.toggleViewAction())

    def _build_status_bar(self):
        self._status_label = QLabel()
        self.statusBar().addWidget(self._status_label)

    # ------------------------------------------------------------------
    # Current board state
    # ------------------------------------------------------------------
    def layers(self, board_index: int | None = None) -> list[Image.Image]:
        if board_index is None:
            board_index = self.board_index
        url = self.boards[board_index]["url"]
        if url not in self._layers:
            self._layers[url] = [_blank_layer() for _ in range(LAYER_COUNT)]
        return self._layers[url]

    def _image_snapshot(self, layer_indexes: list[int]) -> ImageSnapshot:
        layers = self.layers()
        return ImageSnapshot(
            scene_id=self.scene_id,
            board_index=self.board_index,
            layers=[LayerData(index=i, source=layers[i]) for i in layer_indexes],
        )

    def _scene_state(self) -> dict:
        return {
            "sceneId": self.scene_id,
            "boardData": {"boards": [dict(board) for board in self.boards]},
        }

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------
    def _image_edit(self, layer_index: int, edit: Callable[[Image.Image], Image.Image]):
        self._undo_stack.add_image_data(True, self._image_snapshot([layer_index]))
        layers = self.layers()
        layers[layer_index] = edit(layers[layer_index])
        self._undo_stack.add_image_data(False, self._image_snapshot([layer_index]))
        self._refresh()

    def _scene_edit(self, edit: Callable[[], None]):
        self._undo_stack.add_scene_data(True, self._scene_state())
        edit()
        self._undo_stack.add_scene_data(False, self._scene_state())
        self._refresh()

    def load_layer_image(self, path: str, layer_index: int = 0):
        image = Image.open(path).convert("RGBA").resize(BOARD_SIZE, Image.LANCZOS)
        self._image_edit(layer_index, lambda _old: image)

    def flip_layer(self, layer_index: int):
        self._image_edit(layer_index, lambda img: img.transpose(Image.FLIP_LEFT_RIGHT))

    def clear_layer(self, layer_index: int):
        self._image_edit(layer_index, lambda _old: _blank_layer())

    def add_board(self):
        def edit():
            self.boards.insert(self.board_index + 1, {
                "url": f"board-{self._next_board_number}",
                "duration": DEFAULT_DURATION,
            })
            self._next_board_number += 1
            self.board_index += 1
        self._scene_edit(edit)

    def delete_board(self):
        if len(self.boards) <= 1:
            return

        def edit():
            self.boards.pop(self.board_index)
            self.board_index = min(self.board_index, len(self.boards) - 1)
        self._scene_edit(edit)

    def select_board(self, index: int):
        if 0 <= index < len(self.boards):
            self.board_index = index
            self._refresh()

    # ------------------------------------------------------------------
    # Undo / Redo
    # ------------------------------------------------------------------
    def _apply_history_state(self, snapshot: Snapshot):
        if isinstance(snapshot, ImageSnapshot):
            self._apply_image_state(snapshot)
        elif isinstance(snapshot, SceneSnapshot):
            self._apply_scene_state(snapshot)
        self._refresh()

    def _apply_image_state(self, snapshot: ImageSnapshot):
        if snapshot.scene_id != self.scene_id:
            return
        if not 0 <= snapshot.board_index < len(self.boards):
            return
        self.board_index = snapshot.board_index
        layers = self.layers()
        for layer in snapshot.layers:
            # the history keeps the original; the live board gets its own copy
            layers[layer.index] = layer.source.copy()

    def _apply_scene_state(self, snapshot: SceneSnapshot):
        if snapshot.scene_id != self.scene_id or not isinstance(snapshot.scene_data, dict):
            return
        boards = snapshot.scene_data.get("boards", [])
        if not boards:
            return
        self.boards = boards
        self.board_index = min(self.board_index, len(self.boards) - 1)

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------
    def _refresh(self):
        self._view.set_layers(self.layers())
        self._status_label.setText(
            f"シーン {self.scene_id}  ボード {self.board_index + 1} / {len(self.boards)}"
            f"  ({self.boards[self.board_index]['url']})"
        )
        self._update_actions()

    def _update_actions(self):
        self._act_undo.setEnabled(self._undo_stack.can_undo())
        self._act_redo.setEnabled(self._undo_stack.can_redo())
        self._act_delete_board.setEnabled(len(self.boards) > 1)

    # ------------------------------------------------------------------
    # File I/O
    # ------------------------------------------------------------------
    def _open_file(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "画像を開く", "", "PNG Files (*.png);;All Files (*)"
        )
        if not path:
            return
        try:
            self.load_layer_image(path)
        except OSError as e:
            QMessageBox.warning(self, "読み込みエラー", f"{os.path.basename(path)}\n{e}")
            return
        self.statusBar().showMessage(f"{os.path.basename(path)} を読み込みました", 2000)
