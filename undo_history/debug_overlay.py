from PyQt6.QtWidgets import QLabel
from PyQt6.QtCore import Qt
from .undo_stack import UndoStack


class HistoryDebugOverlay(QLabel):
    """Diagnostic listing of the undo history, refreshed on every change."""

    def __init__(self, undo_stack: UndoStack, parent=None):
        super().__init__(parent)
        self._undo_stack = undo_stack
        self.setAlignment(Qt.AlignmentFlag.AlignTop | Qt.AlignmentFlag.AlignLeft)
        self.setMinimumWidth(500)
        self.setStyleSheet(
            "background: black; color: white; padding: 10px;"
            "font-family: monospace; font-size: 11px;"
        )
        self.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        undo_stack.history_changed.connect(self.refresh)
        self.refresh()

    def refresh(self):
        self.setText("\n".join(self._undo_stack.debug_lines()))
