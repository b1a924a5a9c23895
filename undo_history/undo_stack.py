from __future__ import annotations
import logging
from typing import Callable
from PyQt6.QtCore import QObject, Qt, pyqtSignal
from .config import HistoryConfig
from .gate import SnapshotGate
from .history import HistoryList
from .snapshots import ImageSnapshot, Snapshot

logger = logging.getLogger(__name__)


class UndoStack(QObject):
    """Undo/redo history of one editing session.

    Create one per session and hand it to whatever records or applies
    snapshots. ``undone`` / ``redone`` carry a clone of the new present and
    fire once per traversal that actually moved; handlers run synchronously,
    in the order they were connected.
    """

    undone = pyqtSignal(object)
    redone = pyqtSignal(object)
    history_changed = pyqtSignal()

    def __init__(self, config: HistoryConfig | None = None, parent=None):
        super().__init__(parent)
        self.history = HistoryList(config)
        self.gate = SnapshotGate(self.history)

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------
    def add_image_data(self, is_before: bool, snapshot: ImageSnapshot):
        """Record layer pixels. ``is_before`` is True for the snapshot taken before an edit."""
        if self.gate.admit_image(is_before, snapshot):
            self.history_changed.emit()

    def add_scene_data(self, is_before: bool, state: dict):
        """Record a scene from ``{"sceneId": ..., "boardData": ...}``."""
        if self.gate.admit_scene(is_before, state):
            self.history_changed.emit()

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------
    def undo(self):
        if self.history.undo():
            self._emit(self.undone)

    def redo(self):
        if self.history.redo():
            self._emit(self.redone)

    def _emit(self, signal):
        present = self.history.present
        try:
            if present is not None:
                signal.emit(present.clone())
        finally:
            # the history has moved whether or not the clone succeeded
            self.history_changed.emit()

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------
    def subscribe(self, event: str, handler: Callable[[Snapshot], None]):
        signals = {"undo": self.undone, "redo": self.redone}
        if event not in signals:
            raise ValueError(f"Unknown history event: {event!r}")
        signals[event].connect(handler, Qt.ConnectionType.DirectConnection)

    # ------------------------------------------------------------------
    # Session / diagnostics
    # ------------------------------------------------------------------
    def clear(self):
        self.history.clear()
        self.history_changed.emit()

    def debug_lines(self) -> list[str]:
        return self.history.debug_lines()
