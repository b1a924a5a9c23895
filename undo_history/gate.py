import logging
from .history import HistoryList
from .snapshots import ImageSnapshot, SceneSnapshot, Snapshot, scene_snapshot_from_state

logger = logging.getLogger(__name__)


class SnapshotGate:
    """Drops before-operation snapshots that repeat the context of the present one.

    Entering the same board/layers (or scene) several times in a row before
    editing would otherwise fill the history with identical steps.
    After-operation snapshots always land: their pixels may differ even when
    the context matches.
    """

    def __init__(self, history: HistoryList):
        self.history = history

    def admit_image(self, is_before: bool, snapshot: ImageSnapshot) -> bool:
        return self._admit(is_before, snapshot, ImageSnapshot)

    def admit_scene(self, is_before: bool, state) -> bool:
        return self._admit(is_before, scene_snapshot_from_state(state), SceneSnapshot)

    def _admit(self, is_before: bool, snapshot: Snapshot, rule: type) -> bool:
        present = self.history.present
        # with no present there is nothing to compare against, so the first entry always lands
        if is_before and isinstance(present, rule) and present.context_equals(snapshot):
            logger.debug("skip duplicate before-snapshot (%s)", snapshot.kind)
            return False
        self.history.insert(snapshot)
        return True
