from __future__ import annotations
import logging
from .config import HistoryConfig
from .snapshots import Snapshot

logger = logging.getLogger(__name__)


class HistoryList:
    """Bounded linear history: past (oldest first), present, future (nearest redo first)."""

    def __init__(self, config: HistoryConfig | None = None):
        self.config = config or HistoryConfig()
        self._past: list[Snapshot] = []
        self._present: Snapshot | None = None
        self._future: list[Snapshot] = []

    @property
    def max_length(self) -> int:
        return self.config.max_length

    @property
    def past(self) -> tuple[Snapshot, ...]:
        return tuple(self._past)

    @property
    def present(self) -> Snapshot | None:
        return self._present

    @property
    def future(self) -> tuple[Snapshot, ...]:
        return tuple(self._future)

    def length_without_future(self) -> int:
        # counts the present slot even while it is empty
        return len(self._past) + 1

    def can_undo(self) -> bool:
        return bool(self._past)

    def can_redo(self) -> bool:
        return bool(self._future)

    def insert(self, snapshot: Snapshot):
        """Make ``snapshot`` the present. Drops the redo chain and, at capacity, the oldest entry."""
        overflow = self.length_without_future() >= self.max_length
        past = self._past[1:] if overflow else list(self._past)
        if self._present is not None:
            past.append(self._present)
        self._past = past
        self._present = snapshot
        self._future = []
        logger.debug("insert %s (past=%d, overflow=%s)", snapshot.kind, len(self._past), overflow)
        self._trace()

    def undo(self) -> bool:
        if not self._past:
            return False
        if self._present is not None:
            self._future.insert(0, self._present)
        self._present = self._past.pop()
        logger.debug("undo -> %s (past=%d, future=%d)",
                     self._present.kind, len(self._past), len(self._future))
        self._trace()
        return True

    def redo(self) -> bool:
        if not self._future:
            return False
        if self._present is not None:
            self._past.append(self._present)
        self._present = self._future.pop(0)
        logger.debug("redo -> %s (past=%d, future=%d)",
                     self._present.kind, len(self._past), len(self._future))
        self._trace()
        return True

    def clear(self):
        self._past = []
        self._present = None
        self._future = []
        self._trace()

    def debug_lines(self) -> list[str]:
        """Human readable listing: past, then the present (marked), then future."""
        lines = []
        n = 0
        for snapshot in self._past:
            lines.append(f"  {n} {snapshot.describe()}")
            n += 1
        present = self._present.describe() if self._present is not None else "n/a"
        lines.append(f"▸ {n} {present}")
        n += 1
        for snapshot in self._future:
            lines.append(f"  {n} {snapshot.describe()}")
            n += 1
        return lines

    def _trace(self):
        if self.config.debug_mode:
            logger.debug("history:\n%s", "\n".join(self.debug_lines()))
