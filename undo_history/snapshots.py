"""Snapshot variants recorded in the undo history.

Each variant knows how to compare its editing context against another
snapshot, how to clone itself before it is handed to undo/redo listeners,
and how to describe itself for the debug listing.
"""
from __future__ import annotations
import json
from dataclasses import dataclass, field
from typing import Any
from PIL import Image

IMAGE = "image"
SCENE = "scene"


def _string_of(value) -> str:
    return "n/a" if value is None else str(value)


def _pixels_of(layer) -> str:
    source = getattr(layer, "source", None)
    if not isinstance(source, Image.Image):
        return "n/a"
    w, h = source.size
    return str(w * h * len(source.getbands()))


@dataclass(frozen=True, eq=False)
class LayerData:
    index: int
    source: Image.Image  # shared by reference, never copied by the history


@dataclass(frozen=True, eq=False)
class Snapshot:
    kind: str

    def context_equals(self, other: Snapshot | None) -> bool:
        return False

    def clone(self) -> Snapshot:
        return self

    def describe(self) -> str:
        return self.kind


@dataclass(frozen=True, eq=False)
class ImageSnapshot(Snapshot):
    """Layer pixels of one board. Layers must be listed in the same order each time."""

    kind: str = field(default=IMAGE, init=False)
    scene_id: Any = None
    board_index: int | None = None
    layers: tuple[LayerData, ...] = ()

    def __post_init__(self):
        if self.layers is not None:
            object.__setattr__(self, "layers", tuple(self.layers))

    def context_equals(self, other: Snapshot | None) -> bool:
        if not isinstance(other, ImageSnapshot):
            return False
        if self.scene_id is None or self.board_index is None:
            return False
        if self.scene_id != other.scene_id or self.board_index != other.board_index:
            return False
        if self.layers is None or other.layers is None:
            return False
        if len(self.layers) != len(other.layers):
            return False
        for a, b in zip(self.layers, other.layers):
            index = getattr(a, "index", None)
            if index is None or index != getattr(b, "index", None):
                return False
        return True

    def describe(self) -> str:
        layers = ", ".join(
            f"index: {_string_of(getattr(layer, 'index', None))} pixels:{_pixels_of(layer)}"
            for layer in self.layers or ()
        )
        return (f"{self.kind} scene: {_string_of(self.scene_id)} "
                f"board: {_string_of(self.board_index)} layers: [ {layers} ]")


@dataclass(frozen=True, eq=False)
class SceneSnapshot(Snapshot):
    """Board list of a scene. ``scene_data`` must be JSON-serializable.

    Clones go through JSON, so tuples come back as lists and non-string
    dict keys come back as strings.
    """

    kind: str = field(default=SCENE, init=False)
    scene_id: Any = None
    scene_data: Any = None

    def context_equals(self, other: Snapshot | None) -> bool:
        if not isinstance(other, SceneSnapshot):
            return False
        return self.scene_id is not None and self.scene_id == other.scene_id

    def clone(self) -> SceneSnapshot:
        # value round trip so listeners never alias the copy held in history
        return SceneSnapshot(
            scene_id=self.scene_id,
            scene_data=json.loads(json.dumps(self.scene_data)),
        )

    def describe(self) -> str:
        return f"{self.kind} {_board_indexes(self.scene_data)}"


@dataclass(frozen=True, eq=False)
class UnknownSnapshot(Snapshot):
    """Any other kind of snapshot. Never context-equal, so never deduplicated."""

    payload: Any = None


def _board_indexes(scene_data) -> str:
    boards = scene_data.get("boards") if isinstance(scene_data, dict) else None
    if not isinstance(boards, list):
        return ""
    indexes = []
    for board in boards:
        url = board.get("url") if isinstance(board, dict) else None
        if not isinstance(url, str):
            indexes.append("?")
            continue
        try:
            indexes.append(str(int(url.replace("board-", ""))))
        except ValueError:
            indexes.append("?")
    return ", ".join(indexes)


def scene_snapshot_from_state(state) -> SceneSnapshot:
    """Normalize a raw ``{sceneId, boardData}`` mapping into a scene snapshot."""
    if not isinstance(state, dict):
        return SceneSnapshot()
    scene_id = state.get("sceneId", state.get("scene_id"))
    board_data = state.get("boardData", state.get("board_data"))
    return SceneSnapshot(scene_id=scene_id, scene_data=board_data)
