import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PIL import Image
from PyQt6.QtWidgets import QApplication

from undo_history.snapshots import ImageSnapshot, LayerData


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


def make_image_snapshot(scene_id=1, board_index=0, layer_indexes=(0,), color=(0, 0, 0, 0)):
    return ImageSnapshot(
        scene_id=scene_id,
        board_index=board_index,
        layers=[LayerData(index=i, source=Image.new("RGBA", (4, 4), color)) for i in layer_indexes],
    )
