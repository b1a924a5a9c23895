from __future__ import annotations
from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import QPointF
from PyQt6.QtGui import QPainter, QPixmap, QImage, QColor
from PIL import Image


def pil_to_qimage(img: Image.Image) -> QImage:
    img_rgba = img.convert("RGBA")
    data = img_rgba.tobytes("raw", "RGBA")
    # copy() so the QImage owns its buffer once ``data`` goes away
    return QImage(data, img_rgba.width, img_rgba.height, QImage.Format.Format_RGBA8888).copy()


def composite_layers(layers: list[Image.Image]) -> Image.Image | None:
    """Flatten layers bottom (index 0) to top."""
    if not layers:
        return None
    result = Image.new("RGBA", layers[0].size, (0, 0, 0, 0))
    for layer in layers:
        result.alpha_composite(layer.convert("RGBA"))
    return result


class BoardView(QWidget):
    """Shows the flattened layers of the current board, fitted to the widget."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setMinimumSize(320, 240)
        self.image: Image.Image | None = None
        self._pixmap: QPixmap | None = None

    def set_layers(self, layers: list[Image.Image]):
        self.image = composite_layers(layers)
        self._pixmap = QPixmap.fromImage(pil_to_qimage(self.image)) if self.image else None
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(40, 40, 40))

        if not self._pixmap:
            return

        iw, ih = self.image.size
        zoom = min(self.width() / iw, self.height() / ih) * 0.95
        offset = QPointF((self.width() - iw * zoom) / 2, (self.height() - ih * zoom) / 2)

        painter.save()
        painter.translate(offset)
        painter.scale(zoom, zoom)

        # checkerboard background to show image boundary and transparency
        cell = 8
        c1, c2 = QColor(180, 180, 180), QColor(220, 220, 220)
        for cy in range(0, ih, cell):
            for cx in range(0, iw, cell):
                color = c1 if ((cx // cell + cy // cell) % 2 == 0) else c2
                painter.fillRect(cx, cy, min(cell, iw - cx), min(cell, ih - cy), color)

        painter.drawPixmap(0, 0, self._pixmap)
        painter.restore()
