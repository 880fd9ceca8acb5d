import numpy as np
from PySide6.QtWidgets import QWidget
from PySide6.QtGui import QPainter, QPen, QColor, QPixmap, QImage
from PySide6.QtCore import Qt, QRectF, QPointF, Signal

WATER_COLOR = "#1e88e5"
PAPER_COLOR = "#fb8c00"


def buffer_to_pixmap(pixels: np.ndarray) -> QPixmap:
    arr = np.ascontiguousarray(np.clip(pixels * 255 + 0.5, 0, 255).astype(np.uint8))
    h, w, _ = arr.shape
    qimg = QImage(arr.data, w, h, 3 * w, QImage.Format.Format_RGB888).copy()
    return QPixmap.fromImage(qimg)


class ImageCanvas(QWidget):
    """Displays the current photograph and reports clicks in image pixels."""

    clicked = Signal(int, int)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.pix = None
        self.accepting = False
        self.patch_size = 200
        self._img_w = 0
        self._img_h = 0
        self._draw_rect = QRectF()
        self.points_img = []

    def set_image(self, qpix: QPixmap | None):
        self.pix = qpix
        self._img_w = qpix.width() if qpix else 0
        self._img_h = qpix.height() if qpix else 0
        self.points_img = []
        self.update()

    def set_points(self, points):
        self.points_img = list(points)
        self.update()

    def set_accepting(self, accepting: bool):
        self.accepting = accepting
        self.setCursor(
            Qt.CursorShape.CrossCursor if accepting else Qt.CursorShape.ArrowCursor
        )

    def _compute_draw_rect(self) -> QRectF:
        r = self.rect()
        if not self.pix:
            self._draw_rect = QRectF()
            return self._draw_rect
        prf = QRectF(self.pix.rect())
        size = prf.size().scaled(r.width(), r.height(), Qt.AspectRatioMode.KeepAspectRatio)
        x = (r.width() - size.width()) / 2
        y = (r.height() - size.height()) / 2
        self._draw_rect = QRectF(x, y, size.width(), size.height())
        return self._draw_rect

    def _widget_to_image(self, pt: QPointF) -> tuple[int, int] | None:
        if self._draw_rect.isNull() or self._img_w == 0:
            return None
        sx = self._img_w / self._draw_rect.width()
        sy = self._img_h / self._draw_rect.height()
        ix = int((pt.x() - self._draw_rect.x()) * sx)
        iy = int((pt.y() - self._draw_rect.y()) * sy)
        if 0 <= ix < self._img_w and 0 <= iy < self._img_h:
            return ix, iy
        return None

    def mousePressEvent(self, e):
        if not self.accepting or not self.pix:
            return
        if e.button() != Qt.MouseButton.LeftButton:
            return
        self._compute_draw_rect()
        img_pt = self._widget_to_image(e.position())
        if img_pt is None:
            return
        self.clicked.emit(*img_pt)

    def paintEvent(self, e):
        p = QPainter(self)
        p.fillRect(self.rect(), QColor("#f5f5f5"))
        dr = self._compute_draw_rect()
        if not self.pix:
            p.setPen(QColor("#666"))
            p.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, "No image loaded")
            return
        p.drawPixmap(dr, self.pix, QRectF(self.pix.rect()))

        sx = dr.width() / self._img_w
        sy = dr.height() / self._img_h
        for (x, y), color in zip(self.points_img, (WATER_COLOR, PAPER_COLOR)):
            # patch is anchored at its top-left corner and clipped to the image
            w = min(self.patch_size, self._img_w - x)
            h = min(self.patch_size, self._img_h - y)
            p.setPen(QPen(QColor(color), 2))
            p.drawRect(QRectF(dr.x() + x * sx, dr.y() + y * sy, w * sx, h * sy))
