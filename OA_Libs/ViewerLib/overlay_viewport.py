"""
Comparison viewport widget.

Displays the frame rendered by a ComparisonSession and forwards mouse input to
it in viewport pixel coordinates. The frame is scaled to the widget with its
aspect ratio kept, so widget coordinates are mapped back through the same
scale before they reach the drag state machine.
"""

from typing import Any, Optional, Tuple

from PyQt5.QtCore import QPoint, Qt
from PyQt5.QtGui import QImage, QPixmap
from PyQt5.QtWidgets import QLabel, QSizePolicy

from OA_Libs.AlignmentLib.drag_state_machine import DragState
from OA_Libs.AlignmentLib.position_model import Position
from OA_Libs.comparison_session import ComparisonSession


def pil_to_qpixmap(image: Any) -> QPixmap:
    image = image.convert("RGBA")
    width, height = image.size
    data = image.tobytes("raw", "RGBA")
    # QImage does not own the buffer; copy before `data` goes away
    qimage = QImage(data, width, height, width * 4, QImage.Format_RGBA8888).copy()
    return QPixmap.fromImage(qimage)


def widget_to_viewport(
    point: Tuple[int, int],
    widget_size: Tuple[int, int],
    viewport_size: Tuple[int, int],
) -> Position:
    """Map a widget-space point to viewport pixels for a centred, aspect-fit frame."""
    widget_w, widget_h = widget_size
    viewport_w, viewport_h = viewport_size
    if widget_w <= 0 or widget_h <= 0:
        return Position(int(point[0]), int(point[1]))

    scale = min(widget_w / viewport_w, widget_h / viewport_h)
    left = (widget_w - viewport_w * scale) / 2
    top = (widget_h - viewport_h * scale) / 2
    return Position(
        int(round((point[0] - left) / scale)),
        int(round((point[1] - top) / scale)),
    )


def is_outside_surface(point: Tuple[int, int], widget_size: Tuple[int, int]) -> bool:
    """True if a widget-space point lies outside a widget of the given size."""
    x, y = point
    width, height = widget_size
    return not (0 <= x < width and 0 <= y < height)


class OverlayViewport(QLabel):
    """Shows the blended comparison and turns mouse events into drag input."""

    def __init__(self, session: ComparisonSession, parent=None) -> None:
        super().__init__(parent)
        self.session = session
        self._frame_pixmap: Optional[QPixmap] = None

        self.setAlignment(Qt.AlignCenter)
        self.setMinimumSize(640, 360)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setStyleSheet("background-color: #111111; border-radius: 8px;")
        self.setCursor(Qt.OpenHandCursor)

    def refresh(self) -> None:
        frame = self.session.render()
        self._frame_pixmap = pil_to_qpixmap(frame.image)
        self._update_scaled_pixmap()

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self._update_scaled_pixmap()

    def _update_scaled_pixmap(self) -> None:
        if self._frame_pixmap is None:
            return
        scaled = self._frame_pixmap.scaled(
            self.size(),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.FastTransformation,
        )
        self.setPixmap(scaled)

    def _to_viewport(self, pos: QPoint) -> Position:
        return widget_to_viewport(
            (pos.x(), pos.y()),
            (self.width(), self.height()),
            self.session.compositor.viewport_size,
        )

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.LeftButton:
            if self.session.pointer_down(self._to_viewport(event.pos())):
                self.setCursor(Qt.ClosedHandCursor)
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event) -> None:
        if self.session.drag_state is DragState.DRAGGING and event.buttons() & Qt.LeftButton:
            # The press grabs the mouse, so no leaveEvent arrives while dragging
            if is_outside_surface((event.pos().x(), event.pos().y()), (self.width(), self.height())):
                self.session.pointer_leave()
                self.setCursor(Qt.OpenHandCursor)
                event.accept()
                return
            self.session.pointer_move(self._to_viewport(event.pos()))
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event) -> None:
        if event.button() == Qt.LeftButton:
            self.session.pointer_up()
            self.setCursor(Qt.OpenHandCursor)
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event) -> None:
        self.session.pointer_leave()
        self.setCursor(Qt.OpenHandCursor)
        super().leaveEvent(event)
