"""
Tests for the PyQt5 viewer widgets.

Runs on Qt's offscreen platform; widgets are never shown, events are handed
straight to the handlers.
"""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt5.QtCore import QEvent, QPointF, Qt
from PyQt5.QtGui import QKeyEvent, QMouseEvent
from PyQt5.QtWidgets import QApplication

from OA_Libs.AlignmentLib.drag_state_machine import DragState
from OA_Libs.AlignmentLib.position_model import Position
from OA_Libs.ViewerLib.comparison_window import ComparisonWindow
from OA_Libs.ViewerLib.overlay_viewport import OverlayViewport, is_outside_surface, widget_to_viewport
from OA_Libs.constants import COMPARISON_HEADING


@pytest.fixture(scope="module")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


def _mouse(event_type, x, y, button, buttons):
    return QMouseEvent(event_type, QPointF(x, y), button, buttons, Qt.NoModifier)


class TestSurfaceHelpers:
    """Tests for the Qt-free coordinate helpers."""

    def test_inside_points(self):
        assert not is_outside_surface((0, 0), (640, 360))
        assert not is_outside_surface((639, 359), (640, 360))

    @pytest.mark.parametrize("point", [(-1, 10), (10, -300), (640, 10), (10, 360)])
    def test_outside_points(self, point):
        assert is_outside_surface(point, (640, 360))

    def test_widget_to_viewport_scales_back(self):
        assert widget_to_viewport((320, 180), (640, 360), (320, 180)) == Position(160, 90)

    def test_widget_to_viewport_handles_letterbox(self):
        # 640x480 widget shows a 640x360 frame with 60px bars top and bottom
        assert widget_to_viewport((0, 60), (640, 480), (320, 180)) == Position(0, 0)


class TestOverlayViewport:
    """Tests for mouse handling on the viewport."""

    @pytest.fixture
    def viewport(self, qapp, loaded_session):
        widget = OverlayViewport(loaded_session)
        widget.resize(640, 360)
        return widget

    def test_drag_moves_overlay(self, viewport, loaded_session):
        viewport.mousePressEvent(_mouse(QEvent.MouseButtonPress, 320, 180, Qt.LeftButton, Qt.LeftButton))
        viewport.mouseMoveEvent(_mouse(QEvent.MouseMove, 340, 190, Qt.NoButton, Qt.LeftButton))

        assert loaded_session.drag_state is DragState.DRAGGING
        assert loaded_session.position == Position(10, 5)

    def test_leaving_surface_while_held_ends_drag(self, viewport, loaded_session):
        """The mouse grab hides leaveEvent, so an outside move must end the drag."""
        viewport.mousePressEvent(_mouse(QEvent.MouseButtonPress, 320, 180, Qt.LeftButton, Qt.LeftButton))
        viewport.mouseMoveEvent(_mouse(QEvent.MouseMove, 340, 180, Qt.NoButton, Qt.LeftButton))
        viewport.mouseMoveEvent(_mouse(QEvent.MouseMove, 320, -300, Qt.NoButton, Qt.LeftButton))

        assert loaded_session.drag_state is DragState.IDLE
        assert loaded_session.position == Position(10, 0)

        viewport.mouseMoveEvent(_mouse(QEvent.MouseMove, 400, 100, Qt.NoButton, Qt.LeftButton))
        assert loaded_session.position == Position(10, 0)

    def test_release_ends_drag(self, viewport, loaded_session):
        viewport.mousePressEvent(_mouse(QEvent.MouseButtonPress, 320, 180, Qt.LeftButton, Qt.LeftButton))
        viewport.mouseReleaseEvent(_mouse(QEvent.MouseButtonRelease, 320, 180, Qt.LeftButton, Qt.NoButton))

        assert loaded_session.drag_state is DragState.IDLE


class TestComparisonWindow:
    """Tests for window layout and keyboard nudging."""

    @pytest.fixture
    def window(self, qapp, loaded_session):
        return ComparisonWindow(loaded_session)

    def test_comparison_heading(self, window):
        assert window.label_comparison_heading.text() == COMPARISON_HEADING

    def test_slider_does_not_take_arrow_keys(self, window):
        assert window.slider_opacity.focusPolicy() == Qt.NoFocus

    def test_arrow_keys_nudge(self, window, loaded_session):
        window.keyPressEvent(QKeyEvent(QEvent.KeyPress, Qt.Key_Right, Qt.NoModifier))
        window.keyPressEvent(QKeyEvent(QEvent.KeyPress, Qt.Key_Down, Qt.ShiftModifier))

        assert loaded_session.position == Position(1, 10)

    def test_slider_updates_opacity(self, window, loaded_session):
        window.slider_opacity.setValue(40)

        assert loaded_session.opacity == pytest.approx(0.4)
        assert window.label_opacity.text() == "40%"
