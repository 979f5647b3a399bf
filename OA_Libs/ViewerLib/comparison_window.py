from pathlib import Path
from typing import Dict, List, Optional

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QFileDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from OA_Libs.AlignmentLib.nudge_controller import NudgeDirection
from OA_Libs.CompositingLib.image_models import ImageResource, ImageRole
from OA_Libs.ImportLib.image_upload import ImageUploader
from OA_Libs.ViewerLib.overlay_viewport import OverlayViewport, pil_to_qpixmap
from OA_Libs.comparison_session import ComparisonSession
from OA_Libs.constants import (
    APP_SUBTITLE,
    APP_TITLE,
    COMPARISON_HEADING,
    DEFAULT_NUDGE_STEP,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    DROP_ZONE_BORDER_COLOR,
    DROP_ZONE_HIGHLIGHT_COLOR,
    IMAGE_FILE_FILTER,
    LARGE_NUDGE_STEP,
    OPACITY_PERCENT_MAX,
    PLACEHOLDER_TEXT_COLOR,
    UPLOAD_PREVIEW_HEIGHT,
    UPLOAD_PREVIEW_WIDTH,
)

NUDGE_KEYS = {
    Qt.Key_Left: NudgeDirection.LEFT,
    Qt.Key_Right: NudgeDirection.RIGHT,
    Qt.Key_Up: NudgeDirection.UP,
    Qt.Key_Down: NudgeDirection.DOWN,
}

NUDGE_BUTTON_LABELS = {
    NudgeDirection.LEFT: "←",
    NudgeDirection.RIGHT: "→",
    NudgeDirection.UP: "↑",
    NudgeDirection.DOWN: "↓",
}


class UploadPanel(QFrame):
    """One upload card: title, drop zone with preview, and an upload button."""

    def __init__(self, role: ImageRole, session: ComparisonSession, uploader: ImageUploader, parent=None) -> None:
        super().__init__(parent)
        self.role = role
        self.session = session
        self.uploader = uploader
        self._shown_resource: Optional[ImageResource] = None

        self.setAcceptDrops(True)
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)

        title = QLabel(self.role.label)
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet("font-size: 18px; font-weight: 600;")

        self.drop_zone = QLabel()
        self.drop_zone.setAlignment(Qt.AlignCenter)
        self.drop_zone.setFixedSize(UPLOAD_PREVIEW_WIDTH, UPLOAD_PREVIEW_HEIGHT)
        self._set_highlight(False)
        self._show_placeholder()

        self.btn_upload = QPushButton(f"Upload {self.role.label}")
        self.btn_upload.clicked.connect(self.choose_file)

        layout.addWidget(title)
        layout.addWidget(self.drop_zone, alignment=Qt.AlignCenter)
        layout.addWidget(self.btn_upload)

    def _set_highlight(self, active: bool) -> None:
        color = DROP_ZONE_HIGHLIGHT_COLOR if active else DROP_ZONE_BORDER_COLOR
        self.drop_zone.setStyleSheet(
            f"border: 2px dashed {color}; border-radius: 12px; "
            f"background-color: #111111; color: {PLACEHOLDER_TEXT_COLOR};"
        )

    def _show_placeholder(self) -> None:
        self.drop_zone.setToolTip("")
        self.drop_zone.setText("Drag and drop\nor\nclick to upload")

    def _preview_size(self):
        return (UPLOAD_PREVIEW_WIDTH, UPLOAD_PREVIEW_HEIGHT)

    def refresh(self) -> None:
        resource = self.session.get_resource(self.role)
        if resource is self._shown_resource:
            return

        self._shown_resource = resource
        if resource is None:
            self.drop_zone.clear()
            self._show_placeholder()
            return

        preview = self.session.render_slot_preview(self.role, self._preview_size())
        self.drop_zone.setPixmap(pil_to_qpixmap(preview))
        self.drop_zone.setToolTip(resource.display_name)

    def choose_file(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            f"Select {self.role.label} Image",
            "",
            IMAGE_FILE_FILTER,
        )
        if not file_path:
            return
        self.uploader.load_path(self.role, file_path)

    def dragEnterEvent(self, event) -> None:
        if event.mimeData().hasUrls():
            self._set_highlight(True)
            event.acceptProposedAction()
            return
        event.ignore()

    def dragLeaveEvent(self, event) -> None:
        self._set_highlight(False)
        super().dragLeaveEvent(event)

    def dropEvent(self, event) -> None:
        self._set_highlight(False)
        paths = self._local_paths(event.mimeData().urls())
        if not paths:
            event.ignore()
            return
        event.acceptProposedAction()
        self.uploader.load_first(self.role, paths)

    @staticmethod
    def _local_paths(urls) -> List[Path]:
        return [Path(url.toLocalFile()) for url in urls if url.isLocalFile()]


class ComparisonWindow(QMainWindow):
    def __init__(self, session: Optional[ComparisonSession] = None) -> None:
        super().__init__()
        self.setWindowTitle(APP_TITLE)
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

        self.session = session or ComparisonSession()
        self.uploader = ImageUploader(self.session.load_resource)
        self.panels: Dict[ImageRole, UploadPanel] = {}
        self.nudge_buttons: Dict[NudgeDirection, QPushButton] = {}

        self._build_ui()
        self._connect_signals()
        self.on_session_changed(self.session)

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        root = QVBoxLayout(central)

        title = QLabel(APP_TITLE)
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet("font-size: 32px; font-weight: 700;")
        subtitle = QLabel(APP_SUBTITLE)
        subtitle.setAlignment(Qt.AlignCenter)
        subtitle.setStyleSheet(f"color: {PLACEHOLDER_TEXT_COLOR};")
        root.addWidget(title)
        root.addWidget(subtitle)

        uploads_row = QHBoxLayout()
        for role in (ImageRole.BASE, ImageRole.OVERLAY):
            panel = UploadPanel(role, self.session, self.uploader, self)
            self.panels[role] = panel
            uploads_row.addWidget(panel)
        root.addLayout(uploads_row)

        self.comparison_group = QWidget(self)
        comparison_col = QVBoxLayout(self.comparison_group)

        self.label_comparison_heading = QLabel(COMPARISON_HEADING)
        self.label_comparison_heading.setAlignment(Qt.AlignCenter)
        self.label_comparison_heading.setStyleSheet("font-size: 24px; font-weight: 700;")

        opacity_row = QHBoxLayout()
        self.slider_opacity = QSlider(Qt.Horizontal, self)
        self.slider_opacity.setMinimum(0)
        self.slider_opacity.setMaximum(OPACITY_PERCENT_MAX)
        self.slider_opacity.setSingleStep(1)
        # Arrow keys belong to the window for nudging
        self.slider_opacity.setFocusPolicy(Qt.NoFocus)
        self.label_opacity = QLabel()
        self.label_opacity.setMinimumWidth(48)
        opacity_row.addWidget(QLabel("Opacity"))
        opacity_row.addWidget(self.slider_opacity, stretch=1)
        opacity_row.addWidget(self.label_opacity)

        nudge_row = QHBoxLayout()
        nudge_row.addStretch(1)
        for direction, text in NUDGE_BUTTON_LABELS.items():
            button = QPushButton(text)
            button.setFixedWidth(40)
            button.setFocusPolicy(Qt.NoFocus)
            self.nudge_buttons[direction] = button
            nudge_row.addWidget(button)
        self.label_offset = QLabel()
        nudge_row.addSpacing(16)
        nudge_row.addWidget(self.label_offset)
        nudge_row.addStretch(1)

        self.viewport = OverlayViewport(self.session, self)

        comparison_col.addWidget(self.label_comparison_heading)
        comparison_col.addLayout(opacity_row)
        comparison_col.addLayout(nudge_row)
        comparison_col.addWidget(self.viewport, stretch=1)
        root.addWidget(self.comparison_group, stretch=1)

    def _connect_signals(self) -> None:
        self.session.add_listener(self.on_session_changed)
        self.slider_opacity.valueChanged.connect(self.session.set_opacity_percent)
        for direction, button in self.nudge_buttons.items():
            button.clicked.connect(lambda _checked=False, d=direction: self.session.nudge(d))

    def on_session_changed(self, session: ComparisonSession) -> None:
        for panel in self.panels.values():
            panel.refresh()

        active = session.is_comparison_active
        self.comparison_group.setVisible(active)

        self.slider_opacity.blockSignals(True)
        self.slider_opacity.setValue(session.opacity_model.percent)
        self.slider_opacity.blockSignals(False)
        self.label_opacity.setText(f"{session.opacity_model.percent}%")
        self.label_offset.setText(f"Offset: ({session.position.x}, {session.position.y})")

        if active:
            self.viewport.refresh()

    def keyPressEvent(self, event) -> None:
        direction = NUDGE_KEYS.get(event.key())
        if direction is None or not self.session.is_comparison_active:
            super().keyPressEvent(event)
            return

        step = LARGE_NUDGE_STEP if event.modifiers() & Qt.ShiftModifier else DEFAULT_NUDGE_STEP
        self.session.nudge(direction, step)
        event.accept()
