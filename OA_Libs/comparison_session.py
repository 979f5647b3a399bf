"""
Comparison session for Overlay Align.

Ties the two image slots, the alignment models and the compositor together.
The GUI talks only to the session: every user event and every finished image
upload arrives here, is applied synchronously, and listeners are told to
re-render.

Classes:
    ComparisonSession: Owner of all alignment state for one window
"""

from typing import Callable, Dict, List, Optional, Union
import logging

from OA_Libs.AlignmentLib.drag_state_machine import DragState, DragStateMachine
from OA_Libs.AlignmentLib.nudge_controller import NudgeController, NudgeDirection
from OA_Libs.AlignmentLib.opacity_model import OpacityModel
from OA_Libs.AlignmentLib.position_model import Position, PositionModel
from OA_Libs.CompositingLib.compositor import Compositor, RenderedFrame
from OA_Libs.CompositingLib.image_models import ImageResource, ImageRole
from OA_Libs.constants import DEFAULT_NUDGE_STEP, DEFAULT_OPACITY

logger = logging.getLogger(__name__)

SessionListener = Callable[["ComparisonSession"], None]


class ComparisonSession:
    """
    Alignment state for a base/overlay image pair.

    The comparison view is active only while both slots hold an image.
    Pointer presses are ignored until then; releases, leaves and moves are
    always safe to forward because the drag machine treats them as no-ops
    when idle.

    Example:
        >>> session = ComparisonSession()
        >>> session.load_resource(ImageRole.BASE, base_resource)
        >>> session.load_resource(ImageRole.OVERLAY, overlay_resource)
        >>> session.nudge("right")
        >>> session.set_opacity_percent(40)
        >>> session.pointer_down(Position(100, 100))
        >>> session.pointer_move(Position(130, 115))
        >>> session.pointer_up()
        >>> session.position
        Position(x=31, y=15)
    """

    def __init__(self, compositor: Optional[Compositor] = None, opacity: float = DEFAULT_OPACITY):
        self.compositor = compositor or Compositor()
        self.position_model = PositionModel()
        self.opacity_model = OpacityModel(opacity)
        self.drag = DragStateMachine(self.position_model)
        self.nudger = NudgeController(self.position_model)

        self._resources: Dict[ImageRole, Optional[ImageResource]] = {
            ImageRole.BASE: None,
            ImageRole.OVERLAY: None,
        }
        self._listeners: List[SessionListener] = []
        self._notifying = False
        self._notify_pending = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def position(self) -> Position:
        return self.position_model.position

    @property
    def opacity(self) -> float:
        return self.opacity_model.opacity

    @property
    def drag_state(self) -> DragState:
        return self.drag.state

    @property
    def is_comparison_active(self) -> bool:
        return all(resource is not None for resource in self._resources.values())

    def get_resource(self, role: ImageRole) -> Optional[ImageResource]:
        return self._resources[self._coerce_role(role)]

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: SessionListener) -> None:
        if not callable(listener):
            raise ValueError(f"listener must be callable, got {type(listener)}")
        self._listeners.append(listener)

    def remove_listener(self, listener: SessionListener) -> bool:
        if listener in self._listeners:
            self._listeners.remove(listener)
            return True
        return False

    def _notify(self) -> None:
        # A listener that mutates the session is served by one more pass
        # instead of a nested dispatch.
        if self._notifying:
            self._notify_pending = True
            return

        self._notifying = True
        try:
            while True:
                self._notify_pending = False
                for listener in list(self._listeners):
                    listener(self)
                if not self._notify_pending:
                    break
        finally:
            self._notifying = False

    # ------------------------------------------------------------------
    # Image slots
    # ------------------------------------------------------------------

    def load_resource(self, role: Union[ImageRole, str], resource: ImageResource) -> None:
        """
        Completion callback for a finished upload.

        Replaces the slot for ``role``. If this makes both slots present the
        overlay offset starts again from the origin.

        Raises:
            ValueError: If role is unknown or does not match the resource's role
            TypeError: If resource is not an ImageResource
        """
        role = self._coerce_role(role)
        if not isinstance(resource, ImageResource):
            raise TypeError(f"Expected ImageResource, got {type(resource)}")
        if resource.role is not role:
            raise ValueError(f"Resource role {resource.role.value} does not match slot {role.value}")

        was_active = self.is_comparison_active
        self._resources[role] = resource
        logger.info(f"Loaded {role.value} image: {resource.display_name} {resource.size}")

        if not was_active and self.is_comparison_active:
            self.drag.cancel()
            self.position_model.reset()
            logger.debug("Comparison view activated")

        self._notify()

    def clear_resource(self, role: Union[ImageRole, str]) -> None:
        role = self._coerce_role(role)
        if self._resources[role] is None:
            return

        self._resources[role] = None
        self.drag.cancel()
        logger.info(f"Cleared {role.value} image")
        self._notify()

    @staticmethod
    def _coerce_role(role: Union[ImageRole, str]) -> ImageRole:
        if isinstance(role, ImageRole):
            return role
        try:
            return ImageRole(str(role).lower())
        except ValueError:
            raise ValueError(f"Unknown image role: {role!r}")

    # ------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------

    def pointer_down(self, pointer: Position) -> bool:
        """Start a drag if the press lands on the overlay of an active comparison."""
        if not self.is_comparison_active:
            return False
        if not self.compositor.overlay_layer_contains(pointer, self.position):
            return False

        started = self.drag.pointer_down(pointer)
        if started:
            self._notify()
        return started

    def pointer_move(self, pointer: Position) -> bool:
        moved = self.drag.pointer_move(pointer)
        if moved:
            self._notify()
        return moved

    def pointer_up(self) -> bool:
        ended = self.drag.pointer_up()
        if ended:
            self._notify()
        return ended

    def pointer_leave(self) -> bool:
        ended = self.drag.pointer_leave()
        if ended:
            self._notify()
        return ended

    # ------------------------------------------------------------------
    # Discrete controls
    # ------------------------------------------------------------------

    def nudge(self, direction: Union[NudgeDirection, str], step: int = DEFAULT_NUDGE_STEP) -> None:
        self.nudger.nudge(direction, step)
        self._notify()

    def set_opacity(self, value: float) -> None:
        self.opacity_model.set_opacity(value)
        self._notify()

    def set_opacity_percent(self, percent: float) -> None:
        self.opacity_model.set_percent(percent)
        self._notify()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> RenderedFrame:
        return self.compositor.render(
            self._resources[ImageRole.BASE],
            self._resources[ImageRole.OVERLAY],
            self.position,
            self.opacity,
        )

    def render_slot_preview(self, role: Union[ImageRole, str], size=None):
        return self.compositor.render_slot_preview(self.get_resource(role), size)
