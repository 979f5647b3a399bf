"""
Drag interaction state machine for Overlay Align.

Converts raw pointer events from the comparison viewport into overlay offsets.
A drag is anchored at press time: the offset during the drag is always
``anchor_offset + (pointer_now - pointer_origin)``, recomputed from scratch on
every move rather than accumulated.

States:
    IDLE: No button held over the overlay
    DRAGGING: A press started on the overlay and has not been released

Classes:
    DragState: Enum of machine states
    DragSession: Ephemeral record that lives only while DRAGGING
    DragStateMachine: The state machine itself
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import logging

from OA_Libs.AlignmentLib.position_model import Position, PositionModel

logger = logging.getLogger(__name__)


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class DragSession:
    """State captured when a drag begins.

    Attributes:
        anchor_offset: Overlay offset at the moment of the press
        pointer_origin: Pointer coordinates at the moment of the press
    """
    anchor_offset: Position
    pointer_origin: Position

    def offset_for(self, pointer: Position) -> Position:
        return self.anchor_offset + (pointer - self.pointer_origin)


class DragStateMachine:
    """
    Pointer-driven repositioning of the overlay.

    Only one drag can be active at a time. Release and leave both end the
    drag, so losing the pointer outside the viewport never leaves the machine
    stuck in DRAGGING.

    Example:
        >>> model = PositionModel()
        >>> machine = DragStateMachine(model)
        >>> machine.pointer_down(Position(100, 100))
        >>> machine.pointer_move(Position(130, 115))
        >>> machine.pointer_up()
        >>> model.position
        Position(x=30, y=15)
    """

    def __init__(self, position_model: PositionModel):
        self._position_model = position_model
        self._session: Optional[DragSession] = None

    @property
    def state(self) -> DragState:
        return DragState.DRAGGING if self._session is not None else DragState.IDLE

    @property
    def is_dragging(self) -> bool:
        return self._session is not None

    @property
    def session(self) -> Optional[DragSession]:
        return self._session

    def pointer_down(self, pointer: Position) -> bool:
        """
        Begin a drag at the given pointer coordinates.

        Args:
            pointer: Pointer coordinates in viewport pixels

        Returns:
            True if a new drag started, False if one was already active
        """
        if self._session is not None:
            return False

        self._session = DragSession(
            anchor_offset=self._position_model.position,
            pointer_origin=pointer,
        )
        logger.debug(f"Drag started at {pointer.as_tuple()} from offset {self._session.anchor_offset.as_tuple()}")
        return True

    def pointer_move(self, pointer: Position) -> bool:
        """
        Update the offset from the current pointer coordinates.

        Returns:
            True if the position was updated, False if no drag is active
        """
        if self._session is None:
            return False

        self._position_model.set(self._session.offset_for(pointer))
        return True

    def pointer_up(self) -> bool:
        """
        End the active drag, keeping the last computed offset.

        Returns:
            True if a drag was ended, False if the machine was already idle
        """
        if self._session is None:
            return False

        self._session = None
        logger.debug(f"Drag ended at offset {self._position_model.position.as_tuple()}")
        return True

    def pointer_leave(self) -> bool:
        """Pointer left the tracked surface; treated exactly like a release."""
        return self.pointer_up()

    def cancel(self) -> bool:
        return self.pointer_up()
