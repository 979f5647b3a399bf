"""
Nudge controller for Overlay Align.

Discrete directional adjustments of the overlay offset, triggered by buttons
or arrow keys. Nudges are independent of the drag state machine: a nudge
during a drag takes effect immediately, and the next drag anchors on the
nudged offset.
"""

from enum import Enum
from typing import Tuple, Union

from OA_Libs.AlignmentLib.position_model import PositionModel
from OA_Libs.constants import DEFAULT_NUDGE_STEP


class NudgeDirection(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @property
    def unit(self) -> Tuple[int, int]:
        return _UNIT_VECTORS[self]


_UNIT_VECTORS = {
    NudgeDirection.LEFT: (-1, 0),
    NudgeDirection.RIGHT: (1, 0),
    NudgeDirection.UP: (0, -1),
    NudgeDirection.DOWN: (0, 1),
}


class NudgeController:
    """Moves the overlay by a fixed step in one of four directions."""

    def __init__(self, position_model: PositionModel):
        self._position_model = position_model

    def nudge(
        self,
        direction: Union[NudgeDirection, str],
        step: int = DEFAULT_NUDGE_STEP,
    ) -> None:
        """
        Shift the overlay offset by ``step`` pixels.

        Args:
            direction: NudgeDirection or its string value ('left', 'right', 'up', 'down')
            step: Number of pixels to move (default 1)

        Raises:
            ValueError: If direction is not one of the four directions
            TypeError: If step is not an int
        """
        if not isinstance(direction, NudgeDirection):
            try:
                direction = NudgeDirection(str(direction).lower())
            except ValueError:
                raise ValueError(f"Unknown nudge direction: {direction!r}")

        if isinstance(step, bool) or not isinstance(step, int):
            raise TypeError(f"step must be an int, got {type(step).__name__}")

        ux, uy = direction.unit
        self._position_model.adjust(ux * step, uy * step)
